"""Bundled species records and team building.

The records follow the roster-source shape: types, base stats and a
candidate learnset in API form. Fetching live data is left to the host.
"""

import random

from pydantic import BaseModel, Field

from pokearena.core.combatant import Combatant, create_combatant, moves_from_learnset
from pokearena.core.moves import Move, random_moves
from pokearena.core.session import BattleSide
from pokearena.utils.config import config


class SpeciesData(BaseModel):
    """One species as supplied by a roster source."""

    species_id: int
    name: str
    types: list[str] = Field(min_length=1, max_length=2)
    base_stats: dict[str, int]
    learnset: list[dict] = Field(default_factory=list)

    @property
    def base_stat_total(self) -> int:
        return sum(self.base_stats.values())


def _stats(hp: int, atk: int, dfn: int, spa: int, spd: int, spe: int) -> dict[str, int]:
    return {
        "hp": hp,
        "attack": atk,
        "defense": dfn,
        "special-attack": spa,
        "special-defense": spd,
        "speed": spe,
    }


def _learn(name: str, type_: str, damage_class: str, power: int | None, accuracy: int | None, pp: int) -> dict:
    return {
        "name": name,
        "type": type_,
        "damage_class": damage_class,
        "power": power,
        "accuracy": accuracy,
        "pp": pp,
    }


# fmt: off
SPECIES: list[SpeciesData] = [
    SpeciesData(species_id=3, name="venusaur", types=["grass", "poison"], base_stats=_stats(80, 82, 83, 100, 100, 80),
                learnset=[_learn("energy-ball", "grass", "special", 90, 100, 10),
                          _learn("sludge-bomb", "poison", "special", 90, 100, 10),
                          _learn("earthquake", "ground", "physical", 100, 100, 10),
                          _learn("sleep-powder", "grass", "status", None, 75, 15),
                          _learn("razor-leaf", "grass", "physical", 55, 95, 25)]),
    SpeciesData(species_id=6, name="charizard", types=["fire", "flying"], base_stats=_stats(78, 84, 78, 109, 85, 100),
                learnset=[_learn("flamethrower", "fire", "special", 90, 100, 15),
                          _learn("air-slash", "flying", "special", 75, 95, 15),
                          _learn("dragon-pulse", "dragon", "special", 85, 100, 10),
                          _learn("will-o-wisp", "fire", "status", None, 85, 15),
                          _learn("fire-blast", "fire", "special", 110, 85, 5)]),
    SpeciesData(species_id=9, name="blastoise", types=["water"], base_stats=_stats(79, 83, 100, 85, 105, 78),
                learnset=[_learn("surf", "water", "special", 90, 100, 15),
                          _learn("ice-beam", "ice", "special", 90, 100, 10),
                          _learn("hydro-pump", "water", "special", 110, 80, 5),
                          _learn("flash-cannon", "steel", "special", 80, 100, 10)]),
    SpeciesData(species_id=26, name="raichu", types=["electric"], base_stats=_stats(60, 90, 55, 90, 80, 110),
                learnset=[_learn("thunderbolt", "electric", "special", 90, 100, 15),
                          _learn("thunder-punch", "electric", "physical", 75, 100, 15),
                          _learn("brick-break", "fighting", "physical", 75, 100, 15),
                          _learn("thunder-wave", "electric", "status", None, 90, 20)]),
    SpeciesData(species_id=94, name="gengar", types=["ghost", "poison"], base_stats=_stats(60, 65, 60, 130, 75, 110),
                learnset=[_learn("shadow-ball", "ghost", "special", 80, 100, 15),
                          _learn("sludge-bomb", "poison", "special", 90, 100, 10),
                          _learn("hypnosis", "psychic", "status", None, 60, 20),
                          _learn("dazzling-gleam", "fairy", "special", 80, 100, 10),
                          _learn("explosion", "normal", "physical", 250, 100, 5)]),
    SpeciesData(species_id=130, name="gyarados", types=["water", "flying"], base_stats=_stats(95, 125, 79, 60, 100, 81),
                learnset=[_learn("waterfall", "water", "physical", 80, 100, 15),
                          _learn("crunch", "dark", "physical", 80, 100, 15),
                          _learn("earthquake", "ground", "physical", 100, 100, 10),
                          _learn("ice-fang", "ice", "physical", 65, 95, 15)]),
    SpeciesData(species_id=143, name="snorlax", types=["normal"], base_stats=_stats(160, 110, 65, 65, 110, 30),
                learnset=[_learn("body-slam", "normal", "physical", 85, 100, 15),
                          _learn("crunch", "dark", "physical", 80, 100, 15),
                          _learn("earthquake", "ground", "physical", 100, 100, 10),
                          _learn("self-destruct", "normal", "physical", 200, 100, 5)]),
    SpeciesData(species_id=149, name="dragonite", types=["dragon", "flying"], base_stats=_stats(91, 134, 95, 100, 100, 80),
                learnset=[_learn("dragon-claw", "dragon", "physical", 80, 100, 15),
                          _learn("wing-attack", "flying", "physical", 60, 100, 35),
                          _learn("fire-punch", "fire", "physical", 75, 100, 15),
                          _learn("outrage", "dragon", "physical", 120, 100, 10),
                          _learn("thunder-wave", "electric", "status", None, 90, 20)]),
    SpeciesData(species_id=212, name="scizor", types=["bug", "steel"], base_stats=_stats(70, 130, 100, 55, 80, 65),
                learnset=[_learn("x-scissor", "bug", "physical", 80, 100, 15),
                          _learn("iron-head", "steel", "physical", 80, 100, 15),
                          _learn("bullet-punch", "steel", "physical", 40, 100, 30),
                          _learn("aerial-ace", "flying", "physical", 60, None, 20)]),
    SpeciesData(species_id=282, name="gardevoir", types=["psychic", "fairy"], base_stats=_stats(68, 65, 65, 125, 115, 80),
                learnset=[_learn("psychic", "psychic", "special", 90, 100, 10),
                          _learn("moonblast", "fairy", "special", 95, 100, 15),
                          _learn("shadow-ball", "ghost", "special", 80, 100, 15),
                          _learn("thunderbolt", "electric", "special", 90, 100, 15)]),
    SpeciesData(species_id=448, name="lucario", types=["fighting", "steel"], base_stats=_stats(70, 110, 70, 115, 70, 90),
                learnset=[_learn("aura-sphere", "fighting", "special", 80, None, 20),
                          _learn("close-combat", "fighting", "physical", 120, 100, 5),
                          _learn("flash-cannon", "steel", "special", 80, 100, 10),
                          _learn("dark-pulse", "dark", "special", 80, 100, 15)]),
    SpeciesData(species_id=208, name="steelix", types=["steel", "ground"], base_stats=_stats(75, 85, 200, 55, 65, 30),
                learnset=[_learn("iron-tail", "steel", "physical", 100, 75, 15),
                          _learn("earthquake", "ground", "physical", 100, 100, 10),
                          _learn("rock-slide", "rock", "physical", 75, 90, 10)]),
]
# fmt: on


def get_species(name: str) -> SpeciesData | None:
    for species in SPECIES:
        if species.name == name.lower():
            return species
    return None


def pick_moves(species: SpeciesData) -> list[Move]:
    """Four random damaging moves from the learnset, topped up from the move pool."""
    candidates = moves_from_learnset(species.learnset)
    random.shuffle(candidates)
    chosen = candidates[: config.moves_per_combatant]

    names = {m.name for m in chosen}
    for move in random_moves(species.types, config.moves_per_combatant * 2):
        if len(chosen) >= config.moves_per_combatant:
            break
        if move.name not in names:
            chosen.append(move)
            names.add(move.name)
    return chosen


def build_team(
    species: list[SpeciesData],
    side: BattleSide,
    size: int | None = None,
) -> list[Combatant]:
    """Draft ``size`` distinct species into fresh combatants.

    Opponent combatants carry a ``Bot-`` prefix so the two sides can be told
    apart in the log even when they share a species.
    """
    size = size or config.team_size
    if size > len(species):
        raise ValueError(f"Cannot draft {size} from {len(species)} species")

    team: list[Combatant] = []
    for entry in random.sample(species, size):
        display = entry.name.capitalize()
        if side == BattleSide.OPPONENT:
            display = f"Bot-{display}"
        team.append(create_combatant(
            species_id=entry.species_id,
            name=display,
            types=entry.types,
            base_stats=entry.base_stats,
            moves=pick_moves(entry),
        ))
    return team
