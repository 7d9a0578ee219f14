"""Move model, type effectiveness chart, and the move tables the engine keys off."""

import random
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from pokearena.utils.config import config


class PokemonType(str, Enum):
    """All 18 elemental types."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


class MoveCategory(str, Enum):
    """Which stat pair a move reads, or status for non-damaging moves."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class StatusEffect(str, Enum):
    """Major status conditions. At most one is active per combatant."""

    NONE = "none"
    BURN = "burn"
    POISON = "poison"
    PARALYSIS = "paralysis"
    SLEEP = "sleep"
    FREEZE = "freeze"


# ---------------------------------------------------------------------------
# Type effectiveness chart
# ---------------------------------------------------------------------------
# TYPE_CHART[attacking_type][defending_type] = multiplier
# Only non-neutral pairings are listed; anything missing is 1.0.
# ---------------------------------------------------------------------------

# fmt: off
TYPE_CHART: dict[str, dict[str, float]] = {
    "normal": {"rock": 0.5, "ghost": 0.0, "steel": 0.5},
    "fire": {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 2.0, "bug": 2.0,
             "rock": 0.5, "dragon": 0.5, "steel": 2.0},
    "water": {"fire": 2.0, "water": 0.5, "grass": 0.5, "ground": 2.0, "rock": 2.0,
              "dragon": 0.5},
    "electric": {"water": 2.0, "electric": 0.5, "grass": 0.5, "ground": 0.0,
                 "flying": 2.0, "dragon": 0.5},
    "grass": {"fire": 0.5, "water": 2.0, "grass": 0.5, "poison": 0.5, "ground": 2.0,
              "flying": 0.5, "bug": 0.5, "rock": 2.0, "dragon": 0.5, "steel": 0.5},
    "ice": {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 0.5, "ground": 2.0,
            "flying": 2.0, "dragon": 2.0, "steel": 0.5},
    "fighting": {"normal": 2.0, "ice": 2.0, "poison": 0.5, "flying": 0.5,
                 "psychic": 0.5, "bug": 0.5, "rock": 2.0, "ghost": 0.0,
                 "dark": 2.0, "steel": 2.0, "fairy": 0.5},
    "poison": {"grass": 2.0, "poison": 0.5, "ground": 0.5, "rock": 0.5,
               "ghost": 0.5, "steel": 0.0, "fairy": 2.0},
    "ground": {"fire": 2.0, "electric": 2.0, "grass": 0.5, "poison": 2.0,
               "flying": 0.0, "bug": 0.5, "rock": 2.0, "steel": 2.0},
    "flying": {"electric": 0.5, "grass": 2.0, "fighting": 2.0, "bug": 2.0,
               "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2.0, "poison": 2.0, "psychic": 0.5, "dark": 0.0,
                "steel": 0.5},
    "bug": {"fire": 0.5, "grass": 2.0, "fighting": 0.5, "poison": 0.5,
            "flying": 0.5, "psychic": 2.0, "ghost": 0.5, "dark": 2.0,
            "steel": 0.5, "fairy": 0.5},
    "rock": {"fire": 2.0, "ice": 2.0, "fighting": 0.5, "ground": 0.5,
             "flying": 2.0, "bug": 2.0, "steel": 0.5},
    "ghost": {"normal": 0.0, "psychic": 2.0, "ghost": 2.0, "dark": 0.5},
    "dragon": {"dragon": 2.0, "steel": 0.5, "fairy": 0.0},
    "dark": {"fighting": 0.5, "psychic": 2.0, "ghost": 2.0, "dark": 0.5,
             "fairy": 0.5},
    "steel": {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2.0,
              "rock": 2.0, "steel": 0.5, "fairy": 2.0},
    "fairy": {"fire": 0.5, "fighting": 2.0, "poison": 0.5, "dragon": 2.0,
              "dark": 2.0, "steel": 0.5},
}
# fmt: on


def get_type_effectiveness(move_type: str, defender_types: list[str]) -> float:
    """Combined multiplier of an attack type against one or two defending types.

    Each defending type multiplies in its chart entry, so dual types yield
    0x, 0.25x, 0.5x, 1x, 2x or 4x. Unknown types are neutral.
    """
    row = TYPE_CHART.get(move_type.lower(), {})
    multiplier = 1.0
    for defend_type in defender_types:
        multiplier *= row.get(defend_type.lower(), 1.0)
    return multiplier


# ---------------------------------------------------------------------------
# Move model
# ---------------------------------------------------------------------------

def move_key(name: str) -> str:
    """Normalise a move name for table lookups ("Thunder-Wave" -> "thunder wave")."""
    return " ".join(name.lower().replace("-", " ").replace("_", " ").split())


class Move(BaseModel):
    """A move as fixed at roster-build time. Only ``current_pp`` changes in battle."""

    name: str
    type: str  # Elemental type; "typeless" for Struggle
    category: MoveCategory = MoveCategory.PHYSICAL
    power: int = Field(default=0, ge=0)  # 0 for pure status moves
    accuracy: int | None = Field(default=100, gt=0, le=100)  # None never misses
    pp: int = Field(default=20, ge=0)
    current_pp: int | None = None

    @model_validator(mode="after")
    def _fill_current_pp(self) -> "Move":
        if self.current_pp is None:
            self.current_pp = self.pp
        if not 0 <= self.current_pp <= self.pp:
            raise ValueError(f"current_pp must be within 0..{self.pp}, got {self.current_pp}")
        return self

    @property
    def key(self) -> str:
        return move_key(self.name)

    @property
    def is_status(self) -> bool:
        return self.category == MoveCategory.STATUS

    @property
    def inflicts(self) -> StatusEffect:
        """Status this move inflicts, or NONE for moves without a mapping."""
        if not self.is_status:
            return StatusEffect.NONE
        return STATUS_MOVE_EFFECTS.get(self.key, StatusEffect.NONE)

    @property
    def is_self_ko(self) -> bool:
        return self.key in SELF_KO_MOVES

    @property
    def has_pp(self) -> bool:
        return (self.current_pp or 0) > 0


# Status-category moves that map to a major status
STATUS_MOVE_EFFECTS: dict[str, StatusEffect] = {
    "toxic": StatusEffect.POISON,
    "poison powder": StatusEffect.POISON,
    "poison gas": StatusEffect.POISON,
    "thunder wave": StatusEffect.PARALYSIS,
    "stun spore": StatusEffect.PARALYSIS,
    "glare": StatusEffect.PARALYSIS,
    "will o wisp": StatusEffect.BURN,
    "hypnosis": StatusEffect.SLEEP,
    "sleep powder": StatusEffect.SLEEP,
    "spore": StatusEffect.SLEEP,
    "sing": StatusEffect.SLEEP,
    "lovely kiss": StatusEffect.SLEEP,
}

# Moves that knock out their user after dealing damage
SELF_KO_MOVES: frozenset[str] = frozenset({
    "self destruct",
    "selfdestruct",
    "explosion",
    "misty explosion",
})

# Used when a combatant has no move with PP left: typeless, so always neutral
STRUGGLE = Move(
    name="Struggle",
    type="typeless",
    category=MoveCategory.PHYSICAL,
    power=50,
    accuracy=None,
    pp=0,
)


# ---------------------------------------------------------------------------
# Move pool
# ---------------------------------------------------------------------------
# Fallback moves used when a roster source supplies no learnset.
# Each tuple is (name, type, category, power, accuracy, pp).
# ---------------------------------------------------------------------------

MOVE_POOL: dict[str, list[tuple[str, str, str, int, int | None, int]]] = {
    "normal": [
        ("Tackle", "normal", "physical", 40, 100, 35),
        ("Hyper Voice", "normal", "special", 90, 100, 10),
        ("Slash", "normal", "physical", 70, 100, 20),
        ("Take Down", "normal", "physical", 90, 85, 20),
    ],
    "fire": [
        ("Ember", "fire", "special", 40, 100, 25),
        ("Flamethrower", "fire", "special", 90, 100, 15),
        ("Fire Punch", "fire", "physical", 75, 100, 15),
        ("Flare Blitz", "fire", "physical", 120, 100, 15),
    ],
    "water": [
        ("Water Gun", "water", "special", 40, 100, 25),
        ("Surf", "water", "special", 90, 100, 15),
        ("Waterfall", "water", "physical", 80, 100, 15),
        ("Hydro Pump", "water", "special", 110, 80, 5),
    ],
    "grass": [
        ("Vine Whip", "grass", "physical", 45, 100, 25),
        ("Energy Ball", "grass", "special", 90, 100, 10),
        ("Leaf Blade", "grass", "physical", 90, 100, 15),
        ("Solar Beam", "grass", "special", 120, 100, 10),
    ],
    "electric": [
        ("Thunder Shock", "electric", "special", 40, 100, 30),
        ("Thunderbolt", "electric", "special", 90, 100, 15),
        ("Thunder Punch", "electric", "physical", 75, 100, 15),
        ("Thunder", "electric", "special", 110, 70, 10),
    ],
    "ice": [
        ("Ice Shard", "ice", "physical", 40, 100, 30),
        ("Ice Beam", "ice", "special", 90, 100, 10),
        ("Ice Punch", "ice", "physical", 75, 100, 15),
    ],
    "fighting": [
        ("Brick Break", "fighting", "physical", 75, 100, 15),
        ("Close Combat", "fighting", "physical", 120, 100, 5),
        ("Aura Sphere", "fighting", "special", 80, None, 20),
    ],
    "poison": [
        ("Sludge Bomb", "poison", "special", 90, 100, 10),
        ("Poison Jab", "poison", "physical", 80, 100, 20),
    ],
    "ground": [
        ("Earthquake", "ground", "physical", 100, 100, 10),
        ("Earth Power", "ground", "special", 90, 100, 10),
    ],
    "flying": [
        ("Wing Attack", "flying", "physical", 60, 100, 35),
        ("Air Slash", "flying", "special", 75, 95, 15),
    ],
    "psychic": [
        ("Psybeam", "psychic", "special", 65, 100, 20),
        ("Psychic", "psychic", "special", 90, 100, 10),
    ],
    "rock": [
        ("Rock Slide", "rock", "physical", 75, 90, 10),
        ("Power Gem", "rock", "special", 80, 100, 20),
    ],
    "ghost": [
        ("Shadow Ball", "ghost", "special", 80, 100, 15),
        ("Shadow Claw", "ghost", "physical", 70, 100, 15),
    ],
    "dragon": [
        ("Dragon Claw", "dragon", "physical", 80, 100, 15),
        ("Dragon Pulse", "dragon", "special", 85, 100, 10),
    ],
    "dark": [
        ("Crunch", "dark", "physical", 80, 100, 15),
        ("Dark Pulse", "dark", "special", 80, 100, 15),
    ],
    "steel": [
        ("Iron Head", "steel", "physical", 80, 100, 15),
        ("Flash Cannon", "steel", "special", 80, 100, 10),
    ],
    "fairy": [
        ("Dazzling Gleam", "fairy", "special", 80, 100, 10),
        ("Play Rough", "fairy", "physical", 90, 90, 10),
    ],
    "bug": [
        ("X-Scissor", "bug", "physical", 80, 100, 15),
        ("Bug Buzz", "bug", "special", 90, 100, 10),
    ],
    # Coverage and utility moves available to any type
    "generic": [
        ("Hidden Power", "normal", "special", 60, 100, 15),
        ("Return", "normal", "physical", 102, 100, 20),
        ("Toxic", "poison", "status", 0, 90, 10),
        ("Thunder Wave", "electric", "status", 0, 90, 20),
        ("Will-O-Wisp", "fire", "status", 0, 85, 15),
        ("Hypnosis", "psychic", "status", 0, 60, 20),
        ("Self-Destruct", "normal", "physical", 200, 100, 5),
    ],
}


def move_from_tuple(data: tuple[str, str, str, int, int | None, int]) -> Move:
    """Create a Move from a pool tuple."""
    name, move_type, category, power, accuracy, pp = data
    return Move(
        name=name,
        type=move_type,
        category=MoveCategory(category),
        power=power,
        accuracy=accuracy,
        pp=pp,
    )


def random_moves(types: list[str], count: int) -> list[Move]:
    """Draw ``count`` distinct moves, favouring the given types.

    Each own-type pool move is kept with ``config.own_type_move_chance``;
    remaining slots are filled from random pools until full.
    """
    chosen: list[tuple[str, str, str, int, int | None, int]] = []
    for type_name in types:
        for entry in MOVE_POOL.get(type_name.lower(), []):
            if len(chosen) < count and random.random() < config.own_type_move_chance:
                chosen.append(entry)

    names = {entry[0] for entry in chosen}
    available = sum(len(pool) for pool in MOVE_POOL.values())
    pool_keys = list(MOVE_POOL)
    while len(chosen) < min(count, available):
        entry = random.choice(MOVE_POOL[random.choice(pool_keys)])
        if entry[0] not in names:
            chosen.append(entry)
            names.add(entry[0])

    return [move_from_tuple(entry) for entry in chosen[:count]]
