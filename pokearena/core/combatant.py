"""Combatant model and roster building."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field, field_validator, model_validator

from pokearena.core.moves import Move, MoveCategory, StatusEffect, random_moves
from pokearena.utils.config import config


class BattleStats(BaseModel):
    """Post-battle reporting counters. Never read by engine logic."""

    damage_dealt: int = Field(default=0, ge=0)
    damage_taken: int = Field(default=0, ge=0)
    kills: int = Field(default=0, ge=0)


class Combatant(BaseModel):
    """A creature in a battle roster.

    Owned by the BattleSession and referenced by ``id``, which is unique per
    battle (two copies of the same species get different ids).
    """

    # Identity
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    species_id: int
    name: str
    types: list[str] = Field(min_length=1, max_length=2)

    # Stats
    stats: dict[str, int] = Field(default_factory=dict)
    max_hp: int = Field(ge=1)
    current_hp: int = Field(ge=0)

    moves: list[Move] = Field(min_length=1, max_length=4)

    # Status
    status: StatusEffect = StatusEffect.NONE
    status_turns: int = Field(default=0, ge=0)  # Only meaningful for sleep

    battle_stats: BattleStats = Field(default_factory=BattleStats)

    @field_validator("types")
    @classmethod
    def _lowercase_types(cls, value: list[str]) -> list[str]:
        return [t.lower() for t in value]

    @model_validator(mode="after")
    def _check_hp(self) -> Combatant:
        if self.current_hp > self.max_hp:
            raise ValueError(f"current_hp {self.current_hp} exceeds max_hp {self.max_hp}")
        return self

    @property
    def is_fainted(self) -> bool:
        return self.current_hp == 0

    @property
    def hp_fraction(self) -> float:
        return self.current_hp / self.max_hp

    def get_stat(self, name: str) -> int:
        """Named stat value; missing or zero stats read as the configured default."""
        return self.stats.get(name) or config.default_stat

    def offensive_stat(self, category: MoveCategory) -> int:
        return self.get_stat("special-attack" if category == MoveCategory.SPECIAL else "attack")

    def defensive_stat(self, category: MoveCategory) -> int:
        return self.get_stat("special-defense" if category == MoveCategory.SPECIAL else "defense")

    def usable_move_indices(self) -> list[int]:
        return [i for i, move in enumerate(self.moves) if move.has_pp]


# ---------------------------------------------------------------------------
# Roster building
# ---------------------------------------------------------------------------

def create_combatant(
    species_id: int,
    name: str,
    types: list[str],
    base_stats: dict[str, int],
    moves: list[Move] | None = None,
) -> Combatant:
    """Create a fresh combatant at draft time: full HP, full PP, no status.

    Max HP is the species' base HP plus a flat bonus. When no moves are
    supplied a random moveset is drawn from the fallback pool.
    """
    max_hp = (base_stats.get("hp") or config.default_stat) + config.hp_bonus
    battle_moves = moves if moves else random_moves(types, config.moves_per_combatant)
    fresh_moves = [m.model_copy(update={"current_pp": m.pp}) for m in battle_moves]

    return Combatant(
        species_id=species_id,
        name=name,
        types=types,
        stats=dict(base_stats),
        max_hp=max_hp,
        current_hp=max_hp,
        moves=fresh_moves[: config.moves_per_combatant],
    )


def format_move_name(api_name: str) -> str:
    """Turn an API-style name into a display name ("thunder-punch" -> "Thunder Punch")."""
    return " ".join(part.capitalize() for part in api_name.replace("-", " ").split())


def moves_from_learnset(learnset: list[dict]) -> list[Move]:
    """Convert raw learnset entries to Moves.

    Keeps damaging moves only (power > 0), deduplicates by display name and
    treats a missing accuracy as 100. Each entry carries ``name``, ``type``,
    ``power``, ``accuracy``, ``pp`` and ``damage_class``.
    """
    seen: set[str] = set()
    result: list[Move] = []
    for entry in learnset:
        power = entry.get("power") or 0
        if power <= 0:
            continue
        name = format_move_name(entry["name"])
        if name in seen:
            continue
        seen.add(name)
        result.append(Move(
            name=name,
            type=entry["type"],
            category=MoveCategory(entry.get("damage_class") or "status"),
            power=power,
            accuracy=entry.get("accuracy") or 100,
            pp=entry.get("pp") or 10,
        ))
    return result
