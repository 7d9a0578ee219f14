"""Damage calculation.

Formula (level fixed at 100):
    base = (((2 * level / 5 + 2) * power * A / D) / 50) + 2
    damage = floor(base * STAB * effectiveness * roll * crit)

``roll`` is randint(85, 100) / 100 and a critical hit (1/16) multiplies by
1.5. The prediction variant fixes the roll at 0.925 and never crits, so the
AI can compare moves deterministically.
"""

import logging
import math
import random

from pydantic import BaseModel

from pokearena.core.combatant import Combatant
from pokearena.core.moves import Move, get_type_effectiveness
from pokearena.utils.config import config

logger = logging.getLogger(__name__)


class DamageResult(BaseModel):
    """Outcome of a single damage roll."""

    damage: int = 0
    effectiveness: float = 1.0
    is_critical: bool = False


def _base_damage(attacker: Combatant, defender: Combatant, move: Move) -> float:
    attack_stat = attacker.offensive_stat(move.category)
    defense_stat = defender.defensive_stat(move.category)
    return (((2 * config.level / 5 + 2) * move.power * attack_stat / defense_stat) / 50) + 2


def _stab(attacker: Combatant, move: Move) -> float:
    return config.stab_multiplier if move.type.lower() in attacker.types else 1.0


def calculate_damage(
    attacker: Combatant,
    defender: Combatant,
    move: Move,
    roll: float | None = None,
    critical: bool | None = None,
) -> DamageResult:
    """Roll damage for one hit of ``move``.

    ``roll`` and ``critical`` pin the random factors when given. Moves with
    no power deal 0 without consuming any random draws.
    """
    effectiveness = get_type_effectiveness(move.type, defender.types)
    if move.power == 0:
        return DamageResult(damage=0, effectiveness=effectiveness, is_critical=False)

    if roll is None:
        roll = random.randint(config.roll_min, config.roll_max) / 100
    if critical is None:
        critical = random.random() < config.crit_chance
    crit_mult = config.crit_multiplier if critical else 1.0

    damage = _base_damage(attacker, defender, move) * _stab(attacker, move) * effectiveness * roll * crit_mult
    result = DamageResult(damage=math.floor(damage), effectiveness=effectiveness, is_critical=critical)
    logger.debug(
        "%s -> %s with %s: roll=%.2f crit=%s eff=%s dmg=%d",
        attacker.name, defender.name, move.name, roll, critical, effectiveness, result.damage,
    )
    return result


def predict_damage(attacker: Combatant, defender: Combatant, move: Move) -> int:
    """Deterministic damage estimate: fixed average roll, no critical hit."""
    if move.power == 0:
        return 0
    effectiveness = get_type_effectiveness(move.type, defender.types)
    damage = _base_damage(attacker, defender, move) * _stab(attacker, move) * effectiveness * config.predicted_roll
    return math.floor(damage)
