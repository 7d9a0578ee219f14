"""Resolution of a single move: accuracy, PP, damage, status and self-KO."""

import logging
import math
import random

from pydantic import BaseModel, Field

from pokearena.core.damage import calculate_damage
from pokearena.core.moves import Move, StatusEffect
from pokearena.core.session import BattleSession, BattleSide, EventType, TurnEvent
from pokearena.core.status import StatusEngine
from pokearena.utils.config import config

logger = logging.getLogger(__name__)


class MoveOutcome(BaseModel):
    """What happened when a move was resolved."""

    attacker_id: str
    defender_id: str
    move_name: str
    skipped: bool = False  # Either party was already fainted
    missed: bool = False
    damage: int = 0  # HP actually removed from the defender
    effectiveness: float = 1.0
    critical: bool = False
    status_applied: StatusEffect = StatusEffect.NONE
    defender_fainted: bool = False
    attacker_fainted: bool = False
    events: list[TurnEvent] = Field(default_factory=list)


def damage_scale(session: BattleSession, side: BattleSide) -> float:
    """Difficulty multiplier for damage dealt by ``side``; only the AI side is scaled."""
    if side != BattleSide.OPPONENT:
        return 1.0
    return config.difficulty_damage_scale[session.difficulty.value]


def _effectiveness_message(effectiveness: float) -> str:
    if effectiveness == 0:
        return "It had no effect..."
    if effectiveness > 1:
        return "It's super effective!"
    if effectiveness < 1:
        return "It's not very effective..."
    return ""


class MoveResolver:
    """Executes one move from attacker to defender against a session."""

    @staticmethod
    def resolve(session: BattleSession, attacker_id: str, defender_id: str, move: Move) -> MoveOutcome:
        """Resolve ``move`` and write its effects into the session.

        The caller is responsible for having checked that the move may be
        selected (PP, status gating); this only guards against resolving
        against a combatant that has already fainted.
        """
        attacker = session.get(attacker_id)
        defender = session.get(defender_id)
        outcome = MoveOutcome(attacker_id=attacker_id, defender_id=defender_id, move_name=move.name)
        if attacker.is_fainted or defender.is_fainted:
            logger.debug("Skipping stale resolution of %s by %s", move.name, attacker.name)
            outcome.skipped = True
            return outcome

        side = session.side_of(attacker_id)
        events = outcome.events

        def _event(event_type: EventType, message: str, **fields) -> TurnEvent:
            event = session.record(TurnEvent(
                event_type=event_type,
                side=side,
                combatant_id=attacker.id,
                combatant_name=attacker.name,
                target_name=defender.name,
                move_name=move.name,
                message=message,
                **fields,
            ))
            events.append(event)
            return event

        _event(EventType.ATTACK, f"{attacker.name} used {move.name}!")

        if config.pp_before_accuracy:
            session.decrement_pp(attacker_id, move.name)

        if move.accuracy is not None:
            accuracy_roll = random.random() * 100
            if accuracy_roll > move.accuracy:
                logger.debug("%s missed (roll %.1f > %d)", move.name, accuracy_roll, move.accuracy)
                outcome.missed = True
                _event(EventType.MISS, f"{attacker.name}'s attack missed!")
                return outcome

        if not config.pp_before_accuracy:
            session.decrement_pp(attacker_id, move.name)

        result = calculate_damage(attacker, defender, move)
        scaled = math.floor(result.damage * damage_scale(session, side))
        outcome.effectiveness = result.effectiveness
        outcome.critical = result.is_critical

        if move.is_status:
            status = move.inflicts
            if status == StatusEffect.NONE:
                _event(EventType.INFO, "But nothing happened!")
                return outcome
            applied, status_events = StatusEngine.inflict_status(session, defender_id, status)
            events.extend(status_events)
            if applied:
                outcome.status_applied = status
            return outcome

        if result.is_critical:
            _event(EventType.CRITICAL, "A critical hit!", critical=True)
        eff_msg = _effectiveness_message(result.effectiveness)
        if eff_msg:
            _event(EventType.EFFECTIVENESS, eff_msg, effectiveness=result.effectiveness)

        hp_before = defender.current_hp
        defender = session.update_hp(defender_id, max(0, hp_before - scaled))
        lost = hp_before - defender.current_hp
        outcome.damage = lost
        session.record_damage_dealt(attacker_id, lost)
        session.record_damage_taken(defender_id, lost)

        percent = lost * 100 // defender.max_hp
        _event(
            EventType.DAMAGE,
            f"({defender.name} lost {percent}% of its HP)",
            damage=lost,
            effectiveness=result.effectiveness,
            critical=result.is_critical,
        )

        if defender.is_fainted:
            outcome.defender_fainted = True
            session.record_kill(attacker_id)

        if move.is_self_ko:
            session.update_hp(attacker_id, 0)
            outcome.attacker_fainted = True
            _event(EventType.INFO, f"{attacker.name} was knocked out by its own {move.name}!")

        return outcome
