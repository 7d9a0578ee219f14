"""Status condition state machine.

Checked at the start of a combatant's own action:

    none / burn / poison  always act
    sleep                 decrement the counter, act (and wake) only when it hits 0
    freeze                20% to thaw and act, otherwise skip
    paralysis             25% to be fully paralysed and skip; speed halved for ordering

Burn and poison deal max_hp // 16 at the end of every round.
"""

import logging
import random

from pokearena.core.combatant import Combatant
from pokearena.core.moves import StatusEffect
from pokearena.core.session import BattleSession, EventType, TurnEvent
from pokearena.utils.config import config

logger = logging.getLogger(__name__)

# Type-based immunities: status -> types that cannot receive it
STATUS_IMMUNITIES: dict[StatusEffect, frozenset[str]] = {
    StatusEffect.BURN: frozenset({"fire"}),
    StatusEffect.POISON: frozenset({"poison", "steel"}),
    StatusEffect.PARALYSIS: frozenset({"electric"}),
}

_STATUS_VERB = {
    StatusEffect.BURN: "burned",
    StatusEffect.POISON: "poisoned",
    StatusEffect.PARALYSIS: "paralyzed",
    StatusEffect.SLEEP: "put to sleep",
    StatusEffect.FREEZE: "frozen solid",
}


def effective_speed(combatant: Combatant) -> int:
    """Speed used for turn order; halved while paralysed, regardless of the per-turn roll."""
    speed = combatant.get_stat("speed")
    if combatant.status == StatusEffect.PARALYSIS:
        speed = speed // 2
    return speed


class StatusEngine:
    """Applies, gates and ticks status conditions. Stateless."""

    @staticmethod
    def check_can_act(session: BattleSession, combatant_id: str) -> tuple[bool, list[TurnEvent]]:
        """Run the start-of-action check. Returns (can_act, events)."""
        mon = session.get(combatant_id)
        side = session.side_of(combatant_id)
        events: list[TurnEvent] = []

        def _event(message: str) -> None:
            events.append(session.record(TurnEvent(
                event_type=EventType.STATUS,
                side=side,
                combatant_id=mon.id,
                combatant_name=mon.name,
                message=message,
            )))

        if mon.status == StatusEffect.SLEEP:
            turns = max(0, mon.status_turns - 1)
            if turns == 0:
                session.set_status(mon.id, StatusEffect.NONE)
                _event(f"{mon.name} woke up!")
                return True, events
            session.set_status(mon.id, StatusEffect.SLEEP, turns)
            _event(f"{mon.name} is fast asleep.")
            return False, events

        if mon.status == StatusEffect.FREEZE:
            if random.random() < config.freeze_thaw_chance:
                session.set_status(mon.id, StatusEffect.NONE)
                _event(f"{mon.name} thawed out!")
                return True, events
            _event(f"{mon.name} is frozen solid!")
            return False, events

        if mon.status == StatusEffect.PARALYSIS:
            if random.random() < config.full_paralysis_chance:
                _event(f"{mon.name} is paralyzed! It can't move!")
                return False, events

        return True, events

    @staticmethod
    def inflict_status(session: BattleSession, target_id: str, status: StatusEffect) -> tuple[bool, list[TurnEvent]]:
        """Try to give ``status`` to the target. Returns (applied, events).

        Fails if the target already has a status or its type is immune. Sleep
        lasts a random 2-4 counter ticks.
        """
        target = session.get(target_id)
        side = session.side_of(target_id)

        def _event(message: str) -> TurnEvent:
            return session.record(TurnEvent(
                event_type=EventType.STATUS,
                side=side,
                combatant_id=target.id,
                combatant_name=target.name,
                message=message,
            ))

        if target.status != StatusEffect.NONE:
            return False, [_event(f"But it failed! {target.name} is already affected by {target.status.value}.")]

        immune_types = STATUS_IMMUNITIES.get(status, frozenset())
        if immune_types.intersection(target.types):
            return False, [_event(f"{target.name} is immune to {status.value}!")]

        turns = 0
        if status == StatusEffect.SLEEP:
            turns = random.randint(config.sleep_turns_min, config.sleep_turns_max)
        session.set_status(target.id, status, turns)
        logger.debug("%s afflicted with %s (turns=%d)", target.name, status.value, turns)
        return True, [_event(f"{target.name} was {_STATUS_VERB[status]}!")]

    @staticmethod
    def apply_end_of_turn_damage(session: BattleSession, combatant_id: str) -> list[TurnEvent]:
        """Burn / poison tick of max_hp // 16, clamped at 0."""
        mon = session.get(combatant_id)
        if mon.is_fainted or mon.status not in (StatusEffect.BURN, StatusEffect.POISON):
            return []

        damage = mon.max_hp // config.status_damage_divisor
        mon = session.update_hp(mon.id, mon.current_hp - damage)
        cause = "its burn" if mon.status == StatusEffect.BURN else "poison"
        return [session.record(TurnEvent(
            event_type=EventType.STATUS,
            side=session.side_of(mon.id),
            combatant_id=mon.id,
            combatant_name=mon.name,
            damage=damage,
            message=f"{mon.name} was hurt by {cause}! (-{damage} HP)",
        ))]
