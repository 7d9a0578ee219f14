"""Turn-based battle state machine.

One round runs to completion before control returns to the caller:

    round start -> switches -> order attackers -> first action -> second action
    -> end-of-round status damage -> faint / victory check

The engine is synchronous and returns the ordered event list for the round;
pacing and animation are up to the host.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from pokearena.core.ai import OpponentAI
from pokearena.core.combatant import Combatant
from pokearena.core.moves import STRUGGLE, Move
from pokearena.core.resolver import MoveResolver
from pokearena.core.session import (
    AITier,
    BattleAction,
    BattleActionType,
    BattlePhase,
    BattleSession,
    BattleSide,
    EventType,
    TurnEvent,
)
from pokearena.core.status import StatusEngine, effective_speed

logger = logging.getLogger(__name__)


def order_sides(session: BattleSession) -> list[BattleSide]:
    """Both sides in acting order: higher effective speed first, exact ties 50/50."""
    player_speed = effective_speed(session.active(BattleSide.PLAYER))
    opponent_speed = effective_speed(session.active(BattleSide.OPPONENT))
    if player_speed > opponent_speed:
        return [BattleSide.PLAYER, BattleSide.OPPONENT]
    if opponent_speed > player_speed:
        return [BattleSide.OPPONENT, BattleSide.PLAYER]
    if random.random() < 0.5:
        return [BattleSide.PLAYER, BattleSide.OPPONENT]
    return [BattleSide.OPPONENT, BattleSide.PLAYER]


def select_move(combatant: Combatant, action: BattleAction) -> Move:
    """The move an attack action refers to; a missing index means Struggle."""
    if action.move_index is None:
        return STRUGGLE
    if not 0 <= action.move_index < len(combatant.moves):
        raise ValueError(f"{combatant.name} has no move at index {action.move_index}")
    return combatant.moves[action.move_index]


class BattleEngine:
    """Resolves rounds of a battle.

    Stateless -- takes a BattleSession, mutates it, and returns the events
    for that round.
    """

    @staticmethod
    def resolve_round(
        session: BattleSession,
        player_action: BattleAction,
        opponent_action: BattleAction | None = None,
    ) -> list[TurnEvent]:
        """Resolve one round. The opponent's action is chosen by the AI when not given."""
        if session.is_over:
            raise ValueError("Battle is already over")

        if opponent_action is None:
            opponent_action = OpponentAI.choose_action(session, BattleSide.OPPONENT)
        actions = {BattleSide.PLAYER: player_action, BattleSide.OPPONENT: opponent_action}
        for side, action in actions.items():
            BattleEngine._validate(session, side, action)

        events: list[TurnEvent] = []
        round_number = session.next_round()
        events.append(session.record(TurnEvent(event_type=EventType.ROUND, message=f"--- Round {round_number} ---")))

        # Switches go first and cost the switching side its attack
        for side, action in actions.items():
            if action.action_type == BattleActionType.SWITCH:
                events.extend(BattleEngine._switch(session, side, action.switch_to))

        attacking = [side for side, action in actions.items() if action.action_type == BattleActionType.ATTACK]
        if len(attacking) == 2:
            attacking = order_sides(session)
            first, second = session.active(attacking[0]), session.active(attacking[1])
            events.append(session.record(TurnEvent(
                event_type=EventType.INFO,
                side=attacking[0],
                combatant_id=first.id,
                combatant_name=first.name,
                message=f"{first.name} outspeeds! (SPD: {effective_speed(first)} vs {effective_speed(second)})",
            )))

        # Combatants in play after switches; a replacement sent in after a faint joins next round
        fielded_ids = {side: session.active(side).id for side in BattleSide}
        acting_ids = {side: fielded_ids[side] for side in attacking}
        for side in attacking:
            attacker = session.active(side)
            if attacker.id != acting_ids[side] or attacker.is_fainted:
                continue
            defender = session.active(side.other)
            if defender.is_fainted:
                continue
            defender_id = defender.id

            can_act, status_events = StatusEngine.check_can_act(session, attacker.id)
            events.extend(status_events)
            if can_act:
                move = select_move(session.get(attacker.id), actions[side])
                outcome = MoveResolver.resolve(session, attacker.id, defender_id, move)
                events.extend(outcome.events)

            defender_fainted = session.get(defender_id).is_fainted
            for faint_side in (side.other, side):
                if session.active(faint_side).is_fainted and faint_side not in session.defeated_sides:
                    events.extend(BattleEngine._handle_faint(session, faint_side))
            if defender_fainted or session.defeated_sides:
                break

        # End-of-round burn / poison, once per side
        for side in BattleSide:
            mon = session.active(side)
            if mon.id != fielded_ids[side] or mon.is_fainted:
                continue
            events.extend(StatusEngine.apply_end_of_turn_damage(session, mon.id))
            if session.active(side).is_fainted:
                events.extend(BattleEngine._handle_faint(session, side))

        events.extend(BattleEngine._check_victory(session))
        session.turn_log.append(events)
        return events

    @staticmethod
    def _validate(session: BattleSession, side: BattleSide, action: BattleAction) -> None:
        """Reject bad move or switch targets before the round changes any state."""
        if action.action_type == BattleActionType.ATTACK:
            active = session.active(side)
            if action.move_index is not None and not 0 <= action.move_index < len(active.moves):
                raise ValueError(f"{active.name} has no move at index {action.move_index}")
            return
        team = session.team(side)
        index = action.switch_to
        if index is None or not 0 <= index < len(team.roster):
            raise ValueError(f"Invalid switch target {index} for {side.value}")
        if index == team.active_index:
            raise ValueError(f"{team.roster[index].name} is already active")
        if team.roster[index].is_fainted:
            raise ValueError(f"{team.roster[index].name} has fainted and cannot switch in")

    @staticmethod
    def _switch(session: BattleSession, side: BattleSide, index: int) -> list[TurnEvent]:
        old = session.active(side)
        new = session.set_active(side, index)
        logger.debug("%s switched %s -> %s", side.value, old.name, new.name)
        return [session.record(TurnEvent(
            event_type=EventType.SWITCH,
            side=side,
            combatant_id=new.id,
            combatant_name=new.name,
            message=f"{old.name} returned! Go {new.name}!",
        ))]

    @staticmethod
    def _handle_faint(session: BattleSession, side: BattleSide) -> list[TurnEvent]:
        """Announce the faint and send in the first living roster member, if any."""
        team = session.team(side)
        fainted = team.active
        events = [session.record(TurnEvent(
            event_type=EventType.FAINT,
            side=side,
            combatant_id=fainted.id,
            combatant_name=fainted.name,
            message=f"{fainted.name} fainted!",
        ))]

        next_index = team.first_alive_index()
        if next_index is None:
            if side not in session.defeated_sides:
                session.defeated_sides.append(side)
            return events

        replacement = session.set_active(side, next_index)
        sender = team.trainer_name or side.value.capitalize()
        events.append(session.record(TurnEvent(
            event_type=EventType.SWITCH,
            side=side,
            combatant_id=replacement.id,
            combatant_name=replacement.name,
            message=f"{sender} sent out {replacement.name}!",
        )))
        return events

    @staticmethod
    def _check_victory(session: BattleSession) -> list[TurnEvent]:
        if not session.defeated_sides:
            return []
        loser = session.defeated_sides[0]
        session.winner = loser.other
        session.phase = BattlePhase.FINISHED
        winner_team = session.team(session.winner)
        name = winner_team.trainer_name or session.winner.value.capitalize()
        return [session.record(TurnEvent(
            event_type=EventType.VICTORY,
            side=session.winner,
            message=f"{name} wins the battle!",
        ))]


def auto_battle(
    session: BattleSession,
    player_tier: AITier = AITier.GREEDY,
    max_rounds: int = 200,
) -> Iterator[list[TurnEvent]]:
    """Let the AI drive both sides, yielding each round's events until the battle ends."""
    while not session.is_over and session.round_number < max_rounds:
        action = OpponentAI.choose_action(session, BattleSide.PLAYER, player_tier)
        yield BattleEngine.resolve_round(session, action)
