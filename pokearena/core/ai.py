"""Opponent AI policies.

Tier 1 (random)         any move, uniformly
Tier 2 (greedy)         the move with the highest predicted damage
Tier 3 (greedy_switch)  switch out when a benched combatant has a clearly
                        better matchup, otherwise behave like tier 2
"""

import logging
import random

from pokearena.core.combatant import Combatant
from pokearena.core.damage import predict_damage
from pokearena.core.moves import STRUGGLE
from pokearena.core.session import AITier, BattleAction, BattleActionType, BattleSession, BattleSide
from pokearena.utils.config import config

logger = logging.getLogger(__name__)


def best_move_index(attacker: Combatant, defender: Combatant) -> int | None:
    """Index of the usable move with the highest predicted damage.

    Ties go to the earlier move. None when every move is out of PP.
    """
    best_index: int | None = None
    best_damage = -1
    for index in attacker.usable_move_indices():
        damage = predict_damage(attacker, defender, attacker.moves[index])
        if damage > best_damage:
            best_index, best_damage = index, damage
    return best_index


def best_predicted_damage(attacker: Combatant, defender: Combatant) -> int:
    index = best_move_index(attacker, defender)
    move = attacker.moves[index] if index is not None else STRUGGLE
    return predict_damage(attacker, defender, move)


def matchup_score(candidate: Combatant, foe: Combatant) -> float:
    """Predicted damage dealt by the best move minus half the worst predicted damage taken."""
    dealt = best_predicted_damage(candidate, foe)
    taken = max((predict_damage(foe, candidate, move) for move in foe.moves), default=0)
    return dealt - config.damage_taken_weight * taken


class OpponentAI:
    """Chooses an action for one side according to a tier."""

    @staticmethod
    def choose_action(session: BattleSession, side: BattleSide, tier: AITier | None = None) -> BattleAction:
        tier = tier or session.ai_tier
        active = session.active(side)
        foe = session.active(side.other)

        if tier == AITier.GREEDY_SWITCH:
            switch_to = OpponentAI.choose_switch(session, side)
            if switch_to is not None:
                return BattleAction(action_type=BattleActionType.SWITCH, switch_to=switch_to)

        if tier == AITier.RANDOM:
            return BattleAction(move_index=OpponentAI._random_move_index(active))

        return BattleAction(move_index=best_move_index(active, foe))

    @staticmethod
    def _random_move_index(active: Combatant) -> int | None:
        index = random.randrange(len(active.moves))
        if active.moves[index].has_pp or not config.reroll_exhausted_moves:
            return index
        usable = active.usable_move_indices()
        if not usable:
            return None
        return random.choice(usable)

    @staticmethod
    def choose_switch(session: BattleSession, side: BattleSide) -> int | None:
        """Roster index to switch to, or None to stay in.

        At low HP any strictly better matchup is taken; otherwise the best
        alternative must beat the current score by the configured margin.
        """
        team = session.team(side)
        active = team.active
        foe = session.active(side.other)
        current = matchup_score(active, foe)
        low_hp = active.current_hp <= config.low_hp_threshold * active.max_hp

        best_index: int | None = None
        best_score = current
        for index, candidate in enumerate(team.roster):
            if index == team.active_index or candidate.is_fainted:
                continue
            score = matchup_score(candidate, foe)
            if score <= best_score:
                continue
            if not low_hp and score - current < config.switch_margin * abs(current):
                continue
            best_index, best_score = index, score

        logger.debug(
            "%s switch check: current=%.1f low_hp=%s best=%s (%.1f)",
            side.value, current, low_hp, best_index, best_score,
        )
        return best_index
