"""Tests for the tiered opponent AI."""

import random

import pytest

from pokearena.core import ai
from pokearena.core.ai import OpponentAI, best_move_index, matchup_score
from pokearena.core.damage import predict_damage
from pokearena.core.moves import MoveCategory
from pokearena.core.session import AITier, BattleActionType, BattleSide, Difficulty
from tests.factories import make_combatant, make_move, make_session


def _exhausted(move):
    return move.model_copy(update={"current_pp": 0})


@pytest.fixture
def switch_setup():
    """A water type at 20% HP facing an electric attacker, with a ground type on the bench."""
    raichu = make_combatant(
        name="Raichu",
        moves=[make_move("Thunderbolt", "electric", 90, category=MoveCategory.SPECIAL)],
    )
    squirtle = make_combatant(
        name="Squirtle",
        types=("water",),
        hp=100,
        current_hp=20,
        moves=[make_move("Bubble", "water", 20, category=MoveCategory.SPECIAL)],
    )
    diglett = make_combatant(
        name="Diglett",
        types=("ground",),
        moves=[make_move("Earthquake", "ground", 100)],
    )
    return make_session(raichu, [squirtle, diglett], difficulty=Difficulty.HARD)


class TestBestMoveIndex:
    """Tests for tier 2 move choice."""

    def test_picks_highest_predicted_damage(self, pikachu, squirtle):
        assert best_move_index(pikachu, squirtle) == 1

    def test_tie_goes_to_first(self, squirtle):
        attacker = make_combatant(moves=[make_move("Tackle"), make_move("Pound")])
        assert best_move_index(attacker, squirtle) == 0

    def test_skips_exhausted_moves(self, pikachu, squirtle):
        attacker = pikachu.model_copy(update={"moves": [pikachu.moves[0], _exhausted(pikachu.moves[1])]})
        assert best_move_index(attacker, squirtle) == 0

    def test_none_when_all_exhausted(self, pikachu, squirtle):
        attacker = pikachu.model_copy(update={"moves": [_exhausted(m) for m in pikachu.moves]})
        assert best_move_index(attacker, squirtle) is None

    def test_status_moves_score_zero(self, squirtle, thunder_wave):
        attacker = make_combatant(moves=[thunder_wave, make_move("Tackle", power=10)])
        assert best_move_index(attacker, squirtle) == 1


class TestMatchupScore:
    def test_dealt_minus_half_taken(self, pikachu, squirtle):
        dealt = predict_damage(pikachu, squirtle, pikachu.moves[1])
        taken = predict_damage(squirtle, pikachu, squirtle.moves[0])
        assert matchup_score(pikachu, squirtle) == dealt - 0.5 * taken


class TestRandomTier:
    """Tests for tier 1."""

    def test_returns_valid_index(self, session):
        for _ in range(50):
            action = OpponentAI.choose_action(session, BattleSide.PLAYER, AITier.RANDOM)
            assert action.action_type == BattleActionType.ATTACK
            assert action.move_index in (0, 1)

    def test_rerolls_exhausted_move(self, monkeypatch, pikachu, squirtle):
        attacker = pikachu.model_copy(update={"moves": [_exhausted(pikachu.moves[0]), pikachu.moves[1]]})
        session = make_session(attacker, squirtle)
        monkeypatch.setattr(random, "randrange", lambda n: 0)
        action = OpponentAI.choose_action(session, BattleSide.PLAYER, AITier.RANDOM)
        assert action.move_index == 1

    def test_struggles_when_everything_exhausted(self, pikachu, squirtle):
        attacker = pikachu.model_copy(update={"moves": [_exhausted(m) for m in pikachu.moves]})
        session = make_session(attacker, squirtle)
        action = OpponentAI.choose_action(session, BattleSide.PLAYER, AITier.RANDOM)
        assert action.move_index is None

    def test_reroll_can_be_disabled(self, monkeypatch, engine_config, pikachu, squirtle):
        engine_config(reroll_exhausted_moves=False)
        attacker = pikachu.model_copy(update={"moves": [_exhausted(pikachu.moves[0]), pikachu.moves[1]]})
        session = make_session(attacker, squirtle)
        monkeypatch.setattr(random, "randrange", lambda n: 0)
        assert OpponentAI.choose_action(session, BattleSide.PLAYER, AITier.RANDOM).move_index == 0


class TestGreedyTier:
    def test_attacks_with_best_move(self, session):
        action = OpponentAI.choose_action(session, BattleSide.PLAYER, AITier.GREEDY)
        assert action.action_type == BattleActionType.ATTACK
        assert action.move_index == 1

    def test_tier_follows_difficulty(self, session):
        assert session.ai_tier == AITier.GREEDY
        assert make_session(difficulty=Difficulty.EASY).ai_tier == AITier.RANDOM
        assert make_session(difficulty=Difficulty.HARD).ai_tier == AITier.GREEDY_SWITCH


class TestSwitchingTier:
    """Tests for tier 3 switching."""

    def test_switches_out_at_low_hp(self, switch_setup):
        action = OpponentAI.choose_action(switch_setup, BattleSide.OPPONENT)
        assert action.action_type == BattleActionType.SWITCH
        assert action.switch_to == 1

    @pytest.mark.parametrize("tier", [AITier.RANDOM, AITier.GREEDY])
    def test_lower_tiers_never_switch(self, switch_setup, tier):
        for _ in range(20):
            action = OpponentAI.choose_action(switch_setup, BattleSide.OPPONENT, tier)
            assert action.action_type == BattleActionType.ATTACK

    def test_never_switches_to_fainted(self, switch_setup):
        bench = switch_setup.opponent.roster[1]
        switch_setup.update_hp(bench.id, 0)
        action = OpponentAI.choose_action(switch_setup, BattleSide.OPPONENT)
        assert action.action_type == BattleActionType.ATTACK

    def test_single_combatant_stays_in(self, pikachu, squirtle):
        session = make_session(pikachu, squirtle, difficulty=Difficulty.HARD)
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) is None


class TestSwitchMargin:
    """The margin rule, with matchup scores fixed per combatant name."""

    @pytest.fixture
    def scored(self, monkeypatch):
        def _build(scores, current_hp=100):
            monkeypatch.setattr(ai, "matchup_score", lambda candidate, foe: scores[candidate.name])
            roster = [
                make_combatant(name=name, current_hp=current_hp if i == 0 else None)
                for i, name in enumerate(scores)
                if name != "Foe"
            ]
            return make_session(make_combatant(name="Foe"), roster, difficulty=Difficulty.HARD)

        return _build

    def test_small_improvement_at_full_hp_stays(self, scored):
        session = scored({"Active": 100, "Bench": 110, "Foe": 0})
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) is None

    def test_margin_met_at_full_hp_switches(self, scored):
        session = scored({"Active": 100, "Bench": 120, "Foe": 0})
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) == 1

    def test_small_improvement_at_low_hp_switches(self, scored):
        session = scored({"Active": 100, "Bench": 110, "Foe": 0}, current_hp=25)
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) == 1

    def test_equal_score_never_switches(self, scored):
        session = scored({"Active": 100, "Bench": 100, "Foe": 0}, current_hp=10)
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) is None

    def test_best_alternative_chosen(self, scored):
        session = scored({"Active": 10, "First": 50, "Second": 90, "Third": 90, "Foe": 0})
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) == 2

    def test_negative_current_score(self, scored):
        """A margin of 20% of |current| applies to negative scores too."""
        session = scored({"Active": -100, "Bench": -85, "Foe": 0})
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) is None
        session = scored({"Active": -100, "Bench": -80, "Foe": 0})
        assert OpponentAI.choose_switch(session, BattleSide.OPPONENT) == 1
