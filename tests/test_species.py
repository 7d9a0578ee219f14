"""Tests for roster building from species records."""

import pytest

from pokearena.core.combatant import create_combatant, format_move_name, moves_from_learnset
from pokearena.core.moves import MoveCategory, StatusEffect
from pokearena.core.session import BattleSide
from pokearena.data.species import SPECIES, build_team, get_species, pick_moves
from tests.factories import make_move


class TestMovesFromLearnset:
    def test_filters_and_converts(self):
        learnset = [
            {"name": "thunder-punch", "type": "electric", "damage_class": "physical",
             "power": 75, "accuracy": 100, "pp": 15},
            {"name": "thunder-wave", "type": "electric", "damage_class": "status",
             "power": None, "accuracy": 90, "pp": 20},
            {"name": "swift", "type": "normal", "damage_class": "special",
             "power": 60, "accuracy": None, "pp": 20},
        ]
        moves = moves_from_learnset(learnset)
        assert [m.name for m in moves] == ["Thunder Punch", "Swift"]
        assert moves[1].accuracy == 100
        assert moves[1].category == MoveCategory.SPECIAL

    def test_deduplicates_by_display_name(self):
        entry = {"name": "surf", "type": "water", "damage_class": "special", "power": 90, "accuracy": 100, "pp": 15}
        assert len(moves_from_learnset([entry, dict(entry)])) == 1

    def test_format_move_name(self):
        assert format_move_name("will-o-wisp") == "Will O Wisp"


class TestCreateCombatant:
    def test_hp_bonus_and_fresh_state(self):
        tired = make_move(pp=10).model_copy(update={"current_pp": 2})
        mon = create_combatant(25, "Pikachu", ["Electric"], {"hp": 35, "speed": 90}, [tired])
        assert mon.max_hp == 95
        assert mon.current_hp == 95
        assert mon.types == ["electric"]
        assert mon.status == StatusEffect.NONE
        assert mon.moves[0].current_pp == 10
        assert mon.battle_stats.kills == 0

    def test_missing_hp_reads_default(self):
        mon = create_combatant(1, "Mystery", ["normal"], {}, [make_move()])
        assert mon.max_hp == 110

    def test_random_moves_when_none_given(self):
        mon = create_combatant(6, "Charizard", ["fire", "flying"], {"hp": 78})
        assert len(mon.moves) == 4

    def test_moves_capped_at_four(self):
        moves = [make_move(name=f"Move {i}") for i in range(6)]
        assert len(create_combatant(1, "Mew", ["psychic"], {"hp": 100}, moves).moves) == 4


class TestSpecies:
    def test_bundled_species_are_distinct(self):
        ids = [s.species_id for s in SPECIES]
        assert len(ids) == len(set(ids))

    def test_get_species(self):
        assert get_species("Gengar").types == ["ghost", "poison"]
        assert get_species("missingno") is None

    def test_pick_moves_fills_four(self):
        for species in SPECIES:
            moves = pick_moves(species)
            assert len(moves) == 4
            assert len({m.name for m in moves}) == 4


class TestBuildTeam:
    def test_player_team(self):
        team = build_team(SPECIES, BattleSide.PLAYER, 3)
        assert len(team) == 3
        assert len({mon.species_id for mon in team}) == 3
        assert all(not mon.name.startswith("Bot-") for mon in team)
        assert all(mon.current_hp == mon.max_hp for mon in team)

    def test_opponent_prefix(self):
        team = build_team(SPECIES, BattleSide.OPPONENT, 2)
        assert all(mon.name.startswith("Bot-") for mon in team)

    def test_default_size(self):
        assert len(build_team(SPECIES, BattleSide.PLAYER)) == 3

    def test_too_large_rejected(self):
        with pytest.raises(ValueError):
            build_team(SPECIES[:2], BattleSide.PLAYER, 3)

    def test_ids_unique_across_sides(self):
        team = build_team(SPECIES, BattleSide.PLAYER, 6) + build_team(SPECIES, BattleSide.OPPONENT, 6)
        assert len({mon.id for mon in team}) == 12
