"""Builders for hand-made combatants, teams and sessions used across the tests."""

from pokearena.core.combatant import Combatant
from pokearena.core.moves import Move, MoveCategory
from pokearena.core.session import BattleSession, BattleSide, BattleTeam, Difficulty


def make_move(
    name="Tackle",
    type_="normal",
    power=40,
    accuracy=None,
    pp=35,
    category=MoveCategory.PHYSICAL,
) -> Move:
    """Moves never miss unless an accuracy is given, to keep tests deterministic."""
    return Move(name=name, type=type_, category=category, power=power, accuracy=accuracy, pp=pp)


def make_status_move(name="Thunder Wave", type_="electric") -> Move:
    return make_move(name=name, type_=type_, power=0, accuracy=None, pp=20, category=MoveCategory.STATUS)


def make_combatant(
    name="Pikachu",
    types=("electric",),
    hp=100,
    current_hp=None,
    attack=100,
    defense=100,
    spa=100,
    spd=100,
    speed=90,
    moves=None,
    species_id=25,
) -> Combatant:
    if moves is None:
        moves = [make_move()]
    return Combatant(
        species_id=species_id,
        name=name,
        types=list(types),
        stats={
            "hp": hp,
            "attack": attack,
            "defense": defense,
            "special-attack": spa,
            "special-defense": spd,
            "speed": speed,
        },
        max_hp=hp,
        current_hp=hp if current_hp is None else current_hp,
        moves=moves,
    )


def make_session(player=None, opponent=None, difficulty=Difficulty.NORMAL) -> BattleSession:
    """A session from single combatants or roster lists for either side."""
    if player is None:
        player = make_combatant()
    if opponent is None:
        opponent = make_combatant(name="Squirtle", types=("water",), speed=40, species_id=7)
    player_roster = player if isinstance(player, list) else [player]
    opponent_roster = opponent if isinstance(opponent, list) else [opponent]
    return BattleSession(
        difficulty=difficulty,
        player=BattleTeam(side=BattleSide.PLAYER, trainer_name="Ash", roster=player_roster),
        opponent=BattleTeam(side=BattleSide.OPPONENT, trainer_name="Gary", roster=opponent_roster),
    )
