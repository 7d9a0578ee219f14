"""Battle session state and the mutation surface the engine writes through.

The session is owned by the caller and passed explicitly to every engine
call. The engine never holds combatant objects across steps: it looks them
up by id, and every write replaces the whole combatant in its roster.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, Field, PrivateAttr

from pokearena.core.combatant import Combatant
from pokearena.core.moves import StatusEffect
from pokearena.utils.config import config


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BattleSide(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> BattleSide:
        return BattleSide.OPPONENT if self == BattleSide.PLAYER else BattleSide.PLAYER


class Difficulty(str, Enum):
    """Selected once per battle; drives the AI tier and AI damage scaling."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class AITier(str, Enum):
    RANDOM = "random"  # Tier 1
    GREEDY = "greedy"  # Tier 2
    GREEDY_SWITCH = "greedy_switch"  # Tier 3


class BattleActionType(str, Enum):
    ATTACK = "attack"
    SWITCH = "switch"


class BattlePhase(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"


class EventType(str, Enum):
    """Kinds of event a round can produce."""

    ROUND = "round"
    ATTACK = "attack"
    MISS = "miss"
    CRITICAL = "critical"
    EFFECTIVENESS = "effectiveness"
    DAMAGE = "damage"
    STATUS = "status"
    FAINT = "faint"
    SWITCH = "switch"
    INFO = "info"
    VICTORY = "victory"


# ---------------------------------------------------------------------------
# Supporting models
# ---------------------------------------------------------------------------

class BattleAction(BaseModel):
    """An action chosen for one round.

    ``move_index`` of None on an attack means Struggle.
    """

    action_type: BattleActionType = BattleActionType.ATTACK
    move_index: int | None = None
    switch_to: int | None = None  # Index into the side's roster


class TurnEvent(BaseModel):
    """A single event produced while resolving a round.

    Hosts replay these at their own pace; ``message`` is also the line sent
    to the session log.
    """

    event_type: EventType
    side: BattleSide | None = None
    combatant_id: str = ""
    combatant_name: str = ""
    target_name: str = ""
    move_name: str = ""
    damage: int = 0
    effectiveness: float = 1.0
    critical: bool = False
    message: str = ""


class BattleTeam(BaseModel):
    """One side's roster, in draft order."""

    side: BattleSide
    trainer_name: str = ""
    roster: list[Combatant] = Field(min_length=1)
    active_index: int = 0

    @property
    def active(self) -> Combatant:
        return self.roster[self.active_index]

    @property
    def alive_count(self) -> int:
        return sum(1 for c in self.roster if not c.is_fainted)

    def first_alive_index(self) -> int | None:
        """First living roster member in draft order, or None."""
        for i, combatant in enumerate(self.roster):
            if not combatant.is_fainted:
                return i
        return None

    def index_of(self, combatant_id: str) -> int | None:
        for i, combatant in enumerate(self.roster):
            if combatant.id == combatant_id:
                return i
        return None


class BattleSummary(BaseModel):
    """Post-battle report."""

    winner: BattleSide | None
    rounds: int
    player_remaining: int
    player_total: int
    opponent_remaining: int
    opponent_total: int
    mvp_id: str
    mvp_name: str
    mvp_kills: int
    mvp_damage: int


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class BattleSession(BaseModel):
    """The complete state of one battle."""

    battle_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    difficulty: Difficulty = Field(default=Difficulty.NORMAL, frozen=True)

    player: BattleTeam
    opponent: BattleTeam

    phase: BattlePhase = BattlePhase.ACTIVE
    round_number: int = 0
    log: list[str] = Field(default_factory=list)
    turn_log: list[list[TurnEvent]] = Field(default_factory=list)

    winner: BattleSide | None = None
    # Sides in the order their last combatant fainted
    defeated_sides: list[BattleSide] = Field(default_factory=list)

    _log_listener: Callable[[str], None] | None = PrivateAttr(default=None)

    @property
    def ai_tier(self) -> AITier:
        return AITier(config.difficulty_tiers[self.difficulty.value])

    @property
    def is_over(self) -> bool:
        return self.phase == BattlePhase.FINISHED

    def team(self, side: BattleSide) -> BattleTeam:
        return self.player if side == BattleSide.PLAYER else self.opponent

    def active(self, side: BattleSide) -> Combatant:
        return self.team(side).active

    def side_of(self, combatant_id: str) -> BattleSide:
        for side in BattleSide:
            if self.team(side).index_of(combatant_id) is not None:
                return side
        raise ValueError(f"Unknown combatant id: {combatant_id}")

    def get(self, combatant_id: str) -> Combatant:
        """Current state of a combatant, looked up fresh by id."""
        team = self.team(self.side_of(combatant_id))
        return team.roster[team.index_of(combatant_id)]

    # -- log sink ---------------------------------------------------------

    def subscribe(self, listener: Callable[[str], None] | None) -> None:
        """Forward every log line to ``listener`` as well as ``self.log``."""
        self._log_listener = listener

    def add_log(self, message: str) -> None:
        self.log.append(message)
        if self._log_listener is not None:
            self._log_listener(message)

    def record(self, event: TurnEvent) -> TurnEvent:
        """Send an event's message to the log sink and hand the event back."""
        if event.message:
            self.add_log(event.message)
        return event

    # -- mutation sink ----------------------------------------------------

    def _replace(self, updated: Combatant) -> None:
        team = self.team(self.side_of(updated.id))
        roster = list(team.roster)
        roster[team.index_of(updated.id)] = updated
        team.roster = roster

    def update_hp(self, combatant_id: str, new_hp: int) -> Combatant:
        combatant = self.get(combatant_id)
        clamped = max(0, min(combatant.max_hp, new_hp))
        updated = combatant.model_copy(update={"current_hp": clamped})
        self._replace(updated)
        return updated

    def decrement_pp(self, combatant_id: str, move_name: str) -> Combatant:
        """Spend one PP of the named move, floored at 0. Unknown names are a no-op."""
        combatant = self.get(combatant_id)
        moves = [
            m.model_copy(update={"current_pp": max(0, (m.current_pp or 0) - 1)}) if m.name == move_name else m
            for m in combatant.moves
        ]
        updated = combatant.model_copy(update={"moves": moves})
        self._replace(updated)
        return updated

    def set_status(self, combatant_id: str, status: StatusEffect, turns: int = 0) -> Combatant:
        combatant = self.get(combatant_id)
        updated = combatant.model_copy(update={"status": status, "status_turns": turns})
        self._replace(updated)
        return updated

    def _bump_stats(self, combatant_id: str, **deltas: int) -> Combatant:
        combatant = self.get(combatant_id)
        stats = combatant.battle_stats.model_copy(update={
            name: getattr(combatant.battle_stats, name) + amount for name, amount in deltas.items()
        })
        updated = combatant.model_copy(update={"battle_stats": stats})
        self._replace(updated)
        return updated

    def record_damage_dealt(self, combatant_id: str, amount: int) -> Combatant:
        return self._bump_stats(combatant_id, damage_dealt=amount)

    def record_damage_taken(self, combatant_id: str, amount: int) -> Combatant:
        return self._bump_stats(combatant_id, damage_taken=amount)

    def record_kill(self, combatant_id: str) -> Combatant:
        return self._bump_stats(combatant_id, kills=1)

    def set_active(self, side: BattleSide, index: int) -> Combatant:
        team = self.team(side)
        if not 0 <= index < len(team.roster):
            raise ValueError(f"Roster index {index} out of range for {side.value}")
        team.active_index = index
        return team.active

    def next_round(self) -> int:
        self.round_number += 1
        return self.round_number

    # -- reporting --------------------------------------------------------

    def summary(self) -> BattleSummary:
        """Remaining counts per side and the MVP (most kills, then most damage dealt)."""
        everyone = self.player.roster + self.opponent.roster
        mvp = everyone[0]
        for combatant in everyone[1:]:
            stats, best = combatant.battle_stats, mvp.battle_stats
            if stats.kills > best.kills or (stats.kills == best.kills and stats.damage_dealt > best.damage_dealt):
                mvp = combatant
        return BattleSummary(
            winner=self.winner,
            rounds=self.round_number,
            player_remaining=self.player.alive_count,
            player_total=len(self.player.roster),
            opponent_remaining=self.opponent.alive_count,
            opponent_total=len(self.opponent.roster),
            mvp_id=mvp.id,
            mvp_name=mvp.name,
            mvp_kills=mvp.battle_stats.kills,
            mvp_damage=mvp.battle_stats.damage_dealt,
        )
