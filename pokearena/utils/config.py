"""Configuration management for PokeArena."""

from pydantic import BaseModel


class Config(BaseModel):
    """Battle engine configuration."""

    # Damage formula
    level: int = 100  # Every combatant fights at level 100
    default_stat: int = 50  # Used when a stat is missing or zero
    stab_multiplier: float = 1.5
    crit_chance: float = 1 / 16
    crit_multiplier: float = 1.5
    roll_min: int = 85  # Random roll is randint(roll_min, roll_max) / 100
    roll_max: int = 100
    predicted_roll: float = 0.925  # Fixed roll used by the AI's damage prediction

    # Status conditions
    freeze_thaw_chance: float = 0.2
    full_paralysis_chance: float = 0.25
    sleep_turns_min: int = 2
    sleep_turns_max: int = 4
    status_damage_divisor: int = 16  # Burn / poison tick = max_hp // divisor

    # Difficulty: damage multiplier applied to the AI side only
    difficulty_damage_scale: dict = {
        "easy": 0.7,
        "normal": 1.0,
        "hard": 1.3,
    }

    # Difficulty -> opponent AI tier
    difficulty_tiers: dict = {
        "easy": "random",
        "normal": "greedy",
        "hard": "greedy_switch",
    }

    # Tier-3 switching
    low_hp_threshold: float = 0.25  # Fraction of max HP that counts as "low"
    switch_margin: float = 0.2  # Required improvement over the current score
    damage_taken_weight: float = 0.5

    # Rule policies
    pp_before_accuracy: bool = True  # Missed moves still cost PP
    reroll_exhausted_moves: bool = True  # Random AI re-rolls 0-PP picks

    # Roster building
    hp_bonus: int = 60  # max_hp = base hp + hp_bonus
    moves_per_combatant: int = 4
    team_size: int = 3
    own_type_move_chance: float = 0.7


# Global config instance
config = Config()
