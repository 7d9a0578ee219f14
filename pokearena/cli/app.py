"""Main CLI application for PokeArena.

The CLI is a host for the battle engine: it drafts teams, lets the AI play
both sides, and replays each round's events at its own pace.
"""

import logging
import os
import random
import time

import typer
from rich import box
from rich.logging import RichHandler
from rich.panel import Panel

from pokearena import __version__
from pokearena.cli.ui.displays import (
    console,
    display_event,
    display_species_list,
    display_summary,
    display_team,
)
from pokearena.core.battle import auto_battle
from pokearena.core.moves import PokemonType, get_type_effectiveness
from pokearena.core.session import AITier, BattleSession, BattleSide, BattleTeam, Difficulty
from pokearena.data.species import SPECIES, build_team
from pokearena.utils.config import config

app = typer.Typer(
    name="pokearena",
    help="PokeArena - turn-based creature battles against a tiered AI",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
) -> None:
    """PokeArena - draft a team and battle the AI."""
    level = "DEBUG" if verbose else os.getenv("POKEARENA_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("simulate")
def simulate(
    difficulty: Difficulty = typer.Option(Difficulty.NORMAL, "--difficulty", "-d", help="Opponent difficulty"),
    player_tier: AITier = typer.Option(AITier.GREEDY, "--player-tier", "-p", help="Policy driving your side"),
    team_size: int = typer.Option(config.team_size, "--team-size", "-n", min=1, max=len(SPECIES) // 2),
    seed: int = typer.Option(None, "--seed", "-s", help="Random seed for a reproducible battle"),
    delay: float = typer.Option(0.0, "--delay", min=0.0, help="Seconds to pause between events"),
    max_rounds: int = typer.Option(200, "--max-rounds", min=1),
) -> None:
    """Run a full AI-vs-AI battle and print the log."""
    if seed is not None:
        random.seed(seed)

    player_roster = build_team(SPECIES, BattleSide.PLAYER, team_size)
    drafted = {mon.species_id for mon in player_roster}
    opponent_roster = build_team([s for s in SPECIES if s.species_id not in drafted], BattleSide.OPPONENT, team_size)

    session = BattleSession(
        difficulty=difficulty,
        player=BattleTeam(side=BattleSide.PLAYER, trainer_name="You", roster=player_roster),
        opponent=BattleTeam(side=BattleSide.OPPONENT, trainer_name="Enemy AI", roster=opponent_roster),
    )

    console.print(Panel(
        f"[bold]Difficulty:[/bold] {difficulty.value} (AI tier: {session.ai_tier.value})\n"
        f"[bold]Your policy:[/bold] {player_tier.value}",
        title="PokeArena",
        box=box.DOUBLE,
    ))
    display_team(session, BattleSide.PLAYER)
    display_team(session, BattleSide.OPPONENT)

    for events in auto_battle(session, player_tier, max_rounds):
        for event in events:
            display_event(event)
            if delay:
                time.sleep(delay)

    if not session.is_over:
        console.print(f"[yellow]Stopped after {max_rounds} rounds without a winner.[/yellow]")
    display_summary(session, session.summary())


@app.command("matchup")
def matchup(
    attack_type: str = typer.Argument(..., help="Attacking move type"),
    defend_types: list[str] = typer.Argument(..., help="One or two defending types"),
) -> None:
    """Show the effectiveness multiplier of an attack type."""
    valid = {t.value for t in PokemonType}
    requested = [attack_type.lower()] + [t.lower() for t in defend_types]
    unknown = [t for t in requested if t not in valid]
    if unknown:
        console.print(f"[red]Unknown type(s):[/red] {', '.join(unknown)}")
        raise typer.Exit(1)
    if len(defend_types) > 2:
        console.print("[red]A defender has at most two types.[/red]")
        raise typer.Exit(1)

    multiplier = get_type_effectiveness(attack_type, defend_types)
    label = "/".join(t.capitalize() for t in defend_types)
    console.print(f"{attack_type.capitalize()} vs {label}: [bold]{multiplier:g}x[/bold]")


@app.command("roster")
def roster() -> None:
    """List the bundled species."""
    display_species_list(SPECIES)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(f"PokeArena v{__version__}")


if __name__ == "__main__":
    app()
