"""Rich display components for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokearena.core.combatant import Combatant
from pokearena.core.session import BattleSession, BattleSide, BattleSummary, EventType, TurnEvent
from pokearena.data.species import SpeciesData

console = Console()


TYPE_COLORS = {
    "normal": "white",
    "fire": "red",
    "water": "blue",
    "electric": "yellow",
    "grass": "green",
    "ice": "cyan",
    "fighting": "red",
    "poison": "magenta",
    "ground": "yellow",
    "flying": "cyan",
    "psychic": "magenta",
    "bug": "green",
    "rock": "yellow",
    "ghost": "magenta",
    "dragon": "blue",
    "dark": "white",
    "steel": "white",
    "fairy": "magenta",
}

EVENT_STYLES = {
    EventType.ROUND: "bold cyan",
    EventType.ATTACK: "bold",
    EventType.MISS: "dim",
    EventType.CRITICAL: "bold yellow",
    EventType.EFFECTIVENESS: "yellow",
    EventType.DAMAGE: "dim",
    EventType.STATUS: "magenta",
    EventType.FAINT: "bold red",
    EventType.SWITCH: "cyan",
    EventType.VICTORY: "bold green",
}


def format_types(types: list[str]) -> str:
    return "/".join(f"[{TYPE_COLORS.get(t, 'white')}]{t.capitalize()}[/{TYPE_COLORS.get(t, 'white')}]" for t in types)


def hp_color(combatant: Combatant) -> str:
    """Green above half, yellow above a fifth, red below."""
    fraction = combatant.hp_fraction
    if fraction > 0.5:
        return "green"
    if fraction > 0.2:
        return "yellow"
    return "red"


def display_event(event: TurnEvent) -> None:
    style = EVENT_STYLES.get(event.event_type, "white")
    if event.side == BattleSide.OPPONENT and event.event_type == EventType.ATTACK:
        style = "bold red"
    console.print(f"[{style}]{event.message}[/{style}]")


def display_team(session: BattleSession, side: BattleSide) -> None:
    """Show a roster with HP, status and PP."""
    team = session.team(side)
    title = team.trainer_name or side.value.capitalize()
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", width=2)
    table.add_column("Name", min_width=12)
    table.add_column("Type")
    table.add_column("HP", justify="right")
    table.add_column("Status")
    table.add_column("Moves")

    for index, mon in enumerate(team.roster):
        marker = "[yellow]>[/yellow]" if index == team.active_index else ""
        color = hp_color(mon)
        status = "" if mon.status.value == "none" else mon.status.value.upper()
        moves = ", ".join(f"{m.name} ({m.current_pp}/{m.pp})" for m in mon.moves)
        table.add_row(
            marker,
            mon.name if not mon.is_fainted else f"[dim]{mon.name}[/dim]",
            format_types(mon.types),
            f"[{color}]{mon.current_hp}/{mon.max_hp}[/{color}]",
            status,
            moves,
        )
    console.print(table)


def display_summary(session: BattleSession, summary: BattleSummary) -> None:
    """Final result panel plus per-combatant battle stats."""
    if summary.winner == BattleSide.PLAYER:
        headline, color = "VICTORY!", "green"
    elif summary.winner == BattleSide.OPPONENT:
        headline, color = "DEFEAT", "red"
    else:
        headline, color = "NO RESULT", "yellow"

    content = f"""[bold {color}]{headline}[/bold {color}]

[dim]Rounds:[/dim] {summary.rounds}
[dim]Your team:[/dim] {summary.player_remaining} / {summary.player_total} remaining
[dim]Enemy team:[/dim] {summary.opponent_remaining} / {summary.opponent_total} remaining

[yellow]MVP:[/yellow] [bold]{summary.mvp_name}[/bold] ({summary.mvp_kills} KOs, {summary.mvp_damage} dmg)"""
    console.print(Panel(content, title="Battle Over", border_style=color, box=box.ROUNDED))

    table = Table(title="Battle Stats", box=box.ROUNDED)
    table.add_column("Side", style="dim")
    table.add_column("Name")
    table.add_column("Dealt", justify="right", style="green")
    table.add_column("Taken", justify="right", style="red")
    table.add_column("KOs", justify="right", style="yellow")
    for side in BattleSide:
        for mon in session.team(side).roster:
            stats = mon.battle_stats
            table.add_row(side.value, mon.name, str(stats.damage_dealt), str(stats.damage_taken), str(stats.kills))
    console.print(table)


def display_species_list(species: list[SpeciesData]) -> None:
    table = Table(title="Species", box=box.ROUNDED)
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", min_width=12)
    table.add_column("Type")
    table.add_column("BST", justify="right")
    table.add_column("SPD", justify="right")
    for entry in species:
        table.add_row(
            f"{entry.species_id:03d}",
            entry.name.capitalize(),
            format_types(entry.types),
            str(entry.base_stat_total),
            str(entry.base_stats.get("speed", 0)),
        )
    console.print(table)
