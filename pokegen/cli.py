"""Command line helpers for PokeGen."""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from .app import GameApp
from .config import PokeGenConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .diagnostics.economy_simulator import EconomySimulator
from .domain.economy import resell_value
from .domain.inventory import SortKey

console = Console()


def run_simulator() -> None:
    parser = argparse.ArgumentParser(description="PokeGen economy simulator")
    parser.add_argument("--pulls", type=int, default=100, help="Number of creatures to acquire")
    parser.add_argument("--batch", type=int, default=10, help="Concurrent requests per batch")
    args = parser.parse_args()

    asyncio.run(_simulate(args.pulls, args.batch))


async def _simulate(pulls: int, batch: int) -> None:
    app = GameApp(PokeGenConfig.from_env())
    try:
        result = await EconomySimulator(app).simulate(pulls=pulls, batch_size=batch)
    finally:
        await app.close()

    table = Table(title=f"Simulated {result.pulls} pulls")
    table.add_column("Rarity")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    for rarity, amount in result.rarities.items():
        table.add_row(rarity.value, str(amount), f"{amount / result.pulls:.1%}")
    console.print(table)
    console.print(f"Shiny: {result.shinies}")
    console.print(
        f"Spent {result.cost} credits, resell value {result.resell_total} "
        f"([bold]{result.return_rate:.1%}[/bold] returned)"
    )


def run_checklist() -> None:
    argparse.ArgumentParser(description="PokeGen balance checks").parse_args()

    app = GameApp(PokeGenConfig.from_env())
    issues = checklist_run(app)
    if not issues:
        console.print("[green]No issues found[/green]")
        return
    for issue in issues:
        style = "red" if issue.severity == "error" else "yellow"
        console.print(f"[{style}][{issue.severity.upper()}][/{style}] {issue.message}")
    sys.exit(1)


def run_status() -> None:
    parser = argparse.ArgumentParser(description="Show saved credits and collection")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.NEWEST.value,
        help="Collection ordering",
    )
    parser.add_argument("--limit", type=int, default=20, help="Rows to show")
    args = parser.parse_args()

    asyncio.run(_status(SortKey(args.sort), args.limit))


async def _status(sort_key: SortKey, limit: int) -> None:
    app = GameApp(PokeGenConfig.from_env())
    try:
        await app.start()
        report = app.inventory.progress()
        creatures = app.inventory.sort_by(sort_key)[:limit]
    finally:
        await app.close()

    console.print(f"Credits: [bold]{app.inventory.credits}[/bold]")
    console.print(
        f"Rank: [bold]{report.rank.name}[/bold] (score {report.score}, "
        f"{report.progress:.0%} to next rank)"
    )
    table = Table(title=f"Collection ({len(app.inventory)})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Types")
    table.add_column("Rarity")
    table.add_column("Value", justify="right")
    for creature in creatures:
        name = f"{creature.name} *" if creature.is_shiny else creature.name
        table.add_row(
            str(creature.species_id),
            name,
            "/".join(creature.element_types),
            creature.rarity.value,
            str(resell_value(creature)),
        )
    console.print(table)
