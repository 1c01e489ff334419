#!/usr/bin/env python3
import logging
import sys

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from lot_rebalancer import JsonFileStore, RebalanceReport, RebalanceTracker, StoreError
from lot_rebalancer.config import DisplayConfig
from lot_rebalancer.loaders import parse_number

logger = logging.getLogger(__name__)
console = Console()

DRIFT_THRESHOLD = DisplayConfig.DRIFT_ALERT_THRESHOLD
DEFAULT_STRATEGY = "greedy"


def _drift_color(delta: float) -> str:
    """Return color based on drift beyond the alert band."""
    if delta > DRIFT_THRESHOLD:
        return "red"
    if delta < -DRIFT_THRESHOLD:
        return "green"
    return ""


def _trade_color(value: float) -> str:
    if value > 0:
        return "blue"
    if value < 0:
        return "dark_orange"
    return ""


def report_table(report: RebalanceReport) -> Table:
    """Build a Rich table showing holdings, ideal trades and lot-adjusted trades."""
    t = Table(title="Rebalance", box=box.ROUNDED, title_style="bold white")
    t.add_column("Code", style="cyan")
    t.add_column("Name", style="dim")
    t.add_column("Target%", justify="right")
    t.add_column("Held", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right")
    t.add_column("Weight%", justify="right", style="yellow")
    t.add_column("Δ%", justify="right")
    t.add_column("Ideal qty", justify="right", style="dim")
    t.add_column("Trade qty", justify="right")
    t.add_column("Trade amt", justify="right")
    t.add_column("Final%", justify="right")
    t.add_column("Final Δ%", justify="right")

    for a in report.assets:
        t.add_row(
            a.code,
            a.asset.name,
            f"{a.asset.target:.0f}",
            f"{a.asset.held_quantity:,.0f}",
            f"{a.price:,.3f}",
            f"{a.market_value:,.2f}",
            f"{a.current_weight:.2f}",
            Text(f"{a.delta:+.2f}", style=_drift_color(a.delta)),
            f"{a.ideal_trade_quantity:,.0f}",
            Text(
                f"{a.adjusted_trade_quantity:+,d}",
                style=f"bold {_trade_color(a.adjusted_trade_quantity)}".strip(),
            ),
            Text(
                f"{a.adjusted_trade_amount:+,.2f}",
                style=_trade_color(a.adjusted_trade_amount),
            ),
            f"{a.final_weight:.2f}",
            Text(f"{a.final_delta:+.2f}", style=_drift_color(a.final_delta)),
        )
    return t


def summary_table(report: RebalanceReport) -> Table:
    """Build a Rich table with the aggregate figures of a report."""
    t = Table(box=box.SIMPLE, show_header=False)
    t.add_column("", style="bold")
    t.add_column("", justify="right")

    mode = "cash injection" if report.mode == "inject" else "pure rebalance"
    t.add_row("Mode", mode)
    t.add_row("Current total", f"{report.current_total:,.2f}")
    t.add_row("Target total", f"{report.target_total:,.2f}")
    t.add_row("Injected cash", f"{report.target_total - report.current_total:,.2f}")
    t.add_row(
        "Ideal trades",
        f"{report.ideal_trade_total:,.2f} "
        + ("[green](balanced)[/green]" if report.is_balanced else "[yellow](unbalanced)[/yellow]"),
    )
    t.add_row("Lot-adjusted trades", f"[green]{report.adjusted_trade_total:,.2f}[/green]")
    t.add_row("Deviation", f"{report.deviation:+,.2f}")
    return t


def _as_default(value: float) -> str:
    """Prompt default that parses back to exactly the same number."""
    return repr(value)


def _prompt_inputs(tracker: RebalanceTracker) -> None:
    for asset in list(tracker.assets):
        console.print(f"[cyan]{asset.code}[/cyan] {asset.name} [dim](target {asset.target:.0f}%)[/dim]")
        quantity = Prompt.ask("  Held quantity", default=_as_default(asset.held_quantity))
        price = Prompt.ask("  Price", default=_as_default(asset.price))
        tracker.set_holding(asset.code, quantity=quantity, price=price)

    cash = Prompt.ask("Injected cash", default=_as_default(tracker.injected_cash))
    if parse_number(cash) < 0:
        console.print("[yellow]  Negative cash treated as a withdrawal.[/yellow]")
    tracker.set_injected_cash(cash)


def run_cli_loop(tracker: RebalanceTracker, store: JsonFileStore) -> None:
    while True:
        console.print()
        _prompt_inputs(tracker)

        try:
            tracker.save(store)
        except StoreError as e:
            logger.error("%s", e)
            console.print("[red]  Could not save your figures; they will not be restored.[/red]")

        report = tracker.calculate(strategy=DEFAULT_STRATEGY)
        console.print()
        console.print(report_table(report))
        console.print(summary_table(report))
        console.print(
            f"[dim]  Δ beyond ±{DRIFT_THRESHOLD:g}% suggests rebalancing."
            " Blue buys, orange sells.[/dim]"
        )

        console.print()
        if not Confirm.ask("  Edit figures again?", default=False):
            break


def main() -> None:
    """Entry point for the CLI application."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    console.print()
    console.print(Panel("[bold]Lot Rebalancer[/bold] · 100-unit lots", box=box.DOUBLE))

    store = JsonFileStore(sys.argv[1] if len(sys.argv) > 1 else None)
    tracker = RebalanceTracker.from_store(store)
    console.print(f"[dim]  Figures are saved to {store.path}[/dim]")

    run_cli_loop(tracker, store)


if __name__ == "__main__":
    main()
