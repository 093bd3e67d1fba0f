"""Rich table formatting for terminal output."""

from typing import Sequence

from rich.console import Console
from rich.table import Table

from showdown_sim.models.card import Card
from showdown_sim.models.simulation import SimulationResult
from showdown_sim.simulation.evaluator import HandRank


class TableFormatter:
    """Format simulation results as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_wins(self, result: SimulationResult) -> None:
        """Print wins per player as a Rich table."""
        table = Table(title=f"Wins over {result.num_games:,} games")
        table.add_column("Player", style="cyan")
        table.add_column("Wins", justify="right", style="green")
        table.add_column("Win %", justify="right")

        for seat, count in enumerate(result.wins):
            table.add_row(f"Player {seat + 1}", f"{count:,}", f"{result.win_rate(seat):.2f}%")

        self.console.print(table)

    def print_frequencies(self, result: SimulationResult) -> None:
        """Print hand category frequencies, most common first."""
        table = Table(title=f"Hand rank frequencies ({result.total_hands:,} hands)")
        table.add_column("Hand", style="cyan")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Share", justify="right")

        for category, count in result.sorted_categories():
            table.add_row(category, f"{count:,}", f"{result.category_percentage(category):.4f}%")

        self.console.print(table)

    def print_results(self, result: SimulationResult) -> None:
        self.print_wins(result)
        self.console.print()
        self.print_frequencies(result)

    def print_hand_rank(self, cards: Sequence[Card], rank: HandRank) -> None:
        """Print an evaluated hand."""
        table = Table(title="Hand evaluation")
        table.add_column("Cards", style="cyan")
        table.add_column("Category", style="green")
        table.add_column("Deciding ranks", justify="right")

        ranks = ", ".join(r.value for r in rank.ranks) or "-"
        table.add_row(" ".join(str(c) for c in cards), rank.category.display_name, ranks)

        self.console.print(table)
