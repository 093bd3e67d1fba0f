"""Plain text formatting for terminal output."""

from typing import List, Sequence

from showdown_sim.models.card import Card
from showdown_sim.models.simulation import ShowdownResult, SimulationResult
from showdown_sim.simulation.evaluator import HandRank


class TextFormatter:
    """Format simulation results as plain text for terminal display."""

    def format_wins(self, result: SimulationResult) -> List[str]:
        return [f"Player {seat + 1} wins {count} times"
                for seat, count in enumerate(result.wins)]

    def format_frequencies(self, result: SimulationResult) -> List[str]:
        lines = []
        for category, count in result.sorted_categories():
            pct = result.category_percentage(category)
            lines.append(f"{category}: {count} times ({pct:.4f}%)")
        return lines

    def format_results(self, result: SimulationResult) -> str:
        """Format the full report: wins per player, then category frequencies."""
        lines = self.format_wins(result)
        lines.append("")
        lines.append("Hand rank frequencies:")
        lines.extend(self.format_frequencies(result))
        return "\n".join(lines)

    def format_hand_rank(self, cards: Sequence[Card], rank: HandRank) -> str:
        cards_str = " ".join(str(c) for c in cards)
        return f"{cards_str} -> {rank}"

    def format_showdown(self, showdown: ShowdownResult) -> str:
        """Format a single showdown for display."""
        lines = [f"Board: {' '.join(str(c) for c in showdown.board)}"]
        for player, rank in zip(showdown.players, showdown.hand_ranks):
            marker = " *" if player.seat == showdown.winner else ""
            lines.append(f"  Player {player.seat + 1}: {player.cards_str}  {rank}{marker}")
        if showdown.is_split:
            seats = ", ".join(str(s + 1) for s in showdown.tied_seats)
            lines.append(f"  Tie between players {seats}")
        return "\n".join(lines)
