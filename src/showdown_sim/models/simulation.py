"""Simulation data models for showdown trials."""

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from showdown_sim.models.card import Card

if TYPE_CHECKING:
    from showdown_sim.simulation.evaluator import HandRank

DECK_SIZE = 52
HOLE_CARDS = 2
BOARD_CARDS = 5
MIN_PLAYERS = 2
MAX_PLAYERS = (DECK_SIZE - BOARD_CARDS) // HOLE_CARDS


def validate_player_count(num_players: int) -> None:
    """Reject seat counts the deck cannot serve."""
    if num_players < MIN_PLAYERS:
        raise ValueError(f"At least {MIN_PLAYERS} players are required, got {num_players}")
    if HOLE_CARDS * num_players + BOARD_CARDS > DECK_SIZE:
        raise ValueError(
            f"Too many players: {num_players} players need "
            f"{HOLE_CARDS * num_players + BOARD_CARDS} cards, deck has {DECK_SIZE} "
            f"(maximum is {MAX_PLAYERS})"
        )


@dataclass
class SimulationConfig:
    """Simulation run configuration."""
    num_games: int = 1_000_000
    num_players: int = 6
    workers: int = 1
    batch_size: int = 10_000
    seed: Optional[int] = None

    def validate(self) -> None:
        """Raise ValueError if the run cannot be started."""
        validate_player_count(self.num_players)
        if self.num_games < 1:
            raise ValueError(f"num_games must be positive, got {self.num_games}")
        if self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass
class Player:
    """A seat holding two hole cards for one game."""
    seat: int
    cards: List[Card] = field(default_factory=list)

    @property
    def cards_str(self) -> str:
        return " ".join(str(c) for c in self.cards)


@dataclass
class ShowdownResult:
    """Outcome of a single simulated showdown."""
    board: List[Card]
    players: List[Player]
    hand_ranks: List["HandRank"]
    tied_seats: List[int]
    winner: int

    @property
    def categories(self) -> List[str]:
        """Category label of every player's best hand, in seat order."""
        return [r.category.label for r in self.hand_ranks]

    @property
    def winning_rank(self) -> "HandRank":
        return self.hand_ranks[self.winner]

    @property
    def is_split(self) -> bool:
        return len(self.tied_seats) > 1


@dataclass
class SimulationResult:
    """Aggregated wins and hand category counts over many trials."""
    num_games: int
    num_players: int
    wins: List[int] = field(default_factory=list)
    hand_rank_counts: Counter = field(default_factory=Counter)

    def __post_init__(self):
        if not self.wins:
            self.wins = [0] * self.num_players

    @property
    def total_hands(self) -> int:
        """Number of hands observed: every player in every game."""
        return self.num_games * self.num_players

    def merge(self, wins: List[int], hand_rank_counts: Dict[str, int]) -> None:
        """Fold a batch's local tallies into the totals."""
        if len(wins) != self.num_players:
            raise ValueError(
                f"Batch reports {len(wins)} seats, expected {self.num_players}"
            )
        for seat, count in enumerate(wins):
            self.wins[seat] += count
        self.hand_rank_counts.update(hand_rank_counts)

    def win_rate(self, seat: int) -> float:
        if self.num_games == 0:
            return 0.0
        return self.wins[seat] / self.num_games * 100

    def category_percentage(self, category: str) -> float:
        if self.total_hands == 0:
            return 0.0
        return self.hand_rank_counts.get(category, 0) / self.total_hands * 100

    def sorted_categories(self) -> List[Tuple[str, int]]:
        """Categories ordered by descending count."""
        return sorted(self.hand_rank_counts.items(), key=lambda kv: kv[1], reverse=True)
