"""Single-game showdown simulation."""

import logging
import random
from typing import MutableMapping, Optional

from showdown_sim.models.simulation import (
    BOARD_CARDS, HOLE_CARDS, Player, ShowdownResult, validate_player_count
)
from showdown_sim.simulation.deck import Deck
from showdown_sim.simulation.evaluator import HandEvaluator

logger = logging.getLogger(__name__)


class ShowdownSimulator:
    """Deals and evaluates showdowns for a fixed number of players.

    Seats are shuffled after hole cards are dealt, so the seat a hand is
    credited to is independent of the order cards came off the deck. Ties
    are split by picking one of the tied seats uniformly at random.
    """

    def __init__(self, num_players: int, rng: Optional[random.Random] = None):
        validate_player_count(num_players)
        self.num_players = num_players
        self.rng = rng or random.Random()

    def play_hand(self, deck: Optional[Deck] = None) -> ShowdownResult:
        """Play one showdown.

        Args:
            deck: Deck to deal from, used in its current order. When omitted
                a fresh deck is built and shuffled with the simulator's RNG.

        Returns:
            The dealt board, players in seat order, their hand ranks and
            the winning seat.
        """
        if deck is None:
            deck = Deck(self.rng)
            deck.shuffle()

        hole_cards = [deck.deal(HOLE_CARDS) for _ in range(self.num_players)]
        self.rng.shuffle(hole_cards)
        players = [Player(seat=i, cards=cards) for i, cards in enumerate(hole_cards)]

        board = deck.deal(BOARD_CARDS)

        hand_ranks = []
        best_rank = None
        tied_seats = []
        for player in players:
            rank = HandEvaluator.evaluate(player.cards + board)
            hand_ranks.append(rank)

            if best_rank is None or rank > best_rank:
                best_rank = rank
                tied_seats = [player.seat]
            elif rank == best_rank:
                tied_seats.append(player.seat)

        if not tied_seats:
            raise RuntimeError("Showdown finished without a winner")

        winner = self.rng.choice(tied_seats)
        if len(tied_seats) > 1:
            logger.debug("Split between seats %s with %s, awarded to %d",
                         tied_seats, best_rank, winner)

        return ShowdownResult(
            board=board,
            players=players,
            hand_ranks=hand_ranks,
            tied_seats=tied_seats,
            winner=winner,
        )

    def simulate_game(self, hand_rank_counts: MutableMapping[str, int],
                      deck: Optional[Deck] = None) -> int:
        """Play one showdown and tally every player's hand category.

        Args:
            hand_rank_counts: Category label -> count, updated in place.
            deck: Optional deck, see ``play_hand``.

        Returns:
            The winning seat index.
        """
        result = self.play_hand(deck)
        for category in result.categories:
            hand_rank_counts[category] = hand_rank_counts.get(category, 0) + 1
        return result.winner


def simulate_game(num_players: int,
                  hand_rank_counts: MutableMapping[str, int],
                  rng: Optional[random.Random] = None,
                  deck: Optional[Deck] = None) -> int:
    """Simulate one game for ``num_players`` and return the winning seat."""
    return ShowdownSimulator(num_players, rng).simulate_game(hand_rank_counts, deck)
