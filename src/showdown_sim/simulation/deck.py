"""Deck management for showdown simulation."""

import random
from typing import Iterable, List, Optional

from showdown_sim.models.card import Card, Rank, Suit


class Deck:
    """A standard 52-card deck.

    Cards are dealt from the top, which is the end of ``cards``.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize a new deck with all 52 cards in canonical order.

        Args:
            rng: Random generator used by ``shuffle``. Defaults to a fresh
                ``random.Random`` seeded from the OS.
        """
        self.cards: List[Card] = []
        self._rng = rng or random.Random()
        self._reset()

    @classmethod
    def from_cards(cls, cards: Iterable[Card],
                   rng: Optional[random.Random] = None) -> "Deck":
        """Build a deck holding exactly ``cards``; the last card is dealt first."""
        cards = list(cards)
        if len(set(cards)) != len(cards):
            raise ValueError("Deck cannot contain duplicate cards")
        deck = cls(rng)
        deck.cards = cards
        return deck

    def _reset(self):
        """Reset the deck to all 52 cards, suit-major, Two through Ace."""
        self.cards = []
        for suit in Suit:
            for rank in Rank:
                self.cards.append(Card(rank, suit))

    def shuffle(self):
        """Shuffle the deck in place."""
        self._rng.shuffle(self.cards)

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the top of the deck.

        Args:
            count: Number of cards to deal.

        Returns:
            List of dealt cards, in the order they came off the deck.
        """
        if count > len(self.cards):
            raise ValueError(f"Not enough cards in deck. Need {count}, have {len(self.cards)}")

        return [self.cards.pop() for _ in range(count)]

    def deal_one(self) -> Card:
        """Deal a single card from the top of the deck.

        Returns:
            The dealt card.
        """
        return self.deal(1)[0]

    def reset(self):
        """Reset and shuffle the deck."""
        self._reset()
        self.shuffle()

    @property
    def remaining(self) -> int:
        """Get the number of remaining cards."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self.cards)})"
