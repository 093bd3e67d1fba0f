"""Hand evaluation for showdown simulation."""

import functools
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Sequence, Tuple

from showdown_sim.models.card import Card, Rank

WHEEL = frozenset({2, 3, 4, 5, 14})


class HandCategory(IntEnum):
    """Hand categories from worst to best."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        """Stable label used as the key of category tallies."""
        return _LABELS[self]

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


_LABELS = {
    HandCategory.HIGH_CARD: "HighCard",
    HandCategory.ONE_PAIR: "OnePair",
    HandCategory.TWO_PAIR: "TwoPair",
    HandCategory.THREE_OF_A_KIND: "ThreeOfAKind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "FullHouse",
    HandCategory.FOUR_OF_A_KIND: "FourOfAKind",
    HandCategory.STRAIGHT_FLUSH: "StraightFlush",
    HandCategory.ROYAL_FLUSH: "RoyalFlush",
}


@functools.total_ordering
@dataclass(frozen=True)
class HandRank:
    """A hand category plus the ranks that decide ties inside it.

    Only the deciding ranks are carried (a pair carries its pair rank, not
    its kickers), so hands that differ only by kickers compare equal.
    """
    category: HandCategory
    ranks: Tuple[Rank, ...] = ()

    @property
    def sort_key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.category), tuple(r.numeric_value for r in self.ranks)

    def __lt__(self, other):
        if not isinstance(other, HandRank):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        if not self.ranks:
            return self.category.label
        return f"{self.category.label}({', '.join(r.value for r in self.ranks)})"


def is_sequence(values: Sequence[int]) -> bool:
    """Check whether five rank values form a straight.

    Duplicated values can never make a straight. The only wrap-around
    accepted is the wheel, A-2-3-4-5.
    """
    unique = set(values)
    if len(unique) != 5:
        return False
    return max(unique) - min(unique) == 4 or unique == WHEEL


def _straight_high(values: Sequence[int]) -> int:
    # The ace plays low in the wheel.
    if set(values) == WHEEL:
        return 5
    return max(values)


def combination_indices(n: int, k: int) -> Iterator[Tuple[int, ...]]:
    """Yield every k-element index combination of range(n) in lexicographic order."""
    if k < 0 or k > n:
        return
    indices = list(range(k))
    yield tuple(indices)
    while True:
        for i in reversed(range(k)):
            if indices[i] != i + n - k:
                break
        else:
            return
        indices[i] += 1
        for j in range(i + 1, k):
            indices[j] = indices[j - 1] + 1
        yield tuple(indices)


@functools.lru_cache(maxsize=None)
def _five_card_subsets(n: int) -> Tuple[Tuple[int, ...], ...]:
    return tuple(combination_indices(n, 5))


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandRank:
        """Evaluate the best 5-card hand available in ``cards``.

        Args:
            cards: 5 to 7 cards.

        Returns:
            The highest HandRank over every 5-card subset.
        """
        if len(cards) < 5:
            raise ValueError(f"Need at least 5 cards to evaluate, got {len(cards)}")

        if len(cards) == 5:
            return HandEvaluator.evaluate_five(cards)

        best = None
        best_key = None
        for combo in _five_card_subsets(len(cards)):
            rank = HandEvaluator.evaluate_five([cards[i] for i in combo])
            key = rank.sort_key
            if best is None or key > best_key:
                best, best_key = rank, key
        return best

    @staticmethod
    def evaluate_five(cards: Sequence[Card]) -> HandRank:
        """Evaluate exactly 5 cards."""
        if len(cards) != 5:
            raise ValueError(f"Expected 5 cards, got {len(cards)}")

        values = sorted((c.rank.numeric_value for c in cards), reverse=True)

        is_flush = len({c.suit for c in cards}) == 1
        is_straight = is_sequence(values)

        if is_flush and is_straight:
            # A straight holding both Ace and King can only be T-J-Q-K-A.
            if values[0] == 14 and values[1] == 13:
                return HandRank(HandCategory.ROYAL_FLUSH)
            return HandRank(HandCategory.STRAIGHT_FLUSH,
                            (Rank.from_value(_straight_high(values)),))

        counts: Dict[int, int] = {}
        for v in values:
            counts[v] = counts.get(v, 0) + 1

        # Most frequent first, higher value first among equal counts.
        groups = sorted(counts.items(), key=lambda vc: (vc[1], vc[0]), reverse=True)
        top_value, top_count = groups[0]
        second_count = groups[1][1] if len(groups) > 1 else 0

        if top_count == 4:
            return HandRank(HandCategory.FOUR_OF_A_KIND, (Rank.from_value(top_value),))

        if top_count == 3 and second_count == 2:
            return HandRank(HandCategory.FULL_HOUSE,
                            (Rank.from_value(top_value), Rank.from_value(groups[1][0])))

        if is_flush:
            return HandRank(HandCategory.FLUSH, (Rank.from_value(values[0]),))

        if is_straight:
            return HandRank(HandCategory.STRAIGHT,
                            (Rank.from_value(_straight_high(values)),))

        if top_count == 3:
            return HandRank(HandCategory.THREE_OF_A_KIND, (Rank.from_value(top_value),))

        # Pair ranks come out high to low.
        if top_count == 2 and second_count == 2:
            return HandRank(HandCategory.TWO_PAIR,
                            (Rank.from_value(top_value), Rank.from_value(groups[1][0])))

        if top_count == 2:
            return HandRank(HandCategory.ONE_PAIR, (Rank.from_value(top_value),))

        return HandRank(HandCategory.HIGH_CARD, (Rank.from_value(values[0]),))

    @staticmethod
    def compare(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
        """Compare two hands.

        Returns:
            1 if cards1 wins, -1 if cards2 wins, 0 if tie.
        """
        rank1 = HandEvaluator.evaluate(cards1)
        rank2 = HandEvaluator.evaluate(cards2)

        if rank1 > rank2:
            return 1
        if rank1 < rank2:
            return -1
        return 0

    @staticmethod
    def get_winners(board: List[Card],
                    player_cards: Dict[int, List[Card]]) -> List[int]:
        """Get the winning seat(s) from a group of players.

        Args:
            board: Community cards.
            player_cards: Mapping from seat to player's hole cards.

        Returns:
            List of winning seat numbers (may be multiple for ties).
        """
        if not player_cards:
            return []

        evaluations = {
            seat: HandEvaluator.evaluate(list(cards) + list(board))
            for seat, cards in player_cards.items()
        }
        best = max(evaluations.values())
        return [seat for seat, rank in evaluations.items() if rank == best]


def evaluate_five_card_hand(cards: Sequence[Card]) -> HandRank:
    return HandEvaluator.evaluate_five(cards)


def evaluate_hand(cards: Sequence[Card]) -> HandRank:
    return HandEvaluator.evaluate(cards)
