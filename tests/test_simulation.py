"""Tests for the showdown simulation module."""

import pickle
import random
from collections import Counter
from itertools import combinations, permutations

import pytest

from showdown_sim.models.card import Card, Rank, Suit
from showdown_sim.models.simulation import MAX_PLAYERS
from showdown_sim.simulation.deck import Deck
from showdown_sim.simulation.evaluator import (
    HandCategory, HandEvaluator, HandRank, combination_indices, is_sequence,
    evaluate_five_card_hand, evaluate_hand,
)
from showdown_sim.simulation.engine import ShowdownSimulator, simulate_game


def cards(s):
    return [Card.parse(c) for c in s.split()]


class _KeepOrder(random.Random):
    """Generator that leaves sequences in place when asked to shuffle."""

    def shuffle(self, x):
        pass


class TestCard:
    """Tests for the Card, Rank and Suit models."""

    def test_parse(self):
        assert Card.parse("As") == Card(Rank.ACE, Suit.SPADES)
        assert Card.parse("10h") == Card(Rank.TEN, Suit.HEARTS)
        assert str(Card.parse("Td")) == "T♦"
        with pytest.raises(ValueError):
            Card.parse("Zz")

    def test_rank_order(self):
        assert Rank.ACE > Rank.KING > Rank.TEN > Rank.NINE > Rank.TWO
        assert sorted([Rank.KING, Rank.TWO, Rank.ACE]) == [Rank.TWO, Rank.KING, Rank.ACE]
        assert Rank.from_value(14) is Rank.ACE
        with pytest.raises(ValueError):
            Rank.from_value(1)

    def test_card_is_immutable(self):
        """A card in a set cannot be changed out from under it."""
        card = Card.parse("As")
        held = {card}
        with pytest.raises(AttributeError):
            card.rank = Rank.KING
        with pytest.raises(AttributeError):
            card.suit = Suit.HEARTS
        with pytest.raises(AttributeError):
            del card.rank
        assert card == Card(Rank.ACE, Suit.SPADES)
        assert card in held

    def test_card_pickles(self):
        card = Card.parse("Qc")
        assert pickle.loads(pickle.dumps(card)) == card


class TestDeck:
    """Tests for the Deck class."""

    def test_deck_initialization(self):
        """A new deck holds the 52 distinct cards."""
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52

    def test_canonical_order(self):
        """Cards are built suit-major, Two through Ace."""
        deck = Deck()
        assert deck.cards[0] == Card(Rank.TWO, Suit.CLUBS)
        assert deck.cards[12] == Card(Rank.ACE, Suit.CLUBS)
        assert deck.cards[13] == Card(Rank.TWO, Suit.DIAMONDS)
        assert deck.cards[-1] == Card(Rank.ACE, Suit.SPADES)

    def test_deck_shuffle(self):
        """Shuffling reorders the same 52 cards."""
        deck1 = Deck(random.Random(42))
        deck2 = Deck()
        deck1.shuffle()

        assert set(deck1.cards) == set(deck2.cards)
        assert len(deck1) == 52
        assert deck1.cards != deck2.cards

    def test_shuffle_is_seeded(self):
        """Decks shuffled with equal seeds come out identical."""
        deck1 = Deck(random.Random(5))
        deck2 = Deck(random.Random(5))
        deck1.shuffle()
        deck2.shuffle()
        assert deck1.cards == deck2.cards

    def test_deal_cards(self):
        """Dealt cards are exactly the ones removed from the top."""
        deck = Deck(random.Random(1))
        deck.shuffle()
        before = list(deck.cards)

        dealt = deck.deal(5)
        assert len(dealt) == 5
        assert len(deck) == 47
        assert dealt == list(reversed(before[-5:]))
        assert set(dealt) | set(deck.cards) == set(before)
        assert not set(dealt) & set(deck.cards)

    def test_deal_one(self):
        """Dealing a single card takes the top card."""
        deck = Deck()
        card = deck.deal_one()
        assert card == Card(Rank.ACE, Suit.SPADES)
        assert len(deck) == 51
        assert deck.remaining == 51

    def test_deal_too_many(self):
        """Dealing from an exhausted deck is an error."""
        deck = Deck()
        deck.deal(52)
        with pytest.raises(ValueError):
            deck.deal(1)

    def test_reset(self):
        """Resetting restores all 52 cards."""
        deck = Deck()
        deck.deal(10)
        assert len(deck) == 42
        deck.reset()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52

    def test_from_cards(self):
        """An explicit deck deals its last card first."""
        deck = Deck.from_cards(cards("2c 3d 4h"))
        assert deck.deal_one() == Card.parse("4h")
        assert len(deck) == 2

    def test_from_cards_rejects_duplicates(self):
        with pytest.raises(ValueError):
            Deck.from_cards(cards("2c 2c"))


class TestHelpers:
    """Tests for straight detection and combination generation."""

    def test_is_sequence(self):
        assert is_sequence([2, 3, 4, 5, 6])
        assert is_sequence([14, 13, 12, 11, 10])
        assert is_sequence([14, 2, 3, 4, 5])

    def test_is_sequence_rejects(self):
        assert not is_sequence([2, 2, 3, 4, 5])
        assert not is_sequence([11, 12, 13, 14, 2])
        assert not is_sequence([2, 3, 4, 5, 7])

    def test_seven_choose_five(self):
        """21 distinct, sorted index subsets of 7."""
        combos = list(combination_indices(7, 5))
        assert len(combos) == 21
        assert len(set(combos)) == 21
        assert all(list(c) == sorted(c) for c in combos)
        assert combos[0] == (0, 1, 2, 3, 4)
        assert combos[-1] == (2, 3, 4, 5, 6)

    def test_small_combinations(self):
        assert list(combination_indices(4, 2)) == [
            (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3),
        ]
        assert list(combination_indices(5, 5)) == [(0, 1, 2, 3, 4)]
        assert list(combination_indices(3, 5)) == []

    def test_matches_itertools(self):
        assert list(combination_indices(9, 4)) == list(combinations(range(9), 4))


class TestHandEvaluator:
    """Tests for the HandEvaluator class."""

    def test_high_card(self):
        rank = HandEvaluator.evaluate(cards("As Th 8d 5c 2s"))
        assert rank == HandRank(HandCategory.HIGH_CARD, (Rank.ACE,))

    def test_one_pair(self):
        rank = HandEvaluator.evaluate(cards("As Ah 8d 5c 2s"))
        assert rank == HandRank(HandCategory.ONE_PAIR, (Rank.ACE,))

    def test_two_pair_sorted_high_first(self):
        """Pair ranks are reported high pair first whatever the input order."""
        rank = HandEvaluator.evaluate(cards("2s 8d Ah 8c As"))
        assert rank == HandRank(HandCategory.TWO_PAIR, (Rank.ACE, Rank.EIGHT))
        rank = HandEvaluator.evaluate(cards("8c 8d 2s Ah As"))
        assert rank.ranks == (Rank.ACE, Rank.EIGHT)

    def test_three_of_a_kind(self):
        rank = HandEvaluator.evaluate(cards("As Ah Ad 5c 2s"))
        assert rank == HandRank(HandCategory.THREE_OF_A_KIND, (Rank.ACE,))

    def test_straight(self):
        rank = HandEvaluator.evaluate(cards("6s 5h 4d 3c 2s"))
        assert rank == HandRank(HandCategory.STRAIGHT, (Rank.SIX,))

    def test_wheel_straight(self):
        """The wheel is a five-high straight, below a six-high straight."""
        wheel = HandEvaluator.evaluate(cards("Ah 2h 3d 4c 5s"))
        six_high = HandEvaluator.evaluate(cards("2h 3d 4c 5s 6h"))
        assert wheel == HandRank(HandCategory.STRAIGHT, (Rank.FIVE,))
        assert wheel < six_high

    def test_no_wraparound_straight(self):
        rank = HandEvaluator.evaluate(cards("Qh Kd Ac 2s 3h"))
        assert rank.category == HandCategory.HIGH_CARD

    def test_flush(self):
        rank = HandEvaluator.evaluate(cards("As Ts 8s 5s 2s"))
        assert rank == HandRank(HandCategory.FLUSH, (Rank.ACE,))

    def test_flush_compares_by_high_card(self):
        ace_high = HandEvaluator.evaluate(cards("As Ts 8s 5s 2s"))
        king_high = HandEvaluator.evaluate(cards("Kh Qh 8h 5h 2h"))
        assert ace_high > king_high

    def test_full_house(self):
        rank = HandEvaluator.evaluate(cards("As Ah Ad 8c 8s"))
        assert rank == HandRank(HandCategory.FULL_HOUSE, (Rank.ACE, Rank.EIGHT))

    def test_full_house_trips_decide(self):
        threes_full = HandEvaluator.evaluate(cards("3s 3h 3d Ac As"))
        twos_full = HandEvaluator.evaluate(cards("2s 2h 2d Ac Ad"))
        assert threes_full > twos_full

    def test_full_house_low_trips(self):
        """Trips lead the full house even when the pair ranks higher."""
        rank = HandEvaluator.evaluate(cards("2s 2h 2d Ac As"))
        assert rank == HandRank(HandCategory.FULL_HOUSE, (Rank.TWO, Rank.ACE))

    def test_two_pair_high_kicker(self):
        rank = HandEvaluator.evaluate(cards("3s 3h 2d 2c As"))
        assert rank == HandRank(HandCategory.TWO_PAIR, (Rank.THREE, Rank.TWO))

    def test_four_of_a_kind(self):
        rank = HandEvaluator.evaluate(cards("As Ah Ad Ac 2s"))
        assert rank == HandRank(HandCategory.FOUR_OF_A_KIND, (Rank.ACE,))

    def test_straight_flush(self):
        rank = HandEvaluator.evaluate(cards("6s 5s 4s 3s 2s"))
        assert rank == HandRank(HandCategory.STRAIGHT_FLUSH, (Rank.SIX,))

    def test_steel_wheel(self):
        """A wheel straight flush is five high."""
        rank = HandEvaluator.evaluate(cards("As 2s 3s 4s 5s"))
        assert rank == HandRank(HandCategory.STRAIGHT_FLUSH, (Rank.FIVE,))

    def test_royal_flush(self):
        """A royal flush beats every straight flush."""
        royal = HandEvaluator.evaluate(cards("Ts Js Qs Ks As"))
        king_high = HandEvaluator.evaluate(cards("9h Th Jh Qh Kh"))
        assert royal == HandRank(HandCategory.ROYAL_FLUSH)
        assert royal > king_high

    def test_category_order(self):
        """Representative hands of each category rank strictly in order."""
        hands = [
            "As Th 8d 5c 2s",
            "As Ah 8d 5c 2s",
            "As Ah 8d 8c 2s",
            "As Ah Ad 5c 2s",
            "6s 5h 4d 3c 2s",
            "As Ts 8s 5s 2s",
            "As Ah Ad 8c 8s",
            "As Ah Ad Ac 2s",
            "6s 5s 4s 3s 2s",
            "Ts Js Qs Ks As",
        ]
        ranks = [HandEvaluator.evaluate(cards(h)) for h in hands]
        assert [r.category for r in ranks] == list(HandCategory)
        for lower, higher in zip(ranks, ranks[1:]):
            assert lower < higher

    def test_kickers_not_modeled(self):
        """Hands differing only by kickers compare equal."""
        a = HandEvaluator.evaluate(cards("As Ah Kd 5c 2s"))
        b = HandEvaluator.evaluate(cards("Ad Ac 9d 5h 3s"))
        assert a == b

    def test_permutation_invariance(self):
        """Input order never changes the result."""
        for hand in ["Ah 2h 3d 4c 5s", "As Ah 8d 8c 2s", "Ts Js Qs Ks As", "3s 3h 3d Ac As"]:
            base = cards(hand)
            expected = evaluate_five_card_hand(base)
            for perm in permutations(base):
                assert evaluate_five_card_hand(list(perm)) == expected

    def test_permutation_invariance_random_hands(self):
        """Random five-card hands evaluate the same in any order."""
        rng = random.Random(31)
        full_deck = Deck().cards
        for _ in range(200):
            hand = rng.sample(full_deck, 5)
            expected = evaluate_five_card_hand(hand)
            for _ in range(5):
                shuffled = list(hand)
                rng.shuffle(shuffled)
                assert evaluate_five_card_hand(shuffled) == expected

    def test_seven_cards_pick_best(self):
        rank = evaluate_hand(cards("Qs Js Ts 9s 8s 8h 8d"))
        assert rank == HandRank(HandCategory.STRAIGHT_FLUSH, (Rank.QUEEN,))

    def test_seven_card_brute_force(self):
        """Seven-card evaluation equals the max over all 21 subsets."""
        rng = random.Random(2024)
        full_deck = Deck().cards
        for _ in range(200):
            hand = rng.sample(full_deck, 7)
            expected = max(evaluate_five_card_hand(list(c)) for c in combinations(hand, 5))
            assert evaluate_hand(hand) == expected

    def test_too_few_cards(self):
        with pytest.raises(ValueError):
            HandEvaluator.evaluate(cards("As Ks Qs Js"))

    def test_compare_hands(self):
        pair = cards("As Ah 8d 5c 2s")
        high_card = cards("Ks Qh Jd Tc 8s")
        assert HandEvaluator.compare(pair, high_card) == 1
        assert HandEvaluator.compare(high_card, pair) == -1
        assert HandEvaluator.compare(pair, pair) == 0

    def test_get_winners(self):
        board = cards("2c 7d 9h Js Kc")
        winners = HandEvaluator.get_winners(board, {
            1: cards("Ah Ad"),
            2: cards("Kh Kd"),
            3: cards("As Ac"),
        })
        assert winners == [2]

    def test_labels(self):
        assert HandCategory.ROYAL_FLUSH.label == "RoyalFlush"
        assert HandCategory.THREE_OF_A_KIND.label == "ThreeOfAKind"
        assert HandCategory.HIGH_CARD.display_name == "High Card"
        assert str(HandRank(HandCategory.TWO_PAIR, (Rank.ACE, Rank.TEN))) == "TwoPair(A, T)"


class TestShowdownSimulator:
    """Tests for the ShowdownSimulator class."""

    def test_player_count_validation(self):
        with pytest.raises(ValueError):
            ShowdownSimulator(MAX_PLAYERS + 1)
        with pytest.raises(ValueError):
            ShowdownSimulator(1)
        assert ShowdownSimulator(MAX_PLAYERS).num_players == 23

    def test_fixed_deck_game(self):
        """An unshuffled deck gives a known deal and winner."""
        counts = {}
        winner = simulate_game(2, counts, rng=_KeepOrder(), deck=Deck())
        # Seat 0 holds As Ks, seat 1 holds Qs Js, board is Ts 9s 8s 7s 6s.
        assert winner == 1
        assert counts == {"StraightFlush": 2}

    def test_fixed_deck_showdown(self):
        simulator = ShowdownSimulator(2, _KeepOrder())
        result = simulator.play_hand(Deck())
        assert result.players[0].cards == cards("As Ks")
        assert result.players[1].cards == cards("Qs Js")
        assert result.board == cards("Ts 9s 8s 7s 6s")
        assert result.hand_ranks == [
            HandRank(HandCategory.STRAIGHT_FLUSH, (Rank.TEN,)),
            HandRank(HandCategory.STRAIGHT_FLUSH, (Rank.QUEEN,)),
        ]
        assert result.tied_seats == [1]
        assert not result.is_split

    def test_seats_are_shuffled(self):
        """The best hole cards land on either seat, not always the dealt one."""
        simulator = ShowdownSimulator(2, random.Random(11))
        winners = Counter(simulator.play_hand(Deck()).winner for _ in range(1000))
        assert 400 < winners[0] < 600

    def test_tie_break_fairness(self):
        """A royal flush board ties every player; each wins about half."""
        deal_order = cards("2c 3d 4h 5c Ts Js Qs Ks As")
        simulator = ShowdownSimulator(2, random.Random(7))
        wins = Counter()
        for _ in range(2000):
            result = simulator.play_hand(Deck.from_cards(reversed(deal_order)))
            assert result.tied_seats == [0, 1]
            assert result.categories == ["RoyalFlush", "RoyalFlush"]
            wins[result.winner] += 1
        assert 900 < wins[0] < 1100
        assert wins[0] + wins[1] == 2000

    def test_tally_counts_every_player(self):
        simulator = ShowdownSimulator(6, random.Random(3))
        counts = Counter()
        winners = [simulator.simulate_game(counts) for _ in range(200)]
        assert sum(counts.values()) == 1200
        assert all(0 <= w < 6 for w in winners)
        assert set(counts) <= {c.label for c in HandCategory}

    def test_cards_are_unique(self):
        simulator = ShowdownSimulator(23, random.Random(9))
        result = simulator.play_hand()
        dealt = [c for p in result.players for c in p.cards] + result.board
        assert len(dealt) == 51
        assert len(set(dealt)) == 51

    def test_winner_holds_best_hand(self):
        simulator = ShowdownSimulator(5, random.Random(4))
        for _ in range(100):
            result = simulator.play_hand()
            assert result.winning_rank == max(result.hand_ranks)
            assert result.winner in result.tied_seats


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
