"""Card, Rank, and Suit models."""

from enum import Enum


class Suit(str, Enum):
    CLUBS = "c"
    DIAMONDS = "d"
    HEARTS = "h"
    SPADES = "s"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "c": cls.CLUBS, "Clubs": cls.CLUBS, "♣": cls.CLUBS,
            "d": cls.DIAMONDS, "Diamonds": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "h": cls.HEARTS, "Hearts": cls.HEARTS, "♥": cls.HEARTS,
            "s": cls.SPADES, "Spades": cls.SPADES, "♠": cls.SPADES,
        }
        if s in mapping:
            return mapping[s]
        if s.lower() in mapping:
            return mapping[s.lower()]
        raise ValueError(f"Unknown suit: {s}")

    @property
    def symbol(self) -> str:
        return {"c": "♣", "d": "♦", "h": "♥", "s": "♠"}[self.value]


_RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
    "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}


class Rank(str, Enum):
    """Card rank, ordered by numeric value (Two lowest, Ace highest)."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        return _RANK_VALUES[self.value]

    @classmethod
    def from_value(cls, value: int) -> "Rank":
        try:
            return _RANKS_BY_VALUE[value]
        except KeyError:
            raise ValueError(f"Unknown rank value: {value}") from None

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        for r in cls:
            if r.value == c.upper():
                return r
        if c == "10":
            return cls.TEN
        raise ValueError(f"Unknown rank: {c}")

    # Inherited str ordering would put "A" below "K".
    def __lt__(self, other):
        if not isinstance(other, Rank):
            return NotImplemented
        return self.numeric_value < other.numeric_value

    def __le__(self, other):
        if not isinstance(other, Rank):
            return NotImplemented
        return self.numeric_value <= other.numeric_value

    def __gt__(self, other):
        if not isinstance(other, Rank):
            return NotImplemented
        return self.numeric_value > other.numeric_value

    def __ge__(self, other):
        if not isinstance(other, Rank):
            return NotImplemented
        return self.numeric_value >= other.numeric_value


_RANKS_BY_VALUE = {r.numeric_value: r for r in Rank}


class Card:
    """A single playing card. Immutable once created."""

    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "rank", rank)
        object.__setattr__(self, "suit", suit)

    def __setattr__(self, name, value):
        raise AttributeError(f"Card is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Card is immutable, cannot delete {name!r}")

    def __reduce__(self):
        return self.__class__, (self.rank, self.suit)

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '2c', '10d'."""
        s = s.strip()
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise ValueError(f"Cannot parse card: {s}")

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))
