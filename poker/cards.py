"""Card, Deck, Suit, and Rank definitions for poker.

Ranks and suits are one-hot bits so that hands can be classified with
bitwise unions and popcounts instead of sorting explicit rank lists.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

import numpy as np

NUM_RANKS = 13
NUM_SUITS = 4
NUM_CARDS = NUM_RANKS * NUM_SUITS
HAND_SIZE = 5


class Suit(IntEnum):
    """Card suits, one bit each within a 4-bit field."""

    CLUBS = 1 << 0
    DIAMONDS = 1 << 1
    HEARTS = 1 << 2
    SPADES = 1 << 3

    @property
    def index(self) -> int:
        """Position of the suit bit (0-3)."""
        return self.value.bit_length() - 1

    def __str__(self) -> str:
        return "♣♦♥♠"[self.index]


class Rank(IntEnum):
    """Card ranks, one bit each within a 13-bit field (TWO lowest, ACE highest)."""

    TWO = 1 << 0
    THREE = 1 << 1
    FOUR = 1 << 2
    FIVE = 1 << 3
    SIX = 1 << 4
    SEVEN = 1 << 5
    EIGHT = 1 << 6
    NINE = 1 << 7
    TEN = 1 << 8
    JACK = 1 << 9
    QUEEN = 1 << 10
    KING = 1 << 11
    ACE = 1 << 12

    @property
    def index(self) -> int:
        """Position of the rank bit (0 for TWO, 12 for ACE)."""
        return self.value.bit_length() - 1

    def __str__(self) -> str:
        if self <= Rank.TEN:
            return str(self.index + 2)
        return {Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K", Rank.ACE: "A"}[self]


RANK_CHARS = "23456789TJQKA"
SUIT_CHARS = "cdhs"


@dataclass(frozen=True, slots=True)
class Card:
    """A single playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return str(self.rank) + str(self.suit)

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    def to_index(self) -> int:
        """Convert to 0-51 index.

        Index = suit * 13 + rank, using bit positions for both.
        """
        return self.suit.index * NUM_RANKS + self.rank.index

    @classmethod
    def from_index(cls, index: int) -> "Card":
        """Create card from 0-51 index."""
        if not 0 <= index < NUM_CARDS:
            raise ValueError(f"Card index out of range: {index}")
        suit = Suit(1 << (index // NUM_RANKS))
        rank = Rank(1 << (index % NUM_RANKS))
        return cls(rank=rank, suit=suit)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Kh', '2c', 'Td'."""
        s = s.strip()
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()
        if rank_char not in RANK_CHARS:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in SUIT_CHARS:
            raise ValueError(f"Invalid suit: {suit_char}")
        return cls(
            rank=Rank(1 << RANK_CHARS.index(rank_char)),
            suit=Suit(1 << SUIT_CHARS.index(suit_char)),
        )


_STANDARD_CARDS: tuple[Card, ...] = tuple(Card.from_index(i) for i in range(NUM_CARDS))


class Deck:
    """A standard 52-card deck with its own random generator.

    The generator may be an existing ``numpy.random.Generator``, a
    ``SeedSequence``, an integer seed, or None for fresh OS entropy.
    """

    def __init__(self, seed: int | np.random.SeedSequence | np.random.Generator | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._cards: list[Card] = []
        self.reset()

    @classmethod
    def standard(
        cls, seed: int | np.random.SeedSequence | np.random.Generator | None = None
    ) -> "Deck":
        """Create a deck in canonical suit-major order."""
        return cls(seed)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def reset(self) -> None:
        """Reset deck to the 52 cards in canonical order."""
        self._cards = list(_STANDARD_CARDS)

    def shuffle(self) -> None:
        """Shuffle the deck in place."""
        self._rng.shuffle(self._cards)

    def hands(self, size: int = HAND_SIZE) -> Iterator[tuple[Card, ...]]:
        """Yield consecutive non-overlapping groups of ``size`` cards.

        Cards left over after the last full group are not dealt.
        """
        cards = self._cards
        for start in range(0, len(cards) - size + 1, size):
            yield tuple(cards[start : start + size])

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


HANDS_PER_DECK = NUM_CARDS // HAND_SIZE
