"""Bit-parallel classification of 5-card poker hands."""

from collections import Counter
from enum import IntEnum
from typing import Sequence

from poker.cards import HAND_SIZE, Card, Rank


class HandValue(IntEnum):
    """Hand categories from weakest to strongest.

    ROYAL_STRAIGHT is an intermediate shape (ten through ace, any suits) that
    ``classify`` collapses into STRAIGHT or ROYAL_FLUSH. FIVE_OF_A_KIND can
    only occur with decks holding more than four cards of a rank.
    """

    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    ROYAL_STRAIGHT = 6
    FLUSH = 7
    FULL_HOUSE = 8
    FOUR_OF_A_KIND = 9
    STRAIGHT_FLUSH = 10
    ROYAL_FLUSH = 11
    FIVE_OF_A_KIND = 12

    def __str__(self) -> str:
        names = {
            1: "High Card",
            2: "One Pair",
            3: "Two Pair",
            4: "Three of a Kind",
            5: "Straight",
            6: "Royal Straight",
            7: "Flush",
            8: "Full House",
            9: "Four of a Kind",
            10: "Straight Flush",
            11: "Royal Flush",
            12: "Five of a Kind",
        }
        return names[self.value]


# Categories that can come out of classify()
REPORTED_VALUES: tuple[HandValue, ...] = tuple(
    v for v in HandValue if v is not HandValue.ROYAL_STRAIGHT
)


def _check_size(hand: Sequence[Card]) -> None:
    if len(hand) != HAND_SIZE:
        raise ValueError(f"Expected {HAND_SIZE} cards, got {len(hand)}")


def is_flush(hand: Sequence[Card]) -> bool:
    """Bitwise-or the suits together; a flush collapses to a single bit."""
    _check_size(hand)
    suits = hand[0].suit | hand[1].suit | hand[2].suit | hand[3].suit | hand[4].suit
    return suits.bit_count() == 1


def check_straight(hand: Sequence[Card]) -> HandValue:
    """Classify a hand of five distinct ranks as a straight or high card.

    With one-hot ranks, five consecutive ranks span exactly a factor of 16
    between the lowest and highest bit. The wheel (A-2-3-4-5) is the one
    straight where that doesn't hold, since the ace sits at the top.
    """
    _check_size(hand)
    ranks = sorted(card.rank for card in hand)

    if ranks[0] * 16 != ranks[4]:
        if ranks[3] == Rank.FIVE and ranks[4] == Rank.ACE:
            return HandValue.STRAIGHT
        return HandValue.HIGH_CARD
    if ranks[4] == Rank.ACE:
        return HandValue.ROYAL_STRAIGHT
    return HandValue.STRAIGHT


def max_same_kind(hand: Sequence[Card]) -> int:
    """Size of the largest group of cards sharing a rank."""
    counts = Counter(card.rank for card in hand)
    return counts.most_common(1)[0][1]


def rank_shape(hand: Sequence[Card]) -> HandValue:
    """Classify by rank alone, ignoring suits."""
    _check_size(hand)
    rank_union = hand[0].rank | hand[1].rank | hand[2].rank | hand[3].rank | hand[4].rank
    distinct = rank_union.bit_count()

    if distinct == 1:
        return HandValue.FIVE_OF_A_KIND
    if distinct == 2:
        return HandValue.FOUR_OF_A_KIND if max_same_kind(hand) == 4 else HandValue.FULL_HOUSE
    if distinct == 3:
        return HandValue.THREE_OF_A_KIND if max_same_kind(hand) == 3 else HandValue.TWO_PAIR
    if distinct == 4:
        return HandValue.ONE_PAIR
    if distinct == 5:
        return check_straight(hand)
    raise AssertionError(f"Impossible rank union {rank_union:#015b} for {HAND_SIZE} cards")


def classify(hand: Sequence[Card]) -> HandValue:
    """Classify exactly 5 cards into one hand category.

    Rank shape and flush are computed independently and only combined at
    the end, so a flush is found regardless of the rank pattern.
    """
    shape = rank_shape(hand)
    flush = is_flush(hand)

    if flush:
        if shape is HandValue.ROYAL_STRAIGHT:
            return HandValue.ROYAL_FLUSH
        if shape is HandValue.STRAIGHT:
            return HandValue.STRAIGHT_FLUSH
        if shape in (HandValue.FIVE_OF_A_KIND, HandValue.FOUR_OF_A_KIND, HandValue.FULL_HOUSE):
            return shape
        if shape in (
            HandValue.THREE_OF_A_KIND,
            HandValue.TWO_PAIR,
            HandValue.ONE_PAIR,
            HandValue.HIGH_CARD,
        ):
            return HandValue.FLUSH
    else:
        if shape is HandValue.ROYAL_STRAIGHT:
            return HandValue.STRAIGHT
        if shape in (
            HandValue.FIVE_OF_A_KIND,
            HandValue.FOUR_OF_A_KIND,
            HandValue.FULL_HOUSE,
            HandValue.STRAIGHT,
            HandValue.THREE_OF_A_KIND,
            HandValue.TWO_PAIR,
            HandValue.ONE_PAIR,
            HandValue.HIGH_CARD,
        ):
            return shape

    raise AssertionError(f"Unhandled combination: {shape!r}, flush={flush}")


def classify_strings(card_strings: Sequence[str]) -> HandValue:
    """Classify a hand given as strings like ['As', 'Ks', 'Qs', 'Js', 'Ts']."""
    return classify([Card.from_string(s) for s in card_strings])
