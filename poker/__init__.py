"""Card model and 5-card hand classification."""

from poker.cards import Card, Deck, Rank, Suit
from poker.hand_evaluator import HandValue, classify

__all__ = ["Card", "Deck", "HandValue", "Rank", "Suit", "classify"]
