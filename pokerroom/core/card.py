"""
Card and deck primitives for Texas Hold'em.

Cards are immutable (rank, suit) values. A deck is a plain tuple of cards;
dealing returns the dealt cards together with the remaining deck so that
room state never shares a mutable deck between snapshots.

String notation is rank char + suit char, e.g. "Ah", "Td", "2c".
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    HEARTS = 0    # ♥
    DIAMONDS = 1  # ♦
    CLUBS = 2     # ♣
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks; the value is the face value with Ace high (14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10s")
      or Card.from_string("A♠")

    Equality and hashing are by (rank, suit).
    """

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "As", "kh", "10d" and symbol forms like "A♠".
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        rank_part, suit_part = s[:-1].upper(), s[-1]
        if rank_part == "10":
            rank_part = "T"
        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part!r}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part!r}")

        return cls(CHAR_TO_RANK[rank_part], suit)

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Serialized form like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"


CardLike = Union[Card, str]


def to_card(card: CardLike) -> Card:
    """Accept either a Card or its string notation."""
    return card if isinstance(card, Card) else Card.from_string(card)


def to_cards(cards: Iterable[CardLike]) -> List[Card]:
    return [to_card(c) for c in cards]


def ordered_deck() -> Tuple[Card, ...]:
    """All 52 cards in suit-major, rank-ascending order."""
    return tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def shuffled_deck(rng: random.Random) -> Tuple[Card, ...]:
    """
    A fresh full deck permuted by the caller's random source.

    Each call starts from the ordered 52 cards, so a deck is never
    partially reshuffled.
    """
    cards = list(ordered_deck())
    rng.shuffle(cards)
    return tuple(cards)


def deal(deck: Sequence[Card], n: int = 1) -> Tuple[Tuple[Card, ...], Tuple[Card, ...]]:
    """
    Deal n cards from the front of the deck.

    Returns:
        Tuple of (dealt cards, remaining deck)

    Raises:
        ValueError: If not enough cards remain.
    """
    if n > len(deck):
        raise ValueError(f"Cannot deal {n} cards, only {len(deck)} remain")
    return tuple(deck[:n]), tuple(deck[n:])


def burn_and_deal(deck: Sequence[Card], n: int) -> Tuple[Tuple[Card, ...], Tuple[Card, ...]]:
    """Discard the top card, then deal n."""
    _, rest = deal(deck, 1)
    return deal(rest, n)


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str or "," in cards_str:
        return [Card.from_string(s) for s in cards_str.replace(",", " ").split()]

    if len(cards_str) % 2:
        raise ValueError(f"Cannot parse cards: {cards_str!r}")
    return [Card.from_string(cards_str[i:i + 2]) for i in range(0, len(cards_str), 2)]
