"""
Hand Evaluation for Texas Hold'em.

Evaluates up to 7 cards (2 hole cards + up to 5 community cards) and returns
the best hand as a HandValue: category, tie-break vector and the cards that
make the hand. HandValues are totally ordered: category first, then the
tie-break vector compared lexicographically. Higher is better.

Hand Rankings (best to worst):
1. Royal Flush: A♠ K♠ Q♠ J♠ T♠
2. Straight Flush: 5 consecutive cards of same suit
3. Four of a Kind: 4 cards of same rank
4. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
6. Straight: 5 consecutive cards
7. Three of a Kind: 3 cards of same rank
8. Two Pair: 2 different pairs
9. One Pair: 2 cards of same rank
10. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which is 5-high.
"""

from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pokerroom.core.card import Card, CardLike, Rank, to_cards


class HandCategory(IntEnum):
    """Hand categories from worst (lowest value) to best."""
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


HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

MAX_CARDS = 7
HAND_SIZE = 5
WHEEL_HIGH = 5


@total_ordering
@dataclass(frozen=True, eq=False)
class HandValue:
    """
    A comparable hand value.

    Attributes:
        category: Hand category
        tiebreak: Ranks compared in order when categories are equal
        cards: The cards that make the hand, most significant first
    """
    category: HandCategory
    tiebreak: Tuple[int, ...]
    cards: Tuple[Card, ...]

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.category), self.tiebreak

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: HandValue) -> bool:
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]


def evaluate_hand(cards: Iterable[CardLike]) -> HandValue:
    """
    Evaluate the best hand from up to 7 cards.

    Categories are searched flush-with-straight, flush, straight, four of a
    kind, full house, three of a kind, two pair, one pair, high card; the
    first match wins. With at most seven cards a flush or straight never
    coexists with quads or a full house, so this search agrees with the
    ranking order.

    Args:
        cards: 1-7 Cards or card strings ("Ah", "Td")

    Raises:
        ValueError: If no cards, more than 7, or duplicates are given
    """
    cards = to_cards(cards)
    if not 1 <= len(cards) <= MAX_CARDS:
        raise ValueError(f"Need 1-{MAX_CARDS} cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    by_suit: Dict[int, List[Card]] = defaultdict(list)
    for card in cards:
        by_suit[card.suit].append(card)
    flush_cards = next(
        (_by_rank(suited) for suited in by_suit.values() if len(suited) >= HAND_SIZE),
        None,
    )

    if flush_cards:
        straight = _find_straight(flush_cards)
        if straight:
            high, run = straight
            category = HandCategory.ROYAL_FLUSH if high == Rank.ACE else HandCategory.STRAIGHT_FLUSH
            return HandValue(category, (high,), run)

        best = flush_cards[:HAND_SIZE]
        return HandValue(HandCategory.FLUSH, _ranks(best), tuple(best))

    ordered = _by_rank(cards)
    straight = _find_straight(ordered)
    if straight:
        high, run = straight
        return HandValue(HandCategory.STRAIGHT, (high,), run)

    groups = _group_by_rank(ordered)
    counts = [len(group) for group in groups]

    if counts[0] == 4:
        quads = groups[0]
        kickers = _kickers(ordered, quads, 1)
        return _made(HandCategory.FOUR_OF_A_KIND, [quads[0].rank], quads, kickers)

    if counts[0] == 3 and len(counts) > 1 and counts[1] >= 2:
        trips, pair = groups[0], groups[1][:2]
        return _made(HandCategory.FULL_HOUSE, [trips[0].rank, pair[0].rank], trips + pair, [])

    if counts[0] == 3:
        trips = groups[0]
        kickers = _kickers(ordered, trips, 2)
        return _made(HandCategory.THREE_OF_A_KIND, [trips[0].rank], trips, kickers)

    if counts[0] == 2 and len(counts) > 1 and counts[1] == 2:
        pairs = groups[0] + groups[1]
        kickers = _kickers(ordered, pairs, 1)
        return _made(HandCategory.TWO_PAIR, [groups[0][0].rank, groups[1][0].rank], pairs, kickers)

    if counts[0] == 2:
        pair = groups[0]
        kickers = _kickers(ordered, pair, 3)
        return _made(HandCategory.ONE_PAIR, [pair[0].rank], pair, kickers)

    best = ordered[:HAND_SIZE]
    return HandValue(HandCategory.HIGH_CARD, _ranks(best), tuple(best))


def _by_rank(cards: Iterable[Card]) -> List[Card]:
    """Sort by rank descending, suit as a stable secondary key."""
    return sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True)


def _ranks(cards: Sequence[Card]) -> Tuple[int, ...]:
    return tuple(int(c.rank) for c in cards)


def _find_straight(cards: Sequence[Card]) -> Optional[Tuple[int, Tuple[Card, ...]]]:
    """
    Find the highest 5-card run among rank-sorted cards.

    Returns:
        (straight value, run cards high to low) or None. The wheel
        (A-2-3-4-5) has value 5 and lists the Ace last.
    """
    first_of_rank: Dict[int, Card] = {}
    for card in cards:
        first_of_rank.setdefault(int(card.rank), card)
    if Rank.ACE in first_of_rank:
        first_of_rank.setdefault(1, first_of_rank[Rank.ACE])

    for high in range(Rank.ACE, WHEEL_HIGH - 1, -1):
        run = [first_of_rank.get(r) for r in range(high, high - HAND_SIZE, -1)]
        if all(run):
            return high, tuple(run)
    return None


def _group_by_rank(cards: Sequence[Card]) -> List[List[Card]]:
    """Group cards by rank, largest group first, then higher rank first."""
    counts = Counter(c.rank for c in cards)
    groups: Dict[int, List[Card]] = defaultdict(list)
    for card in cards:
        groups[card.rank].append(card)
    return sorted(groups.values(), key=lambda g: (counts[g[0].rank], g[0].rank), reverse=True)


def _kickers(ordered: Sequence[Card], used: Sequence[Card], n: int) -> List[Card]:
    """The n highest cards not already part of the made hand."""
    return [c for c in ordered if c not in used][:n]


def _made(category: HandCategory, made_ranks: List[int], made: List[Card], kickers: List[Card]) -> HandValue:
    tiebreak = tuple(int(r) for r in made_ranks) + _ranks(kickers)
    return HandValue(category, tiebreak, tuple(made) + tuple(kickers))


def compare_hands(cards1: Iterable[CardLike], cards2: Iterable[CardLike]) -> int:
    """
    Compare two hands.

    Returns:
        -1 if cards1 wins, 1 if cards2 wins, 0 if tie
    """
    value1 = evaluate_hand(cards1)
    value2 = evaluate_hand(cards2)

    if value1 > value2:
        return -1
    elif value1 < value2:
        return 1
    else:
        return 0


def get_hand_description(hand: HandValue) -> str:
    """Get a human-readable description of an evaluated hand."""
    category = hand.category
    ranks = hand.tiebreak

    if category == HandCategory.ROYAL_FLUSH:
        return hand.name
    elif category in (HandCategory.STRAIGHT_FLUSH, HandCategory.FLUSH):
        return f"{hand.name}, {_rank_name(ranks[0])} high"
    elif category in (HandCategory.FOUR_OF_A_KIND, HandCategory.THREE_OF_A_KIND):
        return f"{hand.name}, {_rank_name(ranks[0])}s"
    elif category == HandCategory.FULL_HOUSE:
        return f"{hand.name}, {_rank_name(ranks[0])}s full of {_rank_name(ranks[1])}s"
    elif category == HandCategory.STRAIGHT:
        if ranks[0] == WHEEL_HIGH:
            return f"{hand.name}, Five high (Wheel)"
        return f"{hand.name}, {_rank_name(ranks[0])} high"
    elif category == HandCategory.TWO_PAIR:
        return f"{hand.name}, {_rank_name(ranks[0])}s and {_rank_name(ranks[1])}s"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_rank_name(ranks[0])}s"
    else:
        return f"{hand.name}, {_rank_name(ranks[0])}"


def _rank_name(rank: int) -> str:
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[Rank(rank)]
