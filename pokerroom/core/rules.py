"""
Texas Hold'em Rules and Constants.

Key no-limit rules enforced by the engine:

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop: Dealer acts first. Postflop: first live seat left of the dealer.

2. Minimum raise: a raise must increase the bet by at least the previous
   full raise increment, and never by less than the big blind.

3. All-in less than a minimum raise: the table bet goes up, but action is
   not reopened for players who have already acted.

4. Side pots: when players are all-in for different amounts, separate pots
   are created for each all-in level.
"""

from __future__ import annotations
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple


class Street(Enum):
    """Betting rounds of a hand, in dealing order."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @property
    def next(self) -> Optional[Street]:
        order = list(Street)
        index = order.index(self)
        return order[index + 1] if index + 1 < len(order) else None


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "allin"

    @classmethod
    def parse(cls, value) -> ActionType:
        """Accept an ActionType, its value, or its name ("ALL_IN", "raise")."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for action in cls:
            if text.lower() == action.value or text.upper() == action.name:
                return action
        raise ValueError(f"Unknown action: {value!r}")


# History entries for forced bets share the log with player actions
SMALL_BLIND_ENTRY = "small_blind"
BIG_BLIND_ENTRY = "big_blind"


# Default table settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_BUY_IN = 1000
DEFAULT_RAKE = 0.0
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1

COMMUNITY_CARDS_BY_STREET = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
}

CARDS_DEALT_ON = {
    Street.FLOP: FLOP_CARDS,
    Street.TURN: TURN_CARDS,
    Street.RIVER: RIVER_CARDS,
}


@dataclass(frozen=True)
class RoomOptions:
    """
    Configuration for a new room.

    Attributes:
        table_name: Display name of the table
        player_names: Names in seat order (seat 0 first)
        initial_chips: Starting stack for every player
        small_blind: Small blind amount
        big_blind: Big blind amount
        rake: Fraction of each pot retained by the house, in [0, 1]
        player_ids: Optional stable ids, one per name; generated when omitted
    """
    table_name: str
    player_names: Tuple[str, ...]
    initial_chips: int = DEFAULT_BUY_IN
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    rake: float = DEFAULT_RAKE
    player_ids: Optional[Tuple[str, ...]] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_names", tuple(self.player_names))
        if self.player_ids is not None:
            object.__setattr__(self, "player_ids", tuple(self.player_ids))


def get_blind_seats(seats: Sequence[int], dealer_seat: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind seats.

    In heads-up play the dealer posts the small blind.

    Args:
        seats: Occupied seats in ascending order
        dealer_seat: Seat holding the button (must be occupied)

    Returns:
        Tuple of (small_blind_seat, big_blind_seat)
    """
    if len(seats) < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")

    if len(seats) == 2:
        sb_seat = dealer_seat
        bb_seat = seat_after(seats, dealer_seat)
    else:
        sb_seat = seat_after(seats, dealer_seat)
        bb_seat = seat_after(seats, sb_seat)

    return sb_seat, bb_seat


def seat_after(seats: Sequence[int], seat: int) -> int:
    """
    The next occupied seat clockwise from `seat`.

    `seat` itself need not be occupied, which keeps rotation well defined
    after busted players leave the table.
    """
    for candidate in seats:
        if candidate > seat:
            return candidate
    return seats[0]


def calculate_min_raise(current_bet: int, last_raise_amount: int, big_blind: int) -> int:
    """
    Minimum total a raise must reach.

    Args:
        current_bet: Current highest bet in the round
        last_raise_amount: The size of the last full raise (the increase, not total)
        big_blind: Big blind amount

    Returns:
        Minimum total bet amount (including call + raise)
    """
    return current_bet + max(last_raise_amount, big_blind)


def is_action_reopened(all_in_total: int, current_bet: int, last_raise_amount: int, big_blind: int) -> bool:
    """
    Check if an all-in reopens the action.

    An all-in that is less than a full raise does NOT reopen the betting
    for players who have already acted.
    """
    return all_in_total >= calculate_min_raise(current_bet, last_raise_amount, big_blind)
