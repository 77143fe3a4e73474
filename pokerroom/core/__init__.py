"""
PokerRoom Core - Pure Python Texas Hold'em rules engine.

Immutable room snapshots and pure transition functions; no network
dependencies.
"""

from pokerroom.core.card import Card, Rank, Suit, parse_cards
from pokerroom.core.player import Player
from pokerroom.core.rules import ActionType, RoomOptions, Street
from pokerroom.core.errors import (
    PokerRoomError, SetupError, InsufficientPlayers, InsufficientChipsForBlind, HandInProgress,
)
from pokerroom.core.state import ActionOutcome, ActionRecord, PotResult, RoomState, SidePot, create_room
from pokerroom.core.hand import HandCategory, HandValue, compare_hands, evaluate_hand, get_hand_description
from pokerroom.core.betting import (
    apply_action, legal_actions, next_actor_seat, process_action, start_hand, validate_action,
)
from pokerroom.core.street import advance_street, run_out
from pokerroom.core.settlement import (
    compute_side_pots, distribute_pots, resolve_showdown, select_multiple_winners, select_winner,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "parse_cards",
    "Player",
    "ActionType",
    "RoomOptions",
    "Street",
    "PokerRoomError",
    "SetupError",
    "InsufficientPlayers",
    "InsufficientChipsForBlind",
    "HandInProgress",
    "ActionOutcome",
    "ActionRecord",
    "PotResult",
    "RoomState",
    "SidePot",
    "create_room",
    "HandCategory",
    "HandValue",
    "compare_hands",
    "evaluate_hand",
    "get_hand_description",
    "apply_action",
    "legal_actions",
    "next_actor_seat",
    "process_action",
    "start_hand",
    "validate_action",
    "advance_street",
    "run_out",
    "compute_side_pots",
    "distribute_pots",
    "resolve_showdown",
    "select_multiple_winners",
    "select_winner",
]
