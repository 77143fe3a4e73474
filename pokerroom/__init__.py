"""
PokerRoom - Texas Hold'em Rules Engine

A no-limit hold'em table engine with:
- Immutable room state and pure transition functions
- Side pots, rake and showdown evaluation
- A thin FastAPI driver for serving rooms over HTTP

Usage:
    from pokerroom.core import RoomOptions, create_room, start_hand, apply_action
"""

__version__ = "0.1.0"

from pokerroom.core import (
    ActionType,
    RoomOptions,
    RoomState,
    Street,
    advance_street,
    apply_action,
    create_room,
    distribute_pots,
    evaluate_hand,
    select_multiple_winners,
    select_winner,
    start_hand,
    validate_action,
)

__all__ = [
    "ActionType",
    "RoomOptions",
    "RoomState",
    "Street",
    "advance_street",
    "apply_action",
    "create_room",
    "distribute_pots",
    "evaluate_hand",
    "select_multiple_winners",
    "select_winner",
    "start_hand",
    "validate_action",
    "__version__",
]
