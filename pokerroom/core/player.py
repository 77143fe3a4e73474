"""
Player value type for Texas Hold'em.

A Player is an immutable snapshot of one seat:
- Stack (chip count)
- Hole cards
- Bet in the current betting round and total bet in the hand
- Folded / all-in flags and whether the player acted this round

Every change produces a new Player via dataclasses.replace.
"""

from __future__ import annotations
from typing import Tuple, Dict, Any
from dataclasses import dataclass, replace

from pokerroom.core.card import Card


@dataclass(frozen=True)
class Player:
    """
    A player seated in a room.

    Attributes:
        player_id: Stable identifier
        name: Display name
        seat: Seat index, fixed for the hand and used for turn order
        chips: Current stack, never negative
        current_bet: Amount bet in the current betting round
        total_bet: Total amount bet in the current hand (for side pots)
        folded: Has folded this hand
        all_in: Has committed the whole stack this hand
        hole_cards: The player's private cards (0 or 2)
        acted_this_round: Has acted since the last full raise or street start
    """
    player_id: str
    name: str
    seat: int
    chips: int
    current_bet: int = 0
    total_bet: int = 0
    folded: bool = False
    all_in: bool = False
    hole_cards: Tuple[Card, ...] = ()
    acted_this_round: bool = False

    def reset_for_new_hand(self) -> Player:
        """Clear every per-hand field."""
        return replace(
            self,
            current_bet=0,
            total_bet=0,
            folded=False,
            all_in=False,
            hole_cards=(),
            acted_this_round=False,
        )

    def reset_for_new_round(self) -> Player:
        """Clear per-street fields; total_bet is kept for side-pot math."""
        return replace(self, current_bet=0, acted_this_round=False)

    def commit(self, amount: int) -> Player:
        """
        Move chips from the stack into the current bet.

        The caller guarantees 0 <= amount <= chips. Emptying the stack
        marks the player all-in.
        """
        if amount < 0 or amount > self.chips:
            raise ValueError(f"Cannot commit {amount} from a stack of {self.chips}")
        chips = self.chips - amount
        return replace(
            self,
            chips=chips,
            current_bet=self.current_bet + amount,
            total_bet=self.total_bet + amount,
            all_in=self.all_in or (amount > 0 and chips == 0),
        )

    @property
    def is_live(self) -> bool:
        """Still contesting the pot (not folded)."""
        return not self.folded

    @property
    def can_act(self) -> bool:
        """Can still take betting actions this hand."""
        return not self.folded and not self.all_in

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "seat": self.seat,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "total_bet": self.total_bet,
            "folded": self.folded,
            "all_in": self.all_in,
            "acted_this_round": self.acted_this_round,
        }
        if not hide_cards:
            result["hole_cards"] = [card.short_str for card in self.hole_cards]
        return result

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Player {self.name} [{cards_str}] ${self.chips}"
