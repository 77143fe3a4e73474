"""
Room state and room creation.

RoomState is an immutable snapshot of a table. Engine operations never
mutate a snapshot; they build a new one with dataclasses.replace, so a
caller holding an older state keeps an exact copy of it.

Players are kept in seat order and looked up by seat or id through a
mapping built from that tuple, never by list position.
"""

from __future__ import annotations
import logging
import random
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from pokerroom.core.card import Card, shuffled_deck
from pokerroom.core.player import Player
from pokerroom.core.rules import RoomOptions, Street, seat_after


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidePot:
    """A pot tier and the players eligible to win it."""
    pot_id: str
    amount: int
    eligible_player_ids: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.pot_id,
            "amount": self.amount,
            "eligible_player_ids": list(self.eligible_player_ids),
        }


@dataclass(frozen=True)
class ActionRecord:
    """One entry of the append-only hand history."""
    action_type: str
    player_id: str
    amount: int  # Chips moved by this action
    street: Street
    pot: int  # Pot after the action
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.action_type,
            "player_id": self.player_id,
            "amount": self.amount,
            "street": self.street.value,
            "pot": self.pot,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PotResult:
    """Winners chosen for one pending pot."""
    pot_id: str
    winner_ids: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "winner_ids", tuple(self.winner_ids))


@dataclass(frozen=True)
class ActionOutcome:
    """Result of a player action: the new state, or the unchanged one with a reason."""
    success: bool
    message: str
    state: RoomState


@dataclass(frozen=True)
class RoomState:
    """
    Authoritative table state.

    Chip conservation: sum of player chips + pot + side pot amounts only
    changes when rake is taken (recorded in rake_collected).
    """
    room_id: str
    table_name: str
    players: Tuple[Player, ...]
    dealer_seat: int
    small_blind: int
    big_blind: int
    rake: float = 0.0
    pot: int = 0
    side_pots: Tuple[SidePot, ...] = ()
    current_bet: int = 0
    last_raise_amount: int = 0
    current_player_seat: Optional[int] = None
    street: Street = Street.PREFLOP
    community_cards: Tuple[Card, ...] = ()
    deck: Tuple[Card, ...] = ()
    history: Tuple[ActionRecord, ...] = ()
    hand_active: bool = False
    round_winners: Tuple[str, ...] = ()
    completed_rounds: int = 0
    chip_leader: Optional[str] = None
    showdown_required: bool = False
    hand_number: int = 0
    rake_collected: int = 0

    # ---- lookups ----

    @property
    def seats(self) -> List[int]:
        """Occupied seats in ascending order."""
        return [p.seat for p in self.players]

    @property
    def players_by_seat(self) -> Dict[int, Player]:
        return {p.seat: p for p in self.players}

    @property
    def players_by_id(self) -> Dict[str, Player]:
        return {p.player_id: p for p in self.players}

    def player(self, player_id: str) -> Optional[Player]:
        return self.players_by_id.get(player_id)

    def player_at(self, seat: Optional[int]) -> Optional[Player]:
        if seat is None:
            return None
        return self.players_by_seat.get(seat)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        return self.player_at(self.current_player_seat)

    def seats_clockwise_from(self, seat: int) -> List[int]:
        """Every occupied seat, starting with the first one after `seat`."""
        seats = self.seats
        if not seats:
            return []
        first = seat_after(seats, seat)
        index = seats.index(first)
        return seats[index:] + seats[:index]

    @property
    def live_players(self) -> List[Player]:
        """Players still contesting the pot, in seat order."""
        return [p for p in self.players if p.is_live]

    @property
    def acting_players(self) -> List[Player]:
        """Non-folded, non-all-in players, in seat order."""
        return [p for p in self.players if p.can_act]

    @property
    def pot_total(self) -> int:
        """Main pot plus every pending side pot."""
        return self.pot + sum(sp.amount for sp in self.side_pots)

    @property
    def total_chips(self) -> int:
        """Chips on the table: stacks plus all pots."""
        return sum(p.chips for p in self.players) + self.pot_total

    # ---- functional updates ----

    def with_player(self, updated: Player) -> RoomState:
        """Replace the player occupying updated.seat."""
        return self.with_players(
            updated if p.seat == updated.seat else p for p in self.players
        )

    def with_players(self, players: Iterable[Player]) -> RoomState:
        return replace(self, players=tuple(sorted(players, key=lambda p: p.seat)))

    def to_dict(self, reveal: bool = False) -> Dict[str, Any]:
        """
        Plain-data view of the state.

        Args:
            reveal: Include every player's hole cards and the remaining deck
        """
        result = {
            "room_id": self.room_id,
            "table_name": self.table_name,
            "players": [p.to_dict(hide_cards=not reveal) for p in self.players],
            "dealer_seat": self.dealer_seat,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "rake": self.rake,
            "pot": self.pot,
            "side_pots": [sp.to_dict() for sp in self.side_pots],
            "current_bet": self.current_bet,
            "last_raise_amount": self.last_raise_amount,
            "current_player_seat": self.current_player_seat,
            "street": self.street.value,
            "community_cards": [c.short_str for c in self.community_cards],
            "history": [entry.to_dict() for entry in self.history],
            "hand_active": self.hand_active,
            "round_winners": list(self.round_winners),
            "completed_rounds": self.completed_rounds,
            "chip_leader": self.chip_leader,
            "showdown_required": self.showdown_required,
            "hand_number": self.hand_number,
            "rake_collected": self.rake_collected,
        }
        if reveal:
            result["deck"] = [c.short_str for c in self.deck]
        return result


def _generate_id() -> str:
    return uuid.uuid4().hex[:9]


def create_room(options: RoomOptions, rng: Optional[random.Random] = None) -> RoomState:
    """
    Build the initial state of a room.

    All players are seated in the order given with `initial_chips`; the
    dealer button starts at seat 0 and no hand is active. Blind and stack
    sufficiency is checked when a hand starts, not here.

    Args:
        options: Table configuration
        rng: Random source for the initial shuffle; system-seeded when omitted

    Raises:
        ValueError: If no players are given, ids don't match names,
            or the rake is outside [0, 1]
    """
    if not options.player_names:
        raise ValueError("At least one player name is required")
    if not 0 <= options.rake <= 1:
        raise ValueError(f"Rake must be within [0, 1], got {options.rake}")
    if options.small_blind <= 0 or options.big_blind <= 0 or options.initial_chips <= 0:
        raise ValueError("Blinds and initial chips must be positive")

    player_ids = options.player_ids
    if player_ids is None:
        player_ids = tuple(_generate_id() for _ in options.player_names)
    if len(player_ids) != len(options.player_names) or len(set(player_ids)) != len(player_ids):
        raise ValueError("player_ids must be unique and match player_names")

    players = tuple(
        Player(player_id=pid, name=name, seat=seat, chips=options.initial_chips)
        for seat, (pid, name) in enumerate(zip(player_ids, options.player_names))
    )

    state = RoomState(
        room_id=_generate_id(),
        table_name=options.table_name,
        players=players,
        dealer_seat=0,
        small_blind=options.small_blind,
        big_blind=options.big_blind,
        rake=options.rake,
        deck=shuffled_deck(rng or random.Random()),
    )
    logger.info(
        f"Created room {state.room_id} '{state.table_name}' with "
        f"{len(players)} players, blinds {state.small_blind}/{state.big_blind}"
    )
    return state


def chip_leader_of(players: Sequence[Player]) -> Optional[str]:
    """Player with the most chips; ties go to the first in seat order."""
    if not players:
        return None
    return max(players, key=lambda p: p.chips).player_id
