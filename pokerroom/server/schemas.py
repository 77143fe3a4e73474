"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from pokerroom.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_RAKE, DEFAULT_SMALL_BLIND, MAX_PLAYERS,
)


# ============= Request Schemas =============

class CreateRoomRequest(BaseModel):
    """Request to create a new room."""
    table_name: str = Field(default="Table", min_length=1)
    player_names: List[str] = Field(..., min_length=1, max_length=MAX_PLAYERS)
    player_ids: Optional[List[str]] = None
    initial_chips: int = Field(gt=0, default=DEFAULT_BUY_IN)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    rake: float = Field(ge=0, le=1, default=DEFAULT_RAKE)


class StartHandRequest(BaseModel):
    """Request to start a hand; a seed makes the shuffle reproducible."""
    seed: Optional[int] = None


class ActionRequest(BaseModel):
    """Request to take (or validate) a player action."""
    player_id: str
    action_type: str = Field(..., description="fold, check, call, bet, raise, allin")
    amount: Optional[int] = Field(default=None, description="Bet size for bet, total for raise")


class PotResultSchema(BaseModel):
    """Winners chosen for one pot."""
    pot_id: str
    winner_ids: List[str] = Field(..., min_length=1)


class DistributeRequest(BaseModel):
    results: List[PotResultSchema]


class SelectWinnerRequest(BaseModel):
    winner_id: str


class SelectWinnersRequest(BaseModel):
    winner_ids: List[str] = Field(..., min_length=1)


# ============= Response Schemas =============

class PlayerSchema(BaseModel):
    """Player information; hole cards only when revealed."""
    id: str
    name: str
    seat: int
    chips: int
    current_bet: int
    total_bet: int
    folded: bool
    all_in: bool
    acted_this_round: bool
    hole_cards: Optional[List[str]] = None


class SidePotSchema(BaseModel):
    id: str
    amount: int
    eligible_player_ids: List[str]


class HistoryEntrySchema(BaseModel):
    type: str
    player_id: str
    amount: int
    street: str
    pot: int
    timestamp: float


class RoomStateSchema(BaseModel):
    """Complete room state."""
    room_id: str
    table_name: str
    players: List[PlayerSchema]
    dealer_seat: int
    small_blind: int
    big_blind: int
    rake: float
    pot: int
    side_pots: List[SidePotSchema]
    current_bet: int
    last_raise_amount: int
    current_player_seat: Optional[int] = None
    street: str
    community_cards: List[str]
    history: List[HistoryEntrySchema]
    hand_active: bool
    round_winners: List[str]
    completed_rounds: int
    chip_leader: Optional[str] = None
    showdown_required: bool
    hand_number: int
    rake_collected: int
    deck: Optional[List[str]] = None


class ValidationSchema(BaseModel):
    valid: bool
    reason: Optional[str] = None


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    state: RoomStateSchema


class LegalActionsSchema(BaseModel):
    actions: List[Dict[str, Any]]


class SidePotsSchema(BaseModel):
    side_pots: List[SidePotSchema]

