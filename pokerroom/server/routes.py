"""
HTTP API Routes for PokerRoom.

Each route runs one engine operation against a room's latest state.
Setup errors map to 400, unknown rooms to 404; rejected actions are
reported in the response body with the unchanged state.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from pokerroom.core import betting, settlement, street
from pokerroom.core.errors import SetupError
from pokerroom.core.rules import RoomOptions
from pokerroom.core.state import PotResult, RoomState
from pokerroom.server.manager import RoomEntry, RoomManager, RoomNotFound
from pokerroom.server.schemas import (
    ActionRequest, ActionResultSchema, CreateRoomRequest, DistributeRequest,
    LegalActionsSchema, RoomStateSchema, SelectWinnerRequest, SelectWinnersRequest,
    SidePotsSchema, StartHandRequest, ValidationSchema,
)

router = APIRouter(prefix="/rooms")


def get_manager(request: Request) -> RoomManager:
    return request.app.state.manager


def _entry(manager: RoomManager, room_id: str) -> RoomEntry:
    try:
        return manager.get_room(room_id)
    except RoomNotFound:
        raise HTTPException(status_code=404, detail=f"Room not found: {room_id}")


async def _update(manager: RoomManager, room_id: str, transition) -> RoomState:
    _entry(manager, room_id)
    try:
        return await manager.update(room_id, transition)
    except (SetupError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


def _state_body(state: RoomState, reveal: bool = False) -> Dict[str, Any]:
    return state.to_dict(reveal=reveal)


@router.post("", response_model=RoomStateSchema)
async def create_room(req: CreateRoomRequest, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Create a room with every player seated at the initial stack."""
    try:
        state = manager.create_room(RoomOptions(
            table_name=req.table_name,
            player_names=tuple(req.player_names),
            player_ids=tuple(req.player_ids) if req.player_ids is not None else None,
            initial_chips=req.initial_chips,
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            rake=req.rake,
        ))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state_body(state)


@router.get("/{room_id}", response_model=RoomStateSchema)
async def get_room(room_id: str, reveal: bool = False, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Get the current room state; `reveal` includes hole cards and the deck."""
    return _state_body(_entry(manager, room_id).state, reveal=reveal)


@router.post("/{room_id}/start_hand", response_model=RoomStateSchema)
async def start_hand(
    room_id: str,
    req: Optional[StartHandRequest] = None,
    manager: RoomManager = Depends(get_manager),
) -> Dict[str, Any]:
    """Rotate the button, shuffle, deal hole cards and post blinds."""
    seed = req.seed if req is not None else None

    def transition(entry: RoomEntry) -> RoomState:
        return betting.start_hand(entry.state, seed if seed is not None else entry.rng)

    return _state_body(await _update(manager, room_id, transition))


@router.post("/{room_id}/validate", response_model=ValidationSchema)
async def validate_action(room_id: str, req: ActionRequest, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Check an action without applying it."""
    reason = betting.validate_action(_entry(manager, room_id).state, req.player_id, req.action_type, req.amount)
    return {"valid": reason is None, "reason": reason}


@router.post("/{room_id}/actions", response_model=ActionResultSchema)
async def take_action(room_id: str, req: ActionRequest, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Apply a player action; a rejection leaves the room unchanged."""
    outcome = None

    def transition(entry: RoomEntry) -> RoomState:
        nonlocal outcome
        outcome = betting.process_action(entry.state, req.player_id, req.action_type, req.amount)
        return outcome.state

    await _update(manager, room_id, transition)
    return {
        "success": outcome.success,
        "message": outcome.message,
        "state": _state_body(outcome.state),
    }


@router.get("/{room_id}/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions(
    room_id: str,
    player_id: Optional[str] = None,
    manager: RoomManager = Depends(get_manager),
) -> Dict[str, Any]:
    """Legal actions for a player (default: the player to act)."""
    return {"actions": betting.legal_actions(_entry(manager, room_id).state, player_id)}


@router.post("/{room_id}/advance", response_model=RoomStateSchema)
async def advance_street(room_id: str, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Deal the next street, award an uncontested pot, or flag the showdown."""
    return _state_body(await _update(manager, room_id, lambda entry: street.advance_street(entry.state)))


@router.get("/{room_id}/side_pots", response_model=SidePotsSchema)
async def get_side_pots(room_id: str, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Side pots as they would be built from the current commitments."""
    state = _entry(manager, room_id).state
    pots = state.side_pots if state.showdown_required else settlement.compute_side_pots(state)
    return {"side_pots": [pot.to_dict() for pot in pots]}


@router.post("/{room_id}/distribute", response_model=RoomStateSchema)
async def distribute_pots(room_id: str, req: DistributeRequest, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Pay out pending pots to the chosen winners."""
    results = [PotResult(r.pot_id, tuple(r.winner_ids)) for r in req.results]
    return _state_body(await _update(
        manager, room_id, lambda entry: settlement.distribute_pots(entry.state, results)
    ))


@router.post("/{room_id}/winner", response_model=RoomStateSchema)
async def select_winner(room_id: str, req: SelectWinnerRequest, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Award the whole pot to one player."""
    return _state_body(await _update(
        manager, room_id, lambda entry: settlement.select_winner(entry.state, req.winner_id)
    ))


@router.post("/{room_id}/winners", response_model=RoomStateSchema)
async def select_multiple_winners(
    room_id: str,
    req: SelectWinnersRequest,
    manager: RoomManager = Depends(get_manager),
) -> Dict[str, Any]:
    """Split the whole pot among several players."""
    return _state_body(await _update(
        manager, room_id, lambda entry: settlement.select_multiple_winners(entry.state, req.winner_ids)
    ))


@router.post("/{room_id}/showdown", response_model=RoomStateSchema)
async def resolve_showdown(room_id: str, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    """Evaluate hands and settle every pending pot."""
    return _state_body(await _update(manager, room_id, lambda entry: settlement.resolve_showdown(entry.state)))


@router.delete("/{room_id}")
async def remove_room(room_id: str, manager: RoomManager = Depends(get_manager)) -> Dict[str, Any]:
    _entry(manager, room_id)
    manager.remove_room(room_id)
    return {"success": True, "message": f"Room {room_id} removed"}
