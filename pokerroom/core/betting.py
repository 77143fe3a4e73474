"""
Betting engine - hand start and per-action state transitions.

This module implements:
- Starting a hand: dealer rotation, fresh shuffle, hole cards, blinds
- Action validation (fold, check, call, bet, raise, all-in)
- Applying a validated action and choosing the next seat to act
- Betting-round completion

Every function takes a RoomState and returns a new one. A rejected action
returns the input state object itself, untouched.
"""

from __future__ import annotations
import logging
import random
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

from pokerroom.core.card import deal, shuffled_deck
from pokerroom.core.errors import HandInProgress, InsufficientChipsForBlind, InsufficientPlayers
from pokerroom.core.player import Player
from pokerroom.core.rules import (
    ActionType, Street,
    get_blind_seats, seat_after, calculate_min_raise, is_action_reopened,
    BIG_BLIND_ENTRY, HOLE_CARDS, MIN_PLAYERS, SMALL_BLIND_ENTRY,
)
from pokerroom.core.state import ActionOutcome, ActionRecord, RoomState


logger = logging.getLogger(__name__)

RandomSource = Union[random.Random, int, None]


def _as_random(rng: RandomSource) -> random.Random:
    """Accept a Random instance or an integer seed."""
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def start_hand(state: RoomState, rng: RandomSource) -> RoomState:
    """
    Start a new hand.

    Rotates the button, deals two hole cards to every seat from a freshly
    shuffled deck, and posts both blinds in full. Neither blind counts as
    having acted, so the big blind keeps its preflop option.

    Args:
        state: Room with no hand in progress
        rng: Random source (or integer seed) for the shuffle

    Raises:
        HandInProgress: If a hand or its showdown is still unresolved
        InsufficientPlayers: If fewer than 2 players are seated
        InsufficientChipsForBlind: If a blind seat cannot post its blind in full
    """
    if state.hand_active or state.showdown_required:
        raise HandInProgress()
    if len(state.players) < MIN_PLAYERS:
        raise InsufficientPlayers(len(state.players))

    seats = state.seats
    dealer_seat = seat_after(seats, state.dealer_seat)
    sb_seat, bb_seat = get_blind_seats(seats, dealer_seat)

    by_seat = state.players_by_seat
    for seat, blind in ((sb_seat, state.small_blind), (bb_seat, state.big_blind)):
        if by_seat[seat].chips < blind:
            raise InsufficientChipsForBlind(by_seat[seat].player_id, by_seat[seat].chips, blind)

    hand_number = state.hand_number + 1
    logger.info(f"Room {state.room_id}: starting hand #{hand_number}, dealer seat {dealer_seat}")

    # Deal two passes, one card per seat each pass
    deck = shuffled_deck(_as_random(rng))
    players: Dict[int, Player] = {seat: by_seat[seat].reset_for_new_hand() for seat in seats}
    for _ in range(HOLE_CARDS):
        for seat in seats:
            (card,), deck = deal(deck, 1)
            players[seat] = replace(players[seat], hole_cards=players[seat].hole_cards + (card,))

    pot = state.pot_total
    history = []
    for seat, blind, entry in (
        (sb_seat, state.small_blind, SMALL_BLIND_ENTRY),
        (bb_seat, state.big_blind, BIG_BLIND_ENTRY),
    ):
        players[seat] = players[seat].commit(blind)
        pot += blind
        history.append(ActionRecord(
            action_type=entry,
            player_id=players[seat].player_id,
            amount=blind,
            street=Street.PREFLOP,
            pot=pot,
            timestamp=time.time(),
        ))

    new_state = replace(
        state,
        players=tuple(players[seat] for seat in seats),
        dealer_seat=dealer_seat,
        pot=pot,
        side_pots=(),
        current_bet=state.big_blind,
        last_raise_amount=state.big_blind,
        current_player_seat=None,
        street=Street.PREFLOP,
        community_cards=(),
        deck=deck,
        history=tuple(history),
        hand_active=True,
        round_winners=(),
        showdown_required=False,
        hand_number=hand_number,
    )

    # Heads-up: the dealer (small blind) acts first preflop
    first_seat = sb_seat if len(seats) == 2 else seat_after(seats, bb_seat)
    new_state = replace(new_state, current_player_seat=first_to_act(new_state, first_seat))

    logger.debug(
        f"Blinds posted: SB seat {sb_seat}={state.small_blind} BB seat {bb_seat}={state.big_blind}, "
        f"first to act: {new_state.current_player_seat}"
    )
    return new_state


# ---- round completion and turn order ----

def _needs_action(player: Player, table_bet: int) -> bool:
    return player.can_act and (not player.acted_this_round or player.current_bet < table_bet)


def is_round_closed(state: RoomState) -> bool:
    """
    Check if the current betting round is complete.

    Closed when all live players are all-in, one live player remains,
    the only player able to act has nothing left to call, or every player
    able to act has acted and matched the table bet.
    """
    live = state.live_players
    if len(live) <= 1 or all(p.all_in for p in live):
        return True

    acting = state.acting_players
    if len(acting) == 1 and acting[0].current_bet >= state.current_bet:
        return True

    return not any(_needs_action(p, state.current_bet) for p in acting)


def first_to_act(state: RoomState, start_seat: int) -> Optional[int]:
    """First seat from `start_seat` (inclusive) clockwise whose player still needs to act."""
    if is_round_closed(state):
        return None
    by_seat = state.players_by_seat
    seats = state.seats_clockwise_from(start_seat)
    if start_seat in by_seat:
        # seats_clockwise_from lists start_seat last
        seats = [start_seat] + seats[:-1]
    for seat in seats:
        if _needs_action(by_seat[seat], state.current_bet):
            return seat
    return None


def next_actor_seat(state: RoomState) -> Optional[int]:
    """
    The seat that acts after the current one, or None if the round is closed.

    Scans clockwise from the current seat, skipping folded and all-in
    players, for someone who has not acted or has not matched the bet.
    """
    if is_round_closed(state):
        return None
    start = state.current_player_seat if state.current_player_seat is not None else state.dealer_seat
    by_seat = state.players_by_seat
    for seat in state.seats_clockwise_from(start):
        if _needs_action(by_seat[seat], state.current_bet):
            return seat
    return None


# ---- validation ----

def _is_positive_int(amount: Any) -> bool:
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0


def validate_action(
    state: RoomState,
    player_id: str,
    action_type: Union[ActionType, str],
    amount: Optional[int] = None,
) -> Optional[str]:
    """
    Check whether an action is legal.

    Returns:
        A rejection reason, or None if the action is valid
    """
    if not state.hand_active:
        return "No active hand"
    if state.current_player_seat is None:
        return "No current player"

    player = state.player(player_id)
    if player is None:
        return "Player not found"
    if player.folded:
        return "Player has folded"
    if player.all_in:
        return "Player is all-in"
    if player.seat != state.current_player_seat:
        return "Not your turn"

    try:
        action = ActionType.parse(action_type)
    except ValueError:
        return f"Unknown action: {action_type}"

    if action in (ActionType.BET, ActionType.RAISE) and not _is_positive_int(amount):
        return "Invalid amount"

    if action == ActionType.CHECK and player.current_bet < state.current_bet:
        return "Cannot check when facing a bet"

    if action == ActionType.BET:
        if state.current_bet > 0:
            return "Cannot bet when there is already a bet"
        if amount < state.big_blind:
            return f"Minimum bet is {state.big_blind}"
        if amount > player.chips:
            return f"Cannot bet more than stack ({player.chips})"

    if action == ActionType.RAISE:
        min_raise = calculate_min_raise(state.current_bet, state.last_raise_amount, state.big_blind)
        if amount < min_raise:
            return f"Raise must be at least {min_raise}"
        if amount - player.current_bet > player.chips:
            return f"Cannot raise beyond stack ({player.chips + player.current_bet} total)"

    if action == ActionType.CALL:
        call_amount = min(state.current_bet - player.current_bet, player.chips)
        if call_amount < 0:
            return "Invalid call amount"

    return None


# ---- applying actions ----

def process_action(
    state: RoomState,
    player_id: str,
    action_type: Union[ActionType, str],
    amount: Optional[int] = None,
) -> ActionOutcome:
    """
    Validate and apply a player action.

    Args:
        action_type: FOLD, CHECK, CALL, BET, RAISE or ALL_IN (enum or string)
        amount: Bet size for BET, total bet to raise to for RAISE. A RAISE
            with no bet in the round is applied and recorded as a BET

    Returns:
        ActionOutcome carrying the new state, or the unchanged state and
        the rejection reason
    """
    reason = validate_action(state, player_id, action_type, amount)
    if reason is not None:
        logger.debug(f"Room {state.room_id}: rejected {action_type} by {player_id}: {reason}")
        return ActionOutcome(False, reason, state)

    action = ActionType.parse(action_type)
    if action == ActionType.RAISE and state.current_bet == 0:
        # Nothing to raise yet: record it as the opening bet
        action = ActionType.BET
    player = state.player(player_id)
    table_bet = state.current_bet
    last_raise = state.last_raise_amount
    chips_in = 0
    reopens = False

    if action == ActionType.FOLD:
        player = replace(player, folded=True)
        message = "Folded"

    elif action == ActionType.CHECK:
        message = "Checked"

    elif action == ActionType.CALL:
        chips_in = min(table_bet - player.current_bet, player.chips)
        message = f"Called ${chips_in}"

    elif action == ActionType.BET:
        chips_in = amount
        table_bet = amount
        last_raise = amount
        reopens = True
        message = f"Bet ${amount}"

    elif action == ActionType.RAISE:
        chips_in = amount - player.current_bet
        last_raise = amount - table_bet
        table_bet = amount
        reopens = True
        message = f"Raised to ${amount}"

    else:
        chips_in = player.chips
        all_in_total = player.current_bet + chips_in
        if is_action_reopened(all_in_total, table_bet, last_raise, state.big_blind):
            last_raise = all_in_total - table_bet
            table_bet = all_in_total
            reopens = True
        elif all_in_total > table_bet:
            # Short all-in: others must call it, but action is not reopened
            table_bet = all_in_total
        message = f"All-in for ${all_in_total}"

    player = replace(player.commit(chips_in), acted_this_round=True)
    new_state = state.with_player(player)

    if reopens:
        new_state = new_state.with_players(
            replace(p, acted_this_round=False) if p.can_act and p.player_id != player_id else p
            for p in new_state.players
        )

    pot = state.pot + chips_in
    record = ActionRecord(
        action_type=action.value,
        player_id=player_id,
        amount=chips_in,
        street=state.street,
        pot=pot,
        timestamp=time.time(),
    )
    new_state = replace(
        new_state,
        pot=pot,
        current_bet=table_bet,
        last_raise_amount=last_raise,
        history=state.history + (record,),
    )
    new_state = replace(new_state, current_player_seat=next_actor_seat(new_state))

    logger.debug(
        f"Room {state.room_id}: {player.name} {message} on {state.street.value}, "
        f"pot {pot}, next seat {new_state.current_player_seat}"
    )
    return ActionOutcome(True, message, new_state)


def apply_action(
    state: RoomState,
    player_id: str,
    action_type: Union[ActionType, str],
    amount: Optional[int] = None,
) -> RoomState:
    """Apply an action; an invalid action returns the input state unchanged."""
    return process_action(state, player_id, action_type, amount).state


def legal_actions(state: RoomState, player_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Get legal actions for the specified player (or the player to act).

    Returns:
        List of action dicts with type and constraints
    """
    player = state.player(player_id) if player_id else state.current_player
    if player is None or validate_action(state, player.player_id, ActionType.FOLD) is not None:
        return []

    actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
    chips_to_call = max(0, state.current_bet - player.current_bet)

    if chips_to_call == 0:
        actions.append({"type": ActionType.CHECK.value})
    else:
        actions.append({"type": ActionType.CALL.value, "amount": min(chips_to_call, player.chips)})

    max_total = player.chips + player.current_bet
    if state.current_bet == 0:
        if player.chips >= state.big_blind:
            actions.append({"type": ActionType.BET.value, "min": state.big_blind, "max": player.chips})
    else:
        min_raise = calculate_min_raise(state.current_bet, state.last_raise_amount, state.big_blind)
        if max_total >= min_raise:
            actions.append({"type": ActionType.RAISE.value, "min": min_raise, "max": max_total})

    actions.append({"type": ActionType.ALL_IN.value, "amount": max_total})
    return actions
