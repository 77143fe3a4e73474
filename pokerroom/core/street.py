"""
Street advancement.

Called once a betting round has closed (no seat to act). Resets the
per-round betting fields and then either:
- awards the pot when a single live player remains,
- deals the next street (burn one, then three for the flop or one for the
  turn and river) and picks the first actor left of the button, or
- after the river, builds the side pots and flags the showdown.
"""

from __future__ import annotations
import logging
from dataclasses import replace

from pokerroom.core.betting import first_to_act
from pokerroom.core.card import burn_and_deal
from pokerroom.core.rules import CARDS_DEALT_ON, seat_after
from pokerroom.core.settlement import award_uncontested, compute_side_pots, prune_busted
from pokerroom.core.state import RoomState


logger = logging.getLogger(__name__)


def can_advance(state: RoomState) -> bool:
    """A hand is running, its betting round is closed and no showdown is pending."""
    return state.hand_active and state.current_player_seat is None and not state.showdown_required


def advance_street(state: RoomState) -> RoomState:
    """
    Move the hand past a closed betting round.

    Returns the input state unchanged if no hand is active, a seat is still
    open to act, or a showdown is already pending.
    """
    if not can_advance(state):
        logger.warning(f"Room {state.room_id}: advance_street ignored, betting round not closed")
        return state

    new_state = replace(
        state.with_players(p.reset_for_new_round() for p in state.players),
        current_bet=0,
        last_raise_amount=0,
    )

    live = new_state.live_players
    if len(live) == 1:
        return award_uncontested(new_state, live[0])

    next_street = state.street.next
    if next_street is None:
        side_pots = compute_side_pots(new_state)
        logger.info(
            f"Room {state.room_id}: showdown between {[p.name for p in live]}, "
            f"{len(side_pots)} pot(s)"
        )
        new_state = replace(new_state, pot=0, side_pots=side_pots, showdown_required=True)
        return prune_busted(new_state)

    cards, deck = burn_and_deal(state.deck, CARDS_DEALT_ON[next_street])
    new_state = replace(
        new_state,
        street=next_street,
        community_cards=state.community_cards + cards,
        deck=deck,
    )
    first_seat = seat_after(new_state.seats, new_state.dealer_seat)
    new_state = replace(new_state, current_player_seat=first_to_act(new_state, first_seat))

    logger.info(
        f"Room {state.room_id}: {next_street.value} "
        f"{' '.join(c.short_str for c in new_state.community_cards)}, "
        f"first to act: {new_state.current_player_seat}"
    )
    return prune_busted(new_state)


def run_out(state: RoomState) -> RoomState:
    """
    Deal out the remaining streets while nobody can act.

    Stops at the showdown, at the end of the hand, or as soon as a seat
    opens for betting.
    """
    while can_advance(state):
        state = advance_street(state)
    return state
