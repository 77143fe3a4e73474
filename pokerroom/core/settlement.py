"""
Pot settlement - side pots, rake and payouts.

Side pots are built once, when the river betting closes with two or more
live players. Each all-in level caps a tier; money above the highest
all-in level forms the last pot.

Payouts take rake first (floor of the pot times the rake fraction), then
split the rest evenly. Odd chips go one each to winners in the order they
were given, so the caller controls who receives them.
"""

from __future__ import annotations
import logging
import math
from dataclasses import replace
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from pokerroom.core.hand import HandValue, evaluate_hand, get_hand_description
from pokerroom.core.player import Player
from pokerroom.core.state import PotResult, RoomState, SidePot, chip_leader_of


logger = logging.getLogger(__name__)

PotResultLike = Union[PotResult, Mapping[str, Any], Tuple[str, Sequence[str]]]


def compute_side_pots(state: RoomState) -> Tuple[SidePot, ...]:
    """
    Split the chips in play into pots by all-in level.

    For each distinct total bet of an all-in, live player (ascending), the
    tier holds what every player contributed between the previous level and
    this one; it is eligible to live players who reached the level. Whatever
    remains is eligible to live players who bet beyond the top all-in level.

    Example: totals {50 (all-in), 100, 100} with pot 250 give a 150 pot for
    all three and a 100 pot for the two who reached 100.
    """
    total = state.pot_total
    live = state.live_players
    if total <= 0 or not live:
        return ()

    levels = sorted({p.total_bet for p in live if p.all_in})
    pots: List[SidePot] = []
    previous = 0

    for level in levels:
        amount = sum(min(p.total_bet, level) - min(p.total_bet, previous) for p in state.players)
        eligible = tuple(p.player_id for p in live if p.total_bet >= level)
        if amount > 0:
            pots.append(SidePot(f"pot-{len(pots)}", amount, eligible))
        previous = level

    remaining = total - sum(pot.amount for pot in pots)
    if remaining > 0:
        eligible = [p.player_id for p in live if p.total_bet > previous]
        if not eligible:
            # Only folded money sits above the top all-in level
            top = max(p.total_bet for p in live)
            eligible = [p.player_id for p in live if p.total_bet == top]
        pots.append(SidePot(f"pot-{len(pots)}", remaining, tuple(eligible)))

    return tuple(pots)


def calculate_rake(amount: int, rake: float) -> int:
    """Chips retained from a pot: floor(amount * rake), computed exactly."""
    return math.floor(Fraction(str(rake)) * amount)


def split_pot(amount: int, winner_ids: Sequence[str]) -> Dict[str, int]:
    """
    Divide a pot evenly among winners.

    The remainder is paid one chip per winner in list order.
    """
    share, remainder = divmod(amount, len(winner_ids))
    return {
        pid: share + (1 if index < remainder else 0)
        for index, pid in enumerate(winner_ids)
    }


def _pay(players: Dict[str, Player], payouts: Dict[str, int]) -> None:
    for pid, amount in payouts.items():
        players[pid] = replace(players[pid], chips=players[pid].chips + amount)


def prune_busted(state: RoomState) -> RoomState:
    """
    Remove players with no chips.

    While a hand is running, all-in players keep their seat until the pots
    are settled.
    """
    keep = [
        p for p in state.players
        if p.chips > 0 or (state.hand_active and p.is_live)
    ]
    if len(keep) == len(state.players):
        return state
    busted = [p.name for p in state.players if p not in keep]
    logger.info(f"Room {state.room_id}: removing busted players {busted}")
    return state.with_players(keep)


def _finish_hand(state: RoomState, winner_ids: Sequence[str]) -> RoomState:
    """Close the hand once every pot is paid out."""
    state = replace(
        state,
        pot=0,
        side_pots=(),
        current_bet=0,
        last_raise_amount=0,
        current_player_seat=None,
        hand_active=False,
        showdown_required=False,
        round_winners=tuple(winner_ids),
        completed_rounds=state.completed_rounds + 1,
    )
    state = prune_busted(state)
    state = replace(state, chip_leader=chip_leader_of(state.players))
    logger.info(
        f"Room {state.room_id}: hand #{state.hand_number} complete, winners {list(winner_ids)}, "
        f"chip leader {state.chip_leader}"
    )
    return state


def award_uncontested(state: RoomState, winner: Player) -> RoomState:
    """Award everything in the middle to the last live player."""
    total = state.pot_total
    rake = calculate_rake(total, state.rake)
    players = dict(state.players_by_id)
    _pay(players, {winner.player_id: total - rake})

    logger.info(f"Room {state.room_id}: {winner.name} wins {total - rake} uncontested (rake {rake})")
    state = replace(
        state.with_players(players.values()),
        rake_collected=state.rake_collected + rake,
    )
    return _finish_hand(state, [winner.player_id])


def _as_pot_result(result: PotResultLike) -> PotResult:
    if isinstance(result, PotResult):
        return result
    if isinstance(result, Mapping):
        pot_id = result.get("pot_id", result.get("potId"))
        winners = result.get("winner_ids", result.get("winnerIds", ()))
        return PotResult(pot_id, tuple(winners))
    pot_id, winners = result
    return PotResult(pot_id, tuple(winners))


def distribute_pots(state: RoomState, results: Iterable[PotResultLike]) -> RoomState:
    """
    Pay out pending side pots to their chosen winners.

    Winners not eligible for a pot are ignored; a pot with no eligible
    winner, or an unknown pot id, stays pending. When the last pot is paid
    the hand ends.

    Args:
        results: One entry per pot: PotResult, {"pot_id", "winner_ids"}
            mapping, or (pot_id, winner_ids) pair
    """
    if not state.side_pots:
        logger.warning(f"Room {state.room_id}: no pending pots to distribute")
        return state

    pending = {pot.pot_id: pot for pot in state.side_pots}
    players = dict(state.players_by_id)
    winners_seen = list(state.round_winners)
    rake_total = 0

    for result in map(_as_pot_result, results):
        pot = pending.get(result.pot_id)
        if pot is None:
            logger.warning(f"Room {state.room_id}: unknown or settled pot {result.pot_id}")
            continue

        winners = [
            pid for pid in dict.fromkeys(result.winner_ids)
            if pid in pot.eligible_player_ids and pid in players
        ]
        if not winners:
            logger.warning(f"Room {state.room_id}: no eligible winner given for {pot.pot_id}")
            continue

        rake = calculate_rake(pot.amount, state.rake)
        _pay(players, split_pot(pot.amount - rake, winners))
        rake_total += rake
        del pending[pot.pot_id]
        winners_seen.extend(pid for pid in winners if pid not in winners_seen)
        logger.info(f"Room {state.room_id}: {pot.pot_id} ({pot.amount}, rake {rake}) to {winners}")

    if len(pending) == len(state.side_pots):
        return state

    new_state = replace(
        state.with_players(players.values()),
        side_pots=tuple(pot for pot in state.side_pots if pot.pot_id in pending),
        rake_collected=state.rake_collected + rake_total,
        round_winners=tuple(winners_seen),
    )
    if not new_state.side_pots and new_state.pot == 0:
        return _finish_hand(new_state, winners_seen)
    return new_state


def select_multiple_winners(state: RoomState, winner_ids: Sequence[str]) -> RoomState:
    """
    Split everything in the middle (main pot and all side pots) among winners.

    Winners must still be live in the hand. Unknown or folded ids are
    ignored; with no valid winner the state is returned unchanged.
    """
    if not state.hand_active or state.current_player_seat is not None:
        logger.warning(f"Room {state.room_id}: cannot select winners while betting is open")
        return state

    live_ids = {p.player_id for p in state.live_players}
    winners = [pid for pid in dict.fromkeys(winner_ids) if pid in live_ids]
    if not winners:
        return state

    total = state.pot_total
    rake = calculate_rake(total, state.rake)
    players = dict(state.players_by_id)
    _pay(players, split_pot(total - rake, winners))

    logger.info(f"Room {state.room_id}: pot of {total} (rake {rake}) split among {winners}")
    new_state = replace(
        state.with_players(players.values()),
        rake_collected=state.rake_collected + rake,
    )
    return _finish_hand(new_state, winners)


def select_winner(state: RoomState, winner_id: str) -> RoomState:
    """Award the entire pot to a single winner."""
    return select_multiple_winners(state, [winner_id])


def showdown_values(state: RoomState) -> Dict[str, HandValue]:
    """Best hand of every live player with hole cards."""
    return {
        p.player_id: evaluate_hand(p.hole_cards + state.community_cards)
        for p in state.live_players
        if p.hole_cards
    }


def resolve_showdown(state: RoomState) -> RoomState:
    """
    Evaluate hands and distribute every pending pot.

    Tied winners are listed clockwise from the button, so odd chips go to
    the first tied player left of the dealer.
    """
    if not state.showdown_required:
        return state

    values = showdown_values(state)
    order = [state.player_at(seat).player_id for seat in state.seats_clockwise_from(state.dealer_seat)]
    for pid, value in values.items():
        logger.info(f"Room {state.room_id}: {pid} shows {get_hand_description(value)}")

    results = []
    for pot in state.side_pots:
        contenders = [pid for pid in order if pid in pot.eligible_player_ids and pid in values]
        if not contenders:
            continue
        best = max(values[pid] for pid in contenders)
        results.append(PotResult(pot.pot_id, tuple(pid for pid in contenders if values[pid] == best)))

    return distribute_pots(state, results)
