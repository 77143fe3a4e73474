"""
Pytest configuration and shared fixtures for PokerRoom tests.
"""

import random
from dataclasses import replace

import pytest

from pokerroom.core.betting import process_action, start_hand
from pokerroom.core.card import Card, Rank, Suit, ordered_deck, parse_cards
from pokerroom.core.rules import RoomOptions
from pokerroom.core.state import create_room


def make_room(names=("Alice", "Bob", "Carol"), chips=1000, small_blind=5, big_blind=10, rake=0.0):
    """Room whose player ids are the lower-cased names."""
    return create_room(
        RoomOptions(
            table_name="Test Table",
            player_names=tuple(names),
            player_ids=tuple(n.lower() for n in names),
            initial_chips=chips,
            small_blind=small_blind,
            big_blind=big_blind,
            rake=rake,
        ),
        rng=random.Random(0),
    )


def set_players(state, **fields_by_id):
    """Replace fields of players by id: set_players(state, alice={"chips": 50})."""
    for player_id, fields in fields_by_id.items():
        state = state.with_player(replace(state.player(player_id), **fields))
    return state


def rig_deck(state, hands, board):
    """
    Give players fixed hole cards and stack the deck so the next streets
    deal `board`, each preceded by a burn card.

    Args:
        hands: {player_id: "AsAh"}
        board: Five cards, e.g. "Kd 9s 5h 3c Jc"
    """
    hole = {pid: tuple(parse_cards(cards)) for pid, cards in hands.items()}
    board_cards = parse_cards(board)
    for p in state.players:
        hole.setdefault(p.player_id, p.hole_cards)
    used = set(board_cards).union(*hole.values())
    filler = [c for c in ordered_deck() if c not in used]
    deck = (
        [filler[0]] + board_cards[:3]
        + [filler[1], board_cards[3]]
        + [filler[2], board_cards[4]]
        + filler[3:]
    )
    state = replace(state, deck=tuple(deck))
    for pid, cards in hole.items():
        state = state.with_player(replace(state.player(pid), hole_cards=cards))
    return state


@pytest.fixture
def room_factory():
    return make_room


@pytest.fixture
def update_players():
    return set_players


@pytest.fixture
def rigged():
    return rig_deck


@pytest.fixture
def act():
    """Apply an action for whoever is to act, asserting it was accepted."""
    def _act(state, action_type, amount=None):
        player = state.current_player
        assert player is not None, "no seat is open to act"
        outcome = process_action(state, player.player_id, action_type, amount)
        assert outcome.success, outcome.message
        return outcome.state
    return _act


@pytest.fixture
def three_player_room():
    """Alice (seat 0), Bob (seat 1), Carol (seat 2); 1000 chips, blinds 5/10."""
    return make_room()


@pytest.fixture
def three_player_hand(three_player_room):
    """
    First hand of the three-player room.

    Dealer Bob (seat 1), small blind Carol (seat 2), big blind Alice
    (seat 0); Bob acts first.
    """
    return start_hand(three_player_room, 42)


@pytest.fixture
def heads_up_room():
    return make_room(names=("Alice", "Bob"))


@pytest.fixture
def heads_up_hand(heads_up_room):
    """Dealer and small blind Bob (seat 1), big blind Alice (seat 0)."""
    return start_hand(heads_up_room, 7)


@pytest.fixture
def royal_flush():
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
