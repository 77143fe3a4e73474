"""
Tests for action validation and betting flow.
"""

import pytest
from pokerroom.core.betting import (
    apply_action, is_round_closed, legal_actions, process_action, validate_action,
)
from pokerroom.core.rules import ActionType, Street
from pokerroom.core.street import advance_street


class TestValidation:
    """Rejections leave the state untouched and explain why."""

    @pytest.mark.parametrize("player_id, action, amount, reason", [
        ("alice", "call", None, "Not your turn"),
        ("zoe", "call", None, "Player not found"),
        ("bob", "check", None, "Cannot check when facing a bet"),
        ("bob", "bet", 20, "Cannot bet when there is already a bet"),
        ("bob", "raise", 15, "Raise must be at least 20"),
        ("bob", "raise", None, "Invalid amount"),
        ("bob", "raise", 0, "Invalid amount"),
        ("bob", "raise", -30, "Invalid amount"),
        ("bob", "raise", True, "Invalid amount"),
        ("bob", "raise", 2000, "Cannot raise beyond stack (1000 total)"),
        ("bob", "dance", None, "Unknown action: dance"),
    ])
    def test_rejections(self, three_player_hand, player_id, action, amount, reason):
        """Test that each illegal action is rejected with its reason."""
        outcome = process_action(three_player_hand, player_id, action, amount)
        assert not outcome.success
        assert outcome.message == reason
        assert outcome.state is three_player_hand

    def test_no_active_hand(self, three_player_room):
        """Test that nothing can be done before a hand starts."""
        assert validate_action(three_player_room, "alice", "check") == "No active hand"

    def test_folded_player(self, three_player_hand, act):
        """Test that a folded player cannot act again."""
        state = act(three_player_hand, "fold")
        assert validate_action(state, "bob", "call") == "Player has folded"

    def test_all_in_player(self, three_player_hand, act):
        """Test that an all-in player cannot act again."""
        state = act(three_player_hand, "allin")
        assert validate_action(state, "bob", "call") == "Player is all-in"

    def test_no_current_player(self, three_player_hand, act):
        """Test that actions are rejected once the round is closed."""
        state = act(three_player_hand, "fold")
        state = act(state, "fold")
        assert state.current_player_seat is None
        assert validate_action(state, "alice", "check") == "No current player"

    def test_apply_action_returns_same_state_on_rejection(self, three_player_hand):
        """Test that a rejected action hands back the very same state."""
        assert apply_action(three_player_hand, "alice", "fold") is three_player_hand

    def test_action_type_parsing(self, three_player_hand):
        """Test that actions are accepted as enums, values or names."""
        assert validate_action(three_player_hand, "bob", ActionType.CALL) is None
        assert validate_action(three_player_hand, "bob", "CALL") is None
        assert validate_action(three_player_hand, "bob", "ALL_IN") is None


class TestActions:
    """Accepted actions and their effects."""

    def test_call(self, three_player_hand, act):
        """Test that calling matches the table bet."""
        outcome = process_action(three_player_hand, "bob", "call")
        assert outcome.success
        assert outcome.message == "Called $10"
        state = outcome.state
        bob = state.player("bob")
        assert bob.chips == 990
        assert bob.current_bet == 10
        assert bob.acted_this_round
        assert state.pot == 25
        assert state.current_player_seat == 2

    def test_history_record(self, three_player_hand):
        """Test that an action is appended to the hand history."""
        state = apply_action(three_player_hand, "bob", "call")
        record = state.history[-1]
        assert record.action_type == "call"
        assert record.player_id == "bob"
        assert record.amount == 10
        assert record.pot == 25
        assert record.street == Street.PREFLOP
        assert len(state.history) == len(three_player_hand.history) + 1

    def test_fold(self, three_player_hand):
        """Test that folding moves no chips."""
        outcome = process_action(three_player_hand, "bob", "fold")
        assert outcome.message == "Folded"
        assert outcome.state.player("bob").folded
        assert outcome.state.pot == 15

    def test_raise(self, three_player_hand):
        """Test that a raise sets the new bet and raise size."""
        outcome = process_action(three_player_hand, "bob", "raise", 30)
        assert outcome.message == "Raised to $30"
        state = outcome.state
        assert state.current_bet == 30
        assert state.last_raise_amount == 20
        assert state.player("bob").chips == 970
        assert state.pot == 45

    def test_min_raise_tracks_last_raise(self, three_player_hand, act):
        """Test that the minimum raise grows with the last raise."""
        state = act(three_player_hand, "raise", 30)
        outcome = process_action(state, "carol", "raise", 45)
        assert outcome.message == "Raise must be at least 50"
        assert outcome.state is state
        assert process_action(state, "carol", "raise", 50).success

    def test_raise_counts_chips_already_in(self, three_player_hand, act):
        """Test that a raise only takes the difference from the stack."""
        state = act(three_player_hand, "call")
        state = act(state, "raise", 40)
        carol = state.player("carol")
        assert carol.current_bet == 40
        assert carol.chips == 960

    def test_all_in(self, three_player_hand):
        """Test that going all-in commits the whole stack."""
        outcome = process_action(three_player_hand, "bob", "allin")
        assert outcome.message == "All-in for $1000"
        bob = outcome.state.player("bob")
        assert bob.chips == 0
        assert bob.all_in
        assert outcome.state.current_bet == 1000

    def test_big_blind_option(self, three_player_hand, act):
        """Test that the big blind may act after limpers."""
        state = act(three_player_hand, "call")
        state = act(state, "call")
        assert state.current_player_seat == 0
        assert not is_round_closed(state)

        state = act(state, "check")
        assert state.current_player_seat is None
        assert state.pot == 30

    def test_big_blind_raise_reopens(self, three_player_hand, act):
        """Test that a raise by the big blind reopens action."""
        state = act(three_player_hand, "call")
        state = act(state, "call")
        state = act(state, "raise", 30)
        assert state.current_player_seat == 1
        assert not state.player("bob").acted_this_round
        assert not state.player("carol").acted_this_round

    def test_heads_up_order(self, heads_up_hand, act):
        """Test heads-up preflop order: dealer first, big blind last."""
        state = act(heads_up_hand, "call")
        assert state.current_player_seat == 0
        state = act(state, "check")
        assert state.current_player_seat is None

    def test_last_player_facing_bet_still_acts(self, three_player_hand, act):
        """Test that the last player facing a raise still gets to act."""
        state = act(three_player_hand, "raise", 50)
        state = act(state, "fold")
        assert state.current_player_seat == 0
        state = act(state, "call")
        assert state.current_player_seat is None


class TestRoundClosure:
    """Which players can still act, and when the round is over."""

    def test_acting_players_skip_folded_and_all_in(self, three_player_hand, act):
        """Test that only players able to bet are listed as acting."""
        state = act(three_player_hand, "fold")
        state = act(state, "allin")
        assert [p.player_id for p in state.acting_players] == ["alice"]

    def test_lone_actor_facing_all_in_must_respond(self, three_player_hand, act):
        """Test that the only remaining actor still has to call a shove."""
        state = act(three_player_hand, "fold")
        state = act(state, "allin")
        assert not is_round_closed(state)
        assert state.current_player_seat == 0

        state = act(state, "call")
        assert is_round_closed(state)
        assert state.current_player_seat is None


class TestAllInReopening:
    """A short all-in does not reopen action; a full one does."""

    def test_short_all_in(self, three_player_hand, act, update_players):
        """Test that a short all-in must be called but does not reopen action."""
        state = act(three_player_hand, "raise", 30)
        state = update_players(state, carol={"chips": 35})
        state = act(state, "allin")

        assert state.current_bet == 40
        assert state.last_raise_amount == 20
        assert state.player("bob").acted_this_round
        assert state.current_player_seat == 0

        state = act(state, "call")
        assert state.player("alice").current_bet == 40
        assert state.current_player_seat == 1
        state = act(state, "call")
        assert state.current_player_seat is None

    def test_all_in_below_current_bet(self, three_player_hand, act, update_players):
        """Test that an all-in for less leaves the table bet alone."""
        state = act(three_player_hand, "raise", 100)
        state = update_players(state, carol={"chips": 45})
        state = act(state, "allin")
        assert state.current_bet == 100
        assert state.player("carol").total_bet == 50

    def test_full_all_in_reopens(self, three_player_hand, act, update_players):
        """Test that an all-in of a full raise reopens action."""
        state = act(three_player_hand, "raise", 30)
        state = update_players(state, carol={"chips": 100})
        state = act(state, "allin")

        assert state.current_bet == 105
        assert state.last_raise_amount == 75
        assert not state.player("bob").acted_this_round

    def test_call_for_less_goes_all_in(self, three_player_hand, act, update_players):
        """Test that calling with a short stack puts the player all-in."""
        state = act(three_player_hand, "raise", 200)
        state = update_players(state, carol={"chips": 50})
        outcome = process_action(state, "carol", "call")
        assert outcome.message == "Called $50"
        assert outcome.state.player("carol").all_in
        assert outcome.state.current_bet == 200


class TestPostflopBetting:

    @pytest.fixture
    def flop(self, three_player_hand, act):
        state = act(three_player_hand, "call")
        state = act(state, "call")
        state = act(state, "check")
        return advance_street(state)

    def test_bet_rules(self, flop):
        """Test bet size limits on an unopened street."""
        assert flop.current_bet == 0
        assert flop.current_player_seat == 2
        assert validate_action(flop, "carol", "bet", 5) == "Minimum bet is 10"
        assert validate_action(flop, "carol", "bet", 2000) == "Cannot bet more than stack (990)"
        assert validate_action(flop, "carol", "call") is None

        outcome = process_action(flop, "carol", "bet", 20)
        assert outcome.message == "Bet $20"
        assert outcome.state.current_bet == 20
        assert outcome.state.last_raise_amount == 20

    def test_raise_without_bet_opens_betting(self, flop):
        """Test that a raise with no bet is recorded as the opening bet."""
        outcome = process_action(flop, "carol", "raise", 20)
        assert outcome.success
        assert outcome.message == "Bet $20"
        assert outcome.state.current_bet == 20
        assert outcome.state.last_raise_amount == 20
        record = outcome.state.history[-1]
        assert record.action_type == "bet"
        assert record.amount == 20

    def test_raise_with_bet_recorded_as_raise(self, flop, act):
        """Test that a raise over a bet stays a raise."""
        state = act(flop, "bet", 20)
        state = act(state, "raise", 60)
        assert state.history[-1].action_type == "raise"
        assert state.last_raise_amount == 40

    def test_check_around(self, flop, act):
        """Test that the round closes when everyone checks."""
        state = act(flop, "check")
        state = act(state, "check")
        state = act(state, "check")
        assert state.current_player_seat is None


class TestLegalActions:

    def test_facing_big_blind(self, three_player_hand):
        """Test the options of the first player preflop."""
        actions = legal_actions(three_player_hand)
        assert actions == [
            {"type": "fold"},
            {"type": "call", "amount": 10},
            {"type": "raise", "min": 20, "max": 1000},
            {"type": "allin", "amount": 1000},
        ]

    def test_not_your_turn(self, three_player_hand):
        """Test that a waiting player has no legal actions."""
        assert legal_actions(three_player_hand, "alice") == []

    def test_unopened_street(self, three_player_hand, act):
        """Test that an unopened street offers check and bet."""
        state = act(three_player_hand, "call")
        state = act(state, "call")
        state = act(state, "check")
        state = advance_street(state)
        types = [a["type"] for a in legal_actions(state)]
        assert types == ["fold", "check", "bet", "allin"]

    def test_short_stack_cannot_raise(self, three_player_hand, update_players):
        """Test that a stack below the minimum raise can only shove."""
        state = update_players(three_player_hand, bob={"chips": 15})
        types = [a["type"] for a in legal_actions(state)]
        assert types == ["fold", "call", "allin"]
