"""
Setup errors raised by the engine.

Rule violations during play are not exceptions: they come back as
rejection reasons and leave the room state untouched. Only conditions that
prevent a hand from starting at all are raised.
"""


class PokerRoomError(Exception):
    """Base class for engine errors."""


class SetupError(PokerRoomError):
    """The hand cannot be started from this room state."""


class InsufficientPlayers(SetupError):
    def __init__(self, seated: int):
        self.seated = seated
        super().__init__(f"Need at least 2 players to start a hand, {seated} seated")


class InsufficientChipsForBlind(SetupError):
    def __init__(self, player_id: str, stack: int, blind: int):
        self.player_id = player_id
        self.stack = stack
        self.blind = blind
        super().__init__(
            f"Player {player_id} has {stack} chips, cannot post blind of {blind}"
        )


class HandInProgress(SetupError):
    """A hand (or its pending showdown) has not been resolved yet."""

    def __init__(self):
        super().__init__("Cannot start a new hand while the current one is unresolved")
