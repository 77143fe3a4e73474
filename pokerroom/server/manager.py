"""
In-memory room registry for the HTTP driver.

Each room holds its latest immutable state. Updates to one room are
serialized by that room's lock; separate rooms never share state.
"""

from __future__ import annotations
import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from pokerroom.core.rules import RoomOptions
from pokerroom.core.state import RoomState, create_room


logger = logging.getLogger(__name__)


@dataclass
class RoomEntry:
    """A room's current state with its lock and random source."""
    state: RoomState
    rng: random.Random
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class RoomNotFound(KeyError):
    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(room_id)


class RoomManager:
    """
    Manages multiple independent rooms.

    Usage:
        manager = RoomManager(seed=7)
        state = manager.create_room(options)
        state = await manager.update(state.room_id, lambda s: start_hand(s, rng))
    """

    def __init__(self, seed: Optional[int] = None):
        self.rooms: Dict[str, RoomEntry] = {}
        self._seed_source = random.Random(seed)

    def create_room(self, options: RoomOptions) -> RoomState:
        rng = random.Random(self._seed_source.getrandbits(64))
        state = create_room(options, rng=rng)
        self.rooms[state.room_id] = RoomEntry(state=state, rng=rng)
        logger.info(f"Registered room {state.room_id}, {len(self.rooms)} room(s) open")
        return state

    def get_room(self, room_id: str) -> RoomEntry:
        entry = self.rooms.get(room_id)
        if entry is None:
            raise RoomNotFound(room_id)
        return entry

    async def update(self, room_id: str, transition: Callable[[RoomEntry], RoomState]) -> RoomState:
        """
        Run one transition against a room's latest state.

        The transition receives the room entry and returns the next state.
        If it raises, the stored state is left as it was.
        """
        entry = self.get_room(room_id)
        async with entry.lock:
            entry.state = transition(entry)
            return entry.state

    def remove_room(self, room_id: str) -> None:
        self.rooms.pop(room_id, None)
