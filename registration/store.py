import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Dict, Generator

from shared.entities import Team, Player


class IdentityAllocator:
    """Issues strictly increasing ids per entity kind, starting at 1."""

    def __init__(self):
        self._counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def next_id(self, kind: str) -> int:
        with self._lock:
            value = self._counters.get(kind, 0) + 1
            self._counters[kind] = value
            return value


class RegistrationStore:
    """
    Process-wide registration state: teams, players and their id allocator.

    One instance is built by the application factory and shared by the
    registries. Read-modify-write sequences that span several collections
    (the roster capacity check) must hold lock() for the whole sequence.
    The lock is reentrant.
    """

    def __init__(self, allocator: IdentityAllocator = None):
        self.allocator = allocator or IdentityAllocator()
        self.teams: "OrderedDict[int, Team]" = OrderedDict()
        self.players: "OrderedDict[int, Player]" = OrderedDict()
        self._lock = threading.RLock()

    @contextmanager
    def lock(self) -> Generator[None, None, None]:
        with self._lock:
            yield
