"""In-memory registry of per-participant world states."""

import logging
from typing import Callable, Dict, List, Optional

from city.world import City
from rollup.schemas import WorldState

logger = logging.getLogger(__name__)


def normalize_identity(identity: str) -> str:
    """Addresses that differ only in case name the same participant."""
    return identity.lower()


class StateRegistry:
    """Maps participant identities to world states.

    Entries are created on demand and never removed, so the registry
    only grows for the life of the process.
    """

    def __init__(self, factory: Callable[[], WorldState] = City) -> None:
        self._factory = factory
        self._states: Dict[str, WorldState] = {}

    def get_or_create(self, identity: str) -> WorldState:
        key = normalize_identity(identity)
        state = self._states.get(key)
        if state is None:
            state = self._factory()
            self._states[key] = state
            logger.debug("Registered world state for %s (%d total)", key, len(self._states))
        return state

    def exists(self, identity: str) -> bool:
        return normalize_identity(identity) in self._states

    def get(self, identity: str) -> Optional[WorldState]:
        return self._states.get(normalize_identity(identity))

    def identities(self) -> List[str]:
        return list(self._states)

    def __contains__(self, identity: str) -> bool:
        return self.exists(identity)

    def __len__(self) -> int:
        return len(self._states)
