from __future__ import annotations

import time
from dataclasses import dataclass, field

from .session_store import new_id


@dataclass
class PendingRequest:
    """
    Recommendation request parked while the user is away at GitHub.

    - full_name: display name typed on the form
    - limit / min_rating: already clamped
    """

    full_name: str
    limit: int
    min_rating: float
    created_at: float = field(default_factory=time.time)


class OAuthStateStore:
    """One-shot OAuth `state` values; consume() removes the entry it returns."""

    def __init__(self) -> None:
        self._pending: dict[str, PendingRequest] = {}

    async def put(self, request: PendingRequest) -> str:
        state = new_id()
        self._pending[state] = request
        return state

    async def consume(self, state: str | None) -> PendingRequest | None:
        if not state:
            return None
        return self._pending.pop(state, None)

    def __contains__(self, state: str) -> bool:
        return state in self._pending
