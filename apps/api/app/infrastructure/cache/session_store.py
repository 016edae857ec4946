from __future__ import annotations

import secrets
import time

from bioreel_core.types import GitHubUser
from bioreel_user.bias import init_bias
from bioreel_user.session import SessionId, SessionRecord


def new_id() -> str:
    return secrets.token_hex(20)


class SessionStore:
    """
    In-process session store: sid -> SessionRecord.

    - No persistence; a restart drops every session
    - Optional absolute TTL cap (based on SessionRecord.created_at); 0 disables expiry
    """

    def __init__(self, *, absolute_ttl_sec: int = 0) -> None:
        self._sessions: dict[SessionId, SessionRecord] = {}
        self._sess_cap = int(absolute_ttl_sec)

    def _now(self) -> float:
        return time.time()

    def _expired(self, record: SessionRecord) -> bool:
        return bool(self._sess_cap and (self._now() - record.created_at) > self._sess_cap)

    async def create(self, *, user: GitHubUser, access_token: str) -> SessionRecord:
        sid = SessionId(new_id())
        record = SessionRecord(
            sid=sid,
            user=user,
            access_token=access_token,
            created_at=self._now(),
            preference_bias=init_bias(),
        )
        self._sessions[sid] = record
        return record

    async def get(self, sid: str | None) -> SessionRecord | None:
        if not sid:
            return None
        record = self._sessions.get(SessionId(sid))
        if record is None:
            return None
        if self._expired(record):
            await self.delete(sid)
            return None
        return record

    async def delete(self, sid: str | None) -> None:
        if sid:
            self._sessions.pop(SessionId(sid), None)

    def __len__(self) -> int:
        return len(self._sessions)
