from fastapi import Depends, HTTPException, Request, status

from bioreel_user.session import SessionRecord
from app.deps.deps import get_session_store, get_settings
from app.infrastructure.cache.session_store import SessionStore


def get_session_id(request: Request, settings=Depends(get_settings)) -> str | None:
    return request.cookies.get(settings.session_cookie_name) or None


async def get_optional_session(
    sid: str | None = Depends(get_session_id),
    store: SessionStore = Depends(get_session_store),
) -> SessionRecord | None:
    return await store.get(sid)


async def require_session(
    session: SessionRecord | None = Depends(get_optional_session),
) -> SessionRecord:
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in.",
        )
    return session
