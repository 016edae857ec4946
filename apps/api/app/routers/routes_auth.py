import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse

from bioreel_core.errors import DomainError, InvalidOAuthState
from bioreel_genre.decision import GenreDecisionEngine
from bioreel_github.github_client import GitHubOAuthClient
from bioreel_recommendation.pipeline import CandidateFetchPipeline
from bioreel_user.session import SessionRecord
from app.deps.deps import (
    get_decision_engine,
    get_fetch_pipeline,
    get_github_client,
    get_oauth_state_store,
    get_session_store,
    get_settings,
)
from app.deps.session import get_optional_session, get_session_id
from app.infrastructure.cache.oauth_state_store import OAuthStateStore, PendingRequest
from app.infrastructure.cache.session_store import SessionStore
from app.schemas import RecommendationResponse
from app.services.recommend_service import run_recommendation

from ._helpers import parse_limit, parse_min_rating, to_http

router = APIRouter(tags=["auth"])
log = logging.getLogger(__name__)


@router.get(
    "/auth/github",
    response_model=RecommendationResponse,
    responses={302: {"description": "Redirect to GitHub authorization"}},
)
async def start_github_oauth_or_run(
    full_name: str = "",
    min_rating: str | None = None,
    limit: str | None = None,
    session: SessionRecord | None = Depends(get_optional_session),
    settings=Depends(get_settings),
    github: GitHubOAuthClient = Depends(get_github_client),
    state_store: OAuthStateStore = Depends(get_oauth_state_store),
    engine: GenreDecisionEngine = Depends(get_decision_engine),
    pipeline: CandidateFetchPipeline = Depends(get_fetch_pipeline),
):
    """Run recommendations for a logged-in session, otherwise start the GitHub OAuth flow."""
    full_name = full_name.strip()
    if not full_name:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Full name is required.")

    rating_floor = parse_min_rating(min_rating)
    max_results = parse_limit(limit)

    if session is not None:
        try:
            return await run_recommendation(
                session=session,
                full_name=full_name,
                limit=max_results,
                min_rating=rating_floor,
                github=github,
                engine=engine,
                pipeline=pipeline,
            )
        except DomainError as e:
            raise to_http(e)

    state = await state_store.put(
        PendingRequest(full_name=full_name, limit=max_results, min_rating=rating_floor)
    )
    url = github.authorize_url(state=state, redirect_uri=settings.redirect_uri)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/oauth/github/callback", response_model=RecommendationResponse)
async def handle_github_callback(
    response: Response,
    code: str | None = None,
    state: str | None = None,
    settings=Depends(get_settings),
    github: GitHubOAuthClient = Depends(get_github_client),
    state_store: OAuthStateStore = Depends(get_oauth_state_store),
    sessions: SessionStore = Depends(get_session_store),
    engine: GenreDecisionEngine = Depends(get_decision_engine),
    pipeline: CandidateFetchPipeline = Depends(get_fetch_pipeline),
):
    pending = await state_store.consume(state) if code else None
    if pending is None:
        raise to_http(InvalidOAuthState("OAuth Error: missing/invalid code or state."))

    try:
        access_token = await github.exchange_code(code)
    except DomainError as e:
        log.warning("Token exchange failed: %s", e)
        raise HTTPException(e.status, f"Token Exchange Failed: {e}")

    try:
        user = await github.fetch_user(access_token)
    except DomainError as e:
        log.warning("GitHub user fetch failed: %s", e)
        raise HTTPException(e.status, f"GitHub User Fetch Failed: {e}")

    session = await sessions.create(user=user, access_token=access_token)
    response.set_cookie(
        settings.session_cookie_name,
        session.sid,
        httponly=True,
        path="/",
        secure=settings.is_production,
        samesite="lax",
    )

    try:
        return await run_recommendation(
            session=session,
            full_name=pending.full_name,
            limit=pending.limit,
            min_rating=pending.min_rating,
            github=github,
            engine=engine,
            pipeline=pipeline,
            user=user,
        )
    except DomainError as e:
        # no session outlives a failed callback; the error response carries no cookie
        await sessions.delete(session.sid)
        raise to_http(e)


@router.get("/logout")
async def logout(
    sid: str | None = Depends(get_session_id),
    settings=Depends(get_settings),
    sessions: SessionStore = Depends(get_session_store),
):
    await sessions.delete(sid)
    redirect = RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    redirect.delete_cookie(
        settings.session_cookie_name,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )
    return redirect
