from typing import Any, cast

from fastapi import Depends, HTTPException, Request, status

from bioreel_genre.decision import GenreDecisionEngine
from bioreel_genre.naive_bayes import NaiveBayesGenreModel
from bioreel_github.github_client import GitHubOAuthClient
from bioreel_omdb.omdb_client import OMDbClient
from bioreel_recommendation.pipeline import CandidateFetchPipeline
from bioreel_user.feedback import FeedbackService
from app.infrastructure.cache.oauth_state_store import OAuthStateStore
from app.infrastructure.cache.session_store import SessionStore


def _get_state_attr(request: Request, name: str, error_detail: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail,
        )
    return value


def get_settings(request: Request) -> Any:
    return _get_state_attr(request, "settings", "Settings not initialized")


def get_genre_model(request: Request) -> NaiveBayesGenreModel:
    return cast(
        NaiveBayesGenreModel,
        _get_state_attr(request, "genre_model", "Genre model not initialized"),
    )


def get_decision_engine(request: Request) -> GenreDecisionEngine:
    return cast(
        GenreDecisionEngine,
        _get_state_attr(request, "decision_engine", "Decision engine not initialized"),
    )


def get_feedback_service(request: Request) -> FeedbackService:
    return cast(
        FeedbackService,
        _get_state_attr(request, "feedback_service", "Feedback service not initialized"),
    )


def get_github_client(request: Request) -> GitHubOAuthClient:
    return cast(
        GitHubOAuthClient,
        _get_state_attr(request, "github_client", "GitHub client not initialized"),
    )


def get_omdb_client(request: Request) -> OMDbClient:
    return cast(
        OMDbClient,
        _get_state_attr(request, "omdb_client", "OMDb client not initialized"),
    )


def get_fetch_pipeline(
    omdb: OMDbClient = Depends(get_omdb_client),
) -> CandidateFetchPipeline:
    return CandidateFetchPipeline(omdb)


def get_session_store(request: Request) -> SessionStore:
    return cast(
        SessionStore,
        _get_state_attr(request, "session_store", "Session store not initialized"),
    )


def get_oauth_state_store(request: Request) -> OAuthStateStore:
    return cast(
        OAuthStateStore,
        _get_state_attr(request, "oauth_state_store", "OAuth state store not initialized"),
    )
