import logging

from bioreel_core.types import GitHubUser
from bioreel_genre.decision import GenreDecisionEngine
from bioreel_github.github_client import GitHubOAuthClient
from bioreel_recommendation.orchestrator import orchestrate
from bioreel_recommendation.pipeline import CandidateFetchPipeline
from bioreel_user.bias import init_bias
from bioreel_user.session import SessionRecord
from app.schemas import RecommendationDebug, RecommendationResponse

log = logging.getLogger(__name__)


async def run_recommendation(
    *,
    session: SessionRecord,
    full_name: str,
    limit: int,
    min_rating: float,
    github: GitHubOAuthClient,
    engine: GenreDecisionEngine,
    pipeline: CandidateFetchPipeline,
    user: GitHubUser | None = None,
) -> RecommendationResponse:
    """
    Profile fetch -> genre decision -> catalog fetch, each step awaited in turn.

    Refreshes the session's GitHub profile (unless the caller just fetched it as
    `user`) and replaces its LastRun so feedback can target the titles returned
    here. UpstreamAuthError propagates.
    """
    if user is None:
        user = await github.fetch_user(session.access_token)
    session.user = user

    if session.preference_bias is None:
        session.preference_bias = init_bias(engine.model.labels)
    user_bias = dict(session.preference_bias)

    run = await orchestrate(
        engine=engine,
        pipeline=pipeline,
        bio=user.bio,
        location=user.location,
        user_bias=user_bias,
        limit=limit,
        min_rating=min_rating,
    )
    session.last_run = run.to_last_run()

    log.info(
        "Recommended %d %s titles for %s (search %r)",
        len(run.movies),
        run.decision.genre,
        user.login,
        run.search_term,
    )

    return RecommendationResponse(
        full_name=full_name,
        github_login=user.login,
        bio=user.bio,
        location=user.location,
        genre=run.decision.genre,
        reason=run.decision.reason,
        confidence=run.decision.confidence,
        min_rating=min_rating,
        limit=limit,
        movies=run.movies,
        debug=RecommendationDebug(
            **run.debug,
            genre_decision=run.decision.debug,
            model_stats=engine.model.stats(),
            user_bias=user_bias,
        ),
    )
