from dataclasses import dataclass
from typing import Any, Mapping

from bioreel_core.types import Decision, Genre, LastRun, MovieDetail
from bioreel_genre.decision import GenreDecisionEngine, genre_to_search_term

from .pipeline import CandidateFetchPipeline


@dataclass
class RecommendationRun:
    decision: Decision
    search_term: str
    movies: list[MovieDetail]
    debug: dict[str, Any]

    def to_last_run(self) -> LastRun:
        return LastRun(
            genre=self.decision.genre,
            movies_by_id={m.imdb_id: m for m in self.movies if m.imdb_id},
        )


async def orchestrate(
    *,
    engine: GenreDecisionEngine,
    pipeline: CandidateFetchPipeline,
    bio: str,
    location: str,
    user_bias: Mapping[Genre, float] | None,
    limit: int,
    min_rating: float,
) -> RecommendationRun:
    decision = engine.decide(bio, location, user_bias)
    search_term = genre_to_search_term(decision.genre)

    movies, debug = await pipeline.fetch_recommendations(search_term, limit, min_rating)

    return RecommendationRun(
        decision=decision,
        search_term=search_term,
        movies=movies,
        debug=debug,
    )
