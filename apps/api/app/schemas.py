from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from bioreel_core.types import Decision, DecisionDebug, ModelStats, MovieDetail, UserBias


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    imdb_id: str = Field(default="", alias="imdbID", examples=["tt0133093"])
    action: str = Field(default="", examples=["like"])


class DecisionRequest(BaseModel):
    bio: str = ""
    location: str = ""


class DecisionResponse(Decision):
    user_bias: UserBias = Field(default_factory=dict)


class RecommendationDebug(BaseModel):
    search_term: str
    limit: int
    min_rating: float
    steps: List[Dict[str, Any]] = Field(default_factory=list)
    genre_decision: DecisionDebug
    model_stats: ModelStats
    user_bias: UserBias


class RecommendationResponse(BaseModel):
    full_name: str
    github_login: str
    bio: str
    location: str
    genre: str
    reason: str
    confidence: float
    min_rating: float
    limit: int
    movies: List[MovieDetail] = Field(default_factory=list)
    debug: RecommendationDebug


class MeResponse(BaseModel):
    logged_in: bool
    login: str | None = None
    bio: str | None = None
    location: str | None = None
    preference_bias: UserBias | None = None
    model_stats: ModelStats | None = None
