import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import BaseModel, Field

Genre = str
UserBias = Dict[Genre, float]
ImdbId = str


@dataclass(frozen=True)
class TrainingExample:
    text: str
    label: Genre


@dataclass
class DecisionParams:
    empty_bio_prior: float = 0.7  # -> Drama (broad default)
    name_only_prior: float = 0.9  # -> Thriller (engagement baseline)
    location_prior: float = 0.35  # per matched location rule
    max_name_words: int = 3
    top_token_count: int = 6
    broad_default_genre: Genre = "Drama"
    engagement_genre: Genre = "Thriller"


class TokenWeight(BaseModel):
    token: str
    weight: float


class DecisionDebug(BaseModel):
    ml_probs: Dict[Genre, float]
    priors: Dict[Genre, float]
    combined: Dict[Genre, float]
    top_tokens: List[TokenWeight] = Field(default_factory=list)


class Decision(BaseModel):
    genre: Genre
    confidence: float
    reason: str
    debug: DecisionDebug


class LabelCounts(BaseModel):
    documents: int
    tokens: int


class ModelStats(BaseModel):
    labels: List[Genre]
    vocab_size: int
    per_label: Dict[Genre, LabelCounts]


class GitHubUser(BaseModel):
    login: str
    name: str | None = None
    bio: str = ""
    location: str = ""


def parse_rating(raw: Any) -> float | None:
    """OMDb ratings come back as strings ("8.1") or the "N/A" sentinel."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _field(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    return str(value).strip() if value is not None else ""


@dataclass
class SearchCandidate:
    imdb_id: ImdbId
    title: str = ""
    year: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_omdb(cls, payload: dict[str, Any]) -> "SearchCandidate":
        return cls(
            imdb_id=_field(payload, "imdbID"),
            title=_field(payload, "Title"),
            year=_field(payload, "Year"),
            raw=dict(payload),
        )


class MovieDetail(BaseModel):
    imdb_id: ImdbId
    title: str = ""
    year: str = ""
    runtime: str = ""
    rating: float | None = None
    rating_raw: str = ""
    genre: str = ""
    plot: str = ""
    actors: str = ""
    director: str = ""
    writer: str = ""
    poster: str = ""

    @classmethod
    def from_omdb(cls, payload: dict[str, Any]) -> "MovieDetail":
        rating_raw = _field(payload, "imdbRating")
        return cls(
            imdb_id=_field(payload, "imdbID"),
            title=_field(payload, "Title"),
            year=_field(payload, "Year"),
            runtime=_field(payload, "Runtime"),
            rating=parse_rating(rating_raw),
            rating_raw=rating_raw,
            genre=_field(payload, "Genre"),
            plot=_field(payload, "Plot"),
            actors=_field(payload, "Actors"),
            director=_field(payload, "Director"),
            writer=_field(payload, "Writer"),
            poster=_field(payload, "Poster"),
        )


@dataclass
class LastRun:
    """Most recent recommendation result set of a session; feedback is validated against it."""

    genre: Genre
    movies_by_id: dict[ImdbId, MovieDetail]
    ts: float = field(default_factory=time.time)
