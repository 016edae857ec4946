import logging
from typing import Literal

from pydantic import BaseModel

from bioreel_core.config import BIAS_BOUND, FEEDBACK_STEP
from bioreel_core.errors import InvalidFeedback, MovieNotInRun, NoActiveRun
from bioreel_core.types import Genre, ModelStats, MovieDetail, UserBias
from bioreel_genre.naive_bayes import NaiveBayesGenreModel

from .bias import init_bias, nudge
from .session import SessionRecord

log = logging.getLogger(__name__)

FeedbackAction = Literal["like", "dislike"]
_EMPTY_VALUES = {"", "N/A"}


class FeedbackOutcome(BaseModel):
    ok: bool = True
    action: FeedbackAction
    imdb_id: str
    applied_genre: Genre
    updated_bias: UserBias
    model_stats: ModelStats


def build_movie_training_text(movie: MovieDetail) -> str:
    parts = [
        movie.title,
        movie.genre,
        movie.plot,
        movie.actors,
        movie.director,
        movie.writer,
        movie.year,
    ]
    return " ".join(p.strip() for p in parts if p and p.strip() not in _EMPTY_VALUES)


class FeedbackService:
    """
    Applies like/dislike on a movie from the session's last run.

    - dislike: nudges this session's bias for the run's genre down
    - like: nudges the bias up and trains the shared model on the movie's text

    There is no negative update of the shared model; one user's dislikes stay
    in that user's bias.
    """

    def __init__(
        self,
        model: NaiveBayesGenreModel,
        *,
        step: float = FEEDBACK_STEP,
        bound: float = BIAS_BOUND,
    ):
        self.model = model
        self.step = step
        self.bound = bound

    def apply_feedback(
        self, session: SessionRecord, imdb_id: str, action: str
    ) -> FeedbackOutcome:
        imdb_id = str(imdb_id or "").strip()
        action = str(action or "").strip().lower()
        if not imdb_id or action not in ("like", "dislike"):
            raise InvalidFeedback("Expected { imdbID, action: like|dislike }")

        last = session.last_run
        if last is None or not last.genre:
            raise NoActiveRun("No active recommendation session to provide feedback on.")

        movie = last.movies_by_id.get(imdb_id)
        if movie is None:
            raise MovieNotInRun("Movie not found in last recommendation results.")

        genre = last.genre
        if session.preference_bias is None:
            session.preference_bias = init_bias(self.model.labels)

        delta = self.step if action == "like" else -self.step
        nudge(session.preference_bias, genre, delta, self.bound)

        if action == "like":
            self.model.train_one(genre, build_movie_training_text(movie))

        log.info(
            "Feedback %s on %s for %s: bias now %.2f",
            action,
            imdb_id,
            genre,
            session.preference_bias[genre],
        )
        return FeedbackOutcome(
            action=action,
            imdb_id=imdb_id,
            applied_genre=genre,
            updated_bias=dict(session.preference_bias),
            model_stats=self.model.stats(),
        )
