from __future__ import annotations

import logging
from typing import Mapping, Sequence

from bioreel_core.config import GENRE_PRIORITY
from bioreel_core.types import Decision, DecisionDebug, DecisionParams, Genre

from .naive_bayes import NaiveBayesGenreModel
from .scoring import (
    apply_user_bias,
    bias_note,
    heuristic_priors,
    pick_genre,
    softmax_from_log_scores,
)
from .tokenizer import normalize_text

log = logging.getLogger(__name__)


def genre_to_search_term(genre: Genre) -> str:
    if "sci" in normalize_text(genre):
        return "science fiction"
    return genre


class GenreDecisionEngine:
    """
    Picks one genre for a (bio, location, bias) triple:
      1) rule-based priors (empty bio, name-only bio, location)
      2) per-user feedback bias added on top of the priors
      3) Naive Bayes probabilities over "bio location"
      4) combined = probability + prior, argmax in priority order

    Pure with respect to its inputs and the current model counts.
    """

    def __init__(
        self,
        model: NaiveBayesGenreModel,
        params: DecisionParams | None = None,
        *,
        priority: Sequence[Genre] = GENRE_PRIORITY,
    ):
        self.model = model
        self.params = params or DecisionParams()
        self.priority = [g for g in priority if g in model.labels] or list(model.labels)

    def decide(
        self,
        bio: str | None,
        location: str | None,
        user_bias: Mapping[Genre, float] | None = None,
    ) -> Decision:
        bio_raw = (bio or "").strip()
        loc_raw = (location or "").strip()
        labels = self.model.labels

        priors, heuristic_notes = heuristic_priors(bio_raw, loc_raw, labels, self.params)
        applied_bias = apply_user_bias(priors, user_bias)

        prediction = self.model.predict(f"{bio_raw} {loc_raw}".strip())
        probs = softmax_from_log_scores(prediction.scores)

        combined = {g: probs.get(g, 0.0) + priors.get(g, 0.0) for g in labels}
        genre, best = pick_genre(combined, self.priority)

        total = sum(combined.values())
        # negative bias can shrink the total below the winner's score
        confidence = min(1.0, max(0.0, best / (total if total > 0 else 1.0)))

        top_tokens = prediction.top_tokens_by_label(genre, self.params.top_token_count)
        if top_tokens:
            token_expl = f"Top tokens driving {genre}: " + ", ".join(
                f'"{t.token}"' for t in top_tokens
            ) + "."
        else:
            token_expl = "No dominant tokens; selection relied on combined priors."

        reason = " ".join(
            part
            for part in (
                f"Selected {genre} (confidence {confidence * 100:.0f}%).",
                token_expl,
                f"Heuristics: {' '.join(heuristic_notes)}" if heuristic_notes else "",
                bias_note(applied_bias),
            )
            if part
        )

        log.debug("Genre decision %s (confidence %.3f)", genre, confidence)

        return Decision(
            genre=genre,
            confidence=confidence,
            reason=reason,
            debug=DecisionDebug(
                ml_probs={g: round(v, 4) for g, v in probs.items()},
                priors={g: round(v, 3) for g, v in priors.items()},
                combined={g: round(v, 4) for g, v in combined.items()},
                top_tokens=top_tokens,
            ),
        )
