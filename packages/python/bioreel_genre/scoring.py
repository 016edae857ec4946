from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from bioreel_core.types import DecisionParams, Genre

from .tokenizer import normalize_text

_NON_LETTERS = re.compile(r"[^A-Za-z\s]")


def softmax_from_log_scores(scores: Mapping[Genre, float]) -> Dict[Genre, float]:
    if not scores:
        return {}
    labels = list(scores)
    arr = np.array([scores[l] for l in labels], dtype=float)
    exps = np.exp(arr - arr.max())
    total = float(exps.sum()) or 1.0
    return {l: float(e) / total for l, e in zip(labels, exps)}


def is_name_only_bio(bio: str | None, max_words: int = 3) -> bool:
    """A raw bio that is just 1..max_words words once non-letters are dropped."""
    raw = (bio or "").strip()
    if not raw:
        return False
    parts = _NON_LETTERS.sub(" ", raw).split()
    return 1 <= len(parts) <= max_words


@dataclass(frozen=True)
class LocationRule:
    genre: Genre
    substrings: Tuple[str, ...]
    note: str
    exact: Tuple[str, ...] = ()

    def matches(self, location_norm: str) -> bool:
        if location_norm in self.exact:
            return True
        return any(s in location_norm for s in self.substrings)


LOCATION_RULES: Tuple[LocationRule, ...] = (
    LocationRule(
        genre="Action",
        substrings=("new york", "nyc"),
        exact=("ny",),
        note="NYC location: small Action prior (urban pace).",
    ),
    LocationRule(
        genre="Sci-Fi",
        substrings=("san francisco", "bay area", "seattle"),
        note="Tech hub location: small Sci-Fi prior.",
    ),
)


def heuristic_priors(
    bio: str | None,
    location: str | None,
    labels: Sequence[Genre],
    params: DecisionParams,
    rules: Sequence[LocationRule] = LOCATION_RULES,
) -> Tuple[Dict[Genre, float], List[str]]:
    """
    Rule-based additive priors. Returns (priors, notes).

    - empty bio      -> broad default genre
    - name-only bio  -> engagement baseline genre
    - location rules -> each matching rule adds once; rules stack
    """
    priors: Dict[Genre, float] = {l: 0.0 for l in labels}
    notes: List[str] = []

    def bump(genre: Genre, weight: float) -> None:
        if genre in priors:
            priors[genre] += weight

    bio_raw = (bio or "").strip()
    if not normalize_text(bio_raw):
        bump(params.broad_default_genre, params.empty_bio_prior)
        notes.append(
            f"No bio: slight prior toward {params.broad_default_genre} (broad default)."
        )

    if is_name_only_bio(bio_raw, params.max_name_words):
        bump(params.engagement_genre, params.name_only_prior)
        notes.append(
            f"Short name-only bio: prior toward {params.engagement_genre} (engagement baseline)."
        )

    location_norm = normalize_text(location)
    if location_norm:
        for rule in rules:
            if rule.matches(location_norm):
                bump(rule.genre, params.location_prior)
                notes.append(rule.note)

    return priors, notes


def apply_user_bias(
    priors: Dict[Genre, float], user_bias: Mapping[Genre, float] | None
) -> List[Tuple[Genre, float]]:
    """Add finite non-zero bias values into priors; returns the applied entries."""
    applied: List[Tuple[Genre, float]] = []
    if not user_bias:
        return applied
    for genre in priors:
        try:
            value = float(user_bias.get(genre, 0.0) or 0.0)
        except (TypeError, ValueError):
            continue
        if math.isfinite(value) and value != 0.0:
            priors[genre] += value
            applied.append((genre, value))
    return applied


def bias_note(applied: Sequence[Tuple[Genre, float]], top_n: int = 2) -> str:
    if not applied:
        return ""
    top = sorted(applied, key=lambda gv: abs(gv[1]), reverse=True)[:top_n]
    parts = ", ".join(f"{g} {v:+.2f}" for g, v in top)
    return f"User feedback bias applied: {parts}."


def pick_genre(
    combined: Mapping[Genre, float], priority: Sequence[Genre]
) -> Tuple[Genre, float]:
    best_genre = priority[0]
    best_score = -math.inf
    for genre in priority:
        score = combined.get(genre, -math.inf)
        if score > best_score:
            best_genre, best_score = genre, score
    return best_genre, best_score
