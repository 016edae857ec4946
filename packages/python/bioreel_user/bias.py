import math
from typing import Sequence

from bioreel_core.config import BIAS_BOUND, GENRE_LABELS
from bioreel_core.types import Genre, UserBias


def init_bias(labels: Sequence[Genre] = GENRE_LABELS) -> UserBias:
    return {g: 0.0 for g in labels}


def clamp_bias(value: float, bound: float = BIAS_BOUND) -> float:
    """Clamp into [-bound, bound]; anything non-finite resets to 0."""
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(x):
        return 0.0
    return max(-bound, min(bound, x))


def nudge(bias: UserBias, genre: Genre, delta: float, bound: float = BIAS_BOUND) -> UserBias:
    bias[genre] = clamp_bias(bias.get(genre, 0.0) + delta, bound)
    return bias
