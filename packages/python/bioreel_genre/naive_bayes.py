from __future__ import annotations

import logging
import math
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from bioreel_core.config import GENRE_LABELS
from bioreel_core.types import (
    Genre,
    LabelCounts,
    ModelStats,
    TokenWeight,
    TrainingExample,
)

from .seed_data import SEED_TRAINING
from .tokenizer import tokenize

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenrePrediction:
    """
    Result of one predict() call.

    - scores: natural-log class scores; exponentiate with max-subtraction before use
    - tokens: the tokenized input, in order
    - token_probs: label -> {token: smoothed P(token | label)} captured at predict time
    """

    scores: Dict[Genre, float]
    tokens: List[str]
    token_probs: Dict[Genre, Dict[str, float]]

    def top_tokens_by_label(self, label: Genre, k: int) -> List[TokenWeight]:
        probs = self.token_probs.get(label, {})
        # sorted() is stable, so equal weights keep first-seen token order
        ranked = sorted(probs.items(), key=lambda kv: kv[1], reverse=True)
        return [TokenWeight(token=tok, weight=p) for tok, p in ranked[: max(0, k)]]


class NaiveBayesGenreModel:
    """
    Multinomial Naive Bayes over bag-of-tokens with Laplace (alpha=1) smoothing.

    Training is online: every train_one() is visible to the next predict() from any
    caller. Counts are only ever added. All reads and writes go through one lock, so
    a prediction always sees a consistent snapshot of the counters.
    """

    def __init__(self, labels: Sequence[Genre] = GENRE_LABELS):
        self.labels: List[Genre] = list(labels)
        self._lock = threading.Lock()
        self._word_counts: Dict[Genre, Counter] = {l: Counter() for l in self.labels}
        self._doc_counts: Dict[Genre, int] = {l: 0 for l in self.labels}
        self._total_words: Dict[Genre, int] = {l: 0 for l in self.labels}
        self._vocab: set[str] = set()

    # ----- training -----

    def train_one(self, label: Genre, text: str) -> None:
        if label not in self._word_counts:
            return
        tokens = tokenize(text)
        with self._lock:
            self._doc_counts[label] += 1
            counts = self._word_counts[label]
            for tok in tokens:
                self._vocab.add(tok)
                counts[tok] += 1
            self._total_words[label] += len(tokens)

    def train_batch(self, examples: Iterable[TrainingExample]) -> None:
        for ex in examples:
            self.train_one(ex.label, ex.text)

    # ----- inference -----

    def predict(self, text: str) -> GenrePrediction:
        tokens = tokenize(text)
        unique = list(dict.fromkeys(tokens))
        n_labels = len(self.labels)

        scores: Dict[Genre, float] = {}
        token_probs: Dict[Genre, Dict[str, float]] = {}
        with self._lock:
            vocab_size = len(self._vocab) or 1
            total_docs = sum(self._doc_counts.values()) or 1

            for label in self.labels:
                counts = self._word_counts[label]
                denom = self._total_words[label] + vocab_size

                score = math.log((self._doc_counts[label] + 1) / (total_docs + n_labels))
                for tok in tokens:
                    score += math.log((counts.get(tok, 0) + 1) / denom)
                scores[label] = score
                token_probs[label] = {
                    tok: (counts.get(tok, 0) + 1) / denom for tok in unique
                }

        return GenrePrediction(scores=scores, tokens=tokens, token_probs=token_probs)

    # ----- diagnostics -----

    def stats(self) -> ModelStats:
        with self._lock:
            return ModelStats(
                labels=list(self.labels),
                vocab_size=len(self._vocab),
                per_label={
                    l: LabelCounts(
                        documents=self._doc_counts[l], tokens=self._total_words[l]
                    )
                    for l in self.labels
                },
            )


def build_seeded_model(
    labels: Sequence[Genre] = GENRE_LABELS,
    seed: Iterable[TrainingExample] = SEED_TRAINING,
) -> NaiveBayesGenreModel:
    model = NaiveBayesGenreModel(labels)
    model.train_batch(seed)
    stats = model.stats()
    log.info(
        "Genre model seeded: %d labels, vocab size %d",
        len(stats.labels),
        stats.vocab_size,
    )
    return model
