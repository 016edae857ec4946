from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PipelineTrace:
    """
    Append-only step log for one pipeline run.

    Steps are recorded in the exact order the catalog calls were made, so the
    trail doubles as proof of the sequential fetch order.
    """

    search_term: str
    limit: int
    min_rating: float
    steps: list[dict[str, Any]] = field(default_factory=list)

    def add(self, step: str, **fields: Any) -> "PipelineTrace":
        self.steps.append({"step": step, **fields})
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "search_term": self.search_term,
            "limit": self.limit,
            "min_rating": self.min_rating,
            "steps": [dict(s) for s in self.steps],
        }
