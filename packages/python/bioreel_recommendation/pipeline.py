from __future__ import annotations

import logging
from typing import Any, Protocol

from bioreel_core.config import OMDB_CANDIDATE_CAP, OMDB_MAX_PAGES
from bioreel_core.errors import CatalogError
from bioreel_core.types import MovieDetail, SearchCandidate

from .trace import PipelineTrace

log = logging.getLogger(__name__)


class Catalog(Protocol):
    async def search(self, term: str, page: int = 1) -> dict[str, Any]: ...

    async def fetch_details(self, imdb_id: str) -> dict[str, Any]: ...


class CandidateFetchPipeline:
    """
    2-phase, strictly sequential catalog fetch:
      1) Search pages 1..max_pages, dedup ids globally in first-seen order, stop at
         the page cap, the candidate cap, an empty page or a failed page
      2) Fetch details one candidate at a time, keep finite ratings >= min_rating,
         stop once `limit` titles are accepted

    Each catalog call is awaited before the next one is issued. Page and detail
    failures are recorded in the trace and never abort the run.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        max_pages: int = OMDB_MAX_PAGES,
        candidate_cap: int = OMDB_CANDIDATE_CAP,
    ):
        self.catalog = catalog
        self.max_pages = max_pages
        self.candidate_cap = candidate_cap

    async def fetch_recommendations(
        self, search_term: str, limit: int, min_rating: float
    ) -> tuple[list[MovieDetail], dict[str, Any]]:
        trace = PipelineTrace(search_term=search_term, limit=limit, min_rating=min_rating)
        candidates = await self._collect_candidates(search_term, trace)
        results = await self._fill_details(candidates, limit, min_rating, trace)
        trace.add("done", accepted=len(results))
        return results, trace.to_dict()

    # ----- phase 1 -----

    async def _collect_candidates(
        self, search_term: str, trace: PipelineTrace
    ) -> list[SearchCandidate]:
        seen: set[str] = set()
        candidates: list[SearchCandidate] = []

        page = 1
        while page <= self.max_pages:
            trace.add("search", page=page, search_term=search_term)
            try:
                data = await self.catalog.search(search_term, page)
            except CatalogError as e:
                log.warning("Search page %d for %r failed: %s", page, search_term, e)
                trace.add("search_page_failed", page=page, error=str(e))
                break

            if data.get("Response") == "False":
                trace.add("search_page_empty", page=page, error=data.get("Error") or "Unknown")
                break

            rows = data.get("Search")
            for row in rows if isinstance(rows, list) else []:
                if not isinstance(row, dict):
                    continue
                candidate = SearchCandidate.from_omdb(row)
                if candidate.imdb_id and candidate.imdb_id not in seen:
                    seen.add(candidate.imdb_id)
                    candidates.append(candidate)

            if len(candidates) >= self.candidate_cap:
                break
            page += 1

        trace.add("final_candidates", count=len(candidates))
        return candidates

    # ----- phase 2 -----

    async def _fill_details(
        self,
        candidates: list[SearchCandidate],
        limit: int,
        min_rating: float,
        trace: PipelineTrace,
    ) -> list[MovieDetail]:
        accepted: list[MovieDetail] = []

        for candidate in candidates:
            if len(accepted) >= limit:
                break

            imdb_id = candidate.imdb_id
            trace.add("detail", imdbID=imdb_id)
            try:
                data = await self.catalog.fetch_details(imdb_id)
            except CatalogError as e:
                log.info("Skipping %s: detail fetch failed (%s)", imdb_id, e)
                trace.add("detail_failed", imdbID=imdb_id, error=str(e))
                continue

            if data.get("Response") == "False":
                trace.add("detail_no_match", imdbID=imdb_id, error=data.get("Error") or "Unknown")
                continue

            movie = MovieDetail.from_omdb(data)
            if not movie.imdb_id:
                movie.imdb_id = imdb_id

            if movie.rating is not None and movie.rating >= min_rating:
                accepted.append(movie)
                trace.add("accepted", imdbID=imdb_id, imdbRating=movie.rating_raw)
            else:
                trace.add("filtered_out", imdbID=imdb_id, imdbRating=movie.rating_raw)

        return accepted
