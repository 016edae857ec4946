import logging
from typing import Any

import httpx

from bioreel_core.config import OMDB_BASE_URL
from bioreel_core.errors import CatalogError

log = logging.getLogger(__name__)


class OMDbClient:
    """
    Thin async wrapper over the OMDb search (?s=) and detail (?i=) endpoints.

    Transport and decode failures raise CatalogError. A well-formed
    ``{"Response": "False", "Error": ...}`` body is returned as-is; deciding what a
    "no results" page means is the caller's job.
    """

    BASE_URL = OMDB_BASE_URL

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get(self, params: dict[str, str]) -> dict[str, Any]:
        query = {"apikey": self.api_key, **params}
        try:
            response = await self.client.get(self.BASE_URL, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            log.warning("OMDb HTTP %s for %s", e.response.status_code, params)
            raise CatalogError(f"OMDb HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            log.warning("OMDb request error for %s: %s", params, e)
            raise CatalogError(f"OMDb request error: {e}") from e
        except ValueError as e:
            raise CatalogError("OMDb response was not valid JSON.") from e
        if not isinstance(data, dict):
            raise CatalogError("OMDb response was not a JSON object.")
        return data

    async def search(self, term: str, page: int = 1) -> dict[str, Any]:
        return await self.get({"s": term, "type": "movie", "page": str(page)})

    async def fetch_details(self, imdb_id: str) -> dict[str, Any]:
        return await self.get({"i": imdb_id, "plot": "short"})

    async def aclose(self):
        await self.client.aclose()
