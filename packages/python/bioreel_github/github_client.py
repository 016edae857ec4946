import logging
from urllib.parse import urlencode

import httpx

from bioreel_core.config import (
    GITHUB_AUTHORIZE_URL,
    GITHUB_TOKEN_URL,
    GITHUB_USER_AGENT,
    GITHUB_USER_URL,
)
from bioreel_core.errors import UpstreamAuthError
from bioreel_core.types import GitHubUser

log = logging.getLogger(__name__)


class GitHubOAuthClient:
    """OAuth web flow against GitHub: authorize redirect, code-for-token exchange, profile fetch."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": GITHUB_USER_AGENT},
            transport=transport,
        )

    def authorize_url(self, *, state: str, redirect_uri: str, scope: str = "read:user") -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": scope,
            "state": state,
        }
        return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        try:
            r = await self.client.post(
                GITHUB_TOKEN_URL,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "code": code,
                },
                headers={"Accept": "application/json"},
            )
            body = r.json()
        except httpx.RequestError as e:
            log.warning("GitHub token exchange failed: %s", e)
            raise UpstreamAuthError(f"HTTPS error: {e}") from e
        except ValueError as e:
            raise UpstreamAuthError("Token response was not valid JSON.") from e

        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise UpstreamAuthError("No access_token in response.")
        return token

    async def fetch_user(self, access_token: str) -> GitHubUser:
        try:
            r = await self.client.get(
                GITHUB_USER_URL,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
            body = r.json()
        except httpx.RequestError as e:
            log.warning("GitHub user fetch failed: %s", e)
            raise UpstreamAuthError(f"HTTPS error: {e}") from e
        except ValueError as e:
            raise UpstreamAuthError("User response was not valid JSON.") from e

        if not isinstance(body, dict) or not body.get("login"):
            raise UpstreamAuthError("User response missing login.")
        return GitHubUser(
            login=str(body["login"]),
            name=body.get("name"),
            bio=(body.get("bio") or "").strip(),
            location=(body.get("location") or "").strip(),
        )

    async def aclose(self):
        await self.client.aclose()
