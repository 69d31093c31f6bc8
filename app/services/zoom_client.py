# app/services/zoom_client.py
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.zoom.us/v2"
DEFAULT_OAUTH_URL = "https://zoom.us/oauth/token"


class ZoomClientError(RuntimeError):
    """
    Raised when the ZoomClient cannot obtain an access token or when a
    Zoom API call fails in a non-recoverable way.
    """


@dataclass
class ZoomToken:
    access_token: str
    token_type: str
    expires_in: int
    scope: str | None
    expires_at: datetime


class ZoomClient:
    """
    Minimal Zoom REST API client using Server-to-Server OAuth.

    Responsibilities
    ----------------
    - Exchange account credentials for an access token and cache it.
    - Provide thin GET helpers for JSON endpoints and raw downloads.
    - Avoid leaking HTTP client details into the rest of the codebase.

    Notes
    -----
    - Token caching is in-memory for this process only.
    - A small safety margin is applied when calculating token expiry to avoid
      edge cases near expiration.
    """

    def __init__(
        self,
        account_id: str,
        client_id: str,
        client_secret: str,
        base_url: str = DEFAULT_API_BASE_URL,
        oauth_url: str = DEFAULT_OAUTH_URL,
        timeout_seconds: float = 30.0,
    ) -> None:
        if not account_id or not client_id or not client_secret:
            raise ValueError("account_id, client_id and client_secret are required")

        self._account_id = account_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._base_url = base_url.rstrip("/")
        self._oauth_url = oauth_url
        self._timeout_seconds = timeout_seconds

        self._token: Optional[ZoomToken] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _basic_auth_header(self) -> str:
        credentials = f"{self._client_id}:{self._client_secret}".encode()
        return "Basic " + base64.b64encode(credentials).decode()

    async def _fetch_token(self) -> ZoomToken:
        """
        Fetch a fresh access token with the account_credentials grant.
        """
        params = {
            "grant_type": "account_credentials",
            "account_id": self._account_id,
        }
        headers = {"Authorization": self._basic_auth_header()}

        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                resp = await client.post(self._oauth_url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise ZoomClientError(f"Zoom token request failed: {exc}") from exc

        if resp.status_code != 200:
            raise ZoomClientError(
                f"Failed to obtain Zoom token (status={resp.status_code}): {resp.text}"
            )

        payload = resp.json()
        access_token = payload.get("access_token")
        expires_in = payload.get("expires_in")

        if not access_token or not isinstance(expires_in, (int, float)):
            raise ZoomClientError(
                "Invalid token response from Zoom (missing access_token/expires_in)"
            )

        # Refresh slightly before the real expiry.
        now = datetime.now(tz=timezone.utc)
        safety_margin = 60  # seconds
        expires_at = now + timedelta(seconds=float(expires_in) - safety_margin)

        logger.info("Acquired new Zoom access token (expires in %ss)", expires_in)
        return ZoomToken(
            access_token=access_token,
            token_type=payload.get("token_type") or "bearer",
            expires_in=int(expires_in),
            scope=payload.get("scope"),
            expires_at=expires_at,
        )

    async def get_token(self) -> ZoomToken:
        """
        Return the cached token if still valid, otherwise fetch a new one.
        """
        now = datetime.now(tz=timezone.utc)
        if self._token and self._token.expires_at > now:
            return self._token

        self._token = await self._fetch_token()
        return self._token

    async def get_access_token(self) -> str:
        token = await self.get_token()
        return token.access_token

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Issue an authenticated GET and return the JSON payload.

        Raises ZoomClientError on non-2xx responses.
        """
        token = await self.get_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                resp = await client.request(
                    method="GET",
                    url=self._url(path),
                    headers=headers,
                    params=params,
                )
        except httpx.HTTPError as exc:
            raise ZoomClientError(f"Zoom GET {path} failed: {exc}") from exc

        if resp.status_code // 100 != 2:
            raise ZoomClientError(
                f"Zoom GET {path} failed (status={resp.status_code}): {resp.text}"
            )
        return resp.json()

    async def download(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        authenticate: bool = True,
        follow_redirects: bool = False,
        timeout_seconds: Optional[float] = None,
    ) -> httpx.Response:
        """
        GET an arbitrary URL (typically a recording download_url) and return
        the raw response without raising on status, so callers can inspect
        redirects and error bodies. Transport failures raise ZoomClientError.
        """
        request_headers: Dict[str, str] = dict(headers or {})
        if authenticate:
            token = await self.get_access_token()
            request_headers["Authorization"] = f"Bearer {token}"

        timeout = timeout_seconds if timeout_seconds is not None else self._timeout_seconds
        try:
            async with httpx.AsyncClient(
                timeout=timeout, follow_redirects=follow_redirects
            ) as client:
                return await client.request(
                    method="GET",
                    url=self._url(url),
                    headers=request_headers,
                )
        except httpx.HTTPError as exc:
            raise ZoomClientError(f"Download of {url} failed: {exc}") from exc


# Simple singleton-style accessor wired to app settings
_zoom_client_instance: Optional[ZoomClient] = None


def get_zoom_client() -> ZoomClient:
    """
    Lazily construct a ZoomClient instance using application settings.

    Raises ZoomClientError when the credentials are not configured.
    """
    global _zoom_client_instance
    if _zoom_client_instance is None:
        settings = get_settings()
        if not settings.ZOOM_ACCOUNT_ID or not settings.ZOOM_CLIENT_ID or not settings.ZOOM_CLIENT_SECRET:
            raise ZoomClientError(
                "ZOOM_ACCOUNT_ID, ZOOM_CLIENT_ID and ZOOM_CLIENT_SECRET must be "
                "configured in settings to use the shared Zoom client."
            )
        _zoom_client_instance = ZoomClient(
            account_id=settings.ZOOM_ACCOUNT_ID,
            client_id=settings.ZOOM_CLIENT_ID,
            client_secret=settings.ZOOM_CLIENT_SECRET,
            base_url=str(settings.ZOOM_API_BASE_URL or DEFAULT_API_BASE_URL),
            oauth_url=str(settings.ZOOM_OAUTH_URL or DEFAULT_OAUTH_URL),
            timeout_seconds=settings.ZOOM_HTTP_TIMEOUT_SECONDS,
        )
    return _zoom_client_instance
