"""Async transport for the backend-as-a-service.

One instance is created at process start (see ``famspend.main``) and closed at
shutdown. It holds transport configuration only; per-user credentials are
passed in on every call by the auth session.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import Settings, settings as default_settings
from ..core.errors import BackendError, TransportError

logger = logging.getLogger(__name__)


class BackendClient:
    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
            headers={"apikey": api_key, "Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "BackendClient":
        s = settings or default_settings
        return cls(base_url=s.BACKEND_URL, api_key=s.BACKEND_ANON_KEY, timeout_seconds=s.HTTP_TIMEOUT_SECONDS)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _auth_headers(self, access_token: str | None) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token or self._api_key}"}

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        try:
            resp = await self._http.request(
                method, path, json=json, params=params, headers=self._auth_headers(access_token)
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"Network error: {e}") from e

        if resp.status_code >= 400:
            try:
                payload = resp.json()
            except ValueError:
                payload = resp.text
            raise BackendError.from_payload(payload, resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"{method} {path} returned a non-JSON body ({resp.status_code})")
            raise TransportError(f"Invalid JSON from {path}", status_code=resp.status_code) from e

    async def rpc(self, procedure: str, args: dict[str, Any] | None = None, *, access_token: str | None = None) -> Any:
        logger.debug(f"rpc {procedure} args={sorted((args or {}).keys())}")
        return await self._request_json("POST", f"/rest/v1/rpc/{procedure}", access_token=access_token, json=args or {})

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        try:
            return await self._request_json("GET", "/auth/v1/user", access_token=access_token)
        except BackendError as e:
            if isinstance(e, TransportError) or e.status_code not in (401, 403):
                raise
            return None

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        return await self._request_json(
            "POST", "/auth/v1/token", params={"grant_type": "password"}, json={"email": email, "password": password}
        )

    async def refresh_session(self, refresh_token: str) -> dict[str, Any]:
        return await self._request_json(
            "POST", "/auth/v1/token", params={"grant_type": "refresh_token"}, json={"refresh_token": refresh_token}
        )

    async def sign_out(self, access_token: str) -> None:
        await self._request_json("POST", "/auth/v1/logout", access_token=access_token)
