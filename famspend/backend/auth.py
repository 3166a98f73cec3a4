from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Callable

import jwt

from ..core.errors import NotAuthenticated
from ..schemas.auth import TokenPair
from ..schemas.context import Identity
from .client import BackendClient

logger = logging.getLogger(__name__)


class AuthEvent(StrEnum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class _Subscription:
    def __init__(self, listeners: list[Callable[[str], None]], callback: Callable[[str], None]) -> None:
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


def token_claims(token: str | None) -> dict[str, Any] | None:
    # the backend verifies signatures; locally we only read sub/exp
    if not token:
        return None
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None


class AuthSession:
    """Authentication state for one identity, and the gateway its calls go through."""

    def __init__(
        self,
        backend: BackendClient,
        *,
        access_token: str | None = None,
        refresh_token: str | None = None,
        leeway_seconds: int = 30,
    ) -> None:
        self._backend = backend
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._leeway = leeway_seconds
        self._listeners: list[Callable[[str], None]] = []

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def refresh_token(self) -> str | None:
        return self._refresh_token

    def is_expired(self) -> bool:
        claims = token_claims(self._access_token)
        if not claims or "exp" not in claims:
            return False
        now = datetime.now(timezone.utc).timestamp()
        return claims["exp"] <= now + self._leeway

    def on_auth_state_change(self, callback: Callable[[str], None]) -> _Subscription:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    def _emit(self, event: AuthEvent) -> None:
        logger.info(f"Auth state change: {event}")
        for cb in list(self._listeners):
            cb(event)

    def _store(self, payload: dict[str, Any]) -> TokenPair:
        pair = TokenPair(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or self._refresh_token,
            token_type=payload.get("token_type") or "bearer",
            expires_in=payload.get("expires_in"),
        )
        self._access_token = pair.access_token
        self._refresh_token = pair.refresh_token
        return pair

    async def _ensure_fresh(self) -> None:
        if self._access_token and self._refresh_token and self.is_expired():
            await self.refresh_session()

    async def get_user(self) -> Identity | None:
        if not self._access_token:
            return None
        await self._ensure_fresh()
        user = await self._backend.get_user(self._access_token)
        if not user:
            return None
        return Identity.from_auth_user(user)

    async def sign_in_with_password(self, email: str, password: str) -> TokenPair:
        pair = self._store(await self._backend.sign_in_with_password(email, password))
        self._emit(AuthEvent.SIGNED_IN)
        return pair

    async def refresh_session(self) -> TokenPair:
        if not self._refresh_token:
            raise NotAuthenticated("No refresh token")
        pair = self._store(await self._backend.refresh_session(self._refresh_token))
        self._emit(AuthEvent.TOKEN_REFRESHED)
        return pair

    async def sign_out(self) -> None:
        token = self._access_token
        try:
            if token:
                await self._backend.sign_out(token)
        finally:
            self._access_token = None
            self._refresh_token = None
            self._emit(AuthEvent.SIGNED_OUT)

    async def call(self, procedure: str, args: dict[str, Any] | None = None) -> Any:
        await self._ensure_fresh()
        return await self._backend.rpc(procedure, args, access_token=self._access_token)
