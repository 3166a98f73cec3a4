from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

import pytest

from famspend.schemas.context import Identity


class FakeGateway:
    """In-memory gateway. A response may be a value, an exception, or a callable of the args."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict | None]] = []

    async def call(self, procedure: str, args: dict | None = None) -> Any:
        self.calls.append((procedure, args))
        await asyncio.sleep(0)
        result = self.responses.get(procedure)
        if callable(result):
            result = result(args)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Exception):
            raise result
        return result

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def count(self, procedure: str) -> int:
        return self.names().count(procedure)


class _Sub:
    def __init__(self, listeners: list, cb: Callable) -> None:
        self._listeners = listeners
        self._cb = cb

    def unsubscribe(self) -> None:
        if self._cb in self._listeners:
            self._listeners.remove(self._cb)


class FakeAuth:
    def __init__(self, identity: Identity | None = None) -> None:
        self.identity = identity
        self.error: Exception | None = None
        self.listeners: list[Callable[[str], None]] = []

    async def get_user(self) -> Identity | None:
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.identity

    def on_auth_state_change(self, callback: Callable[[str], None]) -> _Sub:
        self.listeners.append(callback)
        return _Sub(self.listeners, callback)

    def emit(self, event: str) -> None:
        for cb in list(self.listeners):
            cb(event)


class FakeSession(FakeGateway, FakeAuth):
    """Both halves of an auth session, as the pages API uses it."""

    def __init__(self, identity: Identity | None = None, responses: dict[str, Any] | None = None) -> None:
        FakeGateway.__init__(self, responses)
        FakeAuth.__init__(self, identity)
        self.access_token = "token" if identity else None


def context_row(user_id: str = "u1", *, family: bool = True, role: str = "admin", **overrides) -> dict:
    row = {
        "user_id": user_id,
        "username": "alice",
        "avatar_url": None,
        "family_id": None,
        "role": None,
        "family_name": None,
        "join_code": None,
        "monthly_spending_limit": None,
    }
    if family:
        row.update(family_id="f1", role=role, family_name="Smiths", join_code="ABC123", monthly_spending_limit=1000.0)
    row.update(overrides)
    return row


def member_row(user_id: str, role: str = "member", username: str | None = None) -> dict:
    return {
        "user_id": user_id,
        "role": role,
        "joined_at": "2025-01-01T00:00:00Z",
        "username": username or user_id,
        "avatar_url": None,
    }


@pytest.fixture
def alice() -> Identity:
    return Identity(id="u1", username="alice", email="alice@example.com")


@pytest.fixture
def auth(alice) -> FakeAuth:
    return FakeAuth(alice)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(
        {
            "get_my_context": [context_row()],
            "get_family_members": [member_row("u1", "admin", "alice"), member_row("u2", "member", "bob")],
        }
    )
