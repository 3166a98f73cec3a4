from typing import Any, Callable, Protocol

from ..schemas.context import Identity


class Gateway(Protocol):
    """Remote procedure gateway: the only way state changes or is read."""

    async def call(self, procedure: str, args: dict[str, Any] | None = None) -> Any: ...


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class AuthProvider(Protocol):
    async def get_user(self) -> Identity | None: ...
    def on_auth_state_change(self, callback: Callable[[str], None]) -> Subscription: ...
