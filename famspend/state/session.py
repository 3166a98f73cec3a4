from __future__ import annotations

import logging

from pydantic import ValidationError

from ..backend.ports import AuthProvider, Gateway, Subscription
from ..core.errors import FamspendError
from ..schemas.context import Identity, UserContext
from ..services.context_service import get_my_context
from .base import ReadModel

logger = logging.getLogger(__name__)


class SessionResolver(ReadModel):
    """Current identity plus its server-derived context (profile, family, role).

    ``get_my_context`` is the single source for membership facts. Every auth
    state change triggers a full reload; concurrent reloads each replace
    ``context`` wholesale and the last one to finish wins.
    """

    def __init__(self, auth: AuthProvider, gateway: Gateway) -> None:
        super().__init__()
        self._auth = auth
        self._gw = gateway
        self._subscription: Subscription | None = None
        self.identity: Identity | None = None
        self.context: UserContext | None = None
        self.loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    async def _on_mount(self) -> None:
        self._subscription = self._auth.on_auth_state_change(self._on_auth_change)
        await self.refresh()

    def _on_unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_change(self, event: str) -> None:
        logger.debug(f"Reloading session after {event}")
        self._spawn(self.refresh())

    async def refresh(self) -> None:
        token = self.token
        self._commit(token, loading=True)

        try:
            identity = await self._auth.get_user()
        except FamspendError as e:
            logger.error(f"Session load error: {e}", exc_info=True)
            self._commit(token, identity=None, context=None, loading=False)
            return

        if identity is None:
            self._commit(token, identity=None, context=None, loading=False)
            return

        try:
            context = await get_my_context(self._gw)
        except (FamspendError, ValidationError) as e:
            # authenticated but context unavailable: degrade to "no family"
            logger.error(f"Failed to fetch user context for {identity.id}: {e}")
            context = None

        self._commit(token, identity=identity, context=context, loading=False)
