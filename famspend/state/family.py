from __future__ import annotations

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..backend.ports import Gateway
from ..core.errors import FamspendError
from ..schemas.common import MemberRole
from ..schemas.family import Family
from ..schemas.member import FamilyMember
from ..services.member_service import get_family_members
from .base import ReadModel
from .session import SessionResolver

logger = logging.getLogger(__name__)

_UNSET = object()


class FamilyState(ReadModel):
    """Family read model: metadata from the session context, members fetched separately."""

    def __init__(self, session: SessionResolver, gateway: Gateway) -> None:
        super().__init__()
        self.session = session
        self._gw = gateway
        self._owns_session = False
        self._unsubscribe: Callable[[], None] | None = None
        # family id the current member list was fetched for
        self._members_scope: object = _UNSET
        self._refetching = False
        self._members_loading = True
        self.members: list[FamilyMember] = []
        self.error: Exception | None = None

    @property
    def family(self) -> Optional[Family]:
        return Family.from_context(self.session.context)

    @property
    def is_admin(self) -> bool:
        ctx = self.session.context
        return ctx is not None and ctx.role == MemberRole.ADMIN

    @property
    def loading(self) -> bool:
        return self.session.loading or self._members_loading

    async def _on_mount(self) -> None:
        if not self.session.mounted:
            self._owns_session = True
            await self.session.mount()
        self._unsubscribe = self.session.subscribe(self._on_session_change)
        if not self.session.loading:
            await self.fetch_members()

    def _on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._owns_session:
            self.session.unmount()
            self._owns_session = False

    def _current_family_id(self) -> str | None:
        ctx = self.session.context
        return ctx.family_id if ctx else None

    def _on_session_change(self) -> None:
        if self.session.loading or self._refetching:
            return
        if self._current_family_id() != self._members_scope:
            self._commit(self.token, _members_loading=True)
            self._spawn(self.fetch_members())

    async def fetch_members(self) -> None:
        token = self.token
        family_id = self._current_family_id()
        self._members_scope = family_id

        if family_id is None:
            self._commit(token, members=[], error=None, _members_loading=False)
            return

        self._commit(token, _members_loading=True, error=None)
        try:
            members = await get_family_members(self._gw)
        except (FamspendError, ValidationError) as e:
            logger.error(f"Failed to load members of family {family_id}: {e}")
            self._commit(token, error=e, _members_loading=False)
            return
        self._commit(token, members=members, _members_loading=False)

    async def refetch(self) -> None:
        # context first so the member list is read against the new family scope
        self._refetching = True
        try:
            await self.session.refresh()
        finally:
            self._refetching = False
        await self.fetch_members()
