from __future__ import annotations

from typing import Any, Callable

from ..backend.ports import Gateway
from ..core.errors import NoFamilyError
from ..schemas.common import MemberRole
from ..services import family_service, member_service
from ..state.family import FamilyState
from .base import Dispatcher, require_text
from .notify import Notifier


class FamilyActions(Dispatcher):
    """Family mutations. Each success refetches the whole family state, context included.

    Authorization (admin-only operations, self-targeting) is left to the backend
    and the page layer; nothing is re-checked here.
    """

    def __init__(
        self,
        gateway: Gateway,
        state: FamilyState,
        notifier: Notifier,
        on_success: Callable[[], Any] | None = None,
    ) -> None:
        super().__init__(notifier, on_success or state.refetch)
        self._gw = gateway
        self._state = state

    def _require_family(self, message: str) -> None:
        if self._state.family is None:
            raise NoFamilyError(message)

    async def create_family(self, name: str, monthly_spending_limit: float | None = None) -> str:
        name = require_text(name, "Family name")

        async def op() -> str:
            family_id = await family_service.create_family(self._gw, name=name)
            # create_family only takes a name; the limit is a second call with no rollback
            if monthly_spending_limit is not None:
                await family_service.update_family(self._gw, monthly_spending_limit=monthly_spending_limit)
            return family_id

        return await self._run("create_family", op, success="Family created successfully!", failure="Failed to create family")

    async def join_family(self, join_code: str) -> str:
        join_code = require_text(join_code, "Join code")
        return await self._run(
            "join_family",
            lambda: family_service.join_family(self._gw, join_code=join_code),
            success="Successfully joined the family!",
            failure="Failed to join family",
        )

    async def update_family(self, name: str | None = None, monthly_spending_limit: float | None = None) -> None:
        self._require_family("No family to update")
        if name is not None:
            name = require_text(name, "Family name")
        await self._run(
            "update_family",
            lambda: family_service.update_family(self._gw, name=name, monthly_spending_limit=monthly_spending_limit),
            success="Family updated successfully!",
            failure="Failed to update family",
        )

    async def delete_family(self) -> None:
        self._require_family("No family to delete")
        await self._run(
            "delete_family",
            lambda: family_service.delete_family(self._gw),
            success="Family deleted successfully!",
            failure="Failed to delete family",
        )

    async def leave_family(self) -> None:
        await self._run(
            "leave_family",
            lambda: family_service.leave_family(self._gw),
            success="You have left the family",
            failure="Failed to leave family",
        )

    async def kick_member(self, user_id: str) -> None:
        await self._run(
            "kick_member",
            lambda: member_service.remove_member(self._gw, user_id=user_id),
            success="Member removed successfully",
            failure="Failed to remove member",
        )

    async def change_member_role(self, user_id: str, role: MemberRole | str) -> None:
        role = MemberRole(role)
        await self._run(
            "change_member_role",
            lambda: member_service.update_member_role(self._gw, user_id=user_id, role=role),
            success=f"Member role updated to {role}",
            failure="Failed to update role",
        )

    async def regenerate_join_code(self) -> str:
        self._require_family("No family")
        return await self._run(
            "regenerate_join_code",
            lambda: family_service.regenerate_join_code(self._gw),
            success="Join code regenerated!",
            failure="Failed to regenerate code",
        )
