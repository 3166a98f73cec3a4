from ..backend.ports import Gateway
from ..core.errors import BackendError
from ..schemas.common import MemberRole
from ..schemas.member import FamilyMember


async def get_family_members(gw: Gateway) -> list[FamilyMember]:
    try:
        rows = await gw.call("get_family_members")
    except BackendError as e:
        raise e.with_prefix("Failed to fetch members") from e
    return [FamilyMember.from_row(r) for r in rows or []]

async def remove_member(gw: Gateway, *, user_id: str) -> None:
    try:
        await gw.call("kick_member", {"target_user_id": user_id})
    except BackendError as e:
        raise e.with_prefix("Failed to remove member") from e

async def update_member_role(gw: Gateway, *, user_id: str, role: MemberRole | str) -> None:
    try:
        await gw.call("update_member_role", {"target_user_id": user_id, "new_role": str(role)})
    except BackendError as e:
        raise e.with_prefix("Failed to update role") from e
