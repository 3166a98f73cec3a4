from ..backend.ports import Gateway
from ..core.errors import BackendError


async def create_family(gw: Gateway, *, name: str) -> str:
    try:
        return await gw.call("create_family", {"family_name": name.strip()})
    except BackendError as e:
        raise e.with_prefix("Failed to create family") from e

async def join_family(gw: Gateway, *, join_code: str) -> str:
    try:
        return await gw.call("join_family", {"input_join_code": join_code.strip()})
    except BackendError as e:
        raise e.with_prefix("Failed to join family") from e

async def leave_family(gw: Gateway) -> None:
    try:
        await gw.call("leave_family")
    except BackendError as e:
        raise e.with_prefix("Failed to leave family") from e

async def update_family(gw: Gateway, *, name: str | None = None, monthly_spending_limit: float | None = None) -> None:
    # acts on the caller's family; a null field is left unchanged server-side
    args = {
        "new_name": (name or "").strip() or None,
        "new_limit": monthly_spending_limit,
    }
    try:
        await gw.call("update_family", args)
    except BackendError as e:
        raise e.with_prefix("Failed to update family") from e

async def delete_family(gw: Gateway) -> None:
    try:
        await gw.call("delete_family")
    except BackendError as e:
        raise e.with_prefix("Failed to delete family") from e

async def regenerate_join_code(gw: Gateway) -> str:
    try:
        return await gw.call("regenerate_family_code")
    except BackendError as e:
        raise e.with_prefix("Failed to regenerate join code") from e
