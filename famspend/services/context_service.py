from ..backend.ports import Gateway
from ..schemas.context import UserContext


async def get_my_context(gw: Gateway) -> UserContext | None:
    rows = await gw.call("get_my_context")
    # zero rows means the profile is not provisioned yet
    if not rows:
        return None
    if isinstance(rows, dict):
        return UserContext.model_validate(rows)
    return UserContext.model_validate(rows[0])
