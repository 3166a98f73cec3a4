from ..backend.ports import Gateway
from ..core.errors import BackendError
from ..schemas.category import Category


async def get_categories(gw: Gateway) -> list[Category]:
    try:
        rows = await gw.call("get_categories_for_my_family")
    except BackendError as e:
        raise e.with_prefix("Failed to fetch categories") from e
    return [Category.model_validate(r) for r in rows or []]

async def create_category(gw: Gateway, *, name: str) -> Category:
    try:
        row = await gw.call("create_category_for_my_family", {"category_name": name.strip()})
    except BackendError as e:
        raise e.with_prefix("Failed to create category") from e
    if isinstance(row, list):
        row = row[0] if row else None
    if not row:
        raise BackendError("Failed to create category: No category returned")
    return Category.model_validate(row)

async def delete_category(gw: Gateway, *, category_id: str) -> None:
    try:
        await gw.call("delete_category_for_my_family", {"category_id": category_id})
    except BackendError as e:
        raise e.with_prefix("Failed to delete category") from e
