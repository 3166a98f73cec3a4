from __future__ import annotations

from typing import Any, Callable

from ..backend.ports import Gateway
from ..services import category_service
from .base import Dispatcher, require_text
from .notify import Notifier


class CategoryActions(Dispatcher):
    def __init__(self, gateway: Gateway, notifier: Notifier, on_success: Callable[[], Any] | None = None) -> None:
        super().__init__(notifier, on_success)
        self._gw = gateway

    async def create(self, name: str) -> bool:
        name = require_text(name, "Category name")
        await self._run(
            "create",
            lambda: category_service.create_category(self._gw, name=name),
            success="Category created",
            failure="Failed to create category",
        )
        return True

    async def remove(self, category_id: str) -> bool:
        await self._run(
            "remove",
            lambda: category_service.delete_category(self._gw, category_id=category_id),
            success="Category deleted",
            failure="Failed to delete category",
        )
        return True
