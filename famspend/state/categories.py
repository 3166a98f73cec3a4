from __future__ import annotations

import logging

from pydantic import ValidationError

from ..actions.notify import Notifier
from ..backend.ports import Gateway
from ..core.errors import FamspendError
from ..schemas.category import Category
from ..services.category_service import get_categories
from .base import ReadModel

logger = logging.getLogger(__name__)


class CategoriesState(ReadModel):
    def __init__(self, gateway: Gateway, notifier: Notifier) -> None:
        super().__init__()
        self._gw = gateway
        self._notifier = notifier
        self.categories: list[Category] = []
        self.loading = True
        self.error: Exception | None = None

    async def _on_mount(self) -> None:
        await self.refetch()

    async def refetch(self) -> None:
        token = self.token
        self._commit(token, loading=True)
        try:
            categories = await get_categories(self._gw)
        except (FamspendError, ValidationError) as e:
            logger.error(f"Failed to load categories: {e}")
            if self._commit(token, error=e, loading=False):
                self._notifier.error("Failed to load categories")
            return
        self._commit(token, categories=categories, error=None, loading=False)
