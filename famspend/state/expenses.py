from __future__ import annotations

import logging

from pydantic import ValidationError

from ..backend.ports import Gateway
from ..core.errors import FamspendError
from ..schemas.expense import ExpensesDashboard
from ..services.expense_service import get_expenses_dashboard
from .base import ReadModel

logger = logging.getLogger(__name__)


class ExpensesDashboardState(ReadModel):
    def __init__(self, gateway: Gateway) -> None:
        super().__init__()
        self._gw = gateway
        self.data: ExpensesDashboard | None = None
        self.loading = True
        self.error: Exception | None = None

    async def _on_mount(self) -> None:
        await self.refetch()

    async def refetch(self) -> None:
        token = self.token
        self._commit(token, loading=True)
        try:
            data = await get_expenses_dashboard(self._gw)
        except (FamspendError, ValidationError) as e:
            logger.error(f"Error fetching expenses dashboard: {e}")
            self._commit(token, error=e, loading=False)
            return
        self._commit(token, data=data, error=None, loading=False)
