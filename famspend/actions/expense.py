from __future__ import annotations

from typing import Any, Callable

from ..backend.ports import Gateway
from ..core.errors import FamspendError
from ..services import expense_service
from .base import Dispatcher
from .notify import Notifier


class ExpenseActions(Dispatcher):
    def __init__(self, gateway: Gateway, notifier: Notifier, on_success: Callable[[], Any] | None = None) -> None:
        super().__init__(notifier, on_success)
        self._gw = gateway
        self.error: Exception | None = None

    async def delete_expense(self, expense_id: str) -> None:
        self.error = None
        try:
            await self._run(
                "delete_expense",
                lambda: expense_service.delete_expense(self._gw, expense_id=expense_id),
                success="Expense deleted",
                failure="Failed to delete expense",
            )
        except FamspendError as e:
            self.error = e
            raise
