from ..backend.ports import Gateway
from ..schemas.expense import ExpensesDashboard


async def get_expenses_dashboard(gw: Gateway) -> ExpensesDashboard:
    data = await gw.call("get_expenses_dashboard_context")
    return ExpensesDashboard.model_validate(data or {})

async def delete_expense(gw: Gateway, *, expense_id: str) -> None:
    await gw.call("delete_my_expense", {"expense_id": expense_id})
