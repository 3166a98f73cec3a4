from fastapi import APIRouter, Depends
from ...actions.expense import ExpenseActions
from ...actions.notify import Notifier
from ...backend.auth import AuthSession
from ...core.errors import FamspendError
from ...state.expenses import ExpensesDashboardState
from ..deps import get_auth_session, get_notifier, http_error
from ..pages import ExpensesPageOut, expenses_page, mounted

router = APIRouter()


@router.get("", response_model=ExpensesPageOut)
async def dashboard(auth: AuthSession = Depends(get_auth_session)):
    async with mounted(ExpensesDashboardState(auth)) as state:
        return expenses_page(state)

@router.delete("/{expense_id}", response_model=ExpensesPageOut)
async def delete_expense(expense_id: str, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with mounted(ExpensesDashboardState(auth)) as state:
        actions = ExpenseActions(auth, notifier, on_success=state.refetch)
        try:
            await actions.delete_expense(expense_id)
        except FamspendError as e:
            raise http_error(e)
        return expenses_page(state, notifier.drain())
