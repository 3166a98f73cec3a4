from typing import Optional
from pydantic import field_validator
from .common import RowModel
from .family import Family


class RecentExpense(RowModel):
    id: str
    expense_title: str
    amount: float
    username: str
    created_at: Optional[str] = None


class PersonalExpense(RowModel):
    id: str
    user_id: str
    family_id: Optional[str] = None
    category_id: Optional[str] = None
    amount: float
    payment_method: Optional[str] = None
    note: Optional[str] = None
    created_at: str
    expense_title: str
    type: Optional[str] = None


class ExpensesDashboard(RowModel):
    family: Optional[Family] = None
    personal_total: float = 0
    family_total: float = 0
    recent_family_expenses: list[RecentExpense] = []
    personal_expenses: list[PersonalExpense] = []

    @field_validator("personal_total", "family_total", mode="before")
    @classmethod
    def _null_total(cls, v):
        return 0 if v is None else v

    @field_validator("recent_family_expenses", "personal_expenses", mode="before")
    @classmethod
    def _null_list(cls, v):
        return [] if v is None else v
