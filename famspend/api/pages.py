"""JSON page views built from mounted read models."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Literal, Optional

from pydantic import BaseModel

from ..backend.auth import AuthSession
from ..schemas.auth import Notification
from ..schemas.category import Category
from ..schemas.expense import ExpensesDashboard
from ..schemas.family import Family
from ..schemas.member import FamilyMember
from ..state.base import ReadModel
from ..state.categories import CategoriesState
from ..state.expenses import ExpensesDashboardState
from ..state.family import FamilyState
from ..state.session import SessionResolver
from ..utils.formatting import format_date, format_number, format_time


class MemberView(FamilyMember):
    can_manage: bool = False


class FamilyPageOut(BaseModel):
    status: Literal["signed_out", "no_family", "family"]
    current_user_id: Optional[str] = None
    family: Optional[Family] = None
    is_admin: bool = False
    members: list[MemberView] = []
    error: Optional[str] = None
    notifications: list[Notification] = []


class CategoriesPageOut(BaseModel):
    categories: list[Category] = []
    error: Optional[str] = None
    notifications: list[Notification] = []


class ExpenseRowView(BaseModel):
    id: str
    title: str
    amount: str
    username: Optional[str] = None
    date: str = ""
    time: str = ""


class ExpensesPageOut(BaseModel):
    dashboard: Optional[ExpensesDashboard] = None
    family_total: str = ""
    personal_total: str = ""
    recent: list[ExpenseRowView] = []
    personal: list[ExpenseRowView] = []
    error: Optional[str] = None
    notifications: list[Notification] = []


@asynccontextmanager
async def mounted(model: ReadModel) -> AsyncIterator[ReadModel]:
    await model.mount()
    try:
        yield model
    finally:
        model.unmount()


def open_family(auth: AuthSession):
    return mounted(FamilyState(SessionResolver(auth, auth), auth))


def family_page(state: FamilyState, notifications: list[Notification] | None = None) -> FamilyPageOut:
    session = state.session
    if not session.is_authenticated:
        return FamilyPageOut(status="signed_out", notifications=notifications or [])

    me = session.identity.id
    family = state.family
    if family is None:
        return FamilyPageOut(status="no_family", current_user_id=me, notifications=notifications or [])

    # the caller is never offered management actions on themself
    members = [
        MemberView(**m.model_dump(), can_manage=state.is_admin and m.user_id != me)
        for m in state.members
    ]
    return FamilyPageOut(
        status="family",
        current_user_id=me,
        family=family,
        is_admin=state.is_admin,
        members=members,
        error=str(state.error) if state.error else None,
        notifications=notifications or [],
    )


def categories_page(state: CategoriesState, notifications: list[Notification] | None = None) -> CategoriesPageOut:
    return CategoriesPageOut(
        categories=state.categories,
        error=str(state.error) if state.error else None,
        notifications=notifications or [],
    )


def expenses_page(state: ExpensesDashboardState, notifications: list[Notification] | None = None) -> ExpensesPageOut:
    data = state.data
    error = str(state.error) if state.error else None
    if data is None:
        return ExpensesPageOut(error=error, notifications=notifications or [])
    recent = [
        ExpenseRowView(
            id=e.id,
            title=e.expense_title,
            amount=format_number(e.amount),
            username=e.username,
            date=format_date(e.created_at),
            time=format_time(e.created_at),
        )
        for e in data.recent_family_expenses
    ]
    personal = [
        ExpenseRowView(
            id=e.id,
            title=e.expense_title,
            amount=format_number(e.amount),
            date=format_date(e.created_at),
            time=format_time(e.created_at),
        )
        for e in data.personal_expenses
    ]
    return ExpensesPageOut(
        dashboard=data,
        family_total=format_number(data.family_total),
        personal_total=format_number(data.personal_total),
        recent=recent,
        personal=personal,
        error=error,
        notifications=notifications or [],
    )
