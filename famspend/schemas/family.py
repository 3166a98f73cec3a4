from typing import Optional
from pydantic import BaseModel
from .common import RowModel
from .context import UserContext


class Family(RowModel):
    id: str
    name: str
    join_code: str
    monthly_spending_limit: Optional[float] = None
    created_at: Optional[str] = None

    @classmethod
    def from_context(cls, context: UserContext | None) -> Optional["Family"]:
        if context is None or context.family_id is None:
            return None
        return cls(
            id=context.family_id,
            name=context.family_name or "",
            join_code=context.join_code or "",
            monthly_spending_limit=context.monthly_spending_limit,
        )


class FamilyCreate(BaseModel):
    name: str
    monthly_spending_limit: Optional[float] = None


class FamilyUpdate(BaseModel):
    name: Optional[str] = None
    monthly_spending_limit: Optional[float] = None


class FamilyJoin(BaseModel):
    join_code: str


class FamilyDelete(BaseModel):
    confirmation: str
