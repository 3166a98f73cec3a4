from typing import Any, Optional
from pydantic import BaseModel
from .common import RowModel, MemberRole


class MemberProfile(RowModel):
    id: str
    username: str
    avatar_url: Optional[str] = None


class FamilyMember(RowModel):
    user_id: str
    role: MemberRole
    joined_at: str
    profile: MemberProfile

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "FamilyMember":
        return cls(
            user_id=row["user_id"],
            role=row["role"],
            joined_at=row["joined_at"],
            profile=MemberProfile(id=row["user_id"], username=row.get("username") or "", avatar_url=row.get("avatar_url")),
        )


class MemberRoleIn(BaseModel):
    role: MemberRole
