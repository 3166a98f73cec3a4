from typing import Any, Optional
from pydantic import model_validator
from .common import RowModel, MemberRole


class Identity(RowModel):
    id: str
    username: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_auth_user(cls, user: dict[str, Any]) -> "Identity":
        meta = user.get("user_metadata") or {}
        email = user.get("email")
        username = meta.get("username") or meta.get("full_name") or (email.split("@")[0] if email else "")
        return cls(id=user["id"], username=username, email=email, avatar_url=meta.get("avatar_url"))


class UserContext(RowModel):
    user_id: str
    username: str
    avatar_url: Optional[str] = None
    family_id: Optional[str] = None
    role: Optional[MemberRole] = None
    family_name: Optional[str] = None
    join_code: Optional[str] = None
    monthly_spending_limit: Optional[float] = None

    @model_validator(mode="after")
    def _role_follows_membership(self) -> "UserContext":
        if (self.role is None) != (self.family_id is None):
            raise ValueError("role must be set exactly when family_id is set")
        return self
