from enum import StrEnum
from pydantic import BaseModel, ConfigDict


class RowModel(BaseModel):
    # backend rows may carry columns this client does not render
    model_config = ConfigDict(extra="ignore")


class MemberRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"
