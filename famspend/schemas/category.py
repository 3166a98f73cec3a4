from pydantic import BaseModel
from .common import RowModel


class Category(RowModel):
    id: str
    family_id: str
    name: str
    created_at: str


class CategoryCreate(BaseModel):
    category_name: str
