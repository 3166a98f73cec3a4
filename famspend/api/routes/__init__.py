from fastapi import APIRouter
from . import auth, family, categories, expenses

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(family.router, prefix="/family", tags=["Family"])
router.include_router(categories.router, prefix="/categories", tags=["Categories"])
router.include_router(expenses.router, prefix="/expenses", tags=["Expenses"])
