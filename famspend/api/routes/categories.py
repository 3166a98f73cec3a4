from fastapi import APIRouter, Depends
from ...actions.category import CategoryActions
from ...actions.notify import Notifier
from ...backend.auth import AuthSession
from ...core.errors import FamspendError
from ...schemas.category import CategoryCreate
from ...state.categories import CategoriesState
from ..deps import get_auth_session, get_notifier, http_error
from ..pages import CategoriesPageOut, categories_page, mounted

router = APIRouter()


@router.get("", response_model=CategoriesPageOut)
async def list_categories(auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with mounted(CategoriesState(auth, notifier)) as state:
        return categories_page(state, notifier.drain())

@router.post("", response_model=CategoriesPageOut)
async def create(payload: CategoryCreate, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with mounted(CategoriesState(auth, notifier)) as state:
        actions = CategoryActions(auth, notifier, on_success=state.refetch)
        try:
            await actions.create(payload.category_name)
        except FamspendError as e:
            raise http_error(e)
        return categories_page(state, notifier.drain())

@router.delete("/{category_id}", response_model=CategoriesPageOut)
async def remove(category_id: str, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with mounted(CategoriesState(auth, notifier)) as state:
        actions = CategoryActions(auth, notifier, on_success=state.refetch)
        try:
            await actions.remove(category_id)
        except FamspendError as e:
            raise http_error(e)
        return categories_page(state, notifier.drain())
