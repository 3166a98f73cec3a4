import logging
from fastapi import APIRouter, Depends, HTTPException, status
from ...actions.family import FamilyActions
from ...actions.notify import Notifier
from ...backend.auth import AuthSession
from ...core.errors import FamspendError, NoFamilyError, NotAuthenticated
from ...schemas.family import FamilyCreate, FamilyDelete, FamilyJoin, FamilyUpdate
from ...schemas.member import MemberRoleIn
from ...state.family import FamilyState
from ..deps import get_auth_session, get_notifier, http_error
from ..pages import FamilyPageOut, family_page, open_family

logger = logging.getLogger(__name__)

router = APIRouter()


def _signed_in(state: FamilyState) -> str:
    if not state.session.is_authenticated:
        raise http_error(NotAuthenticated("Not signed in"))
    return state.session.identity.id

def _not_self(state: FamilyState, user_id: str) -> None:
    if user_id == _signed_in(state):
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, "You cannot manage your own membership")

async def _dispatch(auth: AuthSession, state: FamilyState, notifier: Notifier, call) -> FamilyPageOut:
    try:
        await call(FamilyActions(auth, state, notifier))
    except FamspendError as e:
        raise http_error(e)
    return family_page(state, notifier.drain())


@router.get("", response_model=FamilyPageOut)
async def get_family(auth: AuthSession = Depends(get_auth_session)):
    async with open_family(auth) as state:
        return family_page(state)

@router.post("", response_model=FamilyPageOut)
async def create(payload: FamilyCreate, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        return await _dispatch(auth, state, notifier, lambda a: a.create_family(payload.name, payload.monthly_spending_limit))

@router.post("/join", response_model=FamilyPageOut)
async def join(payload: FamilyJoin, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        return await _dispatch(auth, state, notifier, lambda a: a.join_family(payload.join_code))

@router.patch("", response_model=FamilyPageOut)
async def update(payload: FamilyUpdate, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        return await _dispatch(auth, state, notifier, lambda a: a.update_family(payload.name, payload.monthly_spending_limit))

@router.delete("", response_model=FamilyPageOut)
async def delete(payload: FamilyDelete, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        family = state.family
        if family is None:
            raise http_error(NoFamilyError("No family to delete"))
        if payload.confirmation != family.name:
            raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, "Confirmation does not match the family name")
        logger.info(f"Deleting family {family.id}")
        return await _dispatch(auth, state, notifier, lambda a: a.delete_family())

@router.post("/leave", response_model=FamilyPageOut)
async def leave(auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        return await _dispatch(auth, state, notifier, lambda a: a.leave_family())

@router.post("/join-code", response_model=FamilyPageOut)
async def regenerate_code(auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _signed_in(state)
        return await _dispatch(auth, state, notifier, lambda a: a.regenerate_join_code())

@router.delete("/members/{user_id}", response_model=FamilyPageOut)
async def kick(user_id: str, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _not_self(state, user_id)
        return await _dispatch(auth, state, notifier, lambda a: a.kick_member(user_id))

@router.put("/members/{user_id}/role", response_model=FamilyPageOut)
async def change_role(user_id: str, payload: MemberRoleIn, auth: AuthSession = Depends(get_auth_session), notifier: Notifier = Depends(get_notifier)):
    async with open_family(auth) as state:
        _not_self(state, user_id)
        return await _dispatch(auth, state, notifier, lambda a: a.change_member_role(user_id, payload.role))
