import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from ...backend.auth import AuthSession
from ...backend.client import BackendClient
from ...core.errors import BackendError, NotAuthenticated, TransportError
from ...schemas.auth import LoginIn, RefreshIn, TokenPair
from ..deps import get_auth_session, get_backend, http_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenPair)
async def login(payload: LoginIn, backend: BackendClient = Depends(get_backend)):
    session = AuthSession(backend)
    try:
        return await session.sign_in_with_password(payload.email, payload.password)
    except TransportError as e:
        raise http_error(e)
    except BackendError as e:
        logger.warning(f"Login failed for {payload.email}: {e.message}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect credentials")

@router.post("/refresh", response_model=TokenPair)
async def refresh(payload: RefreshIn, backend: BackendClient = Depends(get_backend)):
    session = AuthSession(backend, refresh_token=payload.refresh_token)
    try:
        return await session.refresh_session()
    except TransportError as e:
        raise http_error(e)
    except (BackendError, NotAuthenticated):
        raise HTTPException(401, "Invalid or expired refresh")

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(auth: AuthSession = Depends(get_auth_session)):
    if not auth.access_token:
        raise http_error(NotAuthenticated("Not signed in"))
    try:
        await auth.sign_out()
    except BackendError as e:
        # tokens are already dropped locally; the server session may outlive them
        logger.warning(f"Sign-out was not acknowledged: {e.message}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
