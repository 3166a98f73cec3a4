from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from ..actions.notify import Notifier
from ..backend.auth import AuthSession
from ..backend.client import BackendClient
from ..core.errors import BackendError, FamspendError, NoFamilyError, NotAuthenticated, TransportError, ValidationFailure
bearer_scheme = HTTPBearer(auto_error=False)
def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend
def get_auth_session(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    backend: BackendClient = Depends(get_backend),
) -> AuthSession:
    # a missing token is a signed-out visitor, not an error
    return AuthSession(backend, access_token=creds.credentials if creds else None)
def get_notifier() -> Notifier:
    return Notifier()
def http_error(e: FamspendError) -> HTTPException:
    if isinstance(e, NotAuthenticated):
        return HTTPException(status.HTTP_401_UNAUTHORIZED, str(e) or "Not signed in")
    if isinstance(e, ValidationFailure):
        return HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e))
    if isinstance(e, NoFamilyError):
        return HTTPException(status.HTTP_409_CONFLICT, str(e))
    if isinstance(e, TransportError):
        return HTTPException(status.HTTP_502_BAD_GATEWAY, e.message)
    if isinstance(e, BackendError):
        return HTTPException(status.HTTP_400_BAD_REQUEST, e.message)
    return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
