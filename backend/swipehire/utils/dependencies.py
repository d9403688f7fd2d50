from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .error_handlers import get_error_message
from .jwt import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> dict:
    """Claims of the bearer token: `sub` (user id as str) and `role`."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail=get_error_message("unauthorized"))

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub") or not payload.get("role"):
        raise HTTPException(status_code=401, detail=get_error_message("session_expired"))
    return payload
