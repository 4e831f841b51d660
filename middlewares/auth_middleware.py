from typing import Optional
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from helpers.token_helper import IdentityError, get_user_id

# auto_error off: the progress routes degrade instead of rejecting
security = HTTPBearer(auto_error=False)


def optional_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def auth_middleware(token: Optional[str] = Depends(optional_token)) -> dict:
    """
    Identify the caller from the bearer token's `id` claim. The signature is
    checked by the upstream backend on the forwarded call, not here.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No auth token found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = get_user_id(token)
    except IdentityError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"id": user_id, "token": token}
