from typing import Annotated, Optional
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from starlette import status
from monhub.config import settings
from monhub.constants import USER_TYPE_AGENT
from monhub.schemas.user import CurrentUser

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM

# Tokens are issued by the marketplace API; this app only reads them
oauth2_bearer = OAuth2PasswordBearer(tokenUrl="auth/login")


def decode_token(token: str) -> dict:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


async def get_current_user(token: Annotated[str, Depends(oauth2_bearer)]) -> CurrentUser:
    try:
        payload = decode_token(token)
        user_id = payload.get("id") or payload.get("userId") or payload.get("sub")
        if not user_id:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not authenticate user",
            )
        return CurrentUser(
            id=str(user_id),
            email=payload.get("email"),
            user_type=payload.get("userType"),
            profile_completed=bool(payload.get("profileCompleted", False)),
            is_paid=bool(payload.get("isPaid", False)),
            access_granted_by_admin=bool(payload.get("accessGrantedByAdmin", False)),
            token=token,
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not authenticate user",
        )


def can_access_protected_resources(user: CurrentUser) -> bool:
    """Completed profile, and for agents an active or admin-granted access."""
    if not user.profile_completed:
        return False
    if user.user_type != USER_TYPE_AGENT:
        return True
    return user.is_paid or user.access_granted_by_admin


optional_oauth2_bearer = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


async def get_optional_user(
    token: Annotated[Optional[str], Depends(optional_oauth2_bearer)],
) -> Optional[CurrentUser]:
    """Visitor identity on public pages; an invalid token counts as anonymous."""
    if not token:
        return None
    try:
        return await get_current_user(token)
    except HTTPException:
        return None
