from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException
from starlette import status

from monhub.constants import USER_TYPE_ADMIN
from monhub.schemas.user import CurrentUser as CurrentUserModel
from monhub.services.api_client import ApiClient
from monhub.services.auth_service import (
    can_access_protected_resources,
    get_current_user,
    get_optional_user,
)


CurrentUser = Annotated[CurrentUserModel, Depends(get_current_user)]
OptionalUser = Annotated[Optional[CurrentUserModel], Depends(get_optional_user)]


def get_api_client(current_user: CurrentUser):
    client = ApiClient(token=current_user.token)
    try:
        yield client
    finally:
        client.close()


def get_public_api_client(current_user: OptionalUser):
    client = ApiClient(token=current_user.token if current_user else None)
    try:
        yield client
    finally:
        client.close()


api_dependency = Annotated[ApiClient, Depends(get_api_client)]
public_api_dependency = Annotated[ApiClient, Depends(get_public_api_client)]


def require_user_type(*allowed: str) -> Callable[..., CurrentUserModel]:
    def dependency(current_user: CurrentUser) -> CurrentUserModel:
        if current_user.user_type not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Accès refusé",
            )
        return current_user

    return dependency


require_admin = require_user_type(USER_TYPE_ADMIN)
AdminUser = Annotated[CurrentUserModel, Depends(require_admin)]


def require_protected_access(current_user: CurrentUser) -> CurrentUserModel:
    if not can_access_protected_resources(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profil incomplet ou abonnement requis",
        )
    return current_user


ProtectedUser = Annotated[CurrentUserModel, Depends(require_protected_access)]
