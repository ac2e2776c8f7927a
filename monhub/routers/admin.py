from fastapi import APIRouter, HTTPException, Query
from starlette import status

from monhub.dependencies import AdminUser, api_dependency
from monhub.schemas.collaboration import AdminCloseRequest, AdminCollaborationUpdate
from monhub.schemas.common import MutationResult
from monhub.schemas.user import AdminUserUpdate
from monhub.services.admin_api import AdminApi
from monhub.services.admin_tables import (
    get_collaboration_table_columns,
    get_property_table_columns,
    get_user_table_columns,
    render_table,
    user_profile_view,
)
from monhub.services.chat_api import ChatApi
from monhub.services.chat_view import load_admin_conversation
from monhub.services.collaboration_api import CollaborationApi

router = APIRouter(prefix="/admin", tags=["admin"])


def _checked(result: MutationResult) -> MutationResult:
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=result.toast.message
        )
    return result


@router.get("/stats")
def get_stats(current_user: AdminUser, client: api_dependency) -> dict:
    return AdminApi(client).get_stats()


# Users


@router.get("/users")
def users_table(current_user: AdminUser, client: api_dependency) -> dict:
    return render_table(get_user_table_columns(), AdminApi(client).get_users())


@router.get("/users/{user_id}")
def user_profile(user_id: str, current_user: AdminUser, client: api_dependency) -> dict:
    return user_profile_view(AdminApi(client).get_user_profile(user_id))


@router.put("/users/{user_id}")
def update_user(
    user_id: str,
    body: AdminUserUpdate,
    current_user: AdminUser,
    client: api_dependency,
) -> dict:
    return user_profile_view(AdminApi(client).update_user(user_id, body))


# Listings


@router.get("/properties")
def properties_table(current_user: AdminUser, client: api_dependency) -> dict:
    return render_table(get_property_table_columns(), AdminApi(client).get_properties())


# Collaborations


@router.get("/collaborations")
def collaborations_table(current_user: AdminUser, client: api_dependency) -> dict:
    rows = CollaborationApi(client).get_all_collaborations_admin()
    return render_table(get_collaboration_table_columns(), rows)


@router.put("/collaborations/{collaboration_id}")
def update_collaboration(
    collaboration_id: str,
    body: AdminCollaborationUpdate,
    current_user: AdminUser,
    client: api_dependency,
) -> MutationResult:
    return _checked(
        CollaborationApi(client).admin_update_collaboration(collaboration_id, body)
    )


@router.post("/collaborations/{collaboration_id}/close")
def close_collaboration(
    collaboration_id: str,
    body: AdminCloseRequest,
    current_user: AdminUser,
    client: api_dependency,
) -> MutationResult:
    return _checked(
        CollaborationApi(client).admin_close_collaboration(collaboration_id, body.action)
    )


@router.post("/collaborations/{collaboration_id}/force-complete")
def force_complete_collaboration(
    collaboration_id: str, current_user: AdminUser, client: api_dependency
) -> MutationResult:
    return _checked(CollaborationApi(client).admin_force_complete(collaboration_id))


@router.delete("/collaborations/{collaboration_id}")
def delete_collaboration(
    collaboration_id: str, current_user: AdminUser, client: api_dependency
) -> MutationResult:
    return _checked(CollaborationApi(client).admin_delete_collaboration(collaboration_id))


@router.get("/chat")
def collaboration_chat(
    current_user: AdminUser,
    client: api_dependency,
    collaboration_id: str = Query(..., alias="collaborationId"),
) -> dict:
    return load_admin_conversation(ChatApi(client), collaboration_id)
