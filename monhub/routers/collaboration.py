from typing import List

from fastapi import APIRouter, HTTPException
from starlette import status

from monhub.constants import COLLABORATION_STATUS_LABELS
from monhub.dependencies import ProtectedUser, api_dependency
from monhub.schemas.collaboration import (
    CompletionRequest,
    ConfirmRequest,
    Contract,
    ContractUpdateRequest,
    NoteRequest,
    ProgressRequest,
    ProgressUpdateRequest,
    ProposalForm,
    StatusUpdateRequest,
)
from monhub.schemas.common import ActionResponse, MutationResult
from monhub.services.chat_api import ChatApi
from monhub.services.chat_view import unread_counts
from monhub.services.collaboration_api import CollaborationApi
from monhub.services.collaboration_view import build_collaboration_page
from monhub.services.collaboration_workflow import (
    CollaborationWorkflow,
    ProposalError,
    WorkflowOutcome,
    validate_proposal,
)
from monhub.services.property_service import PropertyService
from monhub.services.search_ad_api import SearchAdApi
from monhub.utils.date_utils import format_date
from monhub.utils.formatting import participant_name

router = APIRouter(prefix="/collaboration", tags=["collaboration"])


def _workflow(client, collaboration_id: str, user_id: str) -> CollaborationWorkflow:
    api = CollaborationApi(client)
    return CollaborationWorkflow(api, api.get_collaboration_by_id(collaboration_id), user_id)


def _party_workflow(client, collaboration_id: str, user_id: str) -> CollaborationWorkflow:
    """Workflow for a mutation; only the owner and the collaborator may act."""
    workflow = _workflow(client, collaboration_id, user_id)
    if not workflow.can_update:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Accès refusé",
        )
    return workflow


def _respond(outcome: WorkflowOutcome) -> ActionResponse:
    data = {"collaboration": outcome.collaboration.model_dump(by_alias=True, mode="json")}
    if outcome.pending_action is not None:
        data["pending_action"] = outcome.pending_action.value
    return ActionResponse(
        action=outcome.action.value,
        toast=outcome.toast,
        error=outcome.error,
        data=data,
    )


@router.get("/")
def list_collaborations(current_user: ProtectedUser, client: api_dependency) -> List[dict]:
    rows = CollaborationApi(client).get_user_collaborations()
    return [
        {
            "id": c.id,
            "post_type": c.post_type.value,
            "status": c.status.value,
            "status_label": COLLABORATION_STATUS_LABELS[c.status.value],
            "commission": c.proposed_commission,
            "is_owner": c.owner_id == current_user.id,
            "partner": participant_name(
                c.collaborator_id if c.owner_id == current_user.id else c.post_owner_id
            ),
            "created_at": format_date(c.created_at),
        }
        for c in rows
    ]


@router.post("/", status_code=status.HTTP_201_CREATED)
def propose_collaboration(
    form: ProposalForm, current_user: ProtectedUser, client: api_dependency
) -> MutationResult:
    try:
        payload = validate_proposal(form)
    except ProposalError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    result = CollaborationApi(client).propose_collaboration(payload)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=result.toast.message
        )
    return result


@router.get("/{collaboration_id}")
def collaboration_page(
    collaboration_id: str, current_user: ProtectedUser, client: api_dependency
) -> dict:
    workflow = _workflow(client, collaboration_id, current_user.id)
    chat_api = ChatApi(client)
    return build_collaboration_page(
        workflow,
        chat_api,
        PropertyService(client),
        SearchAdApi(client),
        unread_counts=unread_counts(chat_api),
    )


@router.post("/{collaboration_id}/status")
def update_overall_status(
    collaboration_id: str,
    body: StatusUpdateRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.handle_overall_status_update(body.status))


@router.post("/{collaboration_id}/confirm")
def confirm_pending_action(
    collaboration_id: str,
    body: ConfirmRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.confirm_action(body.pending_action))


@router.post("/{collaboration_id}/complete")
def complete_with_reason(
    collaboration_id: str,
    body: CompletionRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.submit_completion_reason(body.reason))


@router.post("/{collaboration_id}/progress")
def update_progress(
    collaboration_id: str,
    body: ProgressRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.handle_progress_update(body.step, body.notes))


@router.put("/{collaboration_id}/progress-status")
def update_progress_status(
    collaboration_id: str,
    body: ProgressUpdateRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.handle_progress_status_update(body))


@router.post("/{collaboration_id}/activities")
def add_activity(
    collaboration_id: str,
    body: NoteRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.handle_add_activity(body.content))


@router.post("/{collaboration_id}/contract/sign")
def sign_contract(
    collaboration_id: str, current_user: ProtectedUser, client: api_dependency
) -> ActionResponse:
    workflow = _party_workflow(client, collaboration_id, current_user.id)
    return _respond(workflow.sign_contract())


@router.get("/{collaboration_id}/contract")
def get_contract(
    collaboration_id: str, current_user: ProtectedUser, client: api_dependency
) -> Contract:
    _party_workflow(client, collaboration_id, current_user.id)
    return CollaborationApi(client).get_contract(collaboration_id)


@router.put("/{collaboration_id}/contract")
def update_contract(
    collaboration_id: str,
    body: ContractUpdateRequest,
    current_user: ProtectedUser,
    client: api_dependency,
) -> MutationResult:
    _party_workflow(client, collaboration_id, current_user.id)
    result = CollaborationApi(client).update_contract(collaboration_id, body)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=result.toast.message
        )
    return result
