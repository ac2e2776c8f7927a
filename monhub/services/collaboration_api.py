import logging
from typing import Callable, List, Optional

from monhub.constants import COLLABORATION_TOAST_MESSAGES as TOASTS
from monhub.schemas.collaboration import (
    AdminCollaborationUpdate,
    Collaboration,
    Contract,
    ContractUpdateRequest,
    ProgressUpdateRequest,
    ProposeCollaborationRequest,
)
from monhub.schemas.common import MutationResult, Toast
from monhub.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def _collaborations(body) -> List[Collaboration]:
    rows = body.get("collaborations", []) if isinstance(body, dict) else body
    return [Collaboration.model_validate(row) for row in rows or []]


class CollaborationApi:
    """Collaboration reads and mutations.

    Reads raise ApiError. Mutations never raise on an API failure: they log
    it and return a MutationResult carrying an error toast, so callers only
    branch on `success`.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def _mutate(
        self,
        name: str,
        call: Callable[[], dict],
        success_message: Optional[str],
        error_message: str,
    ) -> MutationResult:
        try:
            body = call() or {}
        except ApiError as exc:
            logger.error(f"[CollaborationApi] {name} failed: {exc}")
            return MutationResult(
                success=False,
                message=exc.message,
                toast=Toast(type="error", message=exc.message or error_message),
            )
        collaboration = body.get("collaboration") if isinstance(body, dict) else None
        return MutationResult(
            success=True,
            message=body.get("message") if isinstance(body, dict) else None,
            data=Collaboration.model_validate(collaboration) if collaboration else None,
            toast=Toast(type="success", message=success_message)
            if success_message
            else None,
        )

    # ==================== READS ====================

    def get_user_collaborations(self) -> List[Collaboration]:
        return _collaborations(self.client.get("/collaboration"))

    def get_collaboration_by_id(self, collaboration_id: str) -> Collaboration:
        body = self.client.get(f"/collaboration/{collaboration_id}")
        return Collaboration.model_validate(body.get("collaboration", body))

    def get_property_collaborations(self, property_id: str) -> List[Collaboration]:
        return _collaborations(self.client.get(f"/collaboration/property/{property_id}"))

    def get_search_ad_collaborations(self, search_ad_id: str) -> List[Collaboration]:
        return _collaborations(
            self.client.get(f"/collaboration/search-ad/{search_ad_id}")
        )

    def get_contract(self, collaboration_id: str) -> Contract:
        body = self.client.get(f"/contract/{collaboration_id}")
        return Contract.model_validate(body.get("contract", body))

    # ==================== MUTATIONS ====================

    def propose_collaboration(self, payload: ProposeCollaborationRequest) -> MutationResult:
        return self._mutate(
            "propose",
            lambda: self.client.post(
                "/collaboration",
                json=payload.model_dump(by_alias=True, exclude_none=True, mode="json"),
            ),
            TOASTS["PROPOSE_SUCCESS"],
            TOASTS["PROPOSE_ERROR"],
        )

    def respond_to_collaboration(self, collaboration_id: str, response: str) -> MutationResult:
        success = TOASTS["ACCEPT_SUCCESS"] if response == "accepted" else TOASTS["REJECT_SUCCESS"]
        return self._mutate(
            "respond",
            lambda: self.client.post(
                f"/collaboration/{collaboration_id}/respond", json={"response": response}
            ),
            success,
            TOASTS["RESPOND_ERROR"],
        )

    def add_collaboration_note(self, collaboration_id: str, content: str) -> MutationResult:
        return self._mutate(
            "add_note",
            lambda: self.client.post(
                f"/collaboration/{collaboration_id}/notes", json={"content": content}
            ),
            None,
            TOASTS["NOTE_ERROR"],
        )

    def cancel_collaboration(self, collaboration_id: str) -> MutationResult:
        return self._mutate(
            "cancel",
            lambda: self.client.delete(f"/collaboration/{collaboration_id}/cancel"),
            TOASTS["CANCEL_SUCCESS"],
            TOASTS["CANCEL_ERROR"],
        )

    def complete_collaboration(
        self, collaboration_id: str, reason: Optional[str] = None
    ) -> MutationResult:
        payload = {"completionReason": reason} if reason else {}
        return self._mutate(
            "complete",
            lambda: self.client.post(
                f"/collaboration/{collaboration_id}/complete", json=payload
            ),
            None,
            TOASTS["COMPLETE_ERROR"],
        )

    def update_collaboration_progress(
        self, collaboration_id: str, update: ProgressUpdateRequest
    ) -> MutationResult:
        return self._mutate(
            "update_progress",
            lambda: self.client.put(
                f"/collaboration/{collaboration_id}/progress-status",
                json=update.model_dump(by_alias=True, exclude_none=True),
            ),
            TOASTS["PROGRESS_SUCCESS"],
            TOASTS["PROGRESS_ERROR"],
        )

    def sign_collaboration(self, collaboration_id: str) -> MutationResult:
        return self._mutate(
            "sign",
            lambda: self.client.post(f"/contract/{collaboration_id}/sign"),
            TOASTS["SIGN_SUCCESS"],
            TOASTS["SIGN_ERROR"],
        )

    def update_contract(
        self, collaboration_id: str, update: ContractUpdateRequest
    ) -> MutationResult:
        return self._mutate(
            "update_contract",
            lambda: self.client.put(
                f"/contract/{collaboration_id}",
                json=update.model_dump(by_alias=True, exclude_none=True),
            ),
            TOASTS["CONTRACT_UPDATE_SUCCESS"],
            TOASTS["CONTRACT_UPDATE_ERROR"],
        )

    # ==================== ADMIN ====================

    def get_all_collaborations_admin(self) -> List[Collaboration]:
        return _collaborations(self.client.get("/collaboration/admin/all"))

    def admin_update_collaboration(
        self, collaboration_id: str, update: AdminCollaborationUpdate
    ) -> MutationResult:
        return self._mutate(
            "admin_update",
            lambda: self.client.put(
                f"/collaboration/admin/{collaboration_id}",
                json=update.model_dump(by_alias=True, exclude_none=True, mode="json"),
            ),
            TOASTS["ADMIN_UPDATE_SUCCESS"],
            TOASTS["ADMIN_UPDATE_ERROR"],
        )

    def admin_close_collaboration(self, collaboration_id: str, action: str) -> MutationResult:
        return self._mutate(
            "admin_close",
            lambda: self.client.post(
                f"/collaboration/admin/{collaboration_id}/close", json={"action": action}
            ),
            TOASTS["ADMIN_UPDATE_SUCCESS"],
            TOASTS["ADMIN_UPDATE_ERROR"],
        )

    def admin_force_complete(self, collaboration_id: str) -> MutationResult:
        return self._mutate(
            "admin_force_complete",
            lambda: self.client.post(
                f"/collaboration/admin/{collaboration_id}/force-complete"
            ),
            TOASTS["COMPLETE_SUCCESS"],
            TOASTS["ADMIN_UPDATE_ERROR"],
        )

    def admin_delete_collaboration(self, collaboration_id: str) -> MutationResult:
        return self._mutate(
            "admin_delete",
            lambda: self.client.delete(f"/collaboration/admin/{collaboration_id}"),
            TOASTS["ADMIN_DELETE_SUCCESS"],
            TOASTS["ADMIN_DELETE_ERROR"],
        )
