"""Client side of the collaboration lifecycle.

Status transitions are validated by the backend. This module only decides,
for a user action on the current server copy of a collaboration, whether to
call a mutation endpoint, to ask the UI for more input first (contract,
completion reason, confirmation), or to refuse locally. After any successful
mutation the collaboration is refetched and the page re-renders from it.

    pending --respond--> accepted | rejected
    accepted --both parties sign the contract--> active
    active --complete(reason)--> completed
    pending | accepted | active --cancel--> cancelled

Progress steps advance independently, and only while the collaboration is
active.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from monhub.constants import (
    APPORTEUR_MAX_COMMISSION,
    COLLABORATION_ERRORS,
    COLLABORATION_TOAST_MESSAGES,
    USER_TYPE_APPORTEUR,
)
from monhub.schemas.collaboration import (
    Collaboration,
    CollaborationStatus,
    CompensationType,
    ProgressUpdateRequest,
    ProposalForm,
    ProposeCollaborationRequest,
)
from monhub.schemas.common import MutationResult, Toast
from monhub.services.api_client import ApiError
from monhub.services.collaboration_api import CollaborationApi

logger = logging.getLogger(__name__)


class WorkflowAction(str, Enum):
    UPDATED = "updated"
    OPEN_CONTRACT_MODAL = "open_contract_modal"
    OPEN_COMPLETION_REASON_MODAL = "open_completion_reason_modal"
    CONFIRM = "confirm"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass
class WorkflowOutcome:
    action: WorkflowAction
    collaboration: Collaboration
    toast: Optional[Toast] = None
    error: Optional[str] = None
    pending_action: Optional[CollaborationStatus] = None


class ProposalError(ValueError):
    pass


class CollaborationWorkflow:
    def __init__(self, api: CollaborationApi, collaboration: Collaboration, user_id: str):
        self.api = api
        self.collaboration = collaboration
        self.user_id = user_id

    # ==================== ROLES ====================

    @property
    def is_owner(self) -> bool:
        return bool(self.user_id) and self.user_id == self.collaboration.owner_id

    @property
    def is_collaborator(self) -> bool:
        return bool(self.user_id) and self.user_id == self.collaboration.collaborator_user_id

    @property
    def can_update(self) -> bool:
        return self.is_owner or self.is_collaborator

    @property
    def is_active(self) -> bool:
        return self.collaboration.status == CollaborationStatus.ACTIVE

    @property
    def status(self) -> CollaborationStatus:
        return self.collaboration.status

    def peer_id(self) -> Optional[str]:
        """The other party of the collaboration, for the chat side panel."""
        owner = self.collaboration.owner_id
        collaborator = self.collaboration.collaborator_user_id
        if not self.user_id or not owner or not collaborator:
            return None
        return collaborator if self.user_id == owner else owner

    # ==================== HELPERS ====================

    def refetch(self) -> Collaboration:
        self.collaboration = self.api.get_collaboration_by_id(self.collaboration.id)
        return self.collaboration

    def _outcome(self, action: WorkflowAction, **kwargs) -> WorkflowOutcome:
        return WorkflowOutcome(action=action, collaboration=self.collaboration, **kwargs)

    def _after_mutation(
        self, result: MutationResult, toast: Optional[Toast] = None
    ) -> WorkflowOutcome:
        if not result.success:
            return self._outcome(WorkflowAction.FAILED, toast=result.toast)
        self.refetch()
        return self._outcome(WorkflowAction.UPDATED, toast=toast or result.toast)

    def _blocked(self) -> WorkflowOutcome:
        logger.info(
            f"Blocked update on collaboration {self.collaboration.id} "
            f"with status {self.status.value}"
        )
        return self._outcome(
            WorkflowAction.BLOCKED, error=COLLABORATION_ERRORS["NOT_ACTIVE"]
        )

    # ==================== OVERALL STATUS ====================

    def handle_overall_status_update(self, target: CollaborationStatus) -> WorkflowOutcome:
        try:
            if target in (CollaborationStatus.ACCEPTED, CollaborationStatus.REJECTED):
                result = self.api.respond_to_collaboration(
                    self.collaboration.id, target.value
                )
                return self._after_mutation(result)

            if target == CollaborationStatus.COMPLETED:
                return self._outcome(WorkflowAction.OPEN_COMPLETION_REASON_MODAL)

            if target == CollaborationStatus.CANCELLED:
                return self._outcome(WorkflowAction.CONFIRM, pending_action=target)

            if target == CollaborationStatus.ACTIVE:
                if self.status == CollaborationStatus.ACCEPTED:
                    # Activation goes through contract signature
                    return self._outcome(WorkflowAction.OPEN_CONTRACT_MODAL)
                self.refetch()
                return self._outcome(WorkflowAction.UPDATED)

            result = self.api.add_collaboration_note(
                self.collaboration.id, f"Statut mis à jour: {target.value}"
            )
            return self._after_mutation(result)
        except ApiError as exc:
            logger.error(f"Status update failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED, error=COLLABORATION_ERRORS["STATUS_UPDATE_FAILED"]
            )

    def confirm_action(self, pending_action: CollaborationStatus) -> WorkflowOutcome:
        if pending_action == CollaborationStatus.CANCELLED:
            result = self.api.cancel_collaboration(self.collaboration.id)
        else:
            result = self.api.complete_collaboration(self.collaboration.id)

        if not result.success:
            return self._outcome(
                WorkflowAction.FAILED,
                toast=Toast(
                    type="error",
                    message=COLLABORATION_TOAST_MESSAGES["STATUS_UPDATE_ERROR"],
                ),
                pending_action=pending_action,
            )

        toast = result.toast
        if pending_action == CollaborationStatus.COMPLETED:
            toast = Toast(
                type="success", message=COLLABORATION_TOAST_MESSAGES["COMPLETE_SUCCESS"]
            )
        try:
            self.refetch()
        except ApiError as exc:
            logger.error(f"Refetch failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED,
                toast=toast,
                error=COLLABORATION_ERRORS["LOAD_FAILED"],
            )
        return self._outcome(WorkflowAction.UPDATED, toast=toast)

    def submit_completion_reason(self, reason: str) -> WorkflowOutcome:
        result = self.api.complete_collaboration(self.collaboration.id, reason)
        if not result.success:
            return self._outcome(
                WorkflowAction.FAILED,
                toast=Toast(
                    type="error",
                    message=COLLABORATION_TOAST_MESSAGES["STATUS_UPDATE_ERROR"],
                ),
            )
        try:
            self.refetch()
        except ApiError as exc:
            logger.error(f"Refetch failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED, error=COLLABORATION_ERRORS["LOAD_FAILED"]
            )
        return self._outcome(
            WorkflowAction.UPDATED,
            toast=Toast(
                type="success", message=COLLABORATION_TOAST_MESSAGES["COMPLETE_SUCCESS"]
            ),
        )

    def sign_contract(self) -> WorkflowOutcome:
        """Sign from the contract modal; the backend activates once both signed."""
        if self.status != CollaborationStatus.ACCEPTED:
            return self._outcome(
                WorkflowAction.BLOCKED,
                error=COLLABORATION_ERRORS["STATUS_UPDATE_FAILED"],
            )
        try:
            return self._after_mutation(
                self.api.sign_collaboration(self.collaboration.id)
            )
        except ApiError as exc:
            logger.error(f"Refetch after signature failed: {exc}")
            return self._outcome(
                WorkflowAction.FAILED, error=COLLABORATION_ERRORS["LOAD_FAILED"]
            )

    # ==================== PROGRESS ====================

    def handle_progress_update(self, step: str, notes: Optional[str] = None) -> WorkflowOutcome:
        if not self.is_active:
            return self._blocked()
        content = f"Étape mise à jour: {step}"
        if notes:
            content += f" - {notes}"
        try:
            return self._after_mutation(
                self.api.add_collaboration_note(self.collaboration.id, content)
            )
        except ApiError as exc:
            logger.error(f"Progress update failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED,
                error=COLLABORATION_ERRORS["PROGRESS_UPDATE_FAILED"],
            )

    def handle_progress_status_update(self, update: ProgressUpdateRequest) -> WorkflowOutcome:
        if not self.is_active:
            return self._blocked()
        try:
            return self._after_mutation(
                self.api.update_collaboration_progress(self.collaboration.id, update)
            )
        except ApiError as exc:
            logger.error(f"Progress status failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED, error=COLLABORATION_ERRORS["STATUS_UPDATE_FAILED"]
            )

    def handle_add_activity(self, content: str) -> WorkflowOutcome:
        if not self.is_active:
            return self._blocked()
        try:
            return self._after_mutation(
                self.api.add_collaboration_note(self.collaboration.id, content)
            )
        except ApiError as exc:
            logger.error(f"Activity failed for {self.collaboration.id}: {exc}")
            return self._outcome(
                WorkflowAction.FAILED,
                error=COLLABORATION_ERRORS["PROGRESS_UPDATE_FAILED"],
            )

    def default_validated_by(self) -> Optional[str]:
        if self.is_owner:
            return "owner"
        if self.is_collaborator:
            return "collaborator"
        return None


def _parse_number(value: str) -> Optional[float]:
    try:
        return float(str(value).replace(",", "."))
    except (TypeError, ValueError):
        return None


def validate_proposal(form: ProposalForm) -> ProposeCollaborationRequest:
    """Turn the proposal form into the API payload.

    Apporteur posts accept a percentage below the cap or a fixed/gift
    compensation with an amount; agent posts always carry a percentage.
    """
    if not form.agree_to_terms:
        raise ProposalError("Veuillez accepter les conditions de collaboration")

    is_apporteur_post = form.owner_user_type == USER_TYPE_APPORTEUR
    percentage = _parse_number(form.commission_percentage)
    amount = _parse_number(form.compensation_amount)

    if is_apporteur_post:
        if form.compensation_type == CompensationType.PERCENTAGE:
            if percentage is not None and percentage >= APPORTEUR_MAX_COMMISSION:
                raise ProposalError(
                    "Le pourcentage de commission doit être inférieur à 50% "
                    "pour les posts d'apporteur"
                )
        elif not form.compensation_amount:
            raise ProposalError("Veuillez saisir un montant de compensation")

    uses_percentage = (
        not is_apporteur_post or form.compensation_type == CompensationType.PERCENTAGE
    )
    if uses_percentage and percentage is None:
        raise ProposalError("Veuillez saisir un pourcentage de commission valide")
    if not uses_percentage and amount is None:
        raise ProposalError("Veuillez saisir un montant de compensation valide")

    post_ids = (
        {"property_id": form.post_id}
        if form.post_type == "property"
        else {"search_ad_id": form.post_id}
    )
    return ProposeCollaborationRequest(
        **post_ids,
        message=form.message,
        commission_percentage=percentage if uses_percentage else 0,
        compensation_type=form.compensation_type if is_apporteur_post else None,
        compensation_amount=amount if not uses_percentage else None,
    )
