"""
Approval Chain Engine

Builds the ordered approver sequence for a leave request, records each
approver's decision and derives the aggregate request status.

Routing is table driven: every leave type resolves to a ChainKind and every
ChainKind to a ChainTemplate. Medical leave goes HOD -> VC -> President,
everything else HOD -> Dean -> HR.

All functions are pure: they return new objects and never touch the
repository. Step ordering is a caller contract of advance(); the repository
enforces it before calling in.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from app.core.catalogs import ChainKind, chain_kind_for
from app.core.exceptions import RoleNotInChainError, ValidationError
from app.schemas.leave import (
    ApprovalRole,
    ApprovalStep,
    DecisionMetadata,
    LeaveDecision,
    LeaveRequest,
    LeaveStatus,
    StepStatus,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainTemplate:
    roles: Tuple[ApprovalRole, ...]
    # Role that may divide the requested days into paid and unpaid portions
    split_authority: ApprovalRole
    # Role that assigns the leave category
    category_authority: ApprovalRole
    # Whether the category is also kept on the authority's own step
    category_on_step: bool = False


CHAIN_TEMPLATES: Dict[ChainKind, ChainTemplate] = {
    ChainKind.STANDARD: ChainTemplate(
        roles=(ApprovalRole.HOD, ApprovalRole.DEAN, ApprovalRole.HR),
        split_authority=ApprovalRole.DEAN,
        category_authority=ApprovalRole.HR,
    ),
    ChainKind.MEDICAL: ChainTemplate(
        roles=(ApprovalRole.HOD, ApprovalRole.VC, ApprovalRole.PRESIDENT),
        split_authority=ApprovalRole.PRESIDENT,
        category_authority=ApprovalRole.PRESIDENT,
        category_on_step=True,
    ),
}


def template_for(request_type: str) -> ChainTemplate:
    return CHAIN_TEMPLATES[chain_kind_for(request_type)]


def initialize_chain(request_type: str) -> List[ApprovalStep]:
    """Fresh chain for a request type, every step pending."""
    return [ApprovalStep(role=role) for role in template_for(request_type).roles]


def chain_roles(chain: List[ApprovalStep]) -> List[str]:
    return [step.role.value for step in chain]


def step_index(chain: List[ApprovalStep], role: Union[ApprovalRole, str]) -> int:
    """Index of the step owned by role; RoleNotInChainError if absent."""
    role_value = role.value if isinstance(role, ApprovalRole) else str(role).strip().lower()
    for index, step in enumerate(chain):
        if step.role.value == role_value:
            return index
    raise RoleNotInChainError(role_value, chain_roles(chain))


def first_open_index(chain: List[ApprovalStep]) -> Optional[int]:
    """Index of the first step that has not approved, None if all approved."""
    for index, step in enumerate(chain):
        if step.status != StepStatus.APPROVED:
            return index
    return None


def derive_status(chain: List[ApprovalStep]) -> Tuple[LeaveStatus, Optional[ApprovalRole]]:
    """
    Aggregate status and current approver computed from the steps alone.

    Any rejection ends the chain. A chain with no pending step is approved.
    Otherwise the request is Forwarded once somebody has approved, Pending
    before that, and waits on the first pending role.
    """
    if any(step.status == StepStatus.REJECTED for step in chain):
        return LeaveStatus.REJECTED, None

    waiting = next((step for step in chain if step.status == StepStatus.PENDING), None)
    if waiting is None:
        return LeaveStatus.APPROVED, None

    if any(step.status == StepStatus.APPROVED for step in chain):
        return LeaveStatus.FORWARDED, waiting.role
    return LeaveStatus.PENDING, waiting.role


def _coerce_metadata(metadata: Union[DecisionMetadata, Dict[str, Any], None]) -> DecisionMetadata:
    if metadata is None:
        return DecisionMetadata()
    if isinstance(metadata, DecisionMetadata):
        return metadata
    return DecisionMetadata.model_validate(metadata)


def _split_days(total_days: int, metadata: DecisionMetadata) -> Tuple[int, int]:
    paid = metadata.paid_days
    if paid > total_days:
        raise ValidationError(
            f"Paid days ({paid}) exceed the requested {total_days} days",
            details={"paid_days": paid, "days": total_days}
        )
    unpaid = metadata.unpaid_days if metadata.unpaid_days is not None else total_days - paid
    if paid + unpaid != total_days:
        raise ValidationError(
            f"Paid ({paid}) and unpaid ({unpaid}) days must add up to {total_days}",
            details={"paid_days": paid, "unpaid_days": unpaid, "days": total_days}
        )
    return paid, unpaid


def advance(
    request: LeaveRequest,
    acting_role: Union[ApprovalRole, str],
    decision: Union[LeaveDecision, str],
    approver_name: str,
    comment: Optional[str] = None,
    metadata: Union[DecisionMetadata, Dict[str, Any], None] = None,
    acted_on: Optional[date] = None,
) -> LeaveRequest:
    """
    Record one approver's decision and return the updated request.

    Rejection stops the chain: later steps stay pending and are never
    evaluated. Approval forwards to the next pending step after this one,
    or approves the request when none is left.
    """
    try:
        decision = LeaveDecision.parse(decision)
    except ValueError:
        raise ValidationError(f"Unknown decision '{decision}'; expected approved or rejected")

    updated = request.model_copy(deep=True)
    if not updated.approval_chain:
        logger.warning(f"Leave {updated.id} had no approval chain; rebuilding for type '{updated.type}'")
        updated.approval_chain = initialize_chain(updated.type)

    chain = updated.approval_chain
    index = step_index(chain, acting_role)
    step = chain[index]
    template = template_for(updated.type)
    meta = _coerce_metadata(metadata)
    today = acted_on or date.today()

    step.status = StepStatus(decision.value)
    step.by = approver_name
    step.acted_on = today
    step.comment = comment

    if (
        step.role == template.split_authority
        and decision == LeaveDecision.APPROVED
        and meta.paid_days is not None
    ):
        paid, unpaid = _split_days(updated.days, meta)
        step.paid_days, step.unpaid_days = paid, unpaid
        updated.paid_days, updated.unpaid_days = paid, unpaid

    if step.role == template.category_authority and meta.leave_category:
        updated.leave_category = meta.leave_category
        if template.category_on_step:
            step.leave_category = meta.leave_category

    if decision == LeaveDecision.REJECTED:
        updated.status = LeaveStatus.REJECTED
        updated.current_approver = None
        updated.reviewed_by = approver_name
        updated.reviewed_on = today
        return updated

    next_step = next(
        (s for s in chain[index + 1:] if s.status == StepStatus.PENDING),
        None
    )
    if next_step is not None:
        updated.status = LeaveStatus.FORWARDED
        updated.current_approver = next_step.role
    else:
        updated.status = LeaveStatus.APPROVED
        updated.current_approver = None
        updated.reviewed_by = approver_name
        updated.reviewed_on = today
    return updated
