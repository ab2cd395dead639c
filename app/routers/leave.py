from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.catalogs import normalize_leave_type
from app.core.exceptions import EmployeeNotFoundError, ValidationError
from app.dependencies import get_repository, get_state_writer
from app.schemas.leave import (
    ApprovalRole,
    LeaveDecisionRequest,
    LeaveRequest,
    LeaveRequestCreate,
    LeaveStats,
    NoticeValidationRequest,
    NoticeValidationResponse,
)
from app.services.eligibility import validate_advance_notice, validate_maternity_eligibility
from app.services.repository import HRRepository

router = APIRouter(
    prefix="/leaves",
    tags=["leave"]
)


@router.post("", response_model=LeaveRequest)
def submit_leave_request(
    request: LeaveRequestCreate,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    # Maternity requests are blocked here when the advisory checks fail
    if normalize_leave_type(request.type) == "maternity":
        employee = repository.find_employee(request.employee_id)
        if employee is None:
            raise EmployeeNotFoundError(request.employee_id)

        eligibility = validate_maternity_eligibility(employee)
        if not eligibility["eligible"]:
            raise ValidationError(eligibility["reason"])

        notice = validate_advance_notice(request.expected_delivery_date)
        if not notice["valid"]:
            raise ValidationError(notice["reason"], details=notice)

    leave = repository.add_leave(request)
    persist()
    return leave


@router.get("", response_model=List[LeaveRequest])
def list_leave_requests(
    status: Optional[str] = None,
    type: Optional[str] = None,
    employee_id: Optional[str] = None,
    faculty: Optional[str] = None,
    department: Optional[str] = None,
    search: Optional[str] = Query(None, description="Matches the employee name"),
    repository: HRRepository = Depends(get_repository)
):
    return repository.list_leaves(
        status=status,
        leave_type=type,
        employee_id=employee_id,
        faculty=faculty,
        department=department,
        search=search,
    )


@router.get("/pending", response_model=List[LeaveRequest])
def list_pending_leaves(repository: HRRepository = Depends(get_repository)):
    """Requests still in their approval chain (Pending or Forwarded)."""
    return repository.get_pending_leaves()


@router.get("/stats", response_model=LeaveStats)
def get_leave_stats(repository: HRRepository = Depends(get_repository)):
    return repository.leave_stats()


@router.get("/awaiting/{role}", response_model=List[LeaveRequest])
def list_leaves_awaiting(
    role: ApprovalRole,
    faculty: Optional[str] = None,
    department: Optional[str] = None,
    repository: HRRepository = Depends(get_repository)
):
    """Approver inbox for HOD, Dean, HR, VC or President."""
    return repository.get_leaves_awaiting(role, faculty=faculty, department=department)


@router.post("/maternity/validate-notice", response_model=NoticeValidationResponse)
def api_validate_notice(request: NoticeValidationRequest):
    return validate_advance_notice(request.expected_delivery_date, request.application_date)


@router.get("/{leave_id}", response_model=LeaveRequest)
def get_leave_request(leave_id: str, repository: HRRepository = Depends(get_repository)):
    return repository.get_leave(leave_id)


@router.post("/{leave_id}/decisions", response_model=LeaveRequest)
def decide_leave_request(
    leave_id: str,
    decision: LeaveDecisionRequest,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    leave = repository.update_leave_status(
        leave_id,
        role=decision.role,
        decision=decision.decision,
        approver_name=decision.approver_name,
        comment=decision.comment,
        metadata=decision.metadata,
    )
    persist()
    return leave
