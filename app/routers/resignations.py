from typing import Callable, List, Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_repository, get_state_writer
from app.schemas.resignation import (
    ExEmployee,
    HandoverUpdateRequest,
    ProcessResignationRequest,
    ResignationApprovalRequest,
    ResignationRequest,
    ResignationRequestCreate,
)
from app.services.repository import HRRepository

router = APIRouter(prefix="/resignations", tags=["resignations"])
alumni_router = APIRouter(prefix="/ex-employees", tags=["alumni"])


@router.post("", response_model=ResignationRequest)
def submit_resignation(
    request: ResignationRequestCreate,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    resignation = repository.add_resignation(request)
    persist()
    return resignation


@router.get("", response_model=List[ResignationRequest])
def list_resignations(
    status: Optional[str] = None,
    repository: HRRepository = Depends(get_repository)
):
    return repository.list_resignations(status=status)


@router.get("/{resignation_id}", response_model=ResignationRequest)
def get_resignation(resignation_id: str, repository: HRRepository = Depends(get_repository)):
    return repository.get_resignation(resignation_id)


@router.post("/{resignation_id}/decisions", response_model=ResignationRequest)
def approve_resignation(
    resignation_id: str,
    request: ResignationApprovalRequest,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    resignation = repository.approve_resignation(
        resignation_id, approver_name=request.approver_name, comment=request.comment
    )
    persist()
    return resignation


@router.patch("/{resignation_id}/handover", response_model=ResignationRequest)
def update_handover(
    resignation_id: str,
    request: HandoverUpdateRequest,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    resignation = repository.update_resignation_status(
        resignation_id, handover_status=request.handover_status
    )
    persist()
    return resignation


@router.post("/{resignation_id}/process", response_model=ResignationRequest)
def process_resignation(
    resignation_id: str,
    request: Optional[ProcessResignationRequest] = None,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    """Moves the employee to the alumni set and off the active roster."""
    processed_by = request.processed_by if request else None
    resignation = repository.process_resignation(resignation_id, processed_by=processed_by)
    persist()
    return resignation


@alumni_router.get("", response_model=List[ExEmployee])
def list_ex_employees(
    department: Optional[str] = None,
    faculty: Optional[str] = None,
    search: Optional[str] = None,
    repository: HRRepository = Depends(get_repository)
):
    return repository.list_ex_employees(department=department, faculty=faculty, search=search)
