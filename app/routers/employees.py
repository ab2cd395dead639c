from typing import Callable, List, Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_repository, get_state_writer
from app.schemas.employee import (
    Employee,
    EmployeeCreate,
    EmployeeStats,
    EmployeeUpdate,
    MaternityEligibilityResponse,
)
from app.schemas.leave import LeaveRequest
from app.services.eligibility import validate_maternity_eligibility
from app.services.repository import HRRepository

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", response_model=Employee)
def register_employee(
    employee: EmployeeCreate,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    created = repository.add_employee(employee)
    persist()
    return created


@router.get("", response_model=List[Employee])
def list_employees(
    department: Optional[str] = None,
    faculty: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    repository: HRRepository = Depends(get_repository)
):
    return repository.list_employees(
        department=department, faculty=faculty, status=status, search=search
    )


@router.get("/stats", response_model=EmployeeStats)
def get_employee_stats(repository: HRRepository = Depends(get_repository)):
    return repository.employee_stats()


@router.get("/{employee_id}", response_model=Employee)
def get_employee(employee_id: str, repository: HRRepository = Depends(get_repository)):
    return repository.get_employee(employee_id)


@router.patch("/{employee_id}", response_model=Employee)
def update_employee(
    employee_id: str,
    changes: EmployeeUpdate,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    updated = repository.update_employee(employee_id, changes)
    persist()
    return updated


@router.get("/{employee_id}/leaves", response_model=List[LeaveRequest])
def get_employee_leaves(employee_id: str, repository: HRRepository = Depends(get_repository)):
    return repository.get_leaves_by_employee(employee_id)


@router.get("/{employee_id}/maternity-eligibility", response_model=MaternityEligibilityResponse)
def get_maternity_eligibility(employee_id: str, repository: HRRepository = Depends(get_repository)):
    """Advisory check; an unknown employee is reported as ineligible."""
    return validate_maternity_eligibility(repository.find_employee(employee_id))
