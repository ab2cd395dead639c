"""
Side effects of terminal approvals.

Each function takes the current entities and returns updated copies; the
repository decides when to commit them. Nothing here mutates its inputs.
"""
import math
import uuid
from datetime import date
from typing import Optional, Tuple

from app.schemas.employee import Employee
from app.schemas.leave import LeaveRequest, LeaveStatus
from app.schemas.promotion import PromotionRequest, PromotionStatus
from app.schemas.resignation import (
    ExEmployee,
    ResignationRequest,
    ResignationStatus,
)

DAYS_PER_YEAR = 365.25


def apply_leave_approval(employee: Employee, leave: LeaveRequest) -> Employee:
    """
    Deduct approved days from the employee's balance for the leave type,
    floored at zero. Types without a balance entry are not tracked and
    leave the balance untouched.
    """
    if leave.status != LeaveStatus.APPROVED:
        return employee

    updated = employee.model_copy(deep=True)
    if leave.type in updated.leave_balance:
        remaining = updated.leave_balance[leave.type] - leave.days
        updated.leave_balance[leave.type] = max(0, remaining)
    return updated


def apply_promotion_approval(
    employee: Employee,
    promotion: PromotionRequest,
    approved_on: Optional[date] = None
) -> Tuple[Employee, PromotionRequest]:
    updated_employee = employee.model_copy(
        update={"designation": promotion.requested_designation}, deep=True
    )
    updated_promotion = promotion.model_copy(deep=True, update={
        "status": PromotionStatus.APPROVED,
        "approved_on": approved_on or date.today(),
    })
    return updated_employee, updated_promotion


def years_of_service(join_date: date, exit_date: date) -> int:
    return math.floor((exit_date - join_date).days / DAYS_PER_YEAR)


def build_ex_employee(employee: Employee, resignation: ResignationRequest) -> ExEmployee:
    return ExEmployee(
        id=f"x{uuid.uuid4().hex[:8]}",
        employee_id=employee.id,
        name=employee.name,
        email=employee.email,
        department=employee.department,
        faculty=employee.faculty,
        designation=employee.designation,
        join_date=employee.join_date,
        exit_date=resignation.last_working_date,
        years_of_service=years_of_service(employee.join_date, resignation.last_working_date),
        exit_reason=resignation.reason,
        exit_survey=resignation.exit_survey,
    )


def apply_resignation_processing(
    employee: Employee,
    resignation: ResignationRequest,
    processed_by: Optional[str] = None,
    processed_on: Optional[date] = None
) -> Tuple[ExEmployee, ResignationRequest]:
    """Alumni record for the leaver plus the completed resignation."""
    ex_employee = build_ex_employee(employee, resignation)
    completed = resignation.model_copy(deep=True, update={
        "status": ResignationStatus.COMPLETED,
        "processed_by": processed_by,
        "processed_on": processed_on or date.today(),
    })
    return ex_employee, completed
