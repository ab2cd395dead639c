import pytest
from datetime import date

from app.schemas.employee import Employee, EmployeeSnapshot, Gender
from app.schemas.leave import LeaveRequest, LeaveStatus
from app.schemas.promotion import PromotionRequest, PromotionStatus
from app.schemas.resignation import ResignationRequest, ResignationStatus
from app.services.side_effects import (
    apply_leave_approval,
    apply_promotion_approval,
    apply_resignation_processing,
    years_of_service,
)


def _employee(**overrides):
    data = {
        "id": "e1",
        "code": "EMP001",
        "name": "Alice Smith",
        "email": "alice.smith@university.edu",
        "gender": Gender.FEMALE,
        "department": "CS",
        "faculty": "Computing",
        "designation": "Senior Lecturer",
        "join_date": date(2015, 6, 1),
        "employment_status": "confirmed",
        "leave_balance": {"annual": 20, "sick": 2},
    }
    data.update(overrides)
    return Employee(**data)


def _snapshot(employee):
    return EmployeeSnapshot.of(employee)


def _leave(employee, leave_type, days, status=LeaveStatus.APPROVED):
    return LeaveRequest(
        id="l1",
        employee_id=employee.id,
        employee=_snapshot(employee),
        type=leave_type,
        start_date=date(2025, 2, 1),
        end_date=date(2025, 2, days),
        days=days,
        reason="Rest",
        status=status,
        applied_on=date(2025, 1, 10),
    )


@pytest.mark.parametrize("leave_type,days,expected", [
    ("annual", 3, 17),
    ("annual", 20, 0),
    ("sick", 5, 0),  # floored, never negative
])
def test_leave_approval_deducts_balance(leave_type, days, expected):
    employee = _employee()
    updated = apply_leave_approval(employee, _leave(employee, leave_type, days))
    assert updated.leave_balance[leave_type] == expected
    # Input is left untouched
    assert employee.leave_balance == {"annual": 20, "sick": 2}


def test_untracked_leave_type_leaves_balance_alone():
    employee = _employee()
    updated = apply_leave_approval(employee, _leave(employee, "medical", 4))
    assert updated.leave_balance == {"annual": 20, "sick": 2}


def test_non_approved_leave_has_no_effect():
    employee = _employee()
    leave = _leave(employee, "annual", 3, status=LeaveStatus.FORWARDED)
    assert apply_leave_approval(employee, leave).leave_balance["annual"] == 20


def test_promotion_approval_updates_designation():
    employee = _employee()
    promotion = PromotionRequest(
        id="p1",
        employee_id=employee.id,
        employee=_snapshot(employee),
        current_designation="Senior Lecturer",
        requested_designation="Assistant Professor",
        justification="Research output",
        status=PromotionStatus.UNDER_REVIEW,
        applied_on=date(2025, 1, 2),
    )
    updated_employee, updated_promotion = apply_promotion_approval(
        employee, promotion, approved_on=date(2025, 1, 10)
    )
    assert updated_employee.designation == "Assistant Professor"
    assert updated_promotion.status == PromotionStatus.APPROVED
    assert updated_promotion.approved_on == date(2025, 1, 10)
    # Historical snapshot keeps the old designation
    assert updated_promotion.employee.designation == "Senior Lecturer"
    assert employee.designation == "Senior Lecturer"


@pytest.mark.parametrize("join,exit_,expected", [
    (date(2015, 6, 1), date(2023, 6, 1), 8),
    (date(2015, 6, 1), date(2023, 5, 31), 7),
    (date(2024, 1, 1), date(2024, 6, 30), 0),
])
def test_years_of_service(join, exit_, expected):
    assert years_of_service(join, exit_) == expected


def test_resignation_processing_builds_alumni_record():
    employee = _employee()
    resignation = ResignationRequest(
        id="r1",
        employee_id=employee.id,
        employee=_snapshot(employee),
        reason="Relocating abroad",
        notice_period=30,
        last_working_date=date(2023, 6, 1),
        status=ResignationStatus.APPROVED,
        applied_on=date(2023, 5, 1),
    )
    ex_employee, completed = apply_resignation_processing(
        employee, resignation, processed_by="HR Office", processed_on=date(2023, 6, 2)
    )

    assert ex_employee.employee_id == "e1"
    assert ex_employee.email == "alice.smith@university.edu"
    assert ex_employee.exit_date == date(2023, 6, 1)
    assert ex_employee.years_of_service == 8
    assert ex_employee.exit_reason == "Relocating abroad"
    assert completed.status == ResignationStatus.COMPLETED
    assert completed.processed_by == "HR Office"
    assert resignation.status == ResignationStatus.APPROVED
