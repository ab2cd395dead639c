"""
Eligibility & Notice Validators

Pure, advisory checks used before a leave request is submitted.
They return result dicts instead of raising so that the calling layer
decides whether to block the submission.
"""
from datetime import date, timedelta
from typing import Any, Dict, Optional, Union

from app.core.config import settings
from app.schemas.employee import Employee, EmploymentStatus, Gender

# Probation months are counted as 30 days each. Stored probation_end_date
# values were computed this way, so calendar-month arithmetic must not be used.
DAYS_PER_PROBATION_MONTH = 30


def _as_date(value: Union[date, str, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_display_date(value: date) -> str:
    """'2024-12-01' -> 'Dec 1, 2024'"""
    return f"{value:%b} {value.day}, {value.year}"


def calculate_probation_end_date(
    join_date: Union[date, str],
    probation_months: Optional[int] = None
) -> date:
    if probation_months is None:
        probation_months = settings.policy.probation_months
    return _as_date(join_date) + timedelta(days=probation_months * DAYS_PER_PROBATION_MONTH)


def validate_maternity_eligibility(employee: Optional[Employee]) -> Dict[str, Any]:
    """
    Check whether an employee may apply for maternity leave.

    Fails for a missing employee, a non-female employee, or an employee
    still on probation.
    """
    if employee is None:
        return {"eligible": False, "reason": "Employee record not found"}

    if employee.gender != Gender.FEMALE:
        return {
            "eligible": False,
            "reason": "Maternity leave is only available for female employees"
        }

    if employee.employment_status == EmploymentStatus.PROBATION:
        if employee.probation_end_date:
            return {
                "eligible": False,
                "reason": (
                    "Maternity leave is not available during probation. "
                    f"Probation ends on {format_display_date(employee.probation_end_date)}"
                )
            }
        return {
            "eligible": False,
            "reason": "Maternity leave is not available during the probation period"
        }

    return {"eligible": True, "reason": "Employee is eligible for maternity leave"}


def validate_advance_notice(
    expected_delivery_date: Union[date, str, None],
    application_date: Union[date, str, None] = None
) -> Dict[str, Any]:
    """
    Maternity applications need a minimum number of days' notice before the
    expected delivery date. A negative days_in_advance (date already passed)
    is reported as-is; only the threshold decides validity.
    """
    min_required = settings.policy.maternity_min_notice_days
    try:
        expected = _as_date(expected_delivery_date)
        applied = _as_date(application_date) or date.today()
    except ValueError:
        return {
            "valid": False,
            "days_in_advance": None,
            "min_required": min_required,
            "reason": "Dates must be given as YYYY-MM-DD"
        }

    if expected is None:
        return {
            "valid": False,
            "days_in_advance": None,
            "min_required": min_required,
            "reason": "Expected delivery date is required"
        }

    days_in_advance = (expected - applied).days

    if days_in_advance < min_required:
        return {
            "valid": False,
            "days_in_advance": days_in_advance,
            "min_required": min_required,
            "reason": (
                f"Maternity leave must be applied for at least {min_required} days before "
                f"the expected delivery date ({days_in_advance} days given)"
            )
        }

    return {
        "valid": True,
        "days_in_advance": days_in_advance,
        "min_required": min_required,
        "reason": f"Application made {days_in_advance} days in advance"
    }
