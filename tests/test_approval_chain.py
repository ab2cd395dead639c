import pytest
from datetime import date

from app.core.exceptions import RoleNotInChainError, ValidationError
from app.schemas.employee import EmployeeSnapshot
from app.schemas.leave import ApprovalRole, LeaveRequest, LeaveStatus, StepStatus
from app.services import approval_chain

ACTED_ON = date(2025, 1, 10)


def _leave(leave_type="annual", days=3, chain=True):
    return LeaveRequest(
        id="l1",
        employee_id="e1",
        employee=EmployeeSnapshot(
            employee_name="Alice Smith",
            department="CS",
            faculty="Computing",
            designation="Senior Lecturer",
        ),
        type=leave_type,
        start_date=date(2025, 2, 3),
        end_date=date(2025, 2, 2 + days),
        days=days,
        reason="Family visit",
        applied_on=ACTED_ON,
        approval_chain=approval_chain.initialize_chain(leave_type) if chain else None,
        current_approver=ApprovalRole.HOD,
    )


@pytest.mark.parametrize("leave_type", ["annual", "sick", "casual", "maternity", "unpaid", "Annual"])
def test_standard_chain_roles(leave_type):
    chain = approval_chain.initialize_chain(leave_type)
    assert approval_chain.chain_roles(chain) == ["hod", "dean", "hr"]
    assert all(step.status == StepStatus.PENDING for step in chain)


def test_medical_chain_roles():
    chain = approval_chain.initialize_chain("medical")
    assert approval_chain.chain_roles(chain) == ["hod", "vc", "president"]


def test_derive_status_of_fresh_chain():
    chain = approval_chain.initialize_chain("annual")
    assert approval_chain.derive_status(chain) == (LeaveStatus.PENDING, ApprovalRole.HOD)
    # Deriving twice without advancing gives the same answer
    assert approval_chain.derive_status(chain) == approval_chain.derive_status(chain)


@pytest.mark.parametrize("leave_type", ["annual", "medical"])
def test_sequential_approvals_forward_until_last_step(leave_type):
    leave = _leave(leave_type)
    roles = approval_chain.chain_roles(leave.approval_chain)

    for position, role in enumerate(roles):
        leave = approval_chain.advance(leave, role, "approved", f"{role} officer", acted_on=ACTED_ON)
        if position < len(roles) - 1:
            assert leave.status == LeaveStatus.FORWARDED
            assert leave.current_approver.value == roles[position + 1]
        else:
            assert leave.status == LeaveStatus.APPROVED
            assert leave.current_approver is None
            assert leave.reviewed_by == f"{role} officer"
            assert leave.reviewed_on == ACTED_ON

    assert approval_chain.derive_status(leave.approval_chain) == (LeaveStatus.APPROVED, None)


@pytest.mark.parametrize("rejecting_index", [0, 1, 2])
def test_rejection_stops_the_chain(rejecting_index):
    leave = _leave("medical")
    roles = approval_chain.chain_roles(leave.approval_chain)
    for role in roles[:rejecting_index]:
        leave = approval_chain.advance(leave, role, "approved", "Approver", acted_on=ACTED_ON)

    leave = approval_chain.advance(
        leave, roles[rejecting_index], "rejected", "Approver",
        comment="insufficient documentation", acted_on=ACTED_ON
    )

    assert leave.status == LeaveStatus.REJECTED
    assert leave.current_approver is None
    assert leave.approval_chain[rejecting_index].comment == "insufficient documentation"
    for step in leave.approval_chain[rejecting_index + 1:]:
        assert step.status == StepStatus.PENDING
        assert step.by is None


def test_advance_does_not_mutate_input():
    leave = _leave()
    approval_chain.advance(leave, "hod", "approved", "Dr. Khan", acted_on=ACTED_ON)
    assert leave.status == LeaveStatus.PENDING
    assert leave.approval_chain[0].status == StepStatus.PENDING


def test_dean_records_paid_unpaid_split():
    leave = _leave(days=3)
    leave = approval_chain.advance(leave, "hod", "approved", "HOD", acted_on=ACTED_ON)
    leave = approval_chain.advance(
        leave, "dean", "approved", "Dean",
        metadata={"paid_days": 2, "unpaid_days": 1}, acted_on=ACTED_ON
    )
    assert (leave.paid_days, leave.unpaid_days) == (2, 1)
    assert (leave.approval_chain[1].paid_days, leave.approval_chain[1].unpaid_days) == (2, 1)


def test_unpaid_days_default_to_remainder():
    leave = _leave(days=5)
    leave = approval_chain.advance(
        leave, "dean", "approved", "Dean", metadata={"paid_days": 4}, acted_on=ACTED_ON
    )
    assert (leave.paid_days, leave.unpaid_days) == (4, 1)


def test_split_ignored_for_non_authority():
    leave = _leave(days=3)
    leave = approval_chain.advance(
        leave, "hod", "approved", "HOD", metadata={"paid_days": 1}, acted_on=ACTED_ON
    )
    assert leave.paid_days is None
    assert leave.approval_chain[0].paid_days is None


def test_split_must_add_up():
    leave = _leave(days=3)
    with pytest.raises(ValidationError):
        approval_chain.advance(leave, "dean", "approved", "Dean", metadata={"paid_days": 4})
    with pytest.raises(ValidationError):
        approval_chain.advance(
            leave, "dean", "approved", "Dean", metadata={"paid_days": 1, "unpaid_days": 1}
        )


def test_hr_category_lives_on_request_only():
    leave = _leave()
    leave = approval_chain.advance(
        leave, "hr", "approved", "HR", metadata={"leave_category": "Earned"}, acted_on=ACTED_ON
    )
    assert leave.leave_category == "Earned"
    assert leave.approval_chain[2].leave_category is None


def test_president_sets_split_and_category_on_step():
    leave = _leave("medical", days=4)
    leave = approval_chain.advance(
        leave, "president", "approved", "President",
        metadata={"paid_days": 4, "unpaid_days": 0, "leave_category": "Medical - Full Pay"},
        acted_on=ACTED_ON
    )
    step = leave.approval_chain[2]
    assert (step.paid_days, step.unpaid_days, step.leave_category) == (4, 0, "Medical - Full Pay")
    assert leave.leave_category == "Medical - Full Pay"


def test_unknown_role_is_an_error():
    with pytest.raises(RoleNotInChainError):
        approval_chain.advance(_leave(), "vc", "approved", "VC")


def test_unknown_decision_is_an_error():
    with pytest.raises(ValidationError):
        approval_chain.advance(_leave(), "hod", "maybe", "HOD")


def test_decision_aliases():
    leave = approval_chain.advance(_leave(), "HOD", "Approve", "HOD", acted_on=ACTED_ON)
    assert leave.approval_chain[0].status == StepStatus.APPROVED


def test_missing_chain_is_rebuilt():
    leave = approval_chain.advance(_leave("medical", chain=False), "hod", "approved", "HOD")
    assert approval_chain.chain_roles(leave.approval_chain) == ["hod", "vc", "president"]
    assert leave.current_approver == ApprovalRole.VC
