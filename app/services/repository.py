"""
Request Repository

Owns the employee roster, the leave / promotion / resignation collections
and the alumni (ex-employee) set. Every mutation entrypoint lives here; the
approval chain engine and side-effect functions are pure helpers it calls.

Architecture:
- Router -> HRRepository (this module) -> approval_chain / side_effects
- Mutations run under a per-entity lock and build new objects before
  committing, so a failing side effect leaves the store untouched
- Readers always receive copies; stored objects never escape
"""
import logging
import threading
import uuid
import weakref
from contextlib import contextmanager
from datetime import date
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.catalogs import (
    DESIGNATIONS,
    FACULTIES,
    LEAVE_TYPES,
    default_leave_balance,
    designation_rank,
    next_designation,
    normalize_leave_type,
)
from app.core.config import settings
from app.core.exceptions import (
    EmployeeNotFoundError,
    InvalidTransitionError,
    OutOfOrderApprovalError,
    RequestNotFoundError,
    ValidationError,
)
from app.schemas.employee import (
    Employee,
    EmployeeCreate,
    EmployeeSnapshot,
    EmployeeStats,
    EmployeeStatus,
    EmploymentStatus,
    EmployeeUpdate,
)
from app.schemas.leave import (
    ApprovalRole,
    DecisionMetadata,
    LeaveDecision,
    LeaveRequest,
    LeaveRequestCreate,
    LeaveStats,
    LeaveStatus,
    StepStatus,
)
from app.schemas.promotion import (
    CommitteeReview,
    HRDecision,
    PromotionDecision,
    PromotionRequest,
    PromotionRequestCreate,
    PromotionStats,
    PromotionStatus,
)
from app.schemas.resignation import (
    ExEmployee,
    HandoverStatus,
    ResignationRequest,
    ResignationRequestCreate,
    ResignationStatus,
)
from app.services import approval_chain
from app.services.eligibility import calculate_probation_end_date
from app.services.side_effects import (
    apply_leave_approval,
    apply_promotion_approval,
    apply_resignation_processing,
)

logger = logging.getLogger(__name__)

PROMOTION_TRANSITIONS = {
    PromotionStatus.PENDING: {PromotionStatus.UNDER_REVIEW, PromotionStatus.REJECTED},
    PromotionStatus.UNDER_REVIEW: {PromotionStatus.APPROVED, PromotionStatus.REJECTED},
}

RESIGNATION_TRANSITIONS = {
    ResignationStatus.PENDING: {ResignationStatus.APPROVED},
    ResignationStatus.APPROVED: {ResignationStatus.COMPLETED},
}

OPEN_PROMOTION_STATUSES = (PromotionStatus.PENDING, PromotionStatus.UNDER_REVIEW)
OPEN_RESIGNATION_STATUSES = (ResignationStatus.PENDING, ResignationStatus.APPROVED)


def _new_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:8]}"


def _matches(text: Optional[str], *candidates: Optional[str]) -> bool:
    if not text:
        return True
    needle = text.lower()
    return any(needle in (c or "").lower() for c in candidates)


class HRRepository:
    """
    In-memory store for one application instance.

    Held on app.state by the FastAPI lifespan; tests build their own.
    """

    STORES = ("employees", "leaves", "promotions", "resignations", "ex_employees")

    def __init__(
        self,
        strict_approval_order: Optional[bool] = None,
        clock: Callable[[], date] = date.today
    ):
        self._employees: Dict[str, Employee] = {}
        self._leaves: Dict[str, LeaveRequest] = {}
        self._promotions: Dict[str, PromotionRequest] = {}
        self._resignations: Dict[str, ResignationRequest] = {}
        self._ex_employees: List[ExEmployee] = []

        self._lock = threading.RLock()
        # Entries vanish once no caller holds the lock
        self._entity_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()

        if strict_approval_order is None:
            strict_approval_order = settings.policy.strict_approval_order
        self.strict_approval_order = strict_approval_order
        self._today = clock

    # ------------------------------------------------------------------
    # Locking helpers
    # ------------------------------------------------------------------
    @contextmanager
    def _locked(self, entity_id: str) -> Iterator[None]:
        """Serialize read-modify-write cycles on one entity."""
        with self._lock:
            entity_lock = self._entity_locks.get(entity_id)
            if entity_lock is None:
                entity_lock = threading.Lock()
                self._entity_locks[entity_id] = entity_lock
        with entity_lock:
            yield

    def _employee_or_raise(self, employee_id: str) -> Employee:
        employee = self._employees.get(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def _leave_or_raise(self, leave_id: str) -> LeaveRequest:
        leave = self._leaves.get(leave_id)
        if leave is None:
            raise RequestNotFoundError("leave", leave_id)
        return leave

    def _promotion_or_raise(self, promotion_id: str) -> PromotionRequest:
        promotion = self._promotions.get(promotion_id)
        if promotion is None:
            raise RequestNotFoundError("promotion", promotion_id)
        return promotion

    def _resignation_or_raise(self, resignation_id: str) -> ResignationRequest:
        resignation = self._resignations.get(resignation_id)
        if resignation is None:
            raise RequestNotFoundError("resignation", resignation_id)
        return resignation

    @staticmethod
    def _check_catalogs(faculty: str, department: str, designation: str) -> None:
        if faculty not in FACULTIES:
            raise ValidationError(f"Unknown faculty '{faculty}'")
        if department not in FACULTIES[faculty]:
            raise ValidationError(f"Department '{department}' does not belong to faculty '{faculty}'")
        if designation not in DESIGNATIONS:
            raise ValidationError(f"Unknown designation '{designation}'")

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------
    def add_employee(self, data: EmployeeCreate) -> Employee:
        self._check_catalogs(data.faculty, data.department, data.designation)

        probation_end = None
        if data.employment_status == EmploymentStatus.PROBATION:
            probation_end = calculate_probation_end_date(data.join_date)

        employee = Employee(
            id=_new_id("e"),
            **data.model_dump(exclude={"leave_balance"}),
            probation_end_date=probation_end,
            leave_balance=data.leave_balance if data.leave_balance is not None else default_leave_balance(),
        )

        with self._lock:
            if any(e.code == employee.code for e in self._employees.values()):
                raise ValidationError(f"Employee code '{employee.code}' is already in use")
            self._employees[employee.id] = employee

        logger.info(f"Registered employee {employee.id} ({employee.code}) in {employee.department}")
        return employee.model_copy(deep=True)

    def update_employee(self, employee_id: str, changes: EmployeeUpdate) -> Employee:
        """
        Merge a partial update into the stored employee; explicit nulls leave
        a field unchanged. Read, merge and write all run under the store lock,
        the lock every other employee writer commits under.
        """
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            current = self._employee_or_raise(employee_id)
            merged = current.model_dump()
            merged.update(fields)

            if {"faculty", "department", "designation"} & fields.keys():
                self._check_catalogs(merged["faculty"], merged["department"], merged["designation"])

            if "employment_status" in fields:
                if merged["employment_status"] == EmploymentStatus.PROBATION:
                    merged["probation_end_date"] = (
                        current.probation_end_date or calculate_probation_end_date(current.join_date)
                    )
                else:
                    merged["probation_end_date"] = None

            try:
                updated = Employee.model_validate(merged)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid employee update for {employee_id}",
                    details={"errors": [err["msg"] for err in e.errors()]}
                )
            self._employees[employee_id] = updated

        logger.info(f"Updated employee {employee_id}: {sorted(fields)}")
        return updated.model_copy(deep=True)

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            employee = self._employees.get(employee_id)
            return employee.model_copy(deep=True) if employee else None

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.find_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    def list_employees(
        self,
        department: Optional[str] = None,
        faculty: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Employee]:
        with self._lock:
            employees = list(self._employees.values())
        return [
            e.model_copy(deep=True) for e in employees
            if (not department or e.department == department)
            and (not faculty or e.faculty == faculty)
            and (not status or e.status.value == status)
            and _matches(search, e.name, e.code, e.email)
        ]

    def employee_stats(self) -> EmployeeStats:
        with self._lock:
            employees = list(self._employees.values())
        by_department: Dict[str, int] = {}
        by_faculty: Dict[str, int] = {}
        by_status = {s.value: 0 for s in EmployeeStatus}
        for e in employees:
            by_department[e.department] = by_department.get(e.department, 0) + 1
            by_faculty[e.faculty] = by_faculty.get(e.faculty, 0) + 1
            by_status[e.status.value] += 1
        return EmployeeStats(
            total=len(employees),
            by_department=by_department,
            by_faculty=by_faculty,
            by_status=by_status,
        )

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------
    def add_leave(self, data: LeaveRequestCreate) -> LeaveRequest:
        leave_type = normalize_leave_type(data.type)
        if leave_type not in LEAVE_TYPES:
            raise ValidationError(
                f"Unknown leave type '{data.type}'",
                details={"allowed": sorted(LEAVE_TYPES)}
            )
        if data.end_date < data.start_date:
            raise ValidationError("End date cannot be before start date")

        chain = approval_chain.initialize_chain(leave_type)
        status, current_approver = approval_chain.derive_status(chain)

        with self._lock:
            employee = self._employee_or_raise(data.employee_id)
            leave = LeaveRequest(
                id=_new_id("l"),
                employee_id=employee.id,
                employee=EmployeeSnapshot.of(employee),
                type=leave_type,
                start_date=data.start_date,
                end_date=data.end_date,
                days=(data.end_date - data.start_date).days + 1,
                reason=data.reason,
                status=status,
                applied_on=self._today(),
                approval_chain=chain,
                current_approver=current_approver,
                expected_delivery_date=data.expected_delivery_date if leave_type == "maternity" else None,
            )
            self._leaves[leave.id] = leave

        logger.info(f"Leave {leave.id} ({leave_type}, {leave.days} days) submitted for {employee.id}")
        return leave.model_copy(deep=True)

    def update_leave_status(
        self,
        leave_id: str,
        role: Union[ApprovalRole, str],
        decision: Union[LeaveDecision, str],
        approver_name: str,
        comment: Optional[str] = None,
        metadata: Union[DecisionMetadata, Dict[str, Any], None] = None
    ) -> LeaveRequest:
        """
        Apply one approver's decision to a leave request.

        On final approval the employee's balance is deducted in the same
        commit as the status change.
        """
        with self._locked(leave_id):
            leave = self._leave_or_raise(leave_id)
            if leave.is_final:
                raise InvalidTransitionError(
                    f"Leave {leave_id} is already {leave.status.value}",
                    details={"status": leave.status.value}
                )

            chain = leave.approval_chain or approval_chain.initialize_chain(leave.type)
            index = approval_chain.step_index(chain, role)
            acting = chain[index].role

            if self.strict_approval_order:
                expected = approval_chain.first_open_index(chain)
                if expected != index:
                    expected_role = chain[expected].role.value if expected is not None else None
                    raise OutOfOrderApprovalError(acting.value, expected_role)
            elif chain[index].status != StepStatus.PENDING:
                raise InvalidTransitionError(f"The {acting.value} step has already been decided")

            updated = approval_chain.advance(
                leave, acting, decision, approver_name,
                comment=comment, metadata=metadata, acted_on=self._today()
            )

            if updated.status != LeaveStatus.REJECTED:
                # With relaxed ordering a later role may act early; the stored
                # status and approver must still follow the chain itself
                status, current_approver = approval_chain.derive_status(updated.approval_chain)
                if updated.status == LeaveStatus.APPROVED and status != LeaveStatus.APPROVED:
                    raise InvalidTransitionError(
                        f"Leave {leave_id} cannot be approved while the "
                        f"{current_approver.value} step is pending",
                        details={"pending_role": current_approver.value}
                    )
                updated.status = status
                updated.current_approver = current_approver

            with self._lock:
                employee = None
                if updated.status == LeaveStatus.APPROVED:
                    employee = apply_leave_approval(
                        self._employee_or_raise(updated.employee_id), updated
                    )
                self._leaves[leave_id] = updated
                if employee is not None:
                    self._employees[employee.id] = employee

        logger.info(
            f"Leave {leave_id}: {acting.value} {updated.approval_chain[index].status.value} "
            f"-> {updated.status.value}"
        )
        return updated.model_copy(deep=True)

    def get_leave(self, leave_id: str) -> LeaveRequest:
        with self._lock:
            return self._leave_or_raise(leave_id).model_copy(deep=True)

    def list_leaves(
        self,
        status: Optional[str] = None,
        leave_type: Optional[str] = None,
        employee_id: Optional[str] = None,
        faculty: Optional[str] = None,
        department: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[LeaveRequest]:
        """Filtered leaves, newest application first."""
        wanted_type = normalize_leave_type(leave_type) if leave_type else None
        with self._lock:
            leaves = list(self._leaves.values())
        selected = [
            leave for leave in leaves
            if (not status or leave.status.value.lower() == status.lower())
            and (not wanted_type or leave.type == wanted_type)
            and (not employee_id or leave.employee_id == employee_id)
            and (not faculty or leave.employee.faculty == faculty)
            and (not department or leave.employee.department == department)
            and _matches(search, leave.employee.employee_name)
        ]
        selected.sort(key=lambda leave: leave.applied_on, reverse=True)
        return [leave.model_copy(deep=True) for leave in selected]

    def get_leaves_by_employee(self, employee_id: str) -> List[LeaveRequest]:
        return self.list_leaves(employee_id=employee_id)

    def get_pending_leaves(self) -> List[LeaveRequest]:
        """Leaves still moving through their chain (Pending or Forwarded)."""
        return [leave for leave in self.list_leaves() if not leave.is_final]

    def get_leaves_awaiting(
        self,
        role: Union[ApprovalRole, str],
        faculty: Optional[str] = None,
        department: Optional[str] = None
    ) -> List[LeaveRequest]:
        """Approver inbox: open leaves whose current approver is role."""
        role = ApprovalRole(role)
        return [
            leave for leave in self.list_leaves(faculty=faculty, department=department)
            if not leave.is_final and leave.current_approver == role
        ]

    def leave_stats(self) -> LeaveStats:
        with self._lock:
            leaves = list(self._leaves.values())
        by_status = {s.value: 0 for s in LeaveStatus}
        by_type: Dict[str, int] = {}
        for leave in leaves:
            by_status[leave.status.value] += 1
            by_type[leave.type] = by_type.get(leave.type, 0) + 1
        return LeaveStats(total=len(leaves), by_status=by_status, by_type=by_type)

    # ------------------------------------------------------------------
    # Promotions
    # ------------------------------------------------------------------
    def add_promotion(self, data: PromotionRequestCreate) -> PromotionRequest:
        with self._lock:
            employee = self._employee_or_raise(data.employee_id)
            requested = data.requested_designation or next_designation(employee.designation)
            if requested is None:
                raise ValidationError(f"'{employee.designation}' is the top of the designation path")
            if designation_rank(requested) < 0:
                raise ValidationError(f"Unknown designation '{requested}'")
            if designation_rank(requested) <= designation_rank(employee.designation):
                raise ValidationError(
                    f"Requested designation '{requested}' is not above '{employee.designation}'"
                )
            if any(
                p.employee_id == employee.id and p.status in OPEN_PROMOTION_STATUSES
                for p in self._promotions.values()
            ):
                raise ValidationError(f"Employee {employee.id} already has an open promotion request")

            promotion = PromotionRequest(
                id=_new_id("p"),
                employee_id=employee.id,
                employee=EmployeeSnapshot.of(employee),
                current_designation=employee.designation,
                requested_designation=requested,
                justification=data.justification,
                applied_on=self._today(),
            )
            self._promotions[promotion.id] = promotion

        logger.info(f"Promotion {promotion.id}: {employee.id} {promotion.current_designation} -> {requested}")
        return promotion.model_copy(deep=True)

    def update_promotion_status(
        self,
        promotion_id: str,
        status: Union[PromotionStatus, str],
        committee_review: Optional[CommitteeReview] = None,
        hr_decision: Optional[HRDecision] = None
    ) -> PromotionRequest:
        status = PromotionStatus(status)
        with self._locked(promotion_id):
            promotion = self._promotion_or_raise(promotion_id)
            if status not in PROMOTION_TRANSITIONS.get(promotion.status, set()):
                raise InvalidTransitionError(
                    f"Promotion {promotion_id} cannot move from {promotion.status.value} to {status.value}",
                    details={"from": promotion.status.value, "to": status.value}
                )

            updates: Dict[str, Any] = {"status": status}
            if committee_review is not None:
                updates["committee_review"] = committee_review
            if hr_decision is not None:
                updates["hr_decision"] = hr_decision

            with self._lock:
                if status == PromotionStatus.APPROVED:
                    employee, updated = apply_promotion_approval(
                        self._employee_or_raise(promotion.employee_id), promotion, self._today()
                    )
                    updated = updated.model_copy(update={k: v for k, v in updates.items() if k != "status"})
                    self._employees[employee.id] = employee
                else:
                    updated = promotion.model_copy(deep=True, update=updates)
                self._promotions[promotion_id] = updated

        logger.info(f"Promotion {promotion_id}: {promotion.status.value} -> {status.value}")
        return updated.model_copy(deep=True)

    def schedule_committee(
        self,
        promotion_id: str,
        meeting_date: date,
        scheduled_by: str,
        notes: Optional[str] = None
    ) -> PromotionRequest:
        review = CommitteeReview(
            meeting_date=meeting_date,
            notes=notes,
            scheduled_by=scheduled_by,
            scheduled_on=self._today(),
        )
        return self.update_promotion_status(
            promotion_id, PromotionStatus.UNDER_REVIEW, committee_review=review
        )

    def approve_promotion(
        self,
        promotion_id: str,
        approver_name: Optional[str] = None,
        comment: Optional[str] = None
    ) -> PromotionRequest:
        decision = None
        if approver_name:
            decision = HRDecision(
                decision=PromotionDecision.APPROVE,
                notes=comment,
                decided_by=approver_name,
                decided_on=self._today(),
            )
        return self.update_promotion_status(
            promotion_id, PromotionStatus.APPROVED, hr_decision=decision
        )

    def reject_promotion(
        self,
        promotion_id: str,
        decided_by: str,
        notes: Optional[str] = None
    ) -> PromotionRequest:
        decision = HRDecision(
            decision=PromotionDecision.REJECT,
            notes=notes,
            decided_by=decided_by,
            decided_on=self._today(),
        )
        return self.update_promotion_status(
            promotion_id, PromotionStatus.REJECTED, hr_decision=decision
        )

    def get_promotion(self, promotion_id: str) -> PromotionRequest:
        with self._lock:
            return self._promotion_or_raise(promotion_id).model_copy(deep=True)

    def list_promotions(
        self,
        status: Optional[str] = None,
        department: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[PromotionRequest]:
        with self._lock:
            promotions = list(self._promotions.values())
        selected = [
            p for p in promotions
            if (not status or p.status.value.lower() == status.lower())
            and (not department or p.employee.department == department)
            and _matches(search, p.employee.employee_name, p.employee.department)
        ]
        selected.sort(key=lambda p: p.applied_on, reverse=True)
        return [p.model_copy(deep=True) for p in selected]

    def promotion_stats(self) -> PromotionStats:
        with self._lock:
            promotions = list(self._promotions.values())
        by_status = {s.value: 0 for s in PromotionStatus}
        for p in promotions:
            by_status[p.status.value] += 1
        return PromotionStats(total=len(promotions), by_status=by_status)

    # ------------------------------------------------------------------
    # Resignations
    # ------------------------------------------------------------------
    def add_resignation(self, data: ResignationRequestCreate) -> ResignationRequest:
        with self._lock:
            employee = self._employee_or_raise(data.employee_id)
            if data.last_working_date < employee.join_date:
                raise ValidationError("Last working date cannot be before the join date")
            if any(
                r.employee_id == employee.id and r.status in OPEN_RESIGNATION_STATUSES
                for r in self._resignations.values()
            ):
                raise ValidationError(f"Employee {employee.id} already has an open resignation")

            resignation = ResignationRequest(
                id=_new_id("r"),
                employee_id=employee.id,
                employee=EmployeeSnapshot.of(employee),
                reason=data.reason,
                notice_period=data.notice_period,
                last_working_date=data.last_working_date,
                applied_on=self._today(),
                exit_survey=data.exit_survey,
            )
            self._resignations[resignation.id] = resignation

        logger.info(f"Resignation {resignation.id} submitted by {employee.id}, last day {data.last_working_date}")
        return resignation.model_copy(deep=True)

    def update_resignation_status(
        self,
        resignation_id: str,
        status: Union[ResignationStatus, str, None] = None,
        approver_name: Optional[str] = None,
        comment: Optional[str] = None,
        handover_status: Union[HandoverStatus, str, None] = None
    ) -> ResignationRequest:
        """
        Move a resignation forward or update its handover progress.
        Completion goes through process_resignation only.
        """
        with self._locked(resignation_id):
            resignation = self._resignation_or_raise(resignation_id)
            updates: Dict[str, Any] = {}

            if status is not None:
                status = ResignationStatus(status)
                if status == ResignationStatus.COMPLETED:
                    raise InvalidTransitionError("Use process_resignation to complete a resignation")
                if status not in RESIGNATION_TRANSITIONS.get(resignation.status, set()):
                    raise InvalidTransitionError(
                        f"Resignation {resignation_id} cannot move from "
                        f"{resignation.status.value} to {status.value}",
                        details={"from": resignation.status.value, "to": status.value}
                    )
                updates["status"] = status
                if status == ResignationStatus.APPROVED:
                    updates["approved_by"] = approver_name
                    updates["approved_on"] = self._today()
                    updates["comment"] = comment

            if handover_status is not None:
                if resignation.status == ResignationStatus.COMPLETED:
                    raise InvalidTransitionError(f"Resignation {resignation_id} is already completed")
                updates["handover_status"] = HandoverStatus(handover_status)

            updated = resignation.model_copy(deep=True, update=updates)
            with self._lock:
                self._resignations[resignation_id] = updated

        logger.info(f"Resignation {resignation_id} updated: {sorted(updates)}")
        return updated.model_copy(deep=True)

    def approve_resignation(
        self,
        resignation_id: str,
        approver_name: str,
        comment: Optional[str] = None
    ) -> ResignationRequest:
        return self.update_resignation_status(
            resignation_id, ResignationStatus.APPROVED,
            approver_name=approver_name, comment=comment
        )

    def process_resignation(
        self,
        resignation_id: str,
        processed_by: Optional[str] = None
    ) -> ResignationRequest:
        """
        Move the leaver into the alumni set and off the active roster.
        """
        with self._locked(resignation_id):
            resignation = self._resignation_or_raise(resignation_id)
            if resignation.status != ResignationStatus.APPROVED:
                raise InvalidTransitionError(
                    f"Resignation {resignation_id} must be Approved before processing "
                    f"(currently {resignation.status.value})"
                )

            with self._lock:
                employee = self._employee_or_raise(resignation.employee_id)
                ex_employee, completed = apply_resignation_processing(
                    employee, resignation, processed_by, self._today()
                )
                self._ex_employees.append(ex_employee)
                del self._employees[employee.id]
                self._resignations[resignation_id] = completed

        logger.info(
            f"Resignation {resignation_id} processed: {employee.id} moved to alumni "
            f"after {ex_employee.years_of_service} years"
        )
        return completed.model_copy(deep=True)

    def get_resignation(self, resignation_id: str) -> ResignationRequest:
        with self._lock:
            return self._resignation_or_raise(resignation_id).model_copy(deep=True)

    def list_resignations(self, status: Optional[str] = None) -> List[ResignationRequest]:
        with self._lock:
            resignations = list(self._resignations.values())
        selected = [
            r for r in resignations
            if not status or r.status.value.lower() == status.lower()
        ]
        selected.sort(key=lambda r: r.applied_on, reverse=True)
        return [r.model_copy(deep=True) for r in selected]

    def list_ex_employees(
        self,
        department: Optional[str] = None,
        faculty: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[ExEmployee]:
        with self._lock:
            alumni = list(self._ex_employees)
        # ExEmployee is frozen, no copy needed
        return [
            x for x in alumni
            if (not department or x.department == department)
            and (not faculty or x.faculty == faculty)
            and _matches(search, x.name, x.email)
        ]

    # ------------------------------------------------------------------
    # Snapshot documents
    # ------------------------------------------------------------------
    def to_document(self) -> Dict[str, List[Dict[str, Any]]]:
        """One JSON-ready list per logical store."""
        with self._lock:
            return {
                "employees": [e.model_dump(mode="json") for e in self._employees.values()],
                "leaves": [leave.model_dump(mode="json") for leave in self._leaves.values()],
                "promotions": [p.model_dump(mode="json") for p in self._promotions.values()],
                "resignations": [r.model_dump(mode="json") for r in self._resignations.values()],
                "ex_employees": [x.model_dump(mode="json") for x in self._ex_employees],
            }

    def load_document(self, document: Dict[str, List[Dict[str, Any]]]) -> None:
        """Replace every collection with the contents of a snapshot."""
        employees = [Employee.model_validate(e) for e in document.get("employees", [])]
        leaves = [LeaveRequest.model_validate(leave) for leave in document.get("leaves", [])]
        promotions = [PromotionRequest.model_validate(p) for p in document.get("promotions", [])]
        resignations = [ResignationRequest.model_validate(r) for r in document.get("resignations", [])]
        ex_employees = [ExEmployee.model_validate(x) for x in document.get("ex_employees", [])]

        with self._lock:
            self._employees = {e.id: e for e in employees}
            self._leaves = {leave.id: leave for leave in leaves}
            self._promotions = {p.id: p for p in promotions}
            self._resignations = {r.id: r for r in resignations}
            self._ex_employees = ex_employees

        logger.info(
            f"Loaded snapshot: {len(employees)} employees, {len(leaves)} leaves, "
            f"{len(promotions)} promotions, {len(resignations)} resignations, "
            f"{len(ex_employees)} alumni"
        )

    def is_empty(self) -> bool:
        with self._lock:
            return not (self._employees or self._leaves or self._promotions
                        or self._resignations or self._ex_employees)
