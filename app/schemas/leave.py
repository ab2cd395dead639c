from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Dict, List, Optional
import enum

from app.schemas.employee import EmployeeSnapshot


class LeaveStatus(str, enum.Enum):
    PENDING = "Pending"
    FORWARDED = "Forwarded"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ApprovalRole(str, enum.Enum):
    HOD = "hod"
    DEAN = "dean"
    HR = "hr"
    VC = "vc"
    PRESIDENT = "president"


class StepStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveDecision(str, enum.Enum):
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value) -> "LeaveDecision":
        """Accepts 'Approved', 'approve', 'REJECTED' and similar spellings."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        aliases = {"approve": "approved", "reject": "rejected"}
        return cls(aliases.get(text, text))


class ApprovalStep(BaseModel):
    role: ApprovalRole
    status: StepStatus = StepStatus.PENDING
    by: Optional[str] = None
    acted_on: Optional[date] = None
    comment: Optional[str] = None
    # Only populated on the chain's split / categorization authority
    paid_days: Optional[int] = None
    unpaid_days: Optional[int] = None
    leave_category: Optional[str] = None


class LeaveRequest(BaseModel):
    id: str
    employee_id: str
    employee: EmployeeSnapshot
    type: str
    start_date: date
    end_date: date
    days: int
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    applied_on: date
    approval_chain: Optional[List[ApprovalStep]] = None
    current_approver: Optional[ApprovalRole] = None
    paid_days: Optional[int] = None
    unpaid_days: Optional[int] = None
    leave_category: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_on: Optional[date] = None
    expected_delivery_date: Optional[date] = None

    @property
    def is_final(self) -> bool:
        return self.status in (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveRequestCreate(BaseModel):
    employee_id: str
    type: str
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1)
    expected_delivery_date: Optional[date] = None


class DecisionMetadata(BaseModel):
    paid_days: Optional[int] = Field(None, ge=0)
    unpaid_days: Optional[int] = Field(None, ge=0)
    leave_category: Optional[str] = None


class LeaveDecisionRequest(BaseModel):
    role: ApprovalRole
    decision: LeaveDecision
    approver_name: str = Field(..., min_length=1)
    comment: Optional[str] = None
    metadata: Optional[DecisionMetadata] = None

    @field_validator("role", mode="before")
    @classmethod
    def _lower_role(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("decision", mode="before")
    @classmethod
    def _parse_decision(cls, value):
        try:
            return LeaveDecision.parse(value)
        except ValueError:
            return value


class NoticeValidationRequest(BaseModel):
    expected_delivery_date: Optional[date] = None
    application_date: Optional[date] = None


class NoticeValidationResponse(BaseModel):
    valid: bool
    days_in_advance: Optional[int] = None
    min_required: int
    reason: str


class LeaveStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_type: Dict[str, int]
