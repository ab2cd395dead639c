from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, Optional
import enum

from app.schemas.employee import EmployeeSnapshot


class PromotionStatus(str, enum.Enum):
    PENDING = "Pending"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PromotionDecision(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


class CommitteeReview(BaseModel):
    meeting_date: date
    notes: Optional[str] = None
    scheduled_by: str
    scheduled_on: date


class HRDecision(BaseModel):
    decision: PromotionDecision
    notes: Optional[str] = None
    decided_by: str
    decided_on: date


class PromotionRequest(BaseModel):
    id: str
    employee_id: str
    employee: EmployeeSnapshot
    current_designation: str
    requested_designation: str
    justification: str
    status: PromotionStatus = PromotionStatus.PENDING
    applied_on: date
    committee_review: Optional[CommitteeReview] = None
    hr_decision: Optional[HRDecision] = None
    approved_on: Optional[date] = None


class PromotionRequestCreate(BaseModel):
    employee_id: str
    # Defaults to the next step on the designation path
    requested_designation: Optional[str] = None
    justification: str = Field(..., min_length=1)


class CommitteeScheduleRequest(BaseModel):
    meeting_date: date
    notes: Optional[str] = None
    scheduled_by: str = Field(..., min_length=1)


class PromotionDecisionRequest(BaseModel):
    decision: PromotionDecision
    approver_name: str = Field(..., min_length=1)
    comment: Optional[str] = None


class PromotionStats(BaseModel):
    total: int
    by_status: Dict[str, int]
