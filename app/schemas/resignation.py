from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import date
from typing import Optional
import enum

from app.schemas.employee import EmployeeSnapshot


class ResignationStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    COMPLETED = "Completed"


class HandoverStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class ExitSurvey(BaseModel):
    primary_reason: Optional[str] = None
    satisfaction_rating: Optional[int] = Field(None, ge=1, le=5)
    would_recommend: Optional[bool] = None
    would_return: Optional[bool] = None
    feedback: Optional[str] = None


class ResignationRequest(BaseModel):
    id: str
    employee_id: str
    employee: EmployeeSnapshot
    reason: str
    notice_period: int
    last_working_date: date
    status: ResignationStatus = ResignationStatus.PENDING
    applied_on: date
    exit_survey: Optional[ExitSurvey] = None
    handover_status: HandoverStatus = HandoverStatus.PENDING
    approved_by: Optional[str] = None
    approved_on: Optional[date] = None
    comment: Optional[str] = None
    processed_by: Optional[str] = None
    processed_on: Optional[date] = None


class ResignationRequestCreate(BaseModel):
    employee_id: str
    reason: str = Field(..., min_length=1)
    notice_period: int = Field(30, ge=0)
    last_working_date: date
    exit_survey: Optional[ExitSurvey] = None


class ResignationApprovalRequest(BaseModel):
    approver_name: str = Field(..., min_length=1)
    comment: Optional[str] = None


class HandoverUpdateRequest(BaseModel):
    handover_status: HandoverStatus


class ProcessResignationRequest(BaseModel):
    processed_by: Optional[str] = None


class ExEmployee(BaseModel):
    """Alumni record; written once when a resignation is processed."""
    model_config = ConfigDict(frozen=True)

    id: str
    employee_id: str
    name: str
    email: EmailStr
    department: str
    faculty: str
    designation: str
    join_date: date
    exit_date: date
    years_of_service: int
    exit_reason: str
    exit_survey: Optional[ExitSurvey] = None
