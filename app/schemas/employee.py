from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from datetime import date
from typing import Annotated, Dict, Optional
import enum

from app.core.catalogs import LEAVE_TYPES


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class EmploymentStatus(str, enum.Enum):
    PROBATION = "probation"
    CONFIRMED = "confirmed"


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    RESIGNED = "Resigned"


def _check_leave_balance(value: Optional[Dict[str, int]]) -> Optional[Dict[str, int]]:
    if value is None:
        return value
    unknown = [k for k in value if k not in LEAVE_TYPES]
    if unknown:
        raise ValueError(f"Unknown leave types in balance: {', '.join(sorted(unknown))}")
    negative = [k for k, v in value.items() if v < 0]
    if negative:
        raise ValueError(f"Leave balance cannot be negative: {', '.join(sorted(negative))}")
    return value


LeaveBalance = Annotated[Dict[str, int], AfterValidator(_check_leave_balance)]


class Employee(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    code: str
    name: str
    email: EmailStr
    gender: Gender
    department: str
    faculty: str
    designation: str
    join_date: date
    employment_status: EmploymentStatus = EmploymentStatus.PROBATION
    probation_end_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    salary_base: float = 0.0
    leave_balance: LeaveBalance = {}


class EmployeeCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: EmailStr
    gender: Gender
    department: str = "CS"
    faculty: str = "Computing"
    designation: str = "Lecturer"
    join_date: date = Field(default_factory=date.today)
    employment_status: EmploymentStatus = EmploymentStatus.PROBATION
    salary_base: float = Field(0.0, ge=0)
    leave_balance: Optional[LeaveBalance] = None


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    department: Optional[str] = None
    faculty: Optional[str] = None
    designation: Optional[str] = None
    employment_status: Optional[EmploymentStatus] = None
    status: Optional[EmployeeStatus] = None
    salary_base: Optional[float] = Field(None, ge=0)
    leave_balance: Optional[LeaveBalance] = None


class EmployeeSnapshot(BaseModel):
    """Employee details frozen at request creation for historical display."""
    model_config = ConfigDict(frozen=True)

    employee_name: str
    department: str
    faculty: str
    designation: str

    @classmethod
    def of(cls, employee: Employee) -> "EmployeeSnapshot":
        return cls(
            employee_name=employee.name,
            department=employee.department,
            faculty=employee.faculty,
            designation=employee.designation,
        )


class MaternityEligibilityResponse(BaseModel):
    eligible: bool
    reason: str


class EmployeeStats(BaseModel):
    total: int
    by_department: Dict[str, int]
    by_faculty: Dict[str, int]
    by_status: Dict[str, int]
