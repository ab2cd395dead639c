"""
Static reference data for the university HR domain.

Leave types, the ordered designation (promotion) path and the
faculty -> department map. Consumed by validation, routing and seeding.
"""
import enum
from dataclasses import dataclass
from typing import Dict, List, Optional


class ChainKind(str, enum.Enum):
    """Approval routing family a leave type belongs to."""
    STANDARD = "standard"
    MEDICAL = "medical"


@dataclass(frozen=True)
class LeaveTypeInfo:
    id: str
    label: str
    chain_kind: ChainKind = ChainKind.STANDARD
    # Days granted on registration; None means the type is not balance-tracked
    default_days: Optional[int] = None


LEAVE_TYPES: Dict[str, LeaveTypeInfo] = {
    t.id: t for t in (
        LeaveTypeInfo("annual", "Annual", default_days=20),
        LeaveTypeInfo("sick", "Sick", default_days=12),
        LeaveTypeInfo("casual", "Casual", default_days=10),
        LeaveTypeInfo("medical", "Medical", chain_kind=ChainKind.MEDICAL),
        LeaveTypeInfo("maternity", "Maternity"),
        LeaveTypeInfo("unpaid", "Unpaid"),
    )
}

# Lowest to highest
DESIGNATIONS: List[str] = [
    "Teaching Assistant",
    "Lecturer",
    "Senior Lecturer",
    "Assistant Professor",
    "Associate Professor",
    "Professor",
]

FACULTIES: Dict[str, List[str]] = {
    "Computing": ["CS", "SE", "IT", "AI"],
    "Engineering": ["EE", "ME", "CE"],
    "Management Sciences": ["BBA", "Accounting & Finance", "HR"],
    "Social Sciences": ["Psychology", "English", "Media Studies"],
}


def normalize_leave_type(value: str) -> str:
    """Map labels such as 'Annual' onto catalog ids."""
    return (value or "").strip().lower()


def get_leave_type(leave_type: str) -> Optional[LeaveTypeInfo]:
    return LEAVE_TYPES.get(normalize_leave_type(leave_type))


def chain_kind_for(leave_type: str) -> ChainKind:
    info = get_leave_type(leave_type)
    return info.chain_kind if info else ChainKind.STANDARD


def default_leave_balance() -> Dict[str, int]:
    return {t.id: t.default_days for t in LEAVE_TYPES.values() if t.default_days is not None}


def designation_rank(designation: str) -> int:
    """Position on the promotion path, -1 when unknown."""
    try:
        return DESIGNATIONS.index(designation)
    except ValueError:
        return -1


def next_designation(designation: str) -> Optional[str]:
    rank = designation_rank(designation)
    if rank < 0 or rank + 1 >= len(DESIGNATIONS):
        return None
    return DESIGNATIONS[rank + 1]
