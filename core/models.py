from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, List, Optional, Tuple

from utils.constants import ANY_GROUP, EMPTY_STAFF_ID


class SeniorityTier(IntEnum):
    SENIOR = 1
    EXPERIENCED = 2
    JUNIOR = 3


class Specialty(str, Enum):
    NONE = "none"
    TRANSPLANT = "transplant"
    WOUND = "wound"

    @property
    def display_name(self) -> str:
        return SPECIALTY_DISPLAY_NAMES[self]

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["Specialty"]:
        """Resolve a tag or display name (case-insensitive) to a Specialty, or None if unknown."""
        if label is None:
            return None
        key = str(label).strip().lower()
        if not key:
            return cls.NONE
        for member, display in SPECIALTY_DISPLAY_NAMES.items():
            if key in (member.value, display.lower()):
                return member
        return None


SPECIALTY_DISPLAY_NAMES: Dict[Specialty, str] = {
    Specialty.NONE: "None",
    Specialty.TRANSPLANT: "Transplant",
    Specialty.WOUND: "Wound Care",
}

# Lower rank is scheduled first by the day order planner
SPECIALTY_PRIORITY: Dict[Specialty, int] = {
    Specialty.TRANSPLANT: 1,
    Specialty.WOUND: 2,
}


class ConstraintKind(str, Enum):
    UNIT = "unit"
    SPECIALTY = "specialty"


@dataclass(frozen=True)
class StaffMember:
    id: str
    name: str
    tier: SeniorityTier
    unit: str
    quota: int
    weekend_limit: int
    specialty: Specialty = Specialty.NONE
    room: str = ""
    group: str = ""
    unavailable_days: FrozenSet[int] = frozenset()
    requested_days: FrozenSet[int] = frozenset()
    active: bool = True

    @property
    def is_junior(self) -> bool:
        return self.tier == SeniorityTier.JUNIOR


@dataclass(frozen=True)
class DutySlotType:
    id: str
    name: str
    min_staff: int
    max_staff: int
    allowed_units: FrozenSet[str] = frozenset()
    preferred_group: str = ANY_GROUP
    is_emergency: bool = False

    @property
    def has_group_affinity(self) -> bool:
        return bool(self.preferred_group) and self.preferred_group.lower() != ANY_GROUP


@dataclass(frozen=True)
class UnitConstraint:
    """Weekdays (0=Sunday..6=Saturday) on which staff of a unit or specialty may be used."""

    kind: ConstraintKind
    name: str
    allowed_days: FrozenSet[int]
    specialty: Optional[Specialty] = None

    @classmethod
    def for_label(cls, label: str, allowed_days) -> "UnitConstraint":
        """Build a constraint from a raw unit-or-specialty label."""
        label = str(label).strip()
        specialty = Specialty.from_label(label)
        if specialty is not None and specialty != Specialty.NONE:
            return cls(ConstraintKind.SPECIALTY, specialty.value, frozenset(allowed_days), specialty)
        return cls(ConstraintKind.UNIT, label, frozenset(allowed_days))

    def allows(self, weekday: int) -> bool:
        return weekday in self.allowed_days


@dataclass(frozen=True)
class SchedulerConfig:
    year: int
    month: int
    max_retries: int
    randomize_order: bool = False
    prevent_every_other_day: bool = False
    daily_total_target: int = 0
    seed: Optional[int] = None


@dataclass(frozen=True)
class Assignment:
    day: int
    slot_type_id: str
    staff_id: str
    staff_name: str
    tier: int
    unit: str
    is_emergency: bool = False

    @property
    def is_empty(self) -> bool:
        return self.staff_id == EMPTY_STAFF_ID


@dataclass
class DayPlan:
    day: int
    assignments: List[Assignment]
    is_weekend: bool


@dataclass
class StaffStatistics:
    staff_id: str
    total: int = 0
    ordinary: int = 0
    emergency: int = 0
    weekend: int = 0
    saturday: int = 0
    sunday: int = 0


@dataclass
class ScheduleResult:
    year: int
    month: int
    days: List[DayPlan]
    unfilled_slots: int
    logs: List[str]
    stats: List[StaffStatistics]
    attempts: int = 1
    best_attempt: int = 0
    deviation: int = 0

    def stats_by_staff(self) -> Dict[str, StaffStatistics]:
        return {s.staff_id: s for s in self.stats}

    def day(self, day: int) -> DayPlan:
        return self.days[day - 1]

    def assignments(self) -> List[Tuple[int, Assignment]]:
        """Flatten into (day, assignment) pairs, sentinels included."""
        return [(plan.day, a) for plan in self.days for a in plan.assignments]
