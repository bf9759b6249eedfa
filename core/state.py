from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from core.models import Assignment, DutySlotType, StaffMember, StaffStatistics
from utils.constants import EMPTY_STAFF_ID, LOG_CAPACITY, SATURDAY, SUNDAY
from utils.shift_utils import is_weekend_weekday


@dataclass
class ScheduleState:
    """
    All mutable state of one simulation attempt. Created fresh per attempt and
    never shared between attempts; the engine inputs stay read-only.
    """

    year: int
    """The target year."""
    month: int
    """The target month (1-12)."""
    num_days: int
    """The number of days in the month."""
    weekdays: List[int]
    """Weekday index (0=Sunday..6=Saturday) per day; position 0 is day 1."""
    day_assignments: Dict[int, List[Assignment]]
    """Assignments per day, EMPTY sentinels included."""
    staff_ids_by_day: Dict[int, Set[str]]
    """Ids of staff holding a real assignment per day."""
    stats: Dict[str, StaffStatistics]
    """Running statistics per staff id."""
    unfilled_slots: int = 0
    """Number of EMPTY sentinels recorded so far."""
    logs: List[str] = field(default_factory=list)
    """Diagnostic messages, capped at LOG_CAPACITY."""

    @classmethod
    def fresh(cls, year: int, month: int, weekdays: List[int], staff: List[StaffMember]) -> "ScheduleState":
        num_days = len(weekdays)
        return cls(
            year=year,
            month=month,
            num_days=num_days,
            weekdays=list(weekdays),
            day_assignments={d: [] for d in range(1, num_days + 1)},
            staff_ids_by_day={d: set() for d in range(1, num_days + 1)},
            stats={s.id: StaffStatistics(staff_id=s.id) for s in staff},
        )

    def weekday(self, day: int) -> int:
        return self.weekdays[day - 1]

    def is_weekend(self, day: int) -> bool:
        return is_weekend_weekday(self.weekday(day))

    def has_shift_on_day(self, day: int, staff_id: str) -> bool:
        """Days outside the month never hold shifts."""
        worked = self.staff_ids_by_day.get(day)
        return worked is not None and staff_id in worked

    def occupied(self, day: int, slot_type_id: str) -> int:
        """Positions taken in a slot type on a day, sentinels included."""
        return sum(1 for a in self.day_assignments[day] if a.slot_type_id == slot_type_id)

    def filled(self, day: int, slot_type_id: Optional[str] = None) -> int:
        """Real (non-sentinel) assignments on a day, optionally for one slot type."""
        return sum(
            1
            for a in self.day_assignments[day]
            if not a.is_empty and (slot_type_id is None or a.slot_type_id == slot_type_id)
        )

    def record_assignment(self, day: int, slot_type: DutySlotType, person: StaffMember) -> Assignment:
        assignment = Assignment(
            day=day,
            slot_type_id=slot_type.id,
            staff_id=person.id,
            staff_name=person.name,
            tier=int(person.tier),
            unit=person.unit,
            is_emergency=slot_type.is_emergency,
        )
        self.day_assignments[day].append(assignment)
        self.staff_ids_by_day[day].add(person.id)

        stats = self.stats[person.id]
        weekday = self.weekday(day)
        stats.total += 1
        stats.ordinary += 1
        if slot_type.is_emergency:
            stats.emergency += 1
        if is_weekend_weekday(weekday):
            stats.weekend += 1
        if weekday == SATURDAY:
            stats.saturday += 1
        if weekday == SUNDAY:
            stats.sunday += 1
        return assignment

    def record_empty(self, day: int, slot_type: DutySlotType) -> Assignment:
        assignment = Assignment(
            day=day,
            slot_type_id=slot_type.id,
            staff_id=EMPTY_STAFF_ID,
            staff_name=f"EMPTY (min {slot_type.min_staff})",
            tier=0,
            unit="-",
            is_emergency=slot_type.is_emergency,
        )
        self.day_assignments[day].append(assignment)
        self.unfilled_slots += 1
        return assignment

    def log(self, message: str) -> None:
        if len(self.logs) < LOG_CAPACITY:
            self.logs.append(message)
