from core.models import DutySlotType, SeniorityTier, Specialty, StaffMember
from core.state import ScheduleState
from utils.shift_utils import month_weekdays

# June 2026 starts on a Monday: 6/13/20/27 are Saturdays, 7/14/21/28 Sundays
YEAR, MONTH = 2026, 6


def make_staff(
    id,
    tier=SeniorityTier.EXPERIENCED,
    unit="Surgery",
    quota=10,
    weekend_limit=10,
    **kwargs,
) -> StaffMember:
    return StaffMember(
        id=id,
        name=kwargs.pop("name", id.upper()),
        tier=SeniorityTier(tier),
        unit=unit,
        quota=quota,
        weekend_limit=weekend_limit,
        specialty=kwargs.pop("specialty", Specialty.NONE),
        room=kwargs.pop("room", ""),
        group=kwargs.pop("group", ""),
        unavailable_days=frozenset(kwargs.pop("unavailable_days", ())),
        requested_days=frozenset(kwargs.pop("requested_days", ())),
        active=kwargs.pop("active", True),
    )


def make_slot(id="s1", min_staff=1, max_staff=1, allowed_units=(), **kwargs) -> DutySlotType:
    return DutySlotType(
        id=id,
        name=kwargs.pop("name", f"Service {id}"),
        min_staff=min_staff,
        max_staff=max_staff,
        allowed_units=frozenset(allowed_units),
        **kwargs,
    )


def fresh_state(staff, year=YEAR, month=MONTH, num_days=None) -> ScheduleState:
    weekdays = month_weekdays(year, month)
    if num_days is not None:
        weekdays = weekdays[:num_days]
    return ScheduleState.fresh(year, month, weekdays, staff)
