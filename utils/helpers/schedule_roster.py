import pandas as pd
from typing import List

from core.models import (
    DutySlotType,
    SchedulerConfig,
    SeniorityTier,
    Specialty,
    StaffMember,
    UnitConstraint,
)
from schemas.schedule.generate import (
    ScheduleConfig,
    ScheduleRequest,
    ServiceDefinition,
    StaffProfile,
    UnitConstraintSpec,
)

# Standard column name -> candidate header substrings (lower-case)
STAFF_COLUMNS = {
    "Name": ("name",),
    "Unit": ("unit", "department"),
    "Room": ("room",),
    "Tier": ("tier", "seniority", "level"),
    "Quota": ("quota", "target"),
    "Weekend Limit": ("weekend",),
    "Unavailable Days": ("unavailable", "leave", "off"),
    "Requested Days": ("request",),
    "Specialty": ("specialty", "speciality"),
    "Group": ("group",),
}
REQUIRED_STAFF_COLUMNS = ("Name", "Unit")


def standardize_staff_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Standardize the column names of a staff list DataFrame.

    The function builds a dictionary mapping lower-case, stripped column names to the original column names,
    then looks for an exact match of each standard name before falling back to a substring match on the
    candidates in STAFF_COLUMNS. Name and Unit are required; any other missing column is added empty so
    later steps can rely on it being there.
    """
    col_map = {str(col).lower().strip(): col for col in df.columns}
    taken = set()

    def find_col(standard: str, *candidates: str):
        # Try exact match first
        if standard.lower() in col_map and col_map[standard.lower()] not in taken:
            return col_map[standard.lower()]
        # Then try substring match
        for lower, original in col_map.items():
            if original not in taken and any(c in lower for c in candidates):
                return original
        return None

    out = pd.DataFrame(index=df.index)
    for standard, candidates in STAFF_COLUMNS.items():
        src = find_col(standard, *candidates)
        if src is None:
            if standard in REQUIRED_STAFF_COLUMNS:
                raise ValueError(f"No column matching {standard!r} in {list(df.columns)}")
            out[standard] = None
            continue
        taken.add(src)
        out[standard] = df[src]

    out["Name"] = out["Name"].astype(str).str.strip()
    out["Unit"] = out["Unit"].astype(str).str.strip()
    return out


def to_staff_member(profile: StaffProfile) -> StaffMember:
    return StaffMember(
        id=profile.id,
        name=profile.name,
        tier=SeniorityTier(profile.tier),
        unit=profile.unit.strip(),
        quota=profile.quota,
        weekend_limit=profile.weekendLimit,
        specialty=Specialty.from_label(profile.specialty) or Specialty.NONE,
        room=profile.room.strip(),
        group=profile.group.strip(),
        unavailable_days=frozenset(profile.unavailableDays),
        requested_days=frozenset(profile.requestedDays),
        active=profile.isActive,
    )


def to_slot_type(service: ServiceDefinition) -> DutySlotType:
    return DutySlotType(
        id=service.id,
        name=service.name,
        min_staff=service.minDailyCount,
        max_staff=service.maxDailyCount,
        allowed_units=frozenset(u.strip() for u in service.allowedUnits if u.strip()),
        preferred_group=service.preferredGroup,
        is_emergency=service.isEmergency,
    )


def to_unit_constraint(spec: UnitConstraintSpec) -> UnitConstraint:
    return UnitConstraint.for_label(spec.unit, spec.allowedDays)


def to_scheduler_config(config: ScheduleConfig) -> SchedulerConfig:
    return SchedulerConfig(
        year=config.year,
        month=config.month,
        max_retries=config.maxRetries,
        randomize_order=config.randomizeOrder,
        prevent_every_other_day=config.preventEveryOtherDay,
        daily_total_target=config.dailyTotalTarget,
        seed=config.seed,
    )


def unpack_request(request: ScheduleRequest):
    """Convert a validated request into engine inputs: (staff, slot_types, constraints, config)."""
    staff: List[StaffMember] = [to_staff_member(p) for p in request.staff]
    slot_types: List[DutySlotType] = [to_slot_type(s) for s in request.services]
    constraints: List[UnitConstraint] = [to_unit_constraint(c) for c in request.constraints]
    return staff, slot_types, constraints, to_scheduler_config(request.config)
