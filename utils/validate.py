from collections import Counter
from typing import List, Sequence

from core.models import DutySlotType, SchedulerConfig, StaffMember, UnitConstraint
from exceptions.custom_errors import InputMismatchError
from utils.shift_utils import days_in_month


def validate_identifiers(staff: Sequence[StaffMember], slot_types: Sequence[DutySlotType]):
    """
    Validate identifier uniqueness of staff and slot types.

    Raises:
        InputMismatchError: If a staff id or slot type id appears more than once.
    """
    msg = []
    dup_staff = sorted(i for i, n in Counter(s.id for s in staff).items() if n > 1)
    dup_slots = sorted(i for i, n in Counter(s.id for s in slot_types).items() if n > 1)
    if dup_staff:
        msg.append(f"     • Duplicate staff ids: {', '.join(dup_staff)}\n")
    if dup_slots:
        msg.append(f"     • Duplicate service ids: {', '.join(dup_slots)}\n")
    if msg:
        msg.insert(0, "⚠️ Identifiers must be unique:\n")
        raise InputMismatchError("\n".join(msg))


def validate_input_params(
    staff: Sequence[StaffMember],
    slot_types: Sequence[DutySlotType],
    constraints: Sequence[UnitConstraint],
    config: SchedulerConfig,
) -> List[str]:
    """
    Collect warnings about inputs the engine will tolerate but that probably
    do not do what the user meant. Nothing here stops generation.
    """
    warnings = []
    num_days = days_in_month(config.year, config.month)
    units = {s.unit for s in staff}

    for person in staff:
        stray = sorted(d for d in person.unavailable_days | person.requested_days if not 1 <= d <= num_days)
        if stray:
            warnings.append(f" • {person.name}: days {stray} fall outside the month and are ignored.\n")
        if person.quota == 0:
            warnings.append(f" • {person.name} has a quota of 0 and will never be scheduled.\n")

    for slot in slot_types:
        if slot.min_staff > slot.max_staff:
            warnings.append(f" • {slot.name}: minimum ({slot.min_staff}) exceeds maximum ({slot.max_staff}).\n")
        unknown = sorted(slot.allowed_units - units)
        if unknown:
            warnings.append(f" • {slot.name}: no staff belong to {', '.join(unknown)}.\n")

    for c in constraints:
        if not c.allowed_days:
            warnings.append(f" • Constraint for {c.name} allows no weekday at all.\n")

    required = sum(s.min_staff for s in slot_types)
    if config.daily_total_target and config.daily_total_target < required:
        warnings.append(
            f" • Daily target ({config.daily_total_target}) is below the summed minimums ({required}); "
            "target balancing will not run.\n"
        )

    if warnings:
        warnings.insert(0, "Recheck your inputs:\n")
    return warnings
