import pandas as pd
from datetime import date
from typing import Any, Dict, List, Sequence

from core.models import DutySlotType, ScheduleResult, StaffMember
from utils.shift_utils import weekday_label, weekday_of

EMPTY_LABEL = "!!! EMPTY !!!"
DUTY_LABEL = "DUTY"


def extract_calendar(result: ScheduleResult, slot_types: Sequence[DutySlotType]) -> pd.DataFrame:
    """One row per day, one column per service listing who is on duty."""
    rows = []
    for plan in result.days:
        weekday = weekday_of(result.year, result.month, plan.day)
        label = weekday_label(weekday)
        row = {
            "Date": date(result.year, result.month, plan.day).strftime("%d.%m.%Y"),
            "Day": f"{label} (WE)" if plan.is_weekend else label,
        }
        for slot in slot_types:
            names = [
                EMPTY_LABEL if a.is_empty else a.staff_name
                for a in plan.assignments
                if a.slot_type_id == slot.id
            ]
            row[slot.name] = ", ".join(names) if names else "-"
        rows.append(row)
    return pd.DataFrame(rows, columns=["Date", "Day"] + [s.name for s in slot_types])


def extract_staff_view(result: ScheduleResult, staff: Sequence[StaffMember]) -> pd.DataFrame:
    """One row per staff member (sorted by unit then name), one column per day."""
    stats = result.stats_by_staff()
    on_duty = {(day, a.staff_id) for day, a in result.assignments() if not a.is_empty}
    day_cols = [str(p.day) for p in result.days]

    rows = []
    for person in sorted(staff, key=lambda s: (s.unit, s.name)):
        row = {
            "Name": person.name,
            "Unit": person.unit,
            "Room": person.room,
            "Tier": int(person.tier),
            "Total": stats[person.id].total if person.id in stats else 0,
        }
        for plan in result.days:
            row[str(plan.day)] = DUTY_LABEL if (plan.day, person.id) in on_duty else ""
        rows.append(row)
    return pd.DataFrame(rows, columns=["Name", "Unit", "Room", "Tier", "Total"] + day_cols)


def extract_summary(result: ScheduleResult, staff: Sequence[StaffMember]) -> pd.DataFrame:
    """Per-staff statistics next to their quota and weekend limit."""
    stats = result.stats_by_staff()
    rows = []
    for person in staff:
        s = stats.get(person.id)
        if s is None:
            continue
        rows.append(
            {
                "id": person.id,
                "name": person.name,
                "tier": int(person.tier),
                "unit": person.unit,
                "quota": person.quota,
                "weekendLimit": person.weekend_limit,
                "total": s.total,
                "ordinary": s.ordinary,
                "emergency": s.emergency,
                "weekend": s.weekend,
                "saturday": s.saturday,
                "sunday": s.sunday,
                "deviation": abs(person.quota - s.ordinary),
            }
        )
    return pd.DataFrame(rows)


def extract_response(result: ScheduleResult, staff: Sequence[StaffMember]) -> Dict[str, Any]:
    """JSON-ready payload of a result."""
    schedule: List[Dict[str, Any]] = [
        {
            "day": plan.day,
            "isWeekend": plan.is_weekend,
            "assignments": [
                {
                    "serviceId": a.slot_type_id,
                    "staffId": a.staff_id,
                    "staffName": a.staff_name,
                    "tier": a.tier,
                    "unit": a.unit,
                    "isEmergency": a.is_emergency,
                }
                for a in plan.assignments
            ],
        }
        for plan in result.days
    ]
    return {
        "year": result.year,
        "month": result.month,
        "schedule": schedule,
        "staffSummary": extract_summary(result, staff).to_dict(orient="records"),
        "unfilledSlots": result.unfilled_slots,
        "logs": result.logs,
        "attempts": result.attempts,
        "bestAttempt": result.best_attempt,
        "deviation": result.deviation,
    }
