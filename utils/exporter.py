from io import BytesIO
from pathlib import Path
from typing import IO, Optional, Sequence, Union

import pandas as pd

from core.models import DutySlotType, ScheduleResult, StaffMember
from scheduler.extractor import extract_calendar, extract_staff_view, extract_summary

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TEMPLATE_COLUMNS = [
    "Name",
    "Unit",
    "Room",
    "Tier",
    "Quota",
    "Weekend Limit",
    "Unavailable Days",
    "Requested Days",
    "Specialty",
    "Group",
]


def staff_template_frame() -> pd.DataFrame:
    """An example staff sheet in the layout `utils.loader.load_staff_profiles` reads."""
    example = {
        "Name": "Example Nurse",
        "Unit": "General Surgery",
        "Room": "1",
        "Tier": 2,
        "Quota": 7,
        "Weekend Limit": 2,
        "Unavailable Days": "1,2,3",
        "Requested Days": "15,20",
        "Specialty": "none",
        "Group": "",
    }
    return pd.DataFrame([example], columns=TEMPLATE_COLUMNS)


def export_filename(result: ScheduleResult) -> str:
    return f"duty_roster_{result.year}_{result.month:02d}.xlsx"


def write_schedule_workbook(
    result: ScheduleResult,
    slot_types: Sequence[DutySlotType],
    staff: Sequence[StaffMember],
    target: Union[str, Path, IO, None] = None,
) -> Optional[BytesIO]:
    """
    Write the roster as an Excel workbook with three sheets: the calendar view
    (one column per service), the per-staff view (one column per day) and the
    per-staff summary.

    If `target` is None the workbook is written to a new buffer, rewound and returned.
    """
    buffer = BytesIO() if target is None else None
    sheets = {
        "Roster": extract_calendar(result, slot_types),
        "By Staff": extract_staff_view(result, staff),
        "Summary": extract_summary(result, staff),
    }
    with pd.ExcelWriter(buffer if target is None else target, engine="xlsxwriter") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            worksheet = writer.sheets[sheet_name]
            for col_idx, column in enumerate(df.columns):
                width = 4 if sheet_name == "By Staff" and str(column).isdigit() else max(10, len(str(column)) + 2)
                worksheet.set_column(col_idx, col_idx, width)

    if buffer is not None:
        buffer.seek(0)
    return buffer


def write_staff_template(target: Union[str, Path, IO, None] = None) -> Optional[BytesIO]:
    buffer = BytesIO() if target is None else None
    staff_template_frame().to_excel(buffer if target is None else target, index=False, engine="xlsxwriter")
    if buffer is not None:
        buffer.seek(0)
    return buffer
