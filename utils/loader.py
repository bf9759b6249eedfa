import pandas as pd
from typing import Dict, Union, IO, List, Optional
from pathlib import Path
from pydantic import ValidationError
from config.paths import DATA_DIR
from exceptions.custom_errors import FileContentError, FileReadingError
from schemas.schedule.generate import StaffProfile
from utils.helpers.schedule_roster import standardize_staff_columns
from utils.shift_utils import parse_day_list

DEFAULT_TIER = 2


def _cell(value):
    """Treat NaN/blank cells as missing."""
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _row_payload(index: int, row: dict) -> dict:
    """Map a standardized sheet row to StaffProfile fields; raises ValueError on non-numeric cells."""
    payload = {
        "id": f"imp_{index}",
        "name": row["Name"],
        "unit": row["Unit"],
        "tier": int(_cell(row["Tier"]) or DEFAULT_TIER),
        "room": str(_cell(row["Room"]) or "").strip(),
        "specialty": str(_cell(row["Specialty"]) or "none").strip(),
        "group": str(_cell(row["Group"]) or "").strip(),
        "unavailableDays": sorted(parse_day_list(_cell(row["Unavailable Days"]))),
        "requestedDays": sorted(parse_day_list(_cell(row["Requested Days"]))),
    }
    # Room numbers typed as numbers come back as floats
    if payload["room"].endswith(".0"):
        payload["room"] = payload["room"][:-2]
    if _cell(row["Quota"]) is not None:
        payload["quota"] = int(row["Quota"])
    if _cell(row["Weekend Limit"]) is not None:
        payload["weekendLimit"] = int(row["Weekend Limit"])
    return payload


def load_staff_profiles(
    path_or_buffer: Union[str, Path, bytes, IO, None] = None,
    drop_duplicates: bool = True,
    tier_defaults: Optional[Dict[int, dict]] = None,
) -> List[StaffProfile]:
    """
    Load a staff list flexibly by matching columns containing 'name', 'unit', 'room', 'tier', 'quota', etc.

    Parameters:
        path_or_buffer: Path to Excel file or file-like object. Defaults to 'data/staff.xlsx'.
        drop_duplicates: Remove duplicate names if True, otherwise raise on duplicates.
        tier_defaults: Per-tier quota and weekend limit table (e.g. a workspace's); defaults to constants.json.

    Returns:
        List of validated StaffProfile objects. Rows get ids `imp_<row>` in sheet order.
        Missing tiers default to 2; missing quota and weekend limit fall back to the tier defaults.

    Raises:
        FileReadingError: If the file cannot be read as a spreadsheet.
        FileContentError: If a required column is missing, names are duplicated or a row is invalid.
    """
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / "staff.xlsx"

    try:
        df = pd.read_excel(path_or_buffer)
    except Exception as e:
        raise FileReadingError(f"Error loading staff list: {e}")

    try:
        df = standardize_staff_columns(df)
    except ValueError as e:
        raise FileContentError(f"Missing expected column: {e}")

    df = df[df["Name"].str.len() > 0]
    df = df[df["Name"].str.lower() != "nan"]

    if drop_duplicates:
        df = df.drop_duplicates(subset=["Name"])
    elif df.duplicated(subset=["Name"]).any():
        raise FileContentError("Duplicate staff names found.")

    context = {"tier_defaults": tier_defaults} if tier_defaults else None
    profiles = []
    for index, row in enumerate(df.to_dict(orient="records")):
        try:
            payload = _row_payload(index, row)
            profiles.append(StaffProfile.model_validate(payload, context=context))
        except (ValueError, ValidationError) as e:
            raise FileContentError(f"Invalid staff row {index + 2} ({row['Name']}): {e}")

    return profiles
