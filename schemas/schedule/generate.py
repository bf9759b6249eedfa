from pydantic import BaseModel, model_validator, Field, ConfigDict, ValidationInfo
from typing import Dict, List, Optional, Any
from utils.constants import *
from utils.shift_utils import days_in_month, parse_day_list
from core.models import Specialty


# Define data models
class TierLimits(BaseModel):
    quota: int = Field(ge=0)
    weekendLimit: int = Field(ge=0)


def default_tier_limits() -> Dict[int, TierLimits]:
    return {tier: TierLimits(**limits) for tier, limits in TIER_DEFAULTS.items()}


def tier_defaults_table(tier_defaults: Dict[int, TierLimits]) -> Dict[int, dict]:
    """Plain `{tier: {"quota", "weekendLimit"}}` table as read by `StaffProfile` validation."""
    return {int(tier): limits.model_dump() for tier, limits in tier_defaults.items()}


def fill_staff_limits(staff: Any, tier_defaults: Any) -> None:
    """Set missing quota/weekendLimit on raw staff dicts from a raw or validated tier table."""
    if not isinstance(tier_defaults, dict):
        return
    table = {
        int(tier): dict(limits)
        for tier, limits in tier_defaults.items()
        if isinstance(limits, (dict, BaseModel))
    }
    for person in staff or []:
        if not isinstance(person, dict) or not str(person.get("tier")).isdigit():
            continue
        for key, value in table.get(int(person["tier"]), {}).items():
            person.setdefault(key, value)


class StaffProfile(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    tier: int = Field(ge=1, le=3)
    unit: str
    specialty: str = "none"
    room: str = ""
    group: str = ""
    quota: int = Field(ge=0)
    weekendLimit: int = Field(ge=0)
    unavailableDays: List[int] = []
    requestedDays: List[int] = []
    isActive: bool = True

    @model_validator(mode="before")
    @classmethod
    def fill_tier_defaults(cls, values: Any, info: ValidationInfo) -> Any:
        """
        Model validator to fill quota and weekendLimit from the per-tier defaults when they are missing.
        The defaults come from the `tier_defaults` validation context (a workspace's own table); tiers it does
        not list fall back to TIER_DEFAULTS from constants.json.

        Day lists may also arrive as comma separated strings (as typed into a spreadsheet cell), e.g. "1, 2, 15";
        they are parsed into lists of ints here.
        """
        if not isinstance(values, dict):
            return values
        tier = values.get("tier")
        table = (info.context or {}).get("tier_defaults") or {}
        defaults = (table.get(int(tier)) or TIER_DEFAULTS.get(int(tier))) if str(tier).isdigit() else None
        if defaults:
            values.setdefault("quota", defaults["quota"])
            values.setdefault("weekendLimit", defaults["weekendLimit"])
        for key in ("unavailableDays", "requestedDays"):
            if isinstance(values.get(key), str):
                values[key] = sorted(parse_day_list(values[key]))
        return values

    @model_validator(mode="after")
    def check_specialty(self) -> "StaffProfile":
        if Specialty.from_label(self.specialty) is None:
            raise ValueError(f"Unknown specialty {self.specialty!r} for staff {self.name}.")
        return self


class ServiceDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    minDailyCount: int = Field(ge=0)
    maxDailyCount: int = Field(ge=0)
    allowedUnits: List[str] = []
    preferredGroup: str = ANY_GROUP
    isEmergency: bool = False

    @model_validator(mode="after")
    def check_counts(self) -> "ServiceDefinition":
        if self.minDailyCount > self.maxDailyCount:
            raise ValueError(
                f"minDailyCount ({self.minDailyCount}) must not exceed maxDailyCount ({self.maxDailyCount}) for service {self.name}."
            )
        return self


class UnitConstraintSpec(BaseModel):
    model_config = ConfigDict(extra="allow")

    unit: str  # a unit name or a specialty tag/display name
    allowedDays: List[int]

    @model_validator(mode="after")
    def check_weekdays(self) -> "UnitConstraintSpec":
        bad = [d for d in self.allowedDays if not 0 <= d <= 6]
        if bad:
            raise ValueError(f"allowedDays must be weekdays 0 (Sunday) to 6 (Saturday); got {bad} for {self.unit}.")
        return self


class ScheduleConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    year: int = Field(ge=1900, le=9999)
    month: int = Field(ge=1, le=12)
    maxRetries: int = Field(default=DEFAULT_MAX_RETRIES)
    randomizeOrder: bool = False
    preventEveryOtherDay: bool = False
    dailyTotalTarget: int = Field(default=DEFAULT_DAILY_TARGET, ge=0)
    seed: Optional[int] = None


class ScheduleRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    staff: List[StaffProfile]
    services: List[ServiceDefinition]
    constraints: List[UnitConstraintSpec] = []
    config: ScheduleConfig
    tierDefaults: Dict[int, TierLimits] = Field(default_factory=default_tier_limits)

    @model_validator(mode="before")
    @classmethod
    def apply_tier_defaults(cls, values: Any) -> Any:
        """Staff without quota or weekendLimit take them from the request's own tierDefaults, when given."""
        if isinstance(values, dict) and values.get("tierDefaults"):
            fill_staff_limits(values.get("staff"), values["tierDefaults"])
        return values

    @model_validator(mode="after")
    def validate_days_in_month(self) -> "ScheduleRequest":
        num_days = days_in_month(self.config.year, self.config.month)
        for person in self.staff:
            stray = [d for d in person.unavailableDays + person.requestedDays if not 1 <= d <= num_days]
            if stray:
                raise ValueError(
                    f"Days {stray} for {person.name} are outside {self.config.year}-{self.config.month:02d} (1-{num_days})."
                )
        return self
