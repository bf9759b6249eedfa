import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from config.paths import WORKSPACE_PATH
from exceptions.custom_errors import FileContentError, PresetNotFoundError
from schemas.schedule.generate import (
    ScheduleConfig,
    ServiceDefinition,
    StaffProfile,
    TierLimits,
    UnitConstraintSpec,
    default_tier_limits,
    fill_staff_limits,
    tier_defaults_table,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class Preset(BaseModel):
    """A named, reusable set of staff, services and constraints."""

    name: str = Field(min_length=1)
    staff: List[StaffProfile] = []
    services: List[ServiceDefinition] = []
    constraints: List[UnitConstraintSpec] = []
    dailyTotalTarget: Optional[int] = Field(default=None, ge=0)
    customUnits: Optional[List[str]] = None
    customSpecialties: Optional[List[str]] = None


class RosterWorkspace(BaseModel):
    """The latest entity lists, configuration and saved presets, kept between sessions."""

    staff: List[StaffProfile] = []
    services: List[ServiceDefinition] = []
    constraints: List[UnitConstraintSpec] = []
    config: Optional[ScheduleConfig] = None
    tierDefaults: Dict[int, TierLimits] = Field(default_factory=default_tier_limits)
    customUnits: List[str] = []
    customSpecialties: List[str] = []
    presets: List[Preset] = []

    @model_validator(mode="before")
    @classmethod
    def apply_tier_defaults(cls, values: Any) -> Any:
        """Staff stored without limits, at top level or inside presets, take the workspace's tierDefaults."""
        if isinstance(values, dict) and values.get("tierDefaults"):
            fill_staff_limits(values.get("staff"), values["tierDefaults"])
            for preset in values.get("presets") or []:
                if isinstance(preset, dict):
                    fill_staff_limits(preset.get("staff"), values["tierDefaults"])
        return values

    def tier_defaults(self) -> Dict[int, dict]:
        """Validation context table for `StaffProfile` tier defaults."""
        return tier_defaults_table(self.tierDefaults)


def _atomic_write(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def dump_backup(workspace: RosterWorkspace) -> str:
    """Serialize a workspace to the JSON text used for backups."""
    return workspace.model_dump_json(indent=2)


def parse_backup(text: Union[str, bytes]) -> RosterWorkspace:
    """
    Parse backup JSON back into a workspace.

    Raises:
        FileContentError: If the text is not a valid workspace backup.
    """
    try:
        return RosterWorkspace.model_validate_json(text)
    except ValidationError as e:
        raise FileContentError(f"Invalid backup file: {e}")


def save_workspace(workspace: RosterWorkspace, path: Union[str, Path] = WORKSPACE_PATH) -> None:
    _atomic_write(Path(path), dump_backup(workspace))


def load_workspace(path: Union[str, Path] = WORKSPACE_PATH) -> RosterWorkspace:
    """Load the stored workspace; a missing or corrupt file yields an empty one."""
    path = Path(path)
    if not path.exists():
        return RosterWorkspace()
    try:
        return parse_backup(path.read_text(encoding="utf-8"))
    except FileContentError as e:
        logger.warning(f"⚠️ Stored workspace at {path} is unreadable, starting empty: {e}")
        return RosterWorkspace()


# == Presets ==
def find_preset(workspace: RosterWorkspace, name: str) -> Preset:
    for preset in workspace.presets:
        if preset.name == name:
            return preset
    raise PresetNotFoundError(f"No preset named {name!r}.")


def upsert_preset(workspace: RosterWorkspace, preset: Preset) -> RosterWorkspace:
    """Add a preset, replacing any existing preset of the same name."""
    workspace.presets = [p for p in workspace.presets if p.name != preset.name] + [preset]
    return workspace


def delete_preset(workspace: RosterWorkspace, name: str) -> RosterWorkspace:
    find_preset(workspace, name)
    workspace.presets = [p for p in workspace.presets if p.name != name]
    return workspace


def apply_preset(workspace: RosterWorkspace, name: str) -> RosterWorkspace:
    """
    Replace the workspace's staff, services and constraints with a preset's.

    The daily target and the custom unit/specialty lists are only taken over
    when the preset carries them.
    """
    preset = find_preset(workspace, name)
    workspace.staff = list(preset.staff)
    workspace.services = list(preset.services)
    workspace.constraints = list(preset.constraints)
    if preset.customUnits is not None:
        workspace.customUnits = list(preset.customUnits)
    if preset.customSpecialties is not None:
        workspace.customSpecialties = list(preset.customSpecialties)
    if preset.dailyTotalTarget is not None and workspace.config is not None:
        workspace.config = workspace.config.model_copy(update={"dailyTotalTarget": preset.dailyTotalTarget})
    return workspace
