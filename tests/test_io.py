import pandas as pd
import pytest

from core.models import SchedulerConfig
from exceptions.custom_errors import FileContentError
from scheduler.builder import generate
from schemas.schedule.generate import ScheduleConfig
from tests.conftest import MONTH, YEAR, make_slot, make_staff
from utils.exporter import export_filename, write_schedule_workbook, write_staff_template
from utils.loader import load_staff_profiles
from exceptions.custom_errors import PresetNotFoundError
from schemas.schedule.generate import TierLimits
from utils.storage import (
    Preset,
    RosterWorkspace,
    apply_preset,
    delete_preset,
    dump_backup,
    find_preset,
    load_workspace,
    parse_backup,
    save_workspace,
    upsert_preset,
)


def test_staff_template_loads_back(tmp_path):
    path = tmp_path / "staff.xlsx"
    write_staff_template(path)
    [profile] = load_staff_profiles(path)

    assert profile.id == "imp_0"
    assert profile.name == "Example Nurse"
    assert profile.tier == 2 and profile.quota == 7 and profile.weekendLimit == 2
    assert profile.unavailableDays == [1, 2, 3]
    assert profile.requestedDays == [15, 20]
    assert profile.room == "1"


def test_loader_matches_loose_headers_and_defaults(tmp_path):
    path = tmp_path / "loose.xlsx"
    pd.DataFrame(
        {
            "Full Name": ["Ana", "Ben", "Ana"],
            "Department": ["ICU", "ER", "ICU"],
            "Seniority": [1, None, 1],
            "Days Off": ["4,5", None, "4,5"],
        }
    ).to_excel(path, index=False)

    profiles = load_staff_profiles(path)
    assert [p.name for p in profiles] == ["Ana", "Ben"]
    assert profiles[0].unavailableDays == [4, 5]
    assert profiles[1].tier == 2
    assert profiles[1].quota == 5

    with pytest.raises(FileContentError):
        load_staff_profiles(path, drop_duplicates=False)


def test_loader_requires_name_and_unit(tmp_path):
    path = tmp_path / "bad.xlsx"
    pd.DataFrame({"Name": ["Ana"]}).to_excel(path, index=False)
    with pytest.raises(FileContentError):
        load_staff_profiles(path)


def test_schedule_workbook_has_three_sheets():
    staff = [make_staff("a"), make_staff("b"), make_staff("c")]
    slot_types = [make_slot("s1", min_staff=1, max_staff=1, name="Ward")]
    config = SchedulerConfig(year=YEAR, month=MONTH, max_retries=1, seed=3)
    result = generate(staff, slot_types, [], config)

    buffer = write_schedule_workbook(result, slot_types, staff)
    sheets = pd.read_excel(buffer, sheet_name=None)

    assert list(sheets) == ["Roster", "By Staff", "Summary"]
    assert len(sheets["Roster"]) == 30
    assert list(sheets["Roster"].columns) == ["Date", "Day", "Ward"]
    assert len(sheets["By Staff"]) == 3
    assert set(sheets["Summary"]["id"]) == {"a", "b", "c"}
    assert export_filename(result) == "duty_roster_2026_06.xlsx"


def test_workspace_survives_save_and_load(tmp_path):
    path = tmp_path / "workspace.json"
    workspace = RosterWorkspace(config=ScheduleConfig(year=2026, month=6, maxRetries=5))
    save_workspace(workspace, path)

    loaded = load_workspace(path)
    assert loaded.config.maxRetries == 5
    assert loaded.staff == []
    assert list(tmp_path.iterdir()) == [path]


def test_missing_or_corrupt_workspace_starts_empty(tmp_path):
    assert load_workspace(tmp_path / "none.json") == RosterWorkspace()

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert load_workspace(corrupt) == RosterWorkspace()


def test_backup_rejects_foreign_json():
    with pytest.raises(FileContentError):
        parse_backup('{"staff": "nobody"}')
    assert parse_backup(dump_backup(RosterWorkspace())) == RosterWorkspace()


def test_non_numeric_cells_are_reported_as_content_errors(tmp_path):
    path = tmp_path / "typos.xlsx"
    pd.DataFrame({"Name": ["Ana"], "Unit": ["ICU"], "Tier": ["Senior"], "Quota": ["seven"]}).to_excel(
        path, index=False
    )
    with pytest.raises(FileContentError, match="row 2"):
        load_staff_profiles(path)


def test_loader_uses_supplied_tier_defaults(tmp_path):
    path = tmp_path / "staff.xlsx"
    pd.DataFrame({"Name": ["Ana", "Ben"], "Unit": ["ICU", "ER"], "Tier": [3, 2], "Quota": [None, 4]}).to_excel(
        path, index=False
    )
    ana, ben = load_staff_profiles(path, tier_defaults={3: {"quota": 11, "weekendLimit": 4}})

    assert (ana.quota, ana.weekendLimit) == (11, 4)
    # explicit cells win; tiers missing from the table use constants.json
    assert (ben.quota, ben.weekendLimit) == (4, 2)


def test_workspace_tier_defaults_fill_stored_staff():
    text = """
    {
        "tierDefaults": {"1": {"quota": 3, "weekendLimit": 1}, "3": {"quota": 8, "weekendLimit": 3}},
        "staff": [{"id": "a", "name": "Ana", "tier": 3, "unit": "ICU"}],
        "presets": [{"name": "night", "staff": [{"id": "b", "name": "Ben", "tier": 1, "unit": "ER"}]}],
        "customUnits": ["ICU", "ER"],
        "customSpecialties": ["Transplant"]
    }
    """
    workspace = parse_backup(text)

    assert (workspace.staff[0].quota, workspace.staff[0].weekendLimit) == (8, 3)
    assert workspace.presets[0].staff[0].quota == 3
    assert workspace.tier_defaults()[1] == {"quota": 3, "weekendLimit": 1}
    assert parse_backup(dump_backup(workspace)) == workspace


def test_presets_are_saved_applied_and_deleted():
    staff = [{"id": "a", "name": "Ana", "tier": 2, "unit": "ICU"}]
    workspace = RosterWorkspace(
        config=ScheduleConfig(year=2026, month=6),
        tierDefaults={2: TierLimits(quota=6, weekendLimit=2)},
    )
    preset = Preset(name="summer", staff=staff, dailyTotalTarget=3, customUnits=["ICU"])

    upsert_preset(workspace, preset)
    upsert_preset(workspace, preset.model_copy(update={"dailyTotalTarget": 4}))
    assert [p.name for p in workspace.presets] == ["summer"]
    assert find_preset(workspace, "summer").dailyTotalTarget == 4

    apply_preset(workspace, "summer")
    assert [p.id for p in workspace.staff] == ["a"]
    assert workspace.config.dailyTotalTarget == 4
    assert workspace.customUnits == ["ICU"]

    delete_preset(workspace, "summer")
    assert workspace.presets == []
    with pytest.raises(PresetNotFoundError):
        apply_preset(workspace, "summer")
