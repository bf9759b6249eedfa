from collections import defaultdict

import pytest

from core.models import SchedulerConfig, SeniorityTier, Specialty, UnitConstraint
from exceptions.custom_errors import InputMismatchError, InvalidConfigurationError
from scheduler.builder import generate
from scheduler.roommates import RoommateAnalyzer
from scheduler.solver import BestOfRetrySelector, quota_deviation
from tests.conftest import MONTH, YEAR, make_slot, make_staff
from utils.constants import SATURDAY, SUNDAY, THURSDAY
from utils.shift_utils import weekday_of

SENIOR = SeniorityTier.SENIOR
JUNIOR = SeniorityTier.JUNIOR


def _config(**kwargs):
    defaults = dict(year=YEAR, month=MONTH, max_retries=3, seed=42)
    defaults.update(kwargs)
    return SchedulerConfig(**defaults)


def _ward():
    staff = [
        make_staff("sr1", tier=SENIOR, unit="ICU", quota=6, weekend_limit=2),
        make_staff("sr2", tier=SENIOR, unit="ER", quota=6, weekend_limit=2),
        make_staff("e1", unit="ICU", quota=8, weekend_limit=2, room="r1"),
        make_staff("e2", unit="ICU", quota=8, weekend_limit=2, room="r1"),
        make_staff("e3", unit="ER", quota=8, weekend_limit=2, group="A"),
        make_staff("e4", unit="ER", quota=8, weekend_limit=2, requested_days={3, 17}),
        make_staff("e5", unit="Surgery", quota=8, weekend_limit=2, unavailable_days={1, 2, 3, 4, 5}),
        make_staff("e6", unit="ICU", quota=5, weekend_limit=3, specialty=Specialty.TRANSPLANT),
        make_staff("j1", tier=JUNIOR, unit="ER", quota=9, weekend_limit=3, room="r2"),
        make_staff("j2", tier=JUNIOR, unit="ICU", quota=9, weekend_limit=3, room="r2"),
        make_staff("j3", tier=JUNIOR, unit="Surgery", quota=9, weekend_limit=3),
        make_staff("j4", tier=JUNIOR, unit="Surgery", quota=9, weekend_limit=3, group="A"),
        make_staff("gone", unit="ICU", active=False),
    ]
    slot_types = [
        make_slot("icu", min_staff=1, max_staff=2, allowed_units={"ICU"}),
        make_slot("er", min_staff=1, max_staff=2, allowed_units={"ER"}, preferred_group="A"),
        make_slot("ward", min_staff=2, max_staff=3),
        make_slot("em", min_staff=0, max_staff=1, allowed_units={"Surgery", "ER"}, is_emergency=True),
    ]
    constraints = [
        UnitConstraint.for_label("Surgery", {1, 2, 3, 4, 5}),
        UnitConstraint.for_label("Transplant", {6}),
    ]
    return staff, slot_types, constraints


def _days_by_staff(result):
    days = defaultdict(list)
    for day, a in result.assignments():
        if not a.is_empty:
            days[a.staff_id].append(day)
    return days


def test_full_month_honours_hard_constraints():
    staff, slot_types, constraints = _ward()
    result = generate(staff, slot_types, constraints, _config(daily_total_target=6))
    by_id = {s.id: s for s in staff}
    stats = result.stats_by_staff()
    worked = _days_by_staff(result)

    assert len(result.days) == 30
    assert "gone" not in stats and "gone" not in worked

    for staff_id, days in worked.items():
        person = by_id[staff_id]
        assert len(days) == len(set(days)), "one duty per day"
        assert all(b - a > 1 for a, b in zip(sorted(days), sorted(days)[1:])), "rest period"
        assert not set(days) & person.unavailable_days
        assert stats[staff_id].ordinary == len(days) <= person.quota

        weekdays = {d: weekday_of(YEAR, MONTH, d) for d in days}
        weekend = [d for d, wd in weekdays.items() if wd in (SATURDAY, SUNDAY)]
        assert stats[staff_id].weekend == len(weekend) <= person.weekend_limit
        for d, wd in weekdays.items():
            if wd == THURSDAY:
                assert d + 2 not in weekdays and d + 3 not in weekdays

    roommates = RoommateAnalyzer([s for s in staff if s.active])
    for staff_id, days in worked.items():
        for mate in roommates.roommates_of(staff_id):
            for d in days:
                assert not {d - 1, d, d + 1} & set(worked.get(mate, ()))


def test_slot_capacity_and_sentinels_are_consistent():
    staff, slot_types, constraints = _ward()
    result = generate(staff, slot_types, constraints, _config(daily_total_target=6))
    by_id = {s.id: s for s in staff}

    sentinels = 0
    for plan in result.days:
        seniors = 0
        for slot in slot_types:
            here = [a for a in plan.assignments if a.slot_type_id == slot.id]
            empties = sum(1 for a in here if a.is_empty)
            filled = len(here) - empties
            sentinels += empties
            assert filled <= slot.max_staff
            assert empties == max(0, slot.min_staff - filled)
            for a in here:
                if a.is_empty:
                    continue
                person = by_id[a.staff_id]
                seniors += person.tier == SENIOR
                if slot.allowed_units and not person.is_junior:
                    assert person.unit in slot.allowed_units
                assert a.is_emergency == slot.is_emergency
        assert seniors <= 1

    assert result.unfilled_slots == sentinels
    stats = result.stats_by_staff()
    assert sum(s.emergency for s in stats.values()) == sum(
        1 for _, a in result.assignments() if a.is_emergency and not a.is_empty
    )


def test_roommates_never_share_a_day():
    staff = [make_staff("a", room="5"), make_staff("b", room="5"), make_staff("c")]
    slot_types = [make_slot(min_staff=1, max_staff=1)]
    result = generate(staff, slot_types, [], _config(daily_total_target=0))

    worked = _days_by_staff(result)
    assert not set(worked["a"]) & set(worked["b"])
    day5 = {a.staff_id for a in result.day(5).assignments}
    assert not {"a", "b"} <= day5


def test_saturday_only_specialty_covers_every_saturday():
    tx = make_staff("tx", unit="ICU", specialty=Specialty.TRANSPLANT, quota=5, weekend_limit=4)
    staff = [tx] + [make_staff(f"n{i}", unit="ICU", weekend_limit=4) for i in range(4)] + [
        make_staff(f"j{i}", tier=JUNIOR, unit="ICU", weekend_limit=4) for i in range(2)
    ]
    slot_types = [make_slot("icu", min_staff=1, max_staff=2, allowed_units={"ICU"})]
    constraints = [UnitConstraint.for_label("transplant", {6})]
    result = generate(staff, slot_types, constraints, _config(daily_total_target=0))

    tx_days = set(_days_by_staff(result)["tx"])
    assert tx_days == {6, 13, 20, 27}


def test_seeded_runs_are_reproducible():
    staff, slot_types, constraints = _ward()
    config = _config(randomize_order=True, prevent_every_other_day=True)
    first = generate(staff, slot_types, constraints, config)
    second = generate(staff, slot_types, constraints, config)
    assert first.assignments() == second.assignments()
    assert first.unfilled_slots == second.unfilled_slots


def test_selector_keeps_the_best_attempt():
    staff, slot_types, constraints = _ward()
    active = [s for s in staff if s.active]
    config = _config(max_retries=5, randomize_order=True)
    selector = BestOfRetrySelector(active, slot_types, constraints, config)
    result = selector.select()

    assert result.attempts == 5
    assert len(selector.history) == 5
    best = selector.history[result.best_attempt]
    assert (best.unfilled_slots, best.deviation) == (result.unfilled_slots, result.deviation)
    assert result.deviation == quota_deviation(active, result)
    for summary in selector.history:
        assert (result.unfilled_slots, result.deviation) <= (summary.unfilled_slots, summary.deviation)
    earlier = selector.history[: result.best_attempt]
    assert all((s.unfilled_slots, s.deviation) > (best.unfilled_slots, best.deviation) for s in earlier)


def test_zero_retries_is_rejected():
    staff, slot_types, constraints = _ward()
    with pytest.raises(InvalidConfigurationError):
        generate(staff, slot_types, constraints, _config(max_retries=0))


def test_duplicate_ids_are_rejected():
    staff = [make_staff("a"), make_staff("a")]
    with pytest.raises(InputMismatchError):
        generate(staff, [make_slot()], [], _config())
