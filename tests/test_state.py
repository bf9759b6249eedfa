from tests.conftest import fresh_state, make_slot, make_staff
from utils.constants import LOG_CAPACITY

# June 2026: day 1 Monday, 6 Saturday, 14 Sunday


def test_statistics_split_weekend_days_and_emergencies():
    nurse = make_staff("a")
    state = fresh_state([nurse])
    state.record_assignment(1, make_slot("ward"), nurse)
    state.record_assignment(6, make_slot("ward"), nurse)
    state.record_assignment(14, make_slot("er", is_emergency=True), nurse)

    stats = state.stats["a"]
    assert (stats.total, stats.ordinary, stats.emergency) == (3, 3, 1)
    assert (stats.weekend, stats.saturday, stats.sunday) == (2, 1, 1)
    assert state.staff_ids_by_day[6] == {"a"}


def test_sentinels_occupy_positions_but_are_not_filled():
    nurse = make_staff("a")
    slot = make_slot(min_staff=2, max_staff=2)
    state = fresh_state([nurse])
    state.record_assignment(3, slot, nurse)
    state.record_empty(3, slot)

    assert state.occupied(3, slot.id) == 2
    assert state.filled(3, slot.id) == 1
    assert state.filled(3) == 1
    assert state.unfilled_slots == 1
    assert not state.has_shift_on_day(0, "a")
    assert not state.has_shift_on_day(31, "a")


def test_log_is_capped():
    state = fresh_state([make_staff("a")])
    for i in range(LOG_CAPACITY + 5):
        state.log(f"message {i}")

    assert len(state.logs) == LOG_CAPACITY
    assert state.logs[0] == "message 0"
    assert state.logs[-1] == f"message {LOG_CAPACITY - 1}"
