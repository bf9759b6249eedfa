import random
from typing import Iterable, List, Optional, Sequence, Set

from core.context import CandidateOptions
from core.models import ConstraintKind, DutySlotType, SeniorityTier, StaffMember, UnitConstraint
from core.relaxation import BALANCE_LADDER, MINIMUM_FILL_LADDER, RESERVATION_LADDER, RelaxationProfile
from core.state import ScheduleState
from scheduler.evaluator import CandidateEvaluator
from utils.constants import BALANCE_MAX_ITERATIONS
from utils.shift_utils import weekday_label
from utils.logger import get_logger

logger = get_logger(__name__)


class SlotFiller:
    """
    Fills one calendar day in four ordered phases:

    0. specialty reservation for constrained specialties allowed today
    1. a single senior per day, hosted by a randomly chosen slot type
    2. minimum fill of every slot type, recording EMPTY sentinels on failure
    3. target balancing towards the configured daily total
    """

    def __init__(
        self,
        slot_types: Sequence[DutySlotType],
        constraints: Iterable[UnitConstraint],
        evaluator: CandidateEvaluator,
        daily_total_target: int = 0,
        rng: Optional[random.Random] = None,
    ):
        self.slot_types = list(slot_types)
        self.specialty_constraints = [c for c in constraints if c.kind == ConstraintKind.SPECIALTY]
        self.evaluator = evaluator
        self.daily_total_target = daily_total_target
        self.rng = rng or random.Random()

        pools = {s.id: evaluator.pool_size(s) for s in self.slot_types}
        # sorted() is stable: equal pools keep their input order
        self.hardest_first = sorted(self.slot_types, key=lambda s: pools[s.id])
        self.largest_pool_first = sorted(self.slot_types, key=lambda s: -pools[s.id])

    def fill_day(self, day: int, state: ScheduleState) -> None:
        assigned_today: Set[str] = set()
        senior_placed = self._reserve_specialties(day, state, assigned_today)
        if not senior_placed:
            senior_placed = self._place_senior(day, state, assigned_today)
        senior_placed = self._fill_minimums(day, state, assigned_today, senior_placed)
        self._balance_to_target(day, state, assigned_today, senior_placed)

    # == Shared helpers ==
    def _search(
        self,
        slot_type: DutySlotType,
        day: int,
        state: ScheduleState,
        assigned_today: Set[str],
        options: CandidateOptions,
        ladder: Sequence[RelaxationProfile],
    ) -> Optional[StaffMember]:
        for profile in ladder:
            found = self.evaluator.evaluate(slot_type, day, assigned_today, state, options.relaxed(profile))
            if found is not None:
                if profile is not ladder[0]:
                    state.log(f"Day {day}: {slot_type.name} filled by {found.name} in {profile.name} mode")
                return found
        return None

    @staticmethod
    def _place(day: int, slot_type: DutySlotType, person: StaffMember, state: ScheduleState, assigned_today: Set[str]) -> None:
        state.record_assignment(day, slot_type, person)
        assigned_today.add(person.id)

    @staticmethod
    def _senior_exclusion(senior_placed: bool) -> Optional[SeniorityTier]:
        return SeniorityTier.SENIOR if senior_placed else None

    # == Phase 0 ==
    def _reserve_specialties(self, day: int, state: ScheduleState, assigned_today: Set[str]) -> bool:
        """Returns True if a reservation happened to place a senior."""
        senior_placed = False
        weekday = state.weekday(day)
        staff_by_id = {s.id: s for s in self.evaluator.staff}
        for constraint in self.specialty_constraints:
            if not constraint.allows(weekday):
                continue
            if any(staff_by_id[i].specialty == constraint.specialty for i in assigned_today):
                continue
            options = CandidateOptions(
                force_specialty=constraint.specialty,
                exclude_tier=self._senior_exclusion(senior_placed),
            )
            for slot_type in self.hardest_first:
                if state.occupied(day, slot_type.id) >= slot_type.max_staff:
                    continue
                found = self._search(slot_type, day, state, assigned_today, options, RESERVATION_LADDER)
                if found is not None:
                    self._place(day, slot_type, found, state, assigned_today)
                    senior_placed = senior_placed or found.tier == SeniorityTier.SENIOR
                    break
            else:
                state.log(
                    f"Day {day} ({weekday_label(weekday)}): no {constraint.specialty.display_name} staff could be reserved"
                )
        return senior_placed

    # == Phase 1 ==
    def _place_senior(self, day: int, state: ScheduleState, assigned_today: Set[str]) -> bool:
        shuffled = list(self.slot_types)
        self.rng.shuffle(shuffled)
        options = CandidateOptions(force_tier=SeniorityTier.SENIOR)
        for slot_type in shuffled:
            if state.occupied(day, slot_type.id) >= slot_type.min_staff:
                continue
            found = self._search(slot_type, day, state, assigned_today, options, RESERVATION_LADDER)
            if found is not None:
                self._place(day, slot_type, found, state, assigned_today)
                return True
        return False

    # == Phase 2 ==
    def _fill_minimums(self, day: int, state: ScheduleState, assigned_today: Set[str], senior_placed: bool) -> bool:
        for slot_type in self.hardest_first:
            for _ in range(state.occupied(day, slot_type.id), slot_type.min_staff):
                options = CandidateOptions(exclude_tier=self._senior_exclusion(senior_placed))
                found = self._search(slot_type, day, state, assigned_today, options, MINIMUM_FILL_LADDER)
                if found is None:
                    state.record_empty(day, slot_type)
                    state.log(f"Day {day}: {slot_type.name} unfilled (min {slot_type.min_staff})")
                    logger.debug(f"Day {day}: EMPTY sentinel for {slot_type.id}")
                    continue
                self._place(day, slot_type, found, state, assigned_today)
                if found.tier == SeniorityTier.SENIOR:
                    senior_placed = True
        return senior_placed

    # == Phase 3 ==
    def _balance_to_target(self, day: int, state: ScheduleState, assigned_today: Set[str], senior_placed: bool) -> None:
        iterations = 0
        while state.filled(day) < self.daily_total_target and iterations < BALANCE_MAX_ITERATIONS:
            iterations += 1
            open_slots: List[DutySlotType] = [
                s for s in self.largest_pool_first if state.occupied(day, s.id) < s.max_staff
            ]
            if not open_slots:
                break

            placed = False
            for slot_type in open_slots:
                options = CandidateOptions(exclude_tier=self._senior_exclusion(senior_placed))
                found = self._search(slot_type, day, state, assigned_today, options, BALANCE_LADDER)
                if found is not None:
                    self._place(day, slot_type, found, state, assigned_today)
                    senior_placed = senior_placed or found.tier == SeniorityTier.SENIOR
                    placed = True
                    break
            if not placed:
                break

        if state.filled(day) < self.daily_total_target:
            state.log(f"Day {day}: daily target {self.daily_total_target} not reached ({state.filled(day)} on duty)")
