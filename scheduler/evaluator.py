import random
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

from core.constraint_manager import ConstraintManager
from core.context import CandidateContext, CandidateOptions
from core.models import ConstraintKind, DutySlotType, SeniorityTier, Specialty, StaffMember, UnitConstraint
from core.state import ScheduleState
from scheduler.roommates import RoommateAnalyzer
from scheduler.rules import *


def build_eligibility_rules() -> ConstraintManager:
    """Register the eligibility rules in the order they are checked."""
    cm = ConstraintManager()
    # Fixed rules
    cm.add_rule(tier_and_specialty_rule)
    cm.add_rule(availability_rule)

    # Hard rules
    cm.add_rule(rest_period_rule)
    cm.add_rule(unit_eligibility_rule)
    cm.add_rule(roommate_rule)
    cm.add_rule(quota_rule)
    cm.add_rule(weekend_adjacency_rule)
    cm.add_rule(group_affinity_rule, lambda p: p.enforce_group_affinity)

    # Fairness rules
    cm.add_rule(vertical_fairness_rule, lambda p: p.enforce_fairness)
    cm.add_rule(horizontal_fairness_rule, lambda p: p.enforce_fairness)
    return cm


class CandidateEvaluator:
    """Filters the staff list down to eligible candidates for one slot and ranks them."""

    def __init__(
        self,
        staff: Iterable[StaffMember],
        constraints: Iterable[UnitConstraint],
        roommates: RoommateAnalyzer,
        prevent_every_other_day: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self.staff: List[StaffMember] = list(staff)
        self.roommates: Dict[str, frozenset] = {s.id: roommates.roommates_of(s.id) for s in self.staff}
        self.prevent_every_other_day = prevent_every_other_day
        self.rng = rng or random.Random()
        self.rules = build_eligibility_rules()

        self.unit_constraints: Dict[str, List[UnitConstraint]] = defaultdict(list)
        self.specialty_constraints: Dict[Specialty, List[UnitConstraint]] = defaultdict(list)
        for c in constraints:
            if c.kind == ConstraintKind.SPECIALTY:
                self.specialty_constraints[c.specialty].append(c)
            else:
                self.unit_constraints[c.name].append(c)

        self.juniors = [s for s in self.staff if s.tier == SeniorityTier.JUNIOR]

    def _context(
        self,
        slot_type: DutySlotType,
        day: int,
        assigned_today: Set[str],
        state: ScheduleState,
        options: CandidateOptions,
    ) -> CandidateContext:
        tier_floor: Dict[int, int] = {}
        for person in self.staff:
            count = state.stats[person.id].ordinary
            tier = int(person.tier)
            if tier not in tier_floor or count < tier_floor[tier]:
                tier_floor[tier] = count
        junior_floor = tier_floor.get(int(SeniorityTier.JUNIOR)) if self.juniors else None

        return CandidateContext(
            slot_type=slot_type,
            day=day,
            weekday=state.weekday(day),
            is_weekend=state.is_weekend(day),
            assigned_today=assigned_today,
            state=state,
            options=options,
            roommates=self.roommates,
            unit_constraints=self.unit_constraints,
            specialty_constraints=self.specialty_constraints,
            junior_floor=junior_floor,
            tier_floor=tier_floor,
            prevent_every_other_day=self.prevent_every_other_day,
            rng=self.rng,
        )

    def rank(
        self,
        slot_type: DutySlotType,
        day: int,
        assigned_today: Set[str],
        state: ScheduleState,
        options: CandidateOptions = CandidateOptions(),
    ) -> List[StaffMember]:
        """Return every eligible staff member for the slot, best first."""
        ctx = self._context(slot_type, day, assigned_today, state, options)
        scored = [(score_candidate(ctx, p), p) for p in self.staff if self.rules.passes(ctx, p)]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [p for _, p in scored]

    def evaluate(
        self,
        slot_type: DutySlotType,
        day: int,
        assigned_today: Set[str],
        state: ScheduleState,
        options: CandidateOptions = CandidateOptions(),
    ) -> Optional[StaffMember]:
        """Return the top-scoring eligible candidate, or None."""
        ranked = self.rank(slot_type, day, assigned_today, state, options)
        return ranked[0] if ranked else None

    def score(
        self,
        person: StaffMember,
        slot_type: DutySlotType,
        day: int,
        state: ScheduleState,
        options: CandidateOptions = CandidateOptions(),
    ) -> float:
        """Score one staff member for a slot without checking eligibility."""
        return score_candidate(self._context(slot_type, day, set(), state, options), person)

    def pool_size(self, slot_type: DutySlotType) -> int:
        """Staff potentially eligible for a slot type by unit alone; juniors always count."""
        if not slot_type.allowed_units:
            return len(self.staff)
        return sum(1 for s in self.staff if s.is_junior or s.unit in slot_type.allowed_units)
