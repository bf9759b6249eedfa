import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from core.models import DutySlotType, SeniorityTier, Specialty, StaffMember, UnitConstraint
from core.relaxation import NORMAL, RelaxationProfile
from core.state import ScheduleState


@dataclass(frozen=True)
class CandidateOptions:
    force_tier: Optional[SeniorityTier] = None
    exclude_tier: Optional[SeniorityTier] = None
    force_specialty: Optional[Specialty] = None
    profile: RelaxationProfile = NORMAL

    def relaxed(self, profile: RelaxationProfile) -> "CandidateOptions":
        return CandidateOptions(self.force_tier, self.exclude_tier, self.force_specialty, profile)


@dataclass
class CandidateContext:
    """Everything an eligibility rule or the scorer may look at for one search."""

    slot_type: DutySlotType
    day: int
    weekday: int
    is_weekend: bool
    assigned_today: Set[str]
    state: ScheduleState
    options: CandidateOptions
    roommates: Dict[str, frozenset]
    unit_constraints: Dict[str, List[UnitConstraint]]
    specialty_constraints: Dict[Specialty, List[UnitConstraint]]
    junior_floor: Optional[int]
    """Lowest ordinary-shift count among active juniors, None without juniors."""
    tier_floor: Dict[int, int]
    """Lowest ordinary-shift count per tier."""
    prevent_every_other_day: bool
    rng: random.Random

    def worked(self, person: StaffMember, offset: int) -> bool:
        return self.state.has_shift_on_day(self.day + offset, person.id)

    def ordinary(self, person: StaffMember) -> int:
        return self.state.stats[person.id].ordinary

    def unit_allows_today(self, person: StaffMember) -> bool:
        return all(c.allows(self.weekday) for c in self.unit_constraints.get(person.unit, ()))

    def specialty_constraints_for(self, person: StaffMember) -> List[UnitConstraint]:
        if person.specialty == Specialty.NONE:
            return []
        return self.specialty_constraints.get(person.specialty, [])

    def specialty_allows_today(self, person: StaffMember) -> bool:
        return all(c.allows(self.weekday) for c in self.specialty_constraints_for(person))
