import random
from typing import Dict, Iterable, List

from core.models import ConstraintKind, SPECIALTY_PRIORITY, UnitConstraint
from utils.constants import DAY_DIFFICULTY, SATURDAY, SUNDAY


class DayOrderPlanner:
    """Orders the days of a month so that the narrowest candidate pools are resolved first."""

    def __init__(self, constraints: Iterable[UnitConstraint]):
        self.primary_only_days: set[int] = set()
        self.secondary_days: set[int] = set()
        for c in constraints:
            if c.kind != ConstraintKind.SPECIALTY:
                continue
            rank = SPECIALTY_PRIORITY.get(c.specialty)
            if rank == 1 and len(c.allowed_days) == 1:
                self.primary_only_days |= c.allowed_days
            elif rank == 2 and len(c.allowed_days) < 7:
                self.secondary_days |= c.allowed_days

    def difficulty(self, weekday: int) -> int:
        if weekday in self.primary_only_days:
            return DAY_DIFFICULTY["PRIMARY_SPECIALTY_ONLY_DAY"]
        if weekday in self.secondary_days:
            return DAY_DIFFICULTY["SECONDARY_SPECIALTY_DAY"]
        if weekday == SATURDAY:
            return DAY_DIFFICULTY["SATURDAY"]
        if weekday == SUNDAY:
            return DAY_DIFFICULTY["SUNDAY"]
        return DAY_DIFFICULTY["WEEKDAY"]

    def order(self, weekdays: List[int], randomize: bool = False, rng: random.Random = None) -> List[int]:
        """
        Return day numbers (1-based) sorted hardest first.

        Ties keep calendar order unless `randomize` is set, in which case they are
        broken by a draw from `rng`.
        """
        scores: Dict[int, int] = {d: self.difficulty(wd) for d, wd in enumerate(weekdays, start=1)}
        if randomize:
            rng = rng or random.Random()
            draws = {d: rng.random() for d in scores}
            return sorted(scores, key=lambda d: (-scores[d], draws[d]))
        return sorted(scores, key=lambda d: (-scores[d], d))
