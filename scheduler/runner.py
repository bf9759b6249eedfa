import random
from typing import Iterable, List, Optional, Sequence

from core.models import DayPlan, DutySlotType, SchedulerConfig, ScheduleResult, StaffMember, UnitConstraint
from core.state import ScheduleState
from scheduler.day_order import DayOrderPlanner
from scheduler.evaluator import CandidateEvaluator
from scheduler.roommates import RoommateAnalyzer
from scheduler.slot_filler import SlotFiller
from utils.shift_utils import month_weekdays
from utils.logger import get_logger

logger = get_logger(__name__)


class SimulationRunner:
    """Runs one complete attempt over every day of the month."""

    def __init__(
        self,
        staff: Sequence[StaffMember],
        slot_types: Sequence[DutySlotType],
        constraints: Iterable[UnitConstraint],
        config: SchedulerConfig,
        roommates: Optional[RoommateAnalyzer] = None,
        rng: Optional[random.Random] = None,
    ):
        self.staff = list(staff)
        self.config = config
        self.rng = rng or random.Random(config.seed)
        constraints = list(constraints)

        self.weekdays: List[int] = month_weekdays(config.year, config.month)
        self.planner = DayOrderPlanner(constraints)
        self.roommates = roommates or RoommateAnalyzer(self.staff)
        self.evaluator = CandidateEvaluator(
            self.staff,
            constraints,
            self.roommates,
            prevent_every_other_day=config.prevent_every_other_day,
            rng=self.rng,
        )
        self.filler = SlotFiller(
            slot_types,
            constraints,
            self.evaluator,
            daily_total_target=config.daily_total_target,
            rng=self.rng,
        )

    def run(self) -> ScheduleResult:
        """
        Run the day order planner once, then fill every day in that order against
        a fresh per-attempt state.

        Returns:
            ScheduleResult: The attempt's day plans (in calendar order), unfilled
                slot count, diagnostic log and staff statistics.
        """
        state = ScheduleState.fresh(self.config.year, self.config.month, self.weekdays, self.staff)
        order = self.planner.order(self.weekdays, randomize=self.config.randomize_order, rng=self.rng)
        logger.debug(f"Day order: {order}")
        for day in order:
            self.filler.fill_day(day, state)

        days = [
            DayPlan(day=d, assignments=list(state.day_assignments[d]), is_weekend=state.is_weekend(d))
            for d in range(1, state.num_days + 1)
        ]
        return ScheduleResult(
            year=self.config.year,
            month=self.config.month,
            days=days,
            unfilled_slots=state.unfilled_slots,
            logs=list(state.logs),
            stats=[state.stats[s.id] for s in self.staff],
        )
