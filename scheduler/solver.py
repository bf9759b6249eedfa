from dataclasses import dataclass
import random
from typing import Iterable, List, Optional, Sequence

from core.models import DutySlotType, SchedulerConfig, ScheduleResult, StaffMember, UnitConstraint
from exceptions.custom_errors import InvalidConfigurationError
from scheduler.roommates import RoommateAnalyzer
from scheduler.runner import SimulationRunner
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AttemptSummary:
    index: int
    unfilled_slots: int
    deviation: int


def quota_deviation(staff: Iterable[StaffMember], result: ScheduleResult) -> int:
    """Sum of |quota - ordinary shifts| over all staff."""
    stats = result.stats_by_staff()
    return sum(abs(s.quota - stats[s.id].ordinary) for s in staff if s.id in stats)


class BestOfRetrySelector:
    """Runs several independent attempts and keeps the best one."""

    def __init__(
        self,
        staff: Sequence[StaffMember],
        slot_types: Sequence[DutySlotType],
        constraints: Iterable[UnitConstraint],
        config: SchedulerConfig,
        rng: Optional[random.Random] = None,
    ):
        if config.max_retries < 1:
            raise InvalidConfigurationError(
                f"At least one attempt is required (max_retries={config.max_retries})."
            )
        self.staff = list(staff)
        self.config = config
        self.rng = rng or random.Random(config.seed)
        # Roommates are shared read-only across attempts
        self.runner = SimulationRunner(
            self.staff,
            slot_types,
            constraints,
            config,
            roommates=RoommateAnalyzer(self.staff),
            rng=self.rng,
        )
        self.history: List[AttemptSummary] = []

    def select(self) -> ScheduleResult:
        """
        Run `max_retries` attempts and return the one with the fewest unfilled
        slots, breaking ties by the lowest total quota deviation. Earlier attempts
        win exact ties.
        """
        self.history = []
        best: Optional[ScheduleResult] = None
        best_key = None

        for attempt in range(self.config.max_retries):
            result = self.runner.run()
            deviation = quota_deviation(self.staff, result)
            self.history.append(AttemptSummary(attempt, result.unfilled_slots, deviation))

            key = (result.unfilled_slots, deviation)
            if best_key is None or key < best_key:
                best, best_key = result, key
                best.best_attempt = attempt
                best.deviation = deviation
                logger.info(
                    f"Attempt {attempt + 1}/{self.config.max_retries}: new best "
                    f"(unfilled={result.unfilled_slots}, deviation={deviation})"
                )

        best.attempts = self.config.max_retries
        return best
