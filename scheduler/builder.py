import random
from typing import Iterable, Optional

from core.models import DutySlotType, SchedulerConfig, ScheduleResult, StaffMember, UnitConstraint
from scheduler.solver import BestOfRetrySelector
from utils.logger import logger
from utils.validate import validate_identifiers, validate_input_params


# == Generate Schedule ==
def generate(
    staff: Iterable[StaffMember],
    slot_types: Iterable[DutySlotType],
    constraints: Iterable[UnitConstraint],
    config: SchedulerConfig,
    rng: Optional[random.Random] = None,
) -> ScheduleResult:
    """
    Builds a monthly duty roster satisfying hard constraints and balancing fairness.

    Inactive staff are dropped before anything else. The inputs are never mutated.

    Args:
        staff: The staff list; inactive members are ignored.
        slot_types: The duty slot types ("services") to fill each day.
        constraints: Weekday restrictions per unit or specialty.
        config: Target month, retry count and scheduling options.
        rng: Random source; defaults to one seeded from `config.seed`.

    Returns:
        ScheduleResult: The best attempt found.

    Raises:
        InvalidConfigurationError: If `config.max_retries` is below one.
        InputMismatchError: If staff or slot type ids are not unique.
    """
    active = [s for s in staff if s.active]
    slot_types = list(slot_types)
    constraints = list(constraints)

    # === Validate inputs ===
    validate_identifiers(active, slot_types)
    for warning in validate_input_params(active, slot_types, constraints, config):
        logger.warning(warning.strip())

    logger.info(
        f"📋 Generating roster for {config.year}-{config.month:02d}: "
        f"{len(active)} staff, {len(slot_types)} services, {config.max_retries} attempts"
    )
    selector = BestOfRetrySelector(active, slot_types, constraints, config, rng=rng)
    result = selector.select()

    logger.info("✅ Done!")
    logger.info(f"📊 Unfilled slots = {result.unfilled_slots}, quota deviation = {result.deviation}")
    return result
