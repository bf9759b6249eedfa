from core.context import CandidateContext
from core.models import SeniorityTier, StaffMember
from utils.constants import (
    EVERY_OTHER_DAY_PENALTY,
    GROUP_MATCH_BONUS,
    JUNIOR_BONUS,
    QUOTA_HUNGER_WEIGHT,
    REQUESTED_DAY_BONUS,
    RESERVED_SPECIALTY_BONUS,
    SCORE_JITTER,
    SPECIALTY_DAY_BONUS,
    WEEKEND_LOAD_PENALTY,
)

"""
This module contains the low priority logic for the duty roster: the fairness
filters skipped by desperate searches, and the candidate scoring.
"""


def vertical_fairness_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """Experienced staff wait until every junior has caught up with them."""
    if person.tier != SeniorityTier.EXPERIENCED or ctx.junior_floor is None:
        return True
    return ctx.ordinary(person) < ctx.junior_floor


def horizontal_fairness_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """Keep the spread within a tier to at most one shift."""
    floor = ctx.tier_floor.get(int(person.tier))
    if floor is None:
        return True
    return ctx.ordinary(person) - floor <= 1


def score_candidate(ctx: CandidateContext, person: StaffMember) -> float:
    """
    Score an eligible candidate; the highest score wins.

    Components:
        - reserved specialty bonus when the search hunts the staff's specialty
        - specialty day bonus when the staff's specialty constraint allows today
        - requested day bonus
        - junior bonus
        - quota hunger: remaining quota times a weight
        - weekend load penalty on weekend days
        - every-other-day penalty when enabled and the staff worked two days ago
        - group match bonus
        - bounded random jitter to break exact ties
    """
    stats = ctx.state.stats[person.id]
    score = 0.0

    hunted = ctx.options.force_specialty
    if hunted is not None and person.specialty == hunted:
        score += RESERVED_SPECIALTY_BONUS

    if ctx.specialty_constraints_for(person) and ctx.specialty_allows_today(person):
        score += SPECIALTY_DAY_BONUS

    if ctx.day in person.requested_days:
        score += REQUESTED_DAY_BONUS

    if person.is_junior:
        score += JUNIOR_BONUS

    score += (person.quota - stats.ordinary) * QUOTA_HUNGER_WEIGHT

    if ctx.is_weekend:
        score -= stats.weekend * WEEKEND_LOAD_PENALTY

    if ctx.prevent_every_other_day and ctx.worked(person, -2):
        score -= EVERY_OTHER_DAY_PENALTY

    if ctx.slot_type.has_group_affinity and person.group == ctx.slot_type.preferred_group:
        score += GROUP_MATCH_BONUS

    score += ctx.rng.random() * SCORE_JITTER
    return score
