from core.context import CandidateContext
from core.models import StaffMember
from utils.constants import SATURDAY, SUNDAY, THURSDAY

"""
This module contains the hard eligibility rules for the duty roster.
Only the group affinity rule is ever relaxed (in deep-desperate searches).
"""


def rest_period_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """At most one duty per 24 hours: nothing on the day before or after."""
    return not (ctx.worked(person, -1) or ctx.worked(person, +1))


def unit_eligibility_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """
    Juniors may fill any slot type. Everyone else must belong to one of the
    slot type's allowed units (when it lists any), their unit must be allowed on
    today's weekday, and a specialty constraint may narrow that further but
    never widen it.
    """
    if person.is_junior:
        return True
    allowed = ctx.slot_type.allowed_units
    if allowed and person.unit not in allowed:
        return False
    if not ctx.unit_allows_today(person):
        return False
    return ctx.specialty_allows_today(person)


def roommate_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """No roommate on duty today, yesterday or tomorrow."""
    for mate in ctx.roommates.get(person.id, ()):
        if mate in ctx.assigned_today:
            return False
        if ctx.state.has_shift_on_day(ctx.day - 1, mate):
            return False
        if ctx.state.has_shift_on_day(ctx.day + 1, mate):
            return False
    return True


def quota_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """Monthly quota, and the weekend limit on weekend days."""
    stats = ctx.state.stats[person.id]
    if stats.ordinary >= person.quota:
        return False
    if ctx.is_weekend and stats.weekend >= person.weekend_limit:
        return False
    return True


def weekend_adjacency_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """A Thursday duty excludes the following Saturday and Sunday, in both directions."""
    if ctx.weekday == SATURDAY and ctx.worked(person, -2):
        return False
    if ctx.weekday == SUNDAY and ctx.worked(person, -3):
        return False
    if ctx.weekday == THURSDAY and (ctx.worked(person, +2) or ctx.worked(person, +3)):
        return False
    return True


def group_affinity_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    slot = ctx.slot_type
    if not slot.has_group_affinity:
        return True
    return person.group == slot.preferred_group
