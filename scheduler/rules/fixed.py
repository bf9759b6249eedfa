from core.context import CandidateContext
from core.models import StaffMember

"""
This module contains the rules tied to fixed facts of a search: tier/specialty
forcing requested by the caller, and the staff member's own availability.
"""


def tier_and_specialty_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """Honour forced tier, excluded tier and forced specialty from the search options."""
    opts = ctx.options
    if opts.force_tier is not None and person.tier != opts.force_tier:
        return False
    if opts.exclude_tier is not None and person.tier == opts.exclude_tier:
        return False
    if opts.force_specialty is not None and person.specialty != opts.force_specialty:
        return False
    return True


def availability_rule(ctx: CandidateContext, person: StaffMember) -> bool:
    """Not already on duty today and not marked unavailable."""
    if person.id in ctx.assigned_today:
        return False
    return ctx.day not in person.unavailable_days
