from typing import Callable, Optional

from core.relaxation import RelaxationProfile

Rule = Callable[..., bool]
Condition = Callable[[RelaxationProfile], bool]


class ConstraintManager:
    def __init__(self):
        self.rules: list[tuple[Rule, Optional[Condition]]] = []

    def add_rule(self, rule_func: Rule, condition: Optional[Condition] = None):
        """Register an eligibility rule, optionally active only under some relaxation profiles."""
        self.rules.append((rule_func, condition))

    def active_rules(self, profile: RelaxationProfile) -> list[Rule]:
        return [rule for rule, cond in self.rules if cond is None or cond(profile)]

    def passes(self, ctx, person) -> bool:
        """Apply all active rules in registration order, stopping at the first rejection."""
        return all(rule(ctx, person) for rule in self.active_rules(ctx.options.profile))
