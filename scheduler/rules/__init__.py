"""
scheduler.rules
---------------

Exposes all eligibility rules and the scoring function by importing from:

- `fixed`: Rules for search options (tier/specialty forcing) and staff availability.
- `high`: Hard rules (rest period, unit eligibility, roommates, quotas, weekend adjacency, group affinity).
- `low`: Fairness rules skipped by desperate searches, and candidate scoring.

Allows unified access to all rule definitions via wildcard imports.
"""
from .fixed import *
from .high import *
from .low import *
