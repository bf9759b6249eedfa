from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RelaxationProfile:
    """A named degree of constraint relaxation used by the candidate search."""

    name: str
    enforce_fairness: bool
    """Apply the vertical/horizontal fairness filters."""
    enforce_group_affinity: bool
    """Reject staff whose group differs from the slot type's preferred group."""


NORMAL = RelaxationProfile("normal", enforce_fairness=True, enforce_group_affinity=True)
DESPERATE = RelaxationProfile("desperate", enforce_fairness=False, enforce_group_affinity=True)
DEEP_DESPERATE = RelaxationProfile("deep-desperate", enforce_fairness=False, enforce_group_affinity=False)

# Ladders are tried in order; the first profile yielding a candidate wins
RESERVATION_LADDER: Tuple[RelaxationProfile, ...] = (NORMAL, DESPERATE)
MINIMUM_FILL_LADDER: Tuple[RelaxationProfile, ...] = (NORMAL, DESPERATE, DEEP_DESPERATE)
BALANCE_LADDER: Tuple[RelaxationProfile, ...] = (NORMAL, DESPERATE)
