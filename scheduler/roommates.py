from collections import defaultdict
from typing import Dict, FrozenSet, Iterable

from core.models import StaffMember


class RoommateAnalyzer:
    """Mutual-exclusion sets of staff sharing a room identifier."""

    def __init__(self, staff: Iterable[StaffMember]):
        staff = list(staff)
        rooms: Dict[str, set] = defaultdict(set)
        for person in staff:
            room = (person.room or "").strip()
            if room:
                rooms[room].add(person.id)

        self._roommates: Dict[str, FrozenSet[str]] = {}
        for person in staff:
            room = (person.room or "").strip()
            mates = rooms.get(room, set()) - {person.id} if room else set()
            self._roommates[person.id] = frozenset(mates)

    def roommates_of(self, staff_id: str) -> FrozenSet[str]:
        return self._roommates.get(staff_id, frozenset())

    def groups(self) -> list[FrozenSet[str]]:
        """Distinct rooms shared by two or more staff."""
        seen = set()
        for staff_id, mates in self._roommates.items():
            if mates:
                seen.add(frozenset(mates | {staff_id}))
        return sorted(seen, key=lambda g: sorted(g))
