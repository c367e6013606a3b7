"""Round-robin staff assignment"""

from typing import Hashable, Iterable, Optional


class AssignmentRotator:
    """Cycles through a contract's staff pool so generated jobs are spread evenly.

    Purely positional: availability and workload outside the contract are not
    considered.
    """

    def __init__(self, pool: Iterable[Hashable] = ()):
        seen = set()
        ordered = []
        for staff_id in pool:
            if staff_id is None or staff_id in seen:
                continue
            seen.add(staff_id)
            ordered.append(staff_id)
        self._pool = tuple(ordered)
        self._cursor = 0

    @property
    def pool(self) -> tuple:
        return self._pool

    def next(self) -> Optional[Hashable]:
        if not self._pool:
            return None
        staff_id = self._pool[self._cursor % len(self._pool)]
        self._cursor += 1
        return staff_id
