"""Bookkeeping of allocations and releases per tracked type, for leak reports."""

from __future__ import annotations

from collections import Counter


class MemoryDiagnostics:
    """Counts creations and releases of registered types and reports imbalances."""

    def __init__(self) -> None:
        self._allocations: Counter[type] = Counter()
        self._types_by_name: dict[str, type] = {}

    def register(self, tracked_type: type) -> None:
        """Make ``tracked_type`` eligible to appear in the error report."""
        self._types_by_name.setdefault(tracked_type.__qualname__, tracked_type)

    def record_new(self, tracked_type: type) -> None:
        """Note that one object of ``tracked_type`` was created."""
        self._allocations[tracked_type] += 1

    def record_delete(self, tracked_type: type) -> None:
        """Note that one object of ``tracked_type`` was released."""
        self._allocations[tracked_type] -= 1

    def clear(self) -> None:
        """Forget every allocation record, resetting all counts to zero."""
        self._allocations.clear()

    def types_with_errors(self) -> dict[str, int]:
        """Return registered type names whose count is not zero, sorted by name.

        A positive value is a number of leaked objects; a negative value is a
        number of objects released more often than created.
        """
        result: dict[str, int] = {}
        for name in sorted(self._types_by_name):
            record = self._allocations.get(self._types_by_name[name], 0)
            if record != 0:
                result[name] = record
        return result