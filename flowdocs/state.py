"""Per-step open/closed state for one viewing session."""

from __future__ import annotations

import collections.abc as cabc


class ExpansionState:
    """Track which steps a viewer has expanded.

    The store is independent of catalog content: ids that do not exist in the
    catalog can be toggled like any other and simply never match a step.
    Nothing is persisted; a new instance starts with every step collapsed.

    Examples
    --------
    >>> state = ExpansionState()
    >>> state.is_expanded(9)
    False
    >>> state.toggle(9)
    True
    >>> state.toggle(9)
    False
    """

    __slots__ = ("_flags",)

    def __init__(self, expanded: cabc.Iterable[int] = ()) -> None:
        self._flags: dict[int, bool] = dict.fromkeys(expanded, True)

    def __repr__(self) -> str:
        return f"ExpansionState(expanded={self.expanded_ids()!r})"

    def toggle(self, step_id: int) -> bool:
        """Flip the flag for ``step_id`` and return the new value."""
        expanded = not self._flags.get(step_id, False)
        self._flags[step_id] = expanded
        return expanded

    def is_expanded(self, step_id: int) -> bool:
        """Return whether ``step_id`` is open; unknown ids are collapsed."""
        return self._flags.get(step_id, False)

    def expand_all(self, step_ids: cabc.Iterable[int]) -> None:
        """Open every step in ``step_ids``."""
        for step_id in step_ids:
            self._flags[step_id] = True

    def collapse_all(self) -> None:
        """Close every step."""
        self._flags.clear()

    def expanded_ids(self) -> list[int]:
        """Return the ids currently open, in ascending order."""
        return sorted(step_id for step_id, flag in self._flags.items() if flag)


__all__ = ["ExpansionState"]
