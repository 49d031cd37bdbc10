"""SelectionStore: selected row ids, the pending budget, and change callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable


@dataclass(frozen=True)
class SelectionState:
    """Selected ids plus the number of rows still owed by a bulk request."""

    selected_ids: frozenset = frozenset()
    pending_count: int = 0

    def __post_init__(self) -> None:
        if self.pending_count < 0:
            raise ValueError(f"pending_count must be >= 0, got {self.pending_count}.")

    @property
    def total_selected(self) -> int:
        return len(self.selected_ids) + self.pending_count


@dataclass(frozen=True)
class SelectionSnapshot:
    """Read-only view handed to callers and change callbacks."""

    total_selected: int
    pending: bool
    pending_count: int
    selected_ids: frozenset


SelectionCallback = Callable[[SelectionSnapshot], Any]


class SelectionStore:
    """Holds the current SelectionState and notifies registered callbacks.

    The state is replaced as a whole on every change, never edited in place,
    so a failed operation leaves the previous state intact. Mutations come
    from ``toggle_visible`` here and from the bulk planner and page-load
    reconciler through ``apply_selection``.
    """

    def __init__(self) -> None:
        self._state = SelectionState()
        self._callbacks: list[SelectionCallback] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_ids(self) -> frozenset:
        return self._state.selected_ids

    @property
    def pending_count(self) -> int:
        return self._state.pending_count

    @property
    def total_selected(self) -> int:
        return self._state.total_selected

    def is_selected(self, row_id: Hashable) -> bool:
        return row_id in self._state.selected_ids

    def __contains__(self, row_id: Hashable) -> bool:
        return self.is_selected(row_id)

    def snapshot(self) -> SelectionSnapshot:
        """Current total (selected + pending) and whether a budget is pending."""
        state = self._state
        return SelectionSnapshot(
            total_selected=state.total_selected,
            pending=state.pending_count > 0,
            pending_count=state.pending_count,
            selected_ids=state.selected_ids,
        )

    def toggle_visible(
        self, page_ids: Iterable[Hashable], checked_ids: Iterable[Hashable],
    ) -> None:
        """Make membership of the displayed ids match the checked ids.

        Ids in ``page_ids`` are selected when present in ``checked_ids`` and
        deselected otherwise. Ids outside ``page_ids`` keep their state, and
        checked ids that are not on the page are ignored. The pending budget
        is not touched.
        """
        checked = set(checked_ids)
        selected = set(self._state.selected_ids)
        for row_id in page_ids:
            if row_id in checked:
                selected.add(row_id)
            else:
                selected.discard(row_id)
        self._commit(SelectionState(frozenset(selected), self._state.pending_count))

    def apply_selection(self, added_ids: Iterable[Hashable], pending_count: int) -> None:
        """Add ``added_ids`` and set the pending budget in one step."""
        selected = self._state.selected_ids.union(added_ids)
        self._commit(SelectionState(frozenset(selected), pending_count))

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(snapshot), fired after each effective change."""
        self._callbacks.append(callback)

    def _commit(self, new_state: SelectionState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        snapshot = self.snapshot()
        for cb in self._callbacks:
            cb(snapshot)

    def __repr__(self) -> str:
        return (
            f"SelectionStore(selected={len(self._state.selected_ids)}, "
            f"pending={self._state.pending_count})"
        )
