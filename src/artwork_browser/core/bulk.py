"""Bulk "select N rows" planning and its completion as later pages load.

Both halves share one primitive, ``select_first_unselected``: walk a page
in display order and take rows that are not yet selected until a budget
runs out. The planner spends a fresh budget on the page on screen and
leaves the remainder pending; the reconciler spends the pending remainder
on each page that loads afterwards.

When pages are visited out of order while a budget is pending, the budget
goes to whichever page loads next. The result is "the first N rows
encountered while browsing", not the first N rows of the dataset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable

from .selection import SelectionStore
from .validation import validate_requested_count

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    """Ids newly selected by one pass and the budget left afterwards."""

    added_ids: tuple = ()
    pending_count: int = 0

    @property
    def added_count(self) -> int:
        return len(self.added_ids)


def select_first_unselected(
    selected_ids: frozenset | set,
    rows: Iterable[Any],
    budget: int,
) -> tuple[tuple[Hashable, ...], int]:
    """Pick up to ``budget`` rows, in order, whose id is not in ``selected_ids``.

    Returns ``(added_ids, remaining_budget)``. Rows repeated within ``rows``
    are taken at most once. Nothing is mutated.
    """
    added: list[Hashable] = []
    taken: set[Hashable] = set()
    remaining = budget
    for row in rows:
        if remaining <= 0:
            break
        row_id = row.id
        if row_id in selected_ids or row_id in taken:
            continue
        added.append(row_id)
        taken.add(row_id)
        remaining -= 1
    return tuple(added), remaining


class BulkSelectionPlanner:
    """Turns "select N rows" into selections on the current page plus a pending budget."""

    def __init__(self, store: SelectionStore) -> None:
        self._store = store

    def plan_bulk(self, requested_count: int, current_page_rows: Iterable[Any]) -> SelectionResult:
        """Select up to ``requested_count`` unselected rows of the current page.

        The leftover count replaces any pending budget from an earlier
        request. Raises ValidationError, without touching the store, when
        ``requested_count`` is not a positive integer.
        """
        count = validate_requested_count(requested_count)
        added, remaining = select_first_unselected(
            self._store.selected_ids, current_page_rows, count,
        )
        self._store.apply_selection(added, remaining)
        _LOG.info(
            "Bulk selection of %d rows: %d selected on this page, %d pending.",
            count, len(added), remaining,
        )
        return SelectionResult(added_ids=added, pending_count=remaining)


class PageLoadReconciler:
    """Drains the pending budget into the rows of each newly loaded page.

    Call ``reconcile`` once per completed page load; calling it again on
    the same rows finds nothing new to take.
    """

    def __init__(self, store: SelectionStore) -> None:
        self._store = store

    def reconcile(self, new_page_rows: Iterable[Any]) -> SelectionResult:
        pending = self._store.pending_count
        if pending == 0:
            return SelectionResult()
        added, remaining = select_first_unselected(
            self._store.selected_ids, new_page_rows, pending,
        )
        if added:
            self._store.apply_selection(added, remaining)
            _LOG.debug("Reconciled %d pending rows, %d still pending.", len(added), remaining)
        return SelectionResult(added_ids=added, pending_count=remaining)
