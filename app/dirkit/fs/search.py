"""Budgeted breadth search over a directory tree.

A search examines the root, then every directory admitted while the
budget lasts. Enumerations of admitted directories run concurrently;
the search finishes when the number of finished examinations catches up
with the number of admitted directories. Both counters move while the
search runs, so completion is re-checked after every examination.

Failure policy: the first failing branch ends the search with its
error. Branches already in flight are not cancelled; they finish and
their results are discarded.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dirkit.fs.bridge import spawn
from dirkit.fs.entity import Entity, EntityKind
from dirkit.fs.models import (
    ListOptions,
    ResultEnvelope,
    Status,
    matches_template,
    validate_search_limit,
)

if TYPE_CHECKING:
    from dirkit.fs.directory import Directory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TraversalBudget:
    """Live counters of one bounded search.

    Attributes:
        search_limit: Maximum number of directories examined, root included.
        total: Directories admitted so far (the root counts as admitted).
        processed: Admitted directories whose examination finished.
    """

    search_limit: int = 1
    total: int = 1
    processed: int = 0

    def __post_init__(self) -> None:
        """Validate the limit."""
        validate_search_limit(self.search_limit)

    def admit(self) -> bool:
        """Admit one more directory if the budget allows it.

        Returns:
            True if the directory was admitted and must be examined.
        """
        if self.total < self.search_limit:
            self.total += 1
            return True
        return False

    def complete(self) -> bool:
        """Record a finished examination.

        Returns:
            True if every admitted directory has now been examined.
        """
        self.processed += 1
        return self.processed == self.total

    @property
    def finished(self) -> bool:
        """Check if every admitted directory has been examined."""
        return self.processed == self.total


class BoundedSearch:
    """Driver for a single find_files / find_directories invocation.

    Args:
        root: Directory the search starts from.
        options: Listing options carrying the template and search limit.
        target: Kind of entity collected (files or directories).
    """

    def __init__(self, root: Directory, options: ListOptions, target: EntityKind) -> None:
        self._root = root
        self._template = options.template
        self._target = target
        self._budget = TraversalBudget(options.search_limit)
        self._found: list[Entity] = []
        self._branches: set[asyncio.Task[ResultEnvelope]] = set()
        self._done: asyncio.Future[ResultEnvelope] | None = None

    @property
    def budget(self) -> TraversalBudget:
        """Counters of this search."""
        return self._budget

    async def run(self, *, drain: bool = False) -> ResultEnvelope:
        """Examine the tree and return the collected entities.

        Args:
            drain: Wait for branches still in flight before returning or
                raising. Blocking callers set this so that no enumeration
                outlives the call.

        Returns:
            OK envelope with the collected entities (order not defined).

        Raises:
            OSError: The first host failure of any branch.
        """
        self._done = asyncio.get_running_loop().create_future()
        self._schedule(self._root)
        try:
            return await self._done
        finally:
            if drain and self._branches:
                await asyncio.gather(*self._branches, return_exceptions=True)

    def _schedule(self, directory: Directory) -> None:
        task = spawn(directory._enumerate())
        self._branches.add(task)
        task.add_done_callback(self._on_examined)

    def _on_examined(self, task: asyncio.Task[ResultEnvelope]) -> None:
        self._branches.discard(task)
        error = None if task.cancelled() else task.exception()
        done = self._done
        if done is None or done.done():
            logger.debug("Discarding branch result of a finished search")
            return

        if task.cancelled():
            done.cancel()
            return
        if error is not None:
            logger.debug("Search branch failed: %s", error)
            done.set_exception(error)
            return

        for entity in task.result().data:
            self._visit(entity)

        logger.debug(
            "Search progress: %d/%d examined (limit %d)",
            self._budget.processed + 1,
            self._budget.total,
            self._budget.search_limit,
        )
        if self._budget.complete():
            done.set_result(ResultEnvelope(Status.OK, list(self._found)))

    def _visit(self, entity: Entity) -> None:
        is_dir = entity.kind == EntityKind.DIRECTORY

        if self._target == EntityKind.FILE:
            if not is_dir:
                if matches_template(entity.full_name, self._template):
                    self._found.append(entity)
            elif self._budget.admit():
                self._schedule(entity)  # type: ignore[arg-type]
            return

        if not is_dir:
            return
        # Matching and descending are independent for directory searches.
        if matches_template(entity.full_name, self._template):
            self._found.append(entity)
        if self._budget.admit():
            self._schedule(entity)  # type: ignore[arg-type]
