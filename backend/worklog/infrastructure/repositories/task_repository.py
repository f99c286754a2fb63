"""
In-memory task repository.

Holds the authoritative task collection for one process. Instances are
owned by whoever constructs them, so independent instances never share
state.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from worklog.domain.shared.exceptions import TaskNotFoundError
from worklog.domain.tasks.entities import Task, TaskDraft, as_utc
from worklog.domain.tasks.repository import TaskRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTaskRepository(TaskRepository):
    """List-backed implementation of TaskRepository."""

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize repository.

        Args:
            tasks: Seed records, kept in the given order
            clock: Source of creation/update timestamps
        """
        self._tasks: list[Task] = [task.model_copy(deep=True) for task in tasks or []]
        self._clock = clock

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def find_all(self) -> list[Task]:
        return [task.model_copy(deep=True) for task in self._tasks]

    def find_by_id(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)].model_copy(deep=True)

    def create(self, draft: TaskDraft) -> Task:
        # Derived from the current size, so ids can repeat after deletes
        task_id = f"t{len(self._tasks) + 1:03d}"
        now = as_utc(self._clock())
        task = Task(
            id=task_id,
            created_at=now,
            updated_at=now,
            **draft.model_dump(),
        )
        self._tasks.append(task)
        logger.info("Created task %s for %s", task.id, task.work_date)
        return task.model_copy(deep=True)

    def update(self, task_id: str, draft: TaskDraft) -> Task:
        index = self._index_of(task_id)
        existing = self._tasks[index]
        updated = Task(
            id=existing.id,
            created_at=existing.created_at,
            updated_at=max(as_utc(self._clock()), existing.created_at),
            **draft.model_dump(),
        )
        self._tasks[index] = updated
        logger.info("Updated task %s", task_id)
        return updated.model_copy(deep=True)

    def delete(self, task_id: str) -> None:
        index = self._index_of(task_id)
        del self._tasks[index]
        logger.info("Deleted task %s", task_id)

    def count(self) -> int:
        return len(self._tasks)

    def reset(self, tasks: Iterable[Task]) -> None:
        """Replace the whole collection, e.g. when reseeding fixtures."""
        self._tasks = [task.model_copy(deep=True) for task in tasks]
        logger.info("Repository reset with %d tasks", len(self._tasks))
