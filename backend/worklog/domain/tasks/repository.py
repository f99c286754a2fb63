"""
Task Repository Interface

Defines the contract for task data access operations.
"""

from abc import ABC, abstractmethod

from .entities import Task, TaskDraft


class TaskRepository(ABC):
    """
    Abstract repository interface for Task records.

    Insertion order is the canonical iteration order. Every method is
    atomic with respect to other calls; there is no multi-record
    transaction and concurrent updates to one id are last-writer-wins.
    """

    @abstractmethod
    def find_all(self) -> list[Task]:
        """
        Return a snapshot of every task.

        Returns:
            Copy of the collection in insertion order; later mutations of
            the repository are not visible through it
        """
        pass

    @abstractmethod
    def find_by_id(self, task_id: str) -> Task:
        """
        Retrieve a task by its ID.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass

    @abstractmethod
    def create(self, draft: TaskDraft) -> Task:
        """
        Append a new task built from the draft.

        The caller is responsible for validating the draft first.

        Returns:
            Created task with id and timestamps assigned
        """
        pass

    @abstractmethod
    def update(self, task_id: str, draft: TaskDraft) -> Task:
        """
        Replace every field of a task except ``id`` and ``created_at``.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """
        Remove a task permanently.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Count total number of tasks."""
        pass
