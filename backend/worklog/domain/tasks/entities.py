"""
Task entities.

A task records one day's work: who worked, on which machine, and which
materials were consumed. Worker, machine, material and unit ids refer to
reference data; the display names are denormalised onto the record.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from worklog.domain.shared.base import ValueObject


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp, or convert an aware one to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TaskWorker(ValueObject):
    """Worker assigned to a task."""

    id: str
    name: str = ""


class TaskMachine(ValueObject):
    """Machine used by a task."""

    id: str
    name: str = ""


class TaskMaterial(ValueObject):
    """Material consumed by a task."""

    id: str
    name: str = ""
    amount: float = Field(..., gt=0)
    unit_id: str
    unit_name: str = ""


class TaskDraft(ValueObject):
    """Task content without repository-assigned identity and timestamps."""

    work_date: str
    workers: list[TaskWorker] = []
    machine: TaskMachine
    materials: list[TaskMaterial] = []


class Task(TaskDraft):
    """A persisted task record."""

    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalise_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)

    def to_draft(self) -> TaskDraft:
        return TaskDraft(
            work_date=self.work_date,
            workers=list(self.workers),
            machine=self.machine,
            materials=list(self.materials),
        )

    @property
    def worker_ids(self) -> list[str]:
        return [worker.id for worker in self.workers]

    @property
    def material_ids(self) -> list[str]:
        return [material.id for material in self.materials]
