"""
Task-related Data Transfer Objects.

Request and response shapes of the task endpoints. Request DTOs accept
blank and missing values; structural rules are enforced by
``validate_task_form``, which reports every violation at once.
"""

import math

from pydantic import Field

from worklog.domain.shared.base import WireModel
from worklog.domain.tasks.entities import Task


class FormMaterial(WireModel):
    """Material line of a task form; blank lines have an empty id."""

    id: str = ""
    amount: float | None = None
    unit_id: str = ""


class TaskFormInput(WireModel):
    """Values submitted to create or update a task."""

    work_date: str | None = ""
    worker_ids: list[str] = []
    machine_id: str | None = ""
    materials: list[FormMaterial] = []

    model_config = {
        "json_schema_extra": {
            "example": {
                "workDate": "2024-01-15",
                "workerIds": ["w001", "w002"],
                "machineId": "m001",
                "materials": [{"id": "mt001", "amount": 10, "unitId": "u007"}],
            }
        }
    }

    @classmethod
    def from_task(cls, task: Task) -> "TaskFormInput":
        """Build form values from an existing task (edit mode)."""
        return cls(
            work_date=task.work_date,
            worker_ids=[worker.id for worker in task.workers],
            machine_id=task.machine.id,
            materials=[
                FormMaterial(id=m.id, amount=m.amount, unit_id=m.unit_id)
                for m in task.materials
            ],
        )

    def submitted_materials(self) -> list[FormMaterial]:
        """Material lines that will actually be stored (non-blank, positive)."""
        return [
            m
            for m in self.materials
            if m.id and m.amount is not None and math.isfinite(m.amount) and m.amount > 0
        ]


CreateTaskRequest = TaskFormInput
UpdateTaskRequest = TaskFormInput


class TaskListResponse(WireModel):
    """One page of tasks."""

    items: list[Task]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class ErrorResponse(WireModel):
    message: str


class ValidationErrorResponse(WireModel):
    message: str
    errors: dict[str, str]
