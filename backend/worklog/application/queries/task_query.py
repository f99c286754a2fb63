"""
Task query pipeline: filter, then sort, then paginate.

Everything here is pure and synchronous; it works on a snapshot taken
from the task repository and never touches the repository itself.
"""

import math
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator

from worklog.application.dtos.task_dtos import TaskListResponse
from worklog.domain.shared.base import WireModel
from worklog.domain.shared.exceptions import ValidationError
from worklog.domain.tasks.entities import Task, as_utc


class SortKey(str, Enum):
    WORK_DATE = "workDate"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @classmethod
    def parse(cls, value: str | None) -> "SortKey":
        """Unrecognised keys fall back to workDate."""
        try:
            return cls(value)
        except ValueError:
            return cls.WORK_DATE


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Anything other than asc/desc falls back to desc."""
        try:
            return cls(value.lower() if value else value)
        except ValueError:
            return cls.DESC


SORT_FIELDS: dict[SortKey, Callable[[Task], Any]] = {
    SortKey.WORK_DATE: lambda task: task.work_date,
    SortKey.CREATED_AT: lambda task: as_utc(task.created_at),
    SortKey.UPDATED_AT: lambda task: as_utc(task.updated_at),
}


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class TaskQueryParams(WireModel):
    """Listing parameters; ``workerIds``/``materialIds`` also accept csv."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    sort_by: str = SortKey.WORK_DATE.value
    sort_order: str = SortOrder.DESC.value
    work_date_from: str | None = None
    work_date_to: str | None = None
    worker_ids: list[str] | None = None
    material_ids: list[str] | None = None

    @field_validator("worker_ids", "material_ids", mode="before")
    @classmethod
    def _parse_id_list(cls, value: Any) -> Any:
        return _split_csv(value)

    @classmethod
    def parse(cls, **raw: Any) -> "TaskQueryParams":
        """
        Build params from raw values, reporting bad ones as ValidationError.

        Raises:
            ValidationError: With one message per offending parameter
        """
        try:
            return cls.model_validate({k: v for k, v in raw.items() if v is not None})
        except PydanticValidationError as e:
            errors = {}
            for error in e.errors():
                field = ".".join(str(loc) for loc in error["loc"])
                errors[field] = error["msg"]
            raise ValidationError(errors, message="Invalid query parameters") from e


def apply_filters(tasks: Sequence[Task], params: TaskQueryParams) -> list[Task]:
    """
    Keep tasks matching every supplied predicate.

    Dates compare as strings, which is sound for fixed-width YYYY-MM-DD.
    Id filters match when any of the task's ids is in the requested set.
    """
    worker_ids = set(params.worker_ids or [])
    material_ids = set(params.material_ids or [])

    def matches(task: Task) -> bool:
        if params.work_date_from and task.work_date < params.work_date_from:
            return False
        if params.work_date_to and task.work_date > params.work_date_to:
            return False
        if worker_ids and not worker_ids.intersection(task.worker_ids):
            return False
        if material_ids and not material_ids.intersection(task.material_ids):
            return False
        return True

    return [task for task in tasks if matches(task)]


def apply_sorting(
    tasks: Sequence[Task], sort_by: str | None, sort_order: str | None
) -> list[Task]:
    """Stable sort; ties keep their incoming relative order in both directions."""
    key = SORT_FIELDS[SortKey.parse(sort_by)]
    descending = SortOrder.parse(sort_order) is SortOrder.DESC
    return sorted(tasks, key=key, reverse=descending)


def apply_pagination(tasks: Sequence[Task], page: int, limit: int) -> TaskListResponse:
    """Slice one page; a page past the end is empty rather than an error."""
    total = len(tasks)
    start_index = (page - 1) * limit
    return TaskListResponse(
        items=list(tasks[start_index : start_index + limit]),
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


def query_tasks(snapshot: Sequence[Task], params: TaskQueryParams) -> TaskListResponse:
    """Run the filter -> sort -> paginate pipeline over a task snapshot."""
    filtered = apply_filters(snapshot, params)
    ordered = apply_sorting(filtered, params.sort_by, params.sort_order)
    return apply_pagination(ordered, params.page, params.limit)
