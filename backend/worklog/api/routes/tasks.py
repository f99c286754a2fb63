"""
Task API Routes.

CRUD and listing endpoints for work-record tasks. Responses pass through
the active mock scenario, which may substitute canned data or errors.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from worklog.api.deps import ScenarioManagerDep, TaskServiceDep, get_reference_cache
from worklog.api.scenarios import TaskOperation
from worklog.application.dtos.task_dtos import (
    CreateTaskRequest,
    ErrorResponse,
    TaskListResponse,
    UpdateTaskRequest,
    ValidationErrorResponse,
)
from worklog.application.queries.task_query import TaskQueryParams
from worklog.domain.tasks.entities import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "",
    summary="List tasks",
    description="Filter, sort and paginate tasks.",
    response_model=TaskListResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
async def list_tasks(
    task_service: TaskServiceDep,
    scenarios: ScenarioManagerDep,
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Tasks per page"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    work_date_from: str | None = Query(None, alias="workDateFrom"),
    work_date_to: str | None = Query(None, alias="workDateTo"),
    worker_ids: str | None = Query(None, alias="workerIds", description="csv"),
    material_ids: str | None = Query(None, alias="materialIds", description="csv"),
) -> TaskListResponse:
    settings = scenarios.settings
    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    params = TaskQueryParams.parse(
        page=page,
        limit=min(limit, settings.MAX_PAGE_LIMIT),
        sort_by=sort_by or settings.DEFAULT_SORT_BY,
        sort_order=sort_order or settings.DEFAULT_SORT_ORDER,
        work_date_from=work_date_from,
        work_date_to=work_date_to,
        worker_ids=worker_ids,
        material_ids=material_ids,
    )
    return await scenarios.run(
        TaskOperation.LIST, lambda: task_service.list_tasks(params)
    )


@router.get(
    "/{task_id}",
    summary="Get task by ID",
    response_model=Task,
    responses={404: {"model": ErrorResponse}},
)
async def get_task(
    task_id: str, task_service: TaskServiceDep, scenarios: ScenarioManagerDep
) -> Task:
    return await scenarios.run(TaskOperation.GET, lambda: task_service.get_task(task_id))


@router.post(
    "",
    summary="Create task",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_reference_cache)],
    responses={
        400: {"model": ValidationErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_task(
    request: CreateTaskRequest,
    task_service: TaskServiceDep,
    scenarios: ScenarioManagerDep,
) -> Task:
    return await scenarios.run(
        TaskOperation.CREATE, lambda: task_service.create_task(request)
    )


@router.put(
    "/{task_id}",
    summary="Update task",
    dependencies=[Depends(get_reference_cache)],
    response_model=Task,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    task_service: TaskServiceDep,
    scenarios: ScenarioManagerDep,
) -> Task:
    return await scenarios.run(
        TaskOperation.UPDATE, lambda: task_service.update_task(task_id, request)
    )


@router.delete(
    "/{task_id}",
    summary="Delete task",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
)
async def delete_task(
    task_id: str, task_service: TaskServiceDep, scenarios: ScenarioManagerDep
) -> Response:
    await scenarios.run(TaskOperation.DELETE, lambda: task_service.delete_task(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
