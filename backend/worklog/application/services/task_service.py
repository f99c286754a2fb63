"""
Task application service.

Coordinates validation, reference-name resolution and repository access
for the task use cases.
"""

from worklog.application.dtos.task_dtos import TaskFormInput, TaskListResponse
from worklog.application.queries.task_query import TaskQueryParams, query_tasks
from worklog.application.validation.validators import validate_task_form
from worklog.core.observability import get_logger
from worklog.domain.masters.entities import Material, MasterType, Unresolved
from worklog.domain.tasks.entities import (
    Task,
    TaskDraft,
    TaskMachine,
    TaskMaterial,
    TaskWorker,
)
from worklog.domain.tasks.repository import TaskRepository
from worklog.infrastructure.cache.reference_cache import ReferenceCache

logger = get_logger(__name__)


class TaskService:
    """Use cases for listing and mutating tasks."""

    def __init__(self, repository: TaskRepository, reference_cache: ReferenceCache):
        self.repository = repository
        self.reference_cache = reference_cache

    def list_tasks(self, params: TaskQueryParams) -> TaskListResponse:
        return query_tasks(self.repository.find_all(), params)

    def get_task(self, task_id: str) -> Task:
        return self.repository.find_by_id(task_id)

    def create_task(self, form: TaskFormInput) -> Task:
        """
        Validate and store a new task.

        Raises:
            ValidationError: With every failing field
        """
        validate_task_form(form).raise_if_invalid()
        task = self.repository.create(self.build_draft(form))
        logger.info("Task created", task_id=task.id, work_date=task.work_date)
        return task

    def update_task(self, task_id: str, form: TaskFormInput) -> Task:
        """
        Validate and replace an existing task's content.

        Raises:
            TaskNotFoundError: If the task does not exist
            ValidationError: With every failing field
        """
        self.repository.find_by_id(task_id)
        validate_task_form(form).raise_if_invalid()
        task = self.repository.update(task_id, self.build_draft(form))
        logger.info("Task updated", task_id=task.id)
        return task

    def delete_task(self, task_id: str) -> None:
        self.repository.delete(task_id)
        logger.info("Task deleted", task_id=task_id)

    def _name(self, master_type: MasterType, item_id: str) -> str:
        result = self.reference_cache.resolve(master_type, item_id)
        if isinstance(result, Unresolved):
            logger.warning(
                "Unresolved reference id",
                master_type=master_type.value,
                item_id=item_id,
            )
        return result.name

    def build_draft(self, form: TaskFormInput) -> TaskDraft:
        """
        Turn validated form values into a draft with display names filled in.

        Ids are trusted as submitted; an id missing from the reference
        cache is stored with an empty name.
        """
        materials = []
        for line in form.submitted_materials():
            unit_id = line.unit_id
            if not unit_id:
                material = self.reference_cache.get(MasterType.MATERIALS, line.id)
                if isinstance(material, Material):
                    unit_id = material.default_unit_id
            materials.append(
                TaskMaterial(
                    id=line.id,
                    name=self._name(MasterType.MATERIALS, line.id),
                    amount=line.amount,
                    unit_id=unit_id,
                    unit_name=self._name(MasterType.UNITS, unit_id) if unit_id else "",
                )
            )

        return TaskDraft(
            work_date=form.work_date,
            workers=[
                TaskWorker(id=worker_id, name=self._name(MasterType.WORKERS, worker_id))
                for worker_id in form.worker_ids
            ],
            machine=TaskMachine(
                id=form.machine_id,
                name=self._name(MasterType.MACHINES, form.machine_id),
            ),
            materials=materials,
        )
