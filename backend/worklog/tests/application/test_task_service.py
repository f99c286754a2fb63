"""
Tests for the task application service.
"""

import pytest

from worklog.application.dtos.task_dtos import FormMaterial, TaskFormInput
from worklog.application.queries.task_query import TaskQueryParams
from worklog.domain.shared.exceptions import TaskNotFoundError, ValidationError


def make_form(**overrides) -> TaskFormInput:
    values = {
        "work_date": "2024-02-01",
        "worker_ids": ["w001", "w002"],
        "machine_id": "m003",
        "materials": [FormMaterial(id="mt001", amount=4, unit_id="u007")],
    }
    values.update(overrides)
    return TaskFormInput(**values)


class TestCreateTask:
    """Test task creation through the service."""

    @pytest.mark.asyncio
    async def test_create_fills_display_names(self, task_service):
        task = task_service.create_task(make_form())

        assert [w.name for w in task.workers] == ["Taro Yamada", "Hanako Suzuki"]
        assert task.machine.name == "Lathe B-1"
        assert task.materials[0].name == "Aluminium Sheet A5052"
        assert task.materials[0].unit_name == "Sheet"

    @pytest.mark.asyncio
    async def test_blank_unit_uses_material_default(self, task_service):
        form = make_form(materials=[FormMaterial(id="mt005", amount=2.5)])

        task = task_service.create_task(form)

        assert task.materials[0].unit_id == "u001"
        assert task.materials[0].unit_name == "Kilogram"

    @pytest.mark.asyncio
    async def test_blank_material_lines_are_dropped(self, task_service):
        form = make_form(
            materials=[FormMaterial(), FormMaterial(id="mt008", amount=3, unit_id="u006")]
        )

        task = task_service.create_task(form)

        assert [m.id for m in task.materials] == ["mt008"]

    @pytest.mark.asyncio
    async def test_unknown_reference_id_stored_with_empty_name(self, task_service):
        task = task_service.create_task(make_form(worker_ids=["w999"]))

        assert task.workers[0].id == "w999"
        assert task.workers[0].name == ""

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_stored(self, task_service, repository):
        with pytest.raises(ValidationError) as exc_info:
            task_service.create_task(make_form(work_date="", worker_ids=[]))

        assert set(exc_info.value.errors) == {"workDate", "workerIds"}
        assert repository.count() == 15


class TestUpdateTask:
    """Test task updates through the service."""

    @pytest.mark.asyncio
    async def test_update_replaces_content(self, task_service):
        task = task_service.update_task("t002", make_form(machine_id="m008"))

        assert task.id == "t002"
        assert task.machine.name == "Inspection Rig F-1"
        assert task_service.get_task("t002").machine.id == "m008"

    @pytest.mark.asyncio
    async def test_missing_task_wins_over_invalid_form(self, task_service):
        """Test an unknown id is reported before form errors."""
        with pytest.raises(TaskNotFoundError):
            task_service.update_task("t999", make_form(work_date=""))

    @pytest.mark.asyncio
    async def test_invalid_form_leaves_task_untouched(self, task_service):
        before = task_service.get_task("t001")

        with pytest.raises(ValidationError):
            task_service.update_task("t001", make_form(machine_id=""))

        assert task_service.get_task("t001") == before

    @pytest.mark.asyncio
    async def test_edit_round_trip_keeps_content(self, task_service):
        """Test re-submitting an existing task's form values changes nothing but the stamp."""
        before = task_service.get_task("t003")

        after = task_service.update_task("t003", TaskFormInput.from_task(before))

        assert after.to_draft() == before.to_draft()
        assert after.updated_at >= before.updated_at


class TestListAndDelete:
    """Test listing and deletion through the service."""

    @pytest.mark.asyncio
    async def test_list_uses_query_pipeline(self, task_service):
        page = task_service.list_tasks(TaskQueryParams(limit=5, worker_ids=["w001"]))

        assert page.total == 4
        assert [t.id for t in page.items] == ["t015", "t010", "t004", "t001"]

    @pytest.mark.asyncio
    async def test_delete(self, task_service):
        task_service.delete_task("t004")

        with pytest.raises(TaskNotFoundError):
            task_service.get_task("t004")

    @pytest.mark.asyncio
    async def test_delete_missing(self, task_service, repository):
        with pytest.raises(TaskNotFoundError):
            task_service.delete_task("nope")

        assert repository.count() == 15
