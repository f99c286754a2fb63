"""
Tests for the in-memory task repository.
"""

from datetime import datetime, timezone

import pytest

from worklog.data.fixtures import normal_tasks
from worklog.domain.shared.exceptions import TaskNotFoundError
from worklog.domain.tasks.entities import Task, TaskDraft, TaskMachine, TaskWorker
from worklog.infrastructure.repositories.task_repository import (
    InMemoryTaskRepository,
)


def make_draft(work_date: str = "2024-02-01", machine_id: str = "m001") -> TaskDraft:
    return TaskDraft(
        work_date=work_date,
        workers=[TaskWorker(id="w001", name="Taro Yamada")],
        machine=TaskMachine(id=machine_id, name="Press A-1"),
        materials=[],
    )


class TestCreate:
    """Test task creation."""

    def test_create_assigns_next_id_and_timestamps(self, repository, clock):
        """Test id derives from the current size and both stamps match."""
        expected_time = clock.now

        task = repository.create(make_draft())

        assert task.id == "t016"
        assert task.created_at == expected_time
        assert task.updated_at == task.created_at
        assert repository.count() == 16

    def test_created_task_is_found_equal(self, repository):
        created = repository.create(make_draft())

        assert repository.find_by_id(created.id) == created

    def test_create_appends_at_the_end(self, repository):
        created = repository.create(make_draft())

        assert repository.find_all()[-1].id == created.id

    def test_id_can_repeat_after_delete(self, repository):
        """Test the size-derived id scheme reuses an id after a delete."""
        repository.delete("t015")

        created = repository.create(make_draft())

        assert created.id == "t015"

    def test_empty_repository_starts_at_t001(self, clock):
        repository = InMemoryTaskRepository(clock=clock)

        assert repository.create(make_draft()).id == "t001"


class TestUpdate:
    """Test task updates."""

    def test_update_keeps_identity_and_creation_time(self, repository):
        original = repository.find_by_id("t003")

        updated = repository.update("t003", make_draft(work_date="2024-03-03"))

        assert updated.id == "t003"
        assert updated.created_at == original.created_at
        assert updated.work_date == "2024-03-03"
        assert updated.updated_at >= updated.created_at

    def test_update_keeps_position(self, repository):
        repository.update("t002", make_draft())

        assert [t.id for t in repository.find_all()][:3] == ["t001", "t002", "t003"]

    def test_updated_at_never_precedes_created_at(self, clock):
        """Test a clock running behind the record still yields a valid stamp."""
        repository = InMemoryTaskRepository(normal_tasks(), clock=clock)
        clock.now = clock.now.replace(year=2023)

        updated = repository.update("t001", make_draft())

        assert updated.updated_at == updated.created_at

    def test_update_record_with_naive_timestamps(self, clock):
        """Test a record stamped without a timezone is read as UTC."""
        seed = Task(
            id="t001",
            created_at=datetime(2024, 1, 15, 9, 0),
            updated_at=datetime(2024, 1, 15, 9, 0),
            **make_draft(work_date="2024-01-15").model_dump(),
        )
        repository = InMemoryTaskRepository([seed], clock=clock)
        expected_time = clock.now

        updated = repository.update("t001", make_draft())

        assert updated.created_at == datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert updated.updated_at == expected_time

    def test_naive_clock_reading_is_read_as_utc(self):
        repository = InMemoryTaskRepository(
            normal_tasks(), clock=lambda: datetime(2024, 2, 2, 8, 0)
        )

        created = repository.create(make_draft())
        updated = repository.update("t001", make_draft())

        assert created.created_at.tzinfo == timezone.utc
        assert updated.updated_at == datetime(2024, 2, 2, 8, 0, tzinfo=timezone.utc)

    def test_update_missing_raises(self, repository):
        with pytest.raises(TaskNotFoundError):
            repository.update("t999", make_draft())


class TestDelete:
    """Test task deletion."""

    def test_delete_removes_task(self, repository):
        repository.delete("t001")

        with pytest.raises(TaskNotFoundError):
            repository.find_by_id("t001")
        assert repository.count() == 14

    def test_delete_missing_leaves_size_unchanged(self, repository):
        with pytest.raises(TaskNotFoundError) as exc_info:
            repository.delete("t999")

        assert exc_info.value.task_id == "t999"
        assert repository.count() == 15


class TestIsolation:
    """Test returned records are snapshots."""

    def test_find_all_returns_copies(self, repository):
        snapshot = repository.find_all()
        snapshot.clear()

        assert repository.count() == 15

    def test_snapshot_does_not_see_later_writes(self, repository):
        snapshot = repository.find_all()

        repository.delete("t001")
        repository.update("t002", make_draft(work_date="2024-09-09"))

        assert len(snapshot) == 15
        assert snapshot[1].work_date == "2024-01-16"

    def test_seed_list_is_not_shared(self, clock):
        seed = normal_tasks()
        repository = InMemoryTaskRepository(seed, clock=clock)
        seed.pop()

        assert repository.count() == 15

    def test_independent_instances(self, clock):
        first = InMemoryTaskRepository(normal_tasks(), clock=clock)
        second = InMemoryTaskRepository(normal_tasks(), clock=clock)

        first.delete("t001")

        assert second.count() == 15

    def test_reset(self, repository):
        repository.reset([])

        assert repository.count() == 0
        assert repository.find_all() == []
