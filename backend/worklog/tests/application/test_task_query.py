"""
Tests for the task query pipeline (filter -> sort -> paginate).

Includes property-based checks over generated task lists.
"""

import math
from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from worklog.application.queries.task_query import (
    SortKey,
    SortOrder,
    TaskQueryParams,
    apply_filters,
    apply_pagination,
    apply_sorting,
    query_tasks,
)
from worklog.data.fixtures import build_large_dataset, normal_tasks
from worklog.domain.shared.exceptions import ValidationError
from worklog.domain.tasks.entities import Task, TaskMachine, TaskMaterial, TaskWorker

BASE_DATE = date(2024, 1, 1)
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@st.composite
def tasks_strategy(draw, max_size: int = 30) -> list[Task]:
    size = draw(st.integers(min_value=0, max_value=max_size))
    tasks = []
    for i in range(size):
        day = draw(st.integers(min_value=0, max_value=20))
        worker_ids = draw(
            st.lists(st.sampled_from(["w001", "w002", "w003", "w004"]), max_size=3, unique=True)
        )
        material_ids = draw(
            st.lists(st.sampled_from(["mt001", "mt002", "mt003"]), max_size=2, unique=True)
        )
        created = BASE_TIME + timedelta(minutes=draw(st.integers(0, 10_000)))
        tasks.append(
            Task(
                id=f"t{i + 1:03d}",
                work_date=(BASE_DATE + timedelta(days=day)).isoformat(),
                workers=[TaskWorker(id=w) for w in worker_ids],
                machine=TaskMachine(id="m001"),
                materials=[TaskMaterial(id=m, amount=1, unit_id="u001") for m in material_ids],
                created_at=created,
                updated_at=created,
            )
        )
    return tasks


params_strategy = st.builds(
    TaskQueryParams,
    page=st.integers(min_value=1, max_value=8),
    limit=st.integers(min_value=1, max_value=15),
    sort_by=st.sampled_from(["workDate", "createdAt", "updatedAt", "bogus"]),
    sort_order=st.sampled_from(["asc", "desc", "sideways"]),
    work_date_from=st.one_of(st.none(), st.just("2024-01-05")),
    work_date_to=st.one_of(st.none(), st.just("2024-01-15")),
    worker_ids=st.one_of(st.none(), st.just(["w001"]), st.just(["w002", "w004"])),
    material_ids=st.one_of(st.none(), st.just(["mt003"])),
)


class TestQueryProperties:
    """Property-based checks of the pipeline."""

    @given(tasks=tasks_strategy(), params=params_strategy)
    @hypothesis_settings(max_examples=60, deadline=None)
    def test_filtering_never_grows_the_list(self, tasks, params):
        assert len(apply_filters(tasks, params)) <= len(tasks)

    @given(tasks=tasks_strategy(), params=params_strategy)
    @hypothesis_settings(max_examples=60, deadline=None)
    def test_sorting_is_idempotent(self, tasks, params):
        once = apply_sorting(tasks, params.sort_by, params.sort_order)
        twice = apply_sorting(once, params.sort_by, params.sort_order)

        assert [t.id for t in once] == [t.id for t in twice]

    @given(tasks=tasks_strategy(), limit=st.integers(min_value=1, max_value=12))
    @hypothesis_settings(max_examples=60, deadline=None)
    def test_pages_partition_the_input(self, tasks, limit):
        """Test concatenating every page yields the input exactly once, in order."""
        first = apply_pagination(tasks, 1, limit)
        assert first.total_pages == math.ceil(len(tasks) / limit)

        collected = []
        for page in range(1, first.total_pages + 1):
            collected.extend(apply_pagination(tasks, page, limit).items)

        assert [t.id for t in collected] == [t.id for t in tasks]

    @given(tasks=tasks_strategy(), params=params_strategy)
    @hypothesis_settings(max_examples=60, deadline=None)
    def test_total_counts_filtered_tasks(self, tasks, params):
        response = query_tasks(tasks, params)

        assert response.total == len(apply_filters(tasks, params))
        assert len(response.items) <= params.limit


class TestFilters:
    """Test individual filter predicates on the bundled dataset."""

    def test_date_range_is_inclusive(self):
        params = TaskQueryParams(work_date_from="2024-01-17", work_date_to="2024-01-19")

        result = apply_filters(normal_tasks(), params)

        assert [t.work_date for t in result] == ["2024-01-17", "2024-01-18", "2024-01-19"]

    def test_worker_filter_matches_any(self):
        """Test a task matches when any of its workers is requested."""
        params = TaskQueryParams(worker_ids=["w008"])

        result = apply_filters(normal_tasks(), params)

        assert {t.id for t in result} == {"t007", "t015"}

    def test_material_filter(self):
        params = TaskQueryParams(material_ids=["mt008"])

        result = apply_filters(normal_tasks(), params)

        assert {t.id for t in result} == {"t001", "t013"}

    def test_filters_combine_with_and(self):
        params = TaskQueryParams(worker_ids=["w001"], work_date_from="2024-01-20")

        result = apply_filters(normal_tasks(), params)

        assert {t.id for t in result} == {"t010", "t015"}

    def test_empty_id_list_does_not_filter(self):
        params = TaskQueryParams(worker_ids=[])

        assert len(apply_filters(normal_tasks(), params)) == 15


class TestSorting:
    """Test sort keys, direction and stability."""

    def test_default_is_work_date_descending(self):
        result = apply_sorting(normal_tasks(), None, None)

        assert result[0].id == "t015"
        assert result[-1].id == "t001"

    def test_ascending(self):
        result = apply_sorting(normal_tasks(), "workDate", "asc")

        assert result[0].id == "t001"

    def test_unknown_key_falls_back_to_work_date(self):
        assert [t.id for t in apply_sorting(normal_tasks(), "bogus", "asc")] == [
            t.id for t in apply_sorting(normal_tasks(), "workDate", "asc")
        ]

    def test_updated_at(self):
        """Test ordering by the update timestamp."""
        result = apply_sorting(normal_tasks(), "updatedAt", "asc")

        assert [t.id for t in result][:3] == ["t001", "t002", "t003"]

    @pytest.mark.parametrize("sort_by", ["createdAt", "updatedAt"])
    def test_mixed_naive_and_aware_timestamps(self, sort_by):
        """Test naive timestamps sort as UTC alongside aware ones."""
        tasks = normal_tasks()[:3]
        naive = datetime(2024, 1, 16, 12, 0)
        tasks[0] = Task(
            **tasks[0].model_dump(exclude={"created_at", "updated_at"}),
            created_at=naive,
            updated_at=naive,
        )
        tasks[2] = tasks[2].model_copy(update={"created_at": naive, "updated_at": naive})

        result = apply_sorting(tasks, sort_by, "asc")

        assert [t.id for t in result] == ["t002", "t001", "t003"]

    @pytest.mark.parametrize("order", ["asc", "desc"])
    def test_ties_keep_input_order(self, order):
        tasks = [
            t.model_copy(update={"work_date": "2024-01-15"}) for t in normal_tasks()[:4]
        ]

        result = apply_sorting(tasks, "workDate", order)

        assert [t.id for t in result] == ["t001", "t002", "t003", "t004"]

    def test_parse_helpers(self):
        assert SortKey.parse("createdAt") is SortKey.CREATED_AT
        assert SortKey.parse(None) is SortKey.WORK_DATE
        assert SortOrder.parse("ASC") is SortOrder.ASC
        assert SortOrder.parse("") is SortOrder.DESC


class TestPagination:
    """Test page slicing."""

    def test_second_page_of_fifteen(self):
        """Test page 2 at limit 10 holds the five oldest tasks."""
        response = query_tasks(normal_tasks(), TaskQueryParams(page=2, limit=10))

        assert response.total == 15
        assert response.total_pages == 2
        assert [t.id for t in response.items] == ["t005", "t004", "t003", "t002", "t001"]

    def test_page_past_the_end_is_empty(self):
        response = apply_pagination(normal_tasks(), 5, 10)

        assert response.items == []
        assert response.total == 15
        assert response.page == 5

    def test_empty_input(self):
        response = apply_pagination([], 1, 10)

        assert response.total == 0
        assert response.total_pages == 0
        assert response.items == []

    def test_large_dataset(self):
        response = query_tasks(build_large_dataset(), TaskQueryParams(page=10, limit=10))

        assert response.total_pages == 10
        assert len(response.items) == 10
        assert response.items[-1].work_date == "2024-01-01"

    def test_wire_shape(self):
        response = query_tasks(normal_tasks(), TaskQueryParams(limit=1))
        wire = response.model_dump(by_alias=True, mode="json")

        assert set(wire) == {"items", "total", "page", "limit", "totalPages"}
        assert wire["items"][0]["workDate"] == "2024-01-29"


class TestTaskQueryParams:
    """Test parameter parsing."""

    def test_csv_ids(self):
        params = TaskQueryParams.parse(worker_ids="w001, w002,,")

        assert params.worker_ids == ["w001", "w002"]

    def test_wire_names(self):
        params = TaskQueryParams.model_validate(
            {"workDateFrom": "2024-01-01", "sortBy": "createdAt", "materialIds": "mt001"}
        )

        assert params.work_date_from == "2024-01-01"
        assert params.sort_by == "createdAt"
        assert params.material_ids == ["mt001"]

    @pytest.mark.parametrize("raw", [{"page": 0}, {"limit": 0}, {"page": -3}])
    def test_out_of_range_rejected(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            TaskQueryParams.parse(**raw)

        assert exc_info.value.message == "Invalid query parameters"
        assert set(exc_info.value.errors) == set(raw)
