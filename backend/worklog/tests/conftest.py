"""
Shared fixtures for the worklog test suite.
"""

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from worklog.api.deps import AppContainer
from worklog.application.services.task_service import TaskService
from worklog.core.config import Settings
from worklog.data.fixtures import normal_tasks
from worklog.infrastructure.cache.reference_cache import ReferenceCache
from worklog.infrastructure.gateways.in_memory_gateway import (
    InMemoryMasterDataGateway,
)
from worklog.infrastructure.repositories.task_repository import (
    InMemoryTaskRepository,
)
from worklog.main import create_app


class FakeClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        MOCK_SCENARIO="normal",
        SIMULATE_LATENCY=False,
        DELAY_SCENARIO_SECONDS=0.0,
        SEED_DATASET="normal",
        MASTER_API_BASE_URL=None,
        LOG_FORMAT="console",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(clock: FakeClock) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(normal_tasks(), clock=clock)


@pytest.fixture
def master_source() -> InMemoryMasterDataGateway:
    return InMemoryMasterDataGateway()


@pytest.fixture
def reference_cache(master_source: InMemoryMasterDataGateway) -> ReferenceCache:
    return ReferenceCache(master_source)


@pytest.fixture
async def loaded_cache(reference_cache: ReferenceCache) -> ReferenceCache:
    await reference_cache.initialize()
    return reference_cache


@pytest.fixture
def task_service(
    repository: InMemoryTaskRepository, loaded_cache: ReferenceCache
) -> TaskService:
    return TaskService(repository, loaded_cache)


@pytest.fixture
def container(
    test_settings: Settings, master_source: InMemoryMasterDataGateway
) -> AppContainer:
    return AppContainer.build(
        test_settings, tasks=normal_tasks(), master_source=master_source
    )


@pytest.fixture
def client(test_settings: Settings, container: AppContainer) -> Iterator[TestClient]:
    app = create_app(test_settings, container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def valid_form() -> dict:
    return {
        "workDate": "2024-02-01",
        "workerIds": ["w001", "w002"],
        "machineId": "m001",
        "materials": [{"id": "mt001", "amount": 10, "unitId": "u007"}],
    }
