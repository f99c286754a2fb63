"""
API Dependencies.

Wires the reference cache, task repository, task service and scenario
manager for one application instance and exposes them to routes through
FastAPI dependency injection.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from worklog.api.scenarios import ScenarioManager
from worklog.application.services.task_service import TaskService
from worklog.core.config import Settings
from worklog.data.fixtures import load_dataset
from worklog.domain.masters.gateway import MasterDataGateway
from worklog.domain.tasks.entities import Task
from worklog.infrastructure.cache.reference_cache import ReferenceCache
from worklog.infrastructure.gateways.http_gateway import HttpMasterDataGateway
from worklog.infrastructure.gateways.in_memory_gateway import (
    InMemoryMasterDataGateway,
)
from worklog.infrastructure.repositories.task_repository import (
    InMemoryTaskRepository,
)


@dataclass
class AppContainer:
    """Everything one running application owns."""

    settings: Settings
    master_source: InMemoryMasterDataGateway
    gateway: MasterDataGateway
    reference_cache: ReferenceCache
    repository: InMemoryTaskRepository
    task_service: TaskService
    scenarios: ScenarioManager

    @classmethod
    def build(
        cls,
        settings: Settings,
        tasks: list[Task] | None = None,
        master_source: InMemoryMasterDataGateway | None = None,
        gateway: MasterDataGateway | None = None,
    ) -> "AppContainer":
        """
        Assemble a container.

        Args:
            settings: Application settings
            tasks: Seed tasks; defaults to ``settings.SEED_DATASET``
            master_source: Reference data served by ``/masters``
            gateway: Source the reference cache reads from; defaults to a
                remote gateway when ``MASTER_API_BASE_URL`` is set, else
                ``master_source`` itself
        """
        master_source = master_source or InMemoryMasterDataGateway()
        if gateway is None:
            if settings.master_api_url:
                gateway = HttpMasterDataGateway(
                    settings.master_api_url,
                    timeout=settings.MASTER_API_TIMEOUT_SECONDS,
                )
            else:
                gateway = master_source

        reference_cache = ReferenceCache(gateway)
        repository = InMemoryTaskRepository(
            tasks if tasks is not None else load_dataset(settings.SEED_DATASET)
        )
        return cls(
            settings=settings,
            master_source=master_source,
            gateway=gateway,
            reference_cache=reference_cache,
            repository=repository,
            task_service=TaskService(repository, reference_cache),
            scenarios=ScenarioManager(settings),
        )

    async def aclose(self) -> None:
        if isinstance(self.gateway, HttpMasterDataGateway):
            await self.gateway.aclose()


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


ContainerDep = Annotated[AppContainer, Depends(get_container)]


def get_task_service(container: ContainerDep) -> TaskService:
    return container.task_service


def get_scenarios(container: ContainerDep) -> ScenarioManager:
    return container.scenarios


def get_master_source(container: ContainerDep) -> InMemoryMasterDataGateway:
    return container.master_source


async def get_reference_cache(container: ContainerDep) -> ReferenceCache:
    """
    Reference cache, populated before the route runs.

    The first request loads everything; later requests run a best-effort
    differential refresh when ``REFRESH_MASTERS_ON_REQUEST`` is enabled.
    """
    cache = container.reference_cache
    if not cache.initialized:
        await cache.initialize()
    elif container.settings.REFRESH_MASTERS_ON_REQUEST:
        await cache.check_and_refresh()
    return cache


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
ScenarioManagerDep = Annotated[ScenarioManager, Depends(get_scenarios)]
MasterSourceDep = Annotated[InMemoryMasterDataGateway, Depends(get_master_source)]
