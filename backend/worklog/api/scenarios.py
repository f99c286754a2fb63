"""
Mock response scenarios for the task endpoints.

A scenario is a named set of response behaviours, one per task
operation: pass through to the real service, answer an empty page,
answer after a delay, or fail with a server, validation or network
error. The active scenario is a tag held by a ``ScenarioManager``; routes
ask the active behaviour what to do instead of branching on names.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from worklog.application.dtos.task_dtos import TaskListResponse
from worklog.core.config import Settings
from worklog.core.observability import get_logger
from worklog.domain.shared.exceptions import (
    ScenarioNotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)

logger = get_logger(__name__)

T = TypeVar("T")


class TaskScenario(str, Enum):
    NORMAL = "normal"
    EMPTY = "empty"
    DELAY = "delay"
    SERVER_ERROR = "serverError"
    CREATE_VALIDATION_ERROR = "createValidationError"
    NETWORK_ERROR = "networkError"


class TaskOperation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ResponseKind(str, Enum):
    PASS_THROUGH = "pass_through"
    EMPTY_PAGE = "empty_page"
    DELAYED_EMPTY_PAGE = "delayed_empty_page"
    SERVER_ERROR = "server_error"
    VALIDATION_ERROR = "validation_error"
    NETWORK_ERROR = "network_error"


CANNED_VALIDATION_ERRORS: dict[TaskOperation, dict[str, str]] = {
    TaskOperation.CREATE: {
        "workDate": "Work date is required",
        "workerIds": "Select at least one worker",
        "machineId": "Select a machine",
    },
    TaskOperation.UPDATE: {
        "workDate": "Work date is required",
        "workerIds": "Select at least one worker",
    },
}


def empty_page() -> TaskListResponse:
    return TaskListResponse(items=[], total=0, page=1, limit=10, total_pages=0)


@dataclass(frozen=True)
class ScenarioBehaviour:
    """Response behaviour per task operation; unlisted operations pass through."""

    description: str
    overrides: dict[TaskOperation, ResponseKind] = field(default_factory=dict)

    def kind_for(self, operation: TaskOperation) -> ResponseKind:
        return self.overrides.get(operation, ResponseKind.PASS_THROUGH)


SCENARIOS: dict[TaskScenario, ScenarioBehaviour] = {
    TaskScenario.NORMAL: ScenarioBehaviour("Normal operation (default)"),
    TaskScenario.EMPTY: ScenarioBehaviour(
        "Empty task list",
        {TaskOperation.LIST: ResponseKind.EMPTY_PAGE},
    ),
    TaskScenario.DELAY: ScenarioBehaviour(
        "Slow task list (loading state)",
        {TaskOperation.LIST: ResponseKind.DELAYED_EMPTY_PAGE},
    ),
    TaskScenario.SERVER_ERROR: ScenarioBehaviour(
        "Server error (500)",
        {
            TaskOperation.LIST: ResponseKind.SERVER_ERROR,
            TaskOperation.CREATE: ResponseKind.SERVER_ERROR,
            TaskOperation.UPDATE: ResponseKind.SERVER_ERROR,
        },
    ),
    TaskScenario.CREATE_VALIDATION_ERROR: ScenarioBehaviour(
        "Validation error (400)",
        {
            TaskOperation.CREATE: ResponseKind.VALIDATION_ERROR,
            TaskOperation.UPDATE: ResponseKind.VALIDATION_ERROR,
        },
    ),
    TaskScenario.NETWORK_ERROR: ScenarioBehaviour(
        "Network error",
        {
            TaskOperation.LIST: ResponseKind.NETWORK_ERROR,
            TaskOperation.CREATE: ResponseKind.NETWORK_ERROR,
        },
    ),
}

DEFAULT_SCENARIO = TaskScenario.NORMAL


class ScenarioManager:
    """Holds the active scenario tag for one application instance."""

    def __init__(self, settings: Settings, initial: str | None = None):
        self.settings = settings
        self._current = self._coerce(initial or settings.MOCK_SCENARIO)

    @staticmethod
    def _coerce(scenario_id: str) -> TaskScenario:
        try:
            return TaskScenario(scenario_id)
        except ValueError:
            logger.warning("Unknown scenario, using default", scenario_id=scenario_id)
            return DEFAULT_SCENARIO

    @property
    def current(self) -> TaskScenario:
        return self._current

    @property
    def behaviour(self) -> ScenarioBehaviour:
        return SCENARIOS[self._current]

    def switch(self, scenario_id: str) -> TaskScenario:
        """
        Activate a scenario.

        Raises:
            ScenarioNotFoundError: If the id names no scenario
        """
        try:
            scenario = TaskScenario(scenario_id)
        except ValueError as e:
            raise ScenarioNotFoundError(scenario_id) from e
        self._current = scenario
        logger.info("Scenario switched", scenario=scenario.value)
        return scenario

    def clear(self) -> TaskScenario:
        self._current = DEFAULT_SCENARIO
        return self._current

    @staticmethod
    def available() -> list[dict[str, str]]:
        return [
            {"id": scenario.value, "description": behaviour.description}
            for scenario, behaviour in SCENARIOS.items()
        ]

    async def run(self, operation: TaskOperation, handler: Callable[[], T]) -> T:
        """
        Produce the response for ``operation`` under the active scenario.

        ``handler`` performs the real work and is only called for
        pass-through behaviour.
        """
        if self.settings.SIMULATE_LATENCY:
            await asyncio.sleep(self.settings.SIMULATED_LATENCY_SECONDS)

        responder = RESPONDERS[self.behaviour.kind_for(operation)]
        return await responder(self.settings, operation, handler)


async def _pass_through(settings: Settings, operation: TaskOperation, handler):
    return handler()


async def _empty_page(settings: Settings, operation: TaskOperation, handler):
    return empty_page()


async def _delayed_empty_page(settings: Settings, operation: TaskOperation, handler):
    await asyncio.sleep(settings.DELAY_SCENARIO_SECONDS)
    return empty_page()


async def _server_error(settings: Settings, operation: TaskOperation, handler):
    raise ServerError()


async def _validation_error(settings: Settings, operation: TaskOperation, handler):
    raise ValidationError(CANNED_VALIDATION_ERRORS.get(operation, {}))


async def _network_error(settings: Settings, operation: TaskOperation, handler):
    raise TransportError(f"Simulated network failure on {operation.value}")


RESPONDERS: dict[ResponseKind, Callable[..., Awaitable]] = {
    ResponseKind.PASS_THROUGH: _pass_through,
    ResponseKind.EMPTY_PAGE: _empty_page,
    ResponseKind.DELAYED_EMPTY_PAGE: _delayed_empty_page,
    ResponseKind.SERVER_ERROR: _server_error,
    ResponseKind.VALIDATION_ERROR: _validation_error,
    ResponseKind.NETWORK_ERROR: _network_error,
}
