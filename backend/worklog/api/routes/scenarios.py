"""
Mock Scenario API Routes.

Lets a developer switch the task endpoints between normal operation and
canned empty, slow or failing responses at runtime.
"""

from fastapi import APIRouter

from worklog.api.deps import ScenarioManagerDep
from worklog.application.dtos.task_dtos import ErrorResponse

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", summary="List scenarios and the active one")
async def list_scenarios(scenarios: ScenarioManagerDep) -> dict:
    return {"current": scenarios.current.value, "available": scenarios.available()}


@router.put(
    "/{scenario_id}",
    summary="Activate a scenario",
    responses={404: {"model": ErrorResponse}},
)
async def switch_scenario(scenario_id: str, scenarios: ScenarioManagerDep) -> dict:
    return {"current": scenarios.switch(scenario_id).value}


@router.delete("", summary="Reset to the default scenario")
async def clear_scenario(scenarios: ScenarioManagerDep) -> dict:
    return {"current": scenarios.clear().value}
