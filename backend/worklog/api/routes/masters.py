"""
Master Data API Routes.

Serves the reference data (workers, machines, materials, units) and the
version check used by clients to refresh only stale collections.
"""

from typing import Any

from fastapi import APIRouter, Query

from worklog.api.deps import MasterSourceDep
from worklog.application.dtos.task_dtos import ErrorResponse
from worklog.domain.masters.entities import MasterType, MasterVersions
from worklog.domain.shared.exceptions import MasterTypeNotFoundError

router = APIRouter(prefix="/masters", tags=["masters"])


@router.get("", summary="Get all reference data")
async def get_all_masters(master_source: MasterSourceDep) -> dict[str, Any]:
    snapshot = await master_source.load_all()
    return snapshot.to_wire()


@router.get(
    "/check",
    summary="Check reference data versions",
    description="Return the reference types whose server version differs from the client's.",
)
async def check_master_versions(
    master_source: MasterSourceDep,
    workers_version: str = Query("", alias="workersVersion"),
    machines_version: str = Query("", alias="machinesVersion"),
    materials_version: str = Query("", alias="materialsVersion"),
    units_version: str = Query("", alias="unitsVersion"),
) -> dict[str, list[str]]:
    versions = MasterVersions(
        workers=workers_version,
        machines=machines_version,
        materials=materials_version,
        units=units_version,
    )
    stale = await master_source.check_versions(versions)
    return {"updatedMasters": [master_type.value for master_type in stale]}


@router.get(
    "/{master_type}",
    summary="Get one reference collection",
    responses={404: {"model": ErrorResponse}},
)
async def get_master(master_type: str, master_source: MasterSourceDep) -> dict[str, Any]:
    try:
        parsed = MasterType(master_type)
    except ValueError as e:
        raise MasterTypeNotFoundError(master_type) from e

    collection = await master_source.fetch_one(parsed)
    return {
        parsed.value: [item.to_wire() for item in collection.items],
        "version": collection.version,
    }
