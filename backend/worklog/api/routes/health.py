"""
Health Check API Routes

Reports liveness plus the state of the reference-data cache.
"""

from fastapi import APIRouter

from worklog.api.deps import ContainerDep

router = APIRouter()


@router.get("/health", summary="Service health")
async def get_health_status(container: ContainerDep) -> dict:
    """
    Get service health.

    The service is operational without reference data; a cache that has
    not loaded yet is reported so operators can spot an unreachable
    master source.
    """
    cache = container.reference_cache
    return {
        "status": "healthy",
        "environment": container.settings.ENVIRONMENT,
        "referenceCache": {
            "initialized": cache.initialized,
            "loading": cache.loading,
            "versions": cache.versions.to_wire(),
        },
        "tasks": container.repository.count(),
        "scenario": container.scenarios.current.value,
    }
