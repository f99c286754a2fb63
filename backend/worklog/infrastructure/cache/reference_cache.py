"""
Versioned reference-data cache.

Holds workers, machines, materials and units, each stamped with the
version token it was fetched under. The cache is populated once by
``initialize`` and kept current by ``check_and_refresh``, which refetches
only the collections whose token changed on the source side.

Concurrency notes:
    - Concurrent ``initialize`` calls share one in-flight load and all
      resolve (or fail) together.
    - ``check_and_refresh`` is not deduplicated. Overlapping calls may
      refetch the same type twice; a fetch is a full replacement, so the
      result is the same, but no ordering between the calls is promised.
    - A collection, its id index and its version token are swapped with
      no suspension point in between, so readers never see a mix.
"""

import asyncio
from collections.abc import Sequence

from worklog.core.observability import get_logger
from worklog.domain.masters.entities import (
    LookupResult,
    Machine,
    Material,
    MasterType,
    MasterVersions,
    ReferenceItem,
    Resolved,
    Unit,
    Unresolved,
    Worker,
)
from worklog.domain.masters.gateway import MasterDataGateway

logger = get_logger(__name__)


class ReferenceCache:
    """In-memory cache of the four reference collections."""

    def __init__(self, gateway: MasterDataGateway):
        self._gateway = gateway
        self._collections: dict[MasterType, tuple[ReferenceItem, ...]] = {
            master_type: () for master_type in MasterType
        }
        self._indexes: dict[MasterType, dict[str, ReferenceItem]] = {
            master_type: {} for master_type in MasterType
        }
        self._versions = MasterVersions()
        self._initialized = False
        self._init_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def loading(self) -> bool:
        return self._init_task is not None and not self._init_task.done()

    @property
    def versions(self) -> MasterVersions:
        return self._versions

    @property
    def workers(self) -> tuple[Worker, ...]:
        return self._collections[MasterType.WORKERS]  # type: ignore[return-value]

    @property
    def machines(self) -> tuple[Machine, ...]:
        return self._collections[MasterType.MACHINES]  # type: ignore[return-value]

    @property
    def materials(self) -> tuple[Material, ...]:
        return self._collections[MasterType.MATERIALS]  # type: ignore[return-value]

    @property
    def units(self) -> tuple[Unit, ...]:
        return self._collections[MasterType.UNITS]  # type: ignore[return-value]

    def items(self, master_type: MasterType) -> tuple[ReferenceItem, ...]:
        return self._collections[master_type]

    def _replace(
        self, master_type: MasterType, items: Sequence[ReferenceItem], version: str
    ) -> None:
        collection = tuple(items)
        index = {item.id: item for item in collection}
        # No await below this line: the three assignments land together
        self._collections[master_type] = collection
        self._indexes[master_type] = index
        self._versions = self._versions.replace(master_type, version)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Load every collection in one round trip.

        No-op once initialized. Callers arriving while a load is in
        flight wait on that same load instead of starting another.

        Raises:
            TransportError, ServerError: If the load fails; the cache stays
                uninitialized so a later call can retry
        """
        if self._initialized:
            return

        if self._init_task is None:
            task = asyncio.ensure_future(self._load_all())
            task.add_done_callback(self._clear_init_task)
            self._init_task = task

        await asyncio.shield(self._init_task)

    def _clear_init_task(self, task: "asyncio.Future[None]") -> None:
        if self._init_task is task:
            self._init_task = None

    async def _load_all(self) -> None:
        logger.info("Loading reference data")
        try:
            snapshot = await self._gateway.load_all()
        except Exception as e:
            logger.error("Reference data load failed", error=str(e))
            raise

        for master_type in MasterType:
            self._replace(
                master_type,
                snapshot.items(master_type),
                snapshot.versions.get(master_type),
            )
        self._initialized = True
        logger.info(
            "Reference data loaded",
            counts={t.value: len(self._collections[t]) for t in MasterType},
            versions=self._versions.model_dump(),
        )

    async def fetch_master(self, master_type: MasterType) -> None:
        """
        Refetch one collection and replace it together with its token.

        Raises:
            TransportError, ServerError: If the fetch fails; the held
                collection is left untouched
        """
        collection = await self._gateway.fetch_one(master_type)
        self._replace(master_type, collection.items, collection.version)
        logger.info(
            "Reference collection replaced",
            master_type=master_type.value,
            version=collection.version,
            count=len(collection.items),
        )

    async def _refresh_one(self, master_type: MasterType) -> bool:
        try:
            await self.fetch_master(master_type)
        except Exception as e:
            logger.warning(
                "Reference refresh skipped",
                master_type=master_type.value,
                error=str(e),
            )
            return False
        return True

    async def check_and_refresh(self) -> list[MasterType]:
        """
        Refetch the collections whose version token changed.

        Best effort: a failed version check or a failed per-type fetch is
        logged and leaves the affected data stale. Nothing is raised.

        Returns:
            Reference types that were actually replaced
        """
        if not self._initialized:
            return []

        try:
            stale = await self._gateway.check_versions(self._versions)
        except Exception as e:
            logger.warning("Reference version check failed", error=str(e))
            return []

        if not stale:
            return []

        logger.info("Stale reference data", master_types=[t.value for t in stale])
        results = await asyncio.gather(*(self._refresh_one(t) for t in stale))
        return [t for t, refreshed in zip(stale, results) if refreshed]

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, master_type: MasterType | str, item_id: str) -> ReferenceItem | None:
        try:
            master_type = MasterType(master_type)
        except ValueError:
            return None
        return self._indexes[master_type].get(item_id)

    def resolve(self, master_type: MasterType | str, item_id: str) -> LookupResult:
        """Resolve an id to its display name, distinguishing dangling ids."""
        item = self.get(master_type, item_id)
        if item is None:
            return Unresolved(id=item_id)
        return Resolved(id=item_id, name=item.name)

    def lookup(self, master_type: MasterType | str, item_id: str) -> str:
        """Display name for an id, or an empty string when it does not resolve."""
        return self.resolve(master_type, item_id).name

    def worker_name(self, worker_id: str) -> str:
        return self.lookup(MasterType.WORKERS, worker_id)

    def machine_name(self, machine_id: str) -> str:
        return self.lookup(MasterType.MACHINES, machine_id)

    def material_name(self, material_id: str) -> str:
        return self.lookup(MasterType.MATERIALS, material_id)

    def unit_name(self, unit_id: str) -> str:
        return self.lookup(MasterType.UNITS, unit_id)

    def unit_symbol(self, unit_id: str) -> str:
        unit = self.get(MasterType.UNITS, unit_id)
        return unit.symbol if isinstance(unit, Unit) else ""
