"""
In-process master-data gateway.

Serves reference data from a local snapshot without any network hop.
Used by the bundled API when no remote master source is configured, and
by tests that need to publish new versions or inject failures.
"""

import logging

from worklog.data.fixtures import master_snapshot
from worklog.domain.masters.entities import (
    MasterCollection,
    MasterSnapshot,
    MasterType,
    MasterVersions,
    ReferenceItem,
)
from worklog.domain.masters.gateway import MasterDataGateway

logger = logging.getLogger(__name__)


class InMemoryMasterDataGateway(MasterDataGateway):
    """Gateway backed by an in-memory MasterSnapshot."""

    def __init__(self, snapshot: MasterSnapshot | None = None):
        self._snapshot = snapshot or master_snapshot()
        self.calls: list[str] = []

    def publish(
        self, master_type: MasterType, items: list[ReferenceItem], version: str
    ) -> None:
        """Replace one collection on the source side under a new version."""
        self._snapshot = self._snapshot.model_copy(
            update={
                master_type.value: list(items),
                "versions": self._snapshot.versions.replace(master_type, version),
            }
        )
        logger.info("Published %s version %s", master_type.value, version)

    async def load_all(self) -> MasterSnapshot:
        self.calls.append("load_all")
        return self._snapshot.model_copy(deep=True)

    async def check_versions(self, versions: MasterVersions) -> list[MasterType]:
        self.calls.append("check_versions")
        current = self._snapshot.versions
        return [t for t in MasterType if versions.get(t) != current.get(t)]

    async def fetch_one(self, master_type: MasterType) -> MasterCollection:
        self.calls.append(f"fetch_one:{master_type.value}")
        return MasterCollection(
            master_type=master_type,
            items=self._snapshot.items(master_type),
            version=self._snapshot.versions.get(master_type),
        )
