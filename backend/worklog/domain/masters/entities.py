"""
Reference (master) data entities.

Workers, machines, materials and units are looked up by id from task
records. Each collection is versioned by an opaque token that is only
ever compared for inequality.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import Field

from worklog.domain.shared.base import ValueObject


class MasterType(str, Enum):
    """Reference-data collection names."""

    WORKERS = "workers"
    MACHINES = "machines"
    MATERIALS = "materials"
    UNITS = "units"


class Worker(ValueObject):
    id: str = Field(..., min_length=1)
    name: str
    department: str = ""


class Machine(ValueObject):
    id: str = Field(..., min_length=1)
    name: str
    category: str = ""


class Material(ValueObject):
    id: str = Field(..., min_length=1)
    name: str
    category: str = ""
    default_unit_id: str = ""


class Unit(ValueObject):
    id: str = Field(..., min_length=1)
    name: str
    symbol: str = ""


ReferenceItem = Worker | Machine | Material | Unit

ITEM_CLASSES: dict[MasterType, type[ValueObject]] = {
    MasterType.WORKERS: Worker,
    MasterType.MACHINES: Machine,
    MasterType.MATERIALS: Material,
    MasterType.UNITS: Unit,
}


class MasterVersions(ValueObject):
    """Version token per reference type; empty string means never loaded."""

    workers: str = ""
    machines: str = ""
    materials: str = ""
    units: str = ""

    def get(self, master_type: MasterType) -> str:
        return getattr(self, master_type.value)

    def replace(self, master_type: MasterType, version: str) -> "MasterVersions":
        return self.model_copy(update={master_type.value: version})

    def as_query_params(self) -> dict[str, str]:
        return {f"{t.value}Version": self.get(t) for t in MasterType}


class MasterSnapshot(ValueObject):
    """Full reference-data payload returned by a load-all round trip."""

    workers: list[Worker] = []
    machines: list[Machine] = []
    materials: list[Material] = []
    units: list[Unit] = []
    versions: MasterVersions = MasterVersions()

    def items(self, master_type: MasterType) -> list[ReferenceItem]:
        return list(getattr(self, master_type.value))


class MasterCollection(ValueObject):
    """One reference type's full collection plus its version token."""

    master_type: MasterType
    items: list[ReferenceItem]
    version: str


@dataclass(frozen=True)
class Resolved:
    """A reference id that resolved to a display name."""

    id: str
    name: str
    resolved: Literal[True] = True


@dataclass(frozen=True)
class Unresolved:
    """A reference id with no matching entry in the cache."""

    id: str
    resolved: Literal[False] = False

    @property
    def name(self) -> str:
        return ""


LookupResult = Resolved | Unresolved
