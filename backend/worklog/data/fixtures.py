"""
Bundled reference data and task datasets.

Served by the in-process master-data gateway and used to seed the task
repository of the mock API. ``build_large_dataset`` generates 100 tasks
for pagination work.
"""

from datetime import date, datetime, timedelta, timezone

from worklog.domain.masters.entities import (
    Machine,
    MasterSnapshot,
    MasterVersions,
    Material,
    Unit,
    Worker,
)
from worklog.domain.tasks.entities import Task, TaskMachine, TaskMaterial, TaskWorker

WORKERS = [
    Worker(id="w001", name="Taro Yamada", department="Manufacturing"),
    Worker(id="w002", name="Hanako Suzuki", department="Manufacturing"),
    Worker(id="w003", name="Jiro Sato", department="Manufacturing"),
    Worker(id="w004", name="Misaki Tanaka", department="Quality Control"),
    Worker(id="w005", name="Kenichi Takahashi", department="Quality Control"),
    Worker(id="w006", name="Sakura Ito", department="Development"),
    Worker(id="w007", name="Daisuke Watanabe", department="Development"),
    Worker(id="w008", name="Yuko Nakamura", department="General Affairs"),
]

MACHINES = [
    Machine(id="m001", name="Press A-1", category="Press"),
    Machine(id="m002", name="Press A-2", category="Press"),
    Machine(id="m003", name="Lathe B-1", category="Cutting"),
    Machine(id="m004", name="Lathe B-2", category="Cutting"),
    Machine(id="m005", name="Milling Machine C-1", category="Cutting"),
    Machine(id="m006", name="Welder D-1", category="Welding"),
    Machine(id="m007", name="Paint Booth E-1", category="Painting"),
    Machine(id="m008", name="Inspection Rig F-1", category="Inspection"),
]

MATERIALS = [
    Material(id="mt001", name="Aluminium Sheet A5052", category="Metal", default_unit_id="u007"),
    Material(id="mt002", name="Stainless Sheet SUS304", category="Metal", default_unit_id="u007"),
    Material(id="mt003", name="Steel Sheet SS400", category="Metal", default_unit_id="u007"),
    Material(id="mt004", name="Copper Sheet C1100", category="Metal", default_unit_id="u007"),
    Material(id="mt005", name="ABS Resin", category="Resin", default_unit_id="u001"),
    Material(id="mt006", name="Polycarbonate", category="Resin", default_unit_id="u001"),
    Material(id="mt007", name="Nylon", category="Resin", default_unit_id="u001"),
    Material(id="mt008", name="Screw M3x10", category="Parts", default_unit_id="u006"),
    Material(id="mt009", name="Screw M4x15", category="Parts", default_unit_id="u006"),
    Material(id="mt010", name="Washer M4", category="Parts", default_unit_id="u006"),
]

UNITS = [
    Unit(id="u001", name="Kilogram", symbol="kg"),
    Unit(id="u002", name="Gram", symbol="g"),
    Unit(id="u003", name="Metre", symbol="m"),
    Unit(id="u004", name="Centimetre", symbol="cm"),
    Unit(id="u005", name="Millimetre", symbol="mm"),
    Unit(id="u006", name="Piece", symbol="pc"),
    Unit(id="u007", name="Sheet", symbol="sheet"),
    Unit(id="u008", name="Rod", symbol="rod"),
    Unit(id="u009", name="Litre", symbol="L"),
    Unit(id="u010", name="Millilitre", symbol="mL"),
]

MASTER_VERSIONS = MasterVersions(
    workers="v1.0.0",
    machines="v1.0.0",
    materials="v1.0.0",
    units="v1.0.0",
)

_WORKER_NAMES = {w.id: w.name for w in WORKERS}
_MACHINE_NAMES = {m.id: m.name for m in MACHINES}
_MATERIALS_BY_ID = {m.id: m for m in MATERIALS}
_UNIT_NAMES = {u.id: u.name for u in UNITS}


def master_snapshot() -> MasterSnapshot:
    return MasterSnapshot(
        workers=WORKERS,
        machines=MACHINES,
        materials=MATERIALS,
        units=UNITS,
        versions=MASTER_VERSIONS,
    )


def _task(
    task_id: str,
    work_date: str,
    worker_ids: list[str],
    machine_id: str,
    materials: list[tuple[str, float]],
    created_at: str,
    updated_at: str | None = None,
) -> Task:
    task_materials = []
    for material_id, amount in materials:
        unit_id = _MATERIALS_BY_ID[material_id].default_unit_id
        task_materials.append(
            TaskMaterial(
                id=material_id,
                name=_MATERIALS_BY_ID[material_id].name,
                amount=amount,
                unit_id=unit_id,
                unit_name=_UNIT_NAMES[unit_id],
            )
        )
    return Task(
        id=task_id,
        work_date=work_date,
        workers=[TaskWorker(id=w, name=_WORKER_NAMES[w]) for w in worker_ids],
        machine=TaskMachine(id=machine_id, name=_MACHINE_NAMES[machine_id]),
        materials=task_materials,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


def normal_tasks() -> list[Task]:
    """Fifteen tasks dated 2024-01-15 through 2024-01-29."""
    return [
        _task("t001", "2024-01-15", ["w001", "w002"], "m001", [("mt001", 10), ("mt008", 50)], "2024-01-15T09:00:00Z"),
        _task("t002", "2024-01-16", ["w003"], "m003", [("mt002", 5)], "2024-01-16T10:00:00Z"),
        _task("t003", "2024-01-17", ["w004", "w005", "w006"], "m006", [("mt003", 20), ("mt009", 100), ("mt010", 100)], "2024-01-17T08:30:00Z", "2024-01-17T14:00:00Z"),
        _task("t004", "2024-01-18", ["w001"], "m002", [("mt004", 8)], "2024-01-18T09:00:00Z"),
        _task("t005", "2024-01-19", ["w002", "w007"], "m005", [("mt005", 2.5)], "2024-01-19T11:00:00Z"),
        _task("t006", "2024-01-20", ["w003"], "m007", [], "2024-01-20T13:00:00Z"),
        _task("t007", "2024-01-21", ["w004", "w008"], "m008", [], "2024-01-21T10:00:00Z"),
        _task("t008", "2024-01-22", ["w005"], "m003", [("mt001", 15)], "2024-01-22T09:00:00Z"),
        _task("t009", "2024-01-23", ["w006", "w007"], "m004", [("mt006", 3), ("mt007", 1.5)], "2024-01-23T14:00:00Z"),
        _task("t010", "2024-01-24", ["w001"], "m001", [("mt002", 12)], "2024-01-24T08:00:00Z"),
        _task("t011", "2024-01-25", ["w002", "w003"], "m006", [("mt003", 25)], "2024-01-25T09:30:00Z"),
        _task("t012", "2024-01-26", ["w004"], "m008", [], "2024-01-26T15:00:00Z"),
        _task("t013", "2024-01-27", ["w005", "w006"], "m002", [("mt004", 6), ("mt008", 80)], "2024-01-27T10:00:00Z"),
        _task("t014", "2024-01-28", ["w007"], "m005", [("mt005", 4)], "2024-01-28T11:00:00Z"),
        _task("t015", "2024-01-29", ["w008", "w001"], "m007", [], "2024-01-29T13:30:00Z"),
    ]


def build_large_dataset(count: int = 100) -> list[Task]:
    """Generate ``count`` tasks on consecutive days from 2024-01-01."""
    base_date = date(2024, 1, 1)
    tasks = []
    for i in range(count):
        work_date = base_date + timedelta(days=i)
        worker_ids = [WORKERS[(i + j) % len(WORKERS)].id for j in range(1 + i % 3)]
        materials = [
            (MATERIALS[(i + j) % len(MATERIALS)].id, float(int((i + j + 1) * 1.5)))
            for j in range(i % 4)
        ]
        stamp = datetime.combine(work_date, datetime.min.time(), tzinfo=timezone.utc)
        tasks.append(
            _task(
                f"t{i + 1:03d}",
                work_date.isoformat(),
                worker_ids,
                MACHINES[i % len(MACHINES)].id,
                materials,
                stamp.isoformat(),
            )
        )
    return tasks


DATASETS = {
    "normal": normal_tasks,
    "large": build_large_dataset,
    "empty": list,
}


def load_dataset(name: str) -> list[Task]:
    return DATASETS[name]()
