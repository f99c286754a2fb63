"""
Application layer validators for task mutation requests.

Validation is structural only: referenced worker, machine, material and
unit ids are not checked against the reference cache.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from worklog.application.dtos.task_dtos import FormMaterial, TaskFormInput
from worklog.domain.shared.exceptions import ValidationError

WORK_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

WORK_DATE_REQUIRED = "Work date is required"
WORK_DATE_INVALID = "Work date must be in YYYY-MM-DD format"
WORKERS_REQUIRED = "Select at least one worker"
MACHINE_REQUIRED = "Select a machine"
MATERIAL_AMOUNT_INVALID = "Material amount must be greater than 0"

TYPE_ERROR_MESSAGES = {
    "workDate": WORK_DATE_INVALID,
    "workerIds": WORKERS_REQUIRED,
    "machineId": MACHINE_REQUIRED,
    "materials": MATERIAL_AMOUNT_INVALID,
}


class TaskValidationResult:
    """Result of validating a task form."""

    def __init__(self, errors: dict[str, str] | None = None):
        """
        Initialize validation result.

        Args:
            errors: Field name (wire spelling) to error message
        """
        self.errors = errors or {}

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str | None) -> None:
        """Record a field error; ``None`` means the field passed."""
        if message is not None:
            self.errors[field_name] = message

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying every collected field error."""
        if not self.is_valid:
            raise ValidationError(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "errors": dict(self.errors)}


def validate_work_date(work_date: str | None) -> str | None:
    if not work_date:
        return WORK_DATE_REQUIRED
    if not WORK_DATE_PATTERN.fullmatch(work_date):
        return WORK_DATE_INVALID
    return None


def validate_workers(worker_ids: list[str] | None) -> str | None:
    if not worker_ids:
        return WORKERS_REQUIRED
    return None


def validate_machine(machine_id: str | None) -> str | None:
    if not machine_id:
        return MACHINE_REQUIRED
    return None


def _is_positive_amount(amount: float | None) -> bool:
    return amount is not None and math.isfinite(amount) and amount > 0


def validate_materials(materials: list[FormMaterial] | None) -> str | None:
    """Every line with a material id needs a positive, finite amount."""
    for material in materials or []:
        if material.id and not _is_positive_amount(material.amount):
            return MATERIAL_AMOUNT_INVALID
    return None


def _field_spellings(loc_name: str) -> tuple[str, set[str]]:
    """Wire name of a form field, and every key a mapping may use for it."""
    for name, field in TaskFormInput.model_fields.items():
        wire_name = field.alias or name
        if loc_name in (name, wire_name):
            return wire_name, {name, wire_name}
    return loc_name, {loc_name}


def _coerce_form(data: Mapping[str, Any]) -> tuple[TaskFormInput, dict[str, str]]:
    """
    Build a form from a wire mapping, setting aside wrongly typed fields.

    Returns:
        The form built from the well-typed fields, and an error message for
        each field whose value could not be read
    """
    if not isinstance(data, Mapping):
        return TaskFormInput(), {}

    try:
        return TaskFormInput.model_validate(data), {}
    except PydanticValidationError as e:
        type_errors: dict[str, str] = {}
        dropped: set[str] = set()
        for error in e.errors():
            loc_name = str(error["loc"][0]) if error["loc"] else "form"
            field_name, keys = _field_spellings(loc_name)
            type_errors.setdefault(
                field_name, TYPE_ERROR_MESSAGES.get(field_name, error["msg"])
            )
            dropped |= keys

    readable = {key: value for key, value in data.items() if key not in dropped}
    return TaskFormInput.model_validate(readable), type_errors


def validate_task_form(data: TaskFormInput | Mapping[str, Any]) -> TaskValidationResult:
    """
    Validate a task form.

    Pure and deterministic. All rules run independently so every
    applicable error is reported together. A mapping field with a value
    of the wrong type is reported under that field; it never raises.

    Args:
        data: Form values, as a model or a wire-format mapping

    Returns:
        TaskValidationResult keyed by wire field names
    """
    if isinstance(data, TaskFormInput):
        form, type_errors = data, {}
    else:
        form, type_errors = _coerce_form(data)

    result = TaskValidationResult()
    result.add_error("workDate", validate_work_date(form.work_date))
    result.add_error("workerIds", validate_workers(form.worker_ids))
    result.add_error("machineId", validate_machine(form.machine_id))
    result.add_error("materials", validate_materials(form.materials))
    for field_name, message in type_errors.items():
        result.add_error(field_name, message)
    return result
