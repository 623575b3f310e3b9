"""Dynamic Employee validation.

Which reference fields an Employee must carry depends on the modules the
tenant has enabled. ``MODULE_REFERENCE_FIELDS`` is the single table that
ties a module slug to the Employee field it makes mandatory; adding a module
means adding a row here.

Validation runs in two phases. First every required field is checked and
all missing ones are reported together. Only then are the values coerced,
and the first field that fails coercion is reported on its own.
"""

import re
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from onboarding.core.errors import InvalidFieldError, MissingFieldsError, ValidationError
from onboarding.models.base import utcnow
from onboarding.services.entities import EntityKind

BASE_REQUIRED_FIELDS: tuple[str, ...] = ("firstName", "lastName", "email")

MODULE_REFERENCE_FIELDS: dict[str, str] = {
    EntityKind.LOCATIONS: "locationId",
    EntityKind.DEPARTMENTS: "departmentId",
    EntityKind.MANAGERS: "managerId",
    EntityKind.JOB_ROLES: "jobRoleId",
    EntityKind.EMPLOYMENT_TYPES: "employmentTypeId",
    EntityKind.TEAMS: "teamId",
    EntityKind.COST_CENTERS: "costCenterId",
    EntityKind.HARDWARE_ASSETS: "hardwareAssetId",
    EntityKind.ONBOARDING_BUDDIES: "onboardingBuddyId",
    EntityKind.ACCESS_LEVELS: "accessLevelId",
}

# Wire name -> column name
TEXT_FIELDS: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phoneNumber": "phone_number",
}
DATE_FIELDS: dict[str, str] = {"onboardingDate": "onboarding_date"}
REFERENCE_FIELDS: dict[str, str] = {
    "locationId": "location_id",
    "departmentId": "department_id",
    "managerId": "manager_id",
    "jobRoleId": "job_role_id",
    "employmentTypeId": "employment_type_id",
    "teamId": "team_id",
    "costCenterId": "cost_center_id",
    "hardwareAssetId": "hardware_asset_id",
    "onboardingBuddyId": "onboarding_buddy_id",
    "accessLevelId": "access_level_id",
}

# Accepted but never written from the payload
IMMUTABLE_FIELDS = frozenset({"id", "tenantId", "createdAt", "updatedAt"})

# Full RFC 3339 date-time; the offset is mandatory
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})$"
)


def required_fields(enabled_modules: Iterable[str]) -> list[str]:
    """Base fields first, then one field per enabled module, in module order."""
    fields = list(BASE_REQUIRED_FIELDS)
    for slug in enabled_modules:
        field = MODULE_REFERENCE_FIELDS.get(slug)
        if field is not None and field not in fields:
            fields.append(field)
    return fields


def find_missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    return [field for field in required if _is_empty(payload.get(field))]


def validate_new_employee(
    payload: Any,
    enabled_modules: Iterable[str],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Turn a create payload into an employee document (column names)."""
    payload = _require_object(payload)

    missing = find_missing_fields(payload, required_fields(enabled_modules))
    if missing:
        raise MissingFieldsError(missing)

    doc: dict[str, Any] = {}
    for wire, column in TEXT_FIELDS.items():
        doc[column] = _coerce_text(wire, payload.get(wire))

    if _is_empty(payload.get("onboardingDate")):
        doc["onboarding_date"] = now or utcnow()
    else:
        doc["onboarding_date"] = _coerce_date("onboardingDate", payload["onboardingDate"])

    for wire, column in REFERENCE_FIELDS.items():
        doc[column] = _coerce_reference(wire, payload.get(wire))
    return doc


def validate_employee_update(payload: Any, enabled_modules: Iterable[str]) -> dict[str, Any]:
    """Coerce the supplied subset; required fields may not be emptied."""
    payload = _require_object(payload)
    payload = {key: value for key, value in payload.items() if key not in IMMUTABLE_FIELDS}

    known = TEXT_FIELDS.keys() | DATE_FIELDS.keys() | REFERENCE_FIELDS.keys()
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValidationError("Unknown employee fields", unknownFields=unknown)
    if not payload:
        raise ValidationError("No fields to update")

    required = [field for field in required_fields(enabled_modules) if field in payload]
    missing = find_missing_fields(payload, required)
    if missing:
        raise MissingFieldsError(missing)

    doc: dict[str, Any] = {}
    for wire, value in payload.items():
        if wire in TEXT_FIELDS:
            doc[TEXT_FIELDS[wire]] = _coerce_text(wire, value)
        elif wire in DATE_FIELDS:
            if _is_empty(value):
                raise InvalidFieldError(wire, f"{wire} cannot be empty")
            doc[DATE_FIELDS[wire]] = _coerce_date(wire, value)
        else:
            doc[REFERENCE_FIELDS[wire]] = _coerce_reference(wire, value)
    return doc


# ── Coercion ──────────────────────────────────────────────────

def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return dict(payload)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidFieldError(field, f"{field} must be a string")
    return value.strip()


def _coerce_reference(field: str, value: Any) -> uuid.UUID | None:
    if _is_empty(value):
        return None
    if not isinstance(value, str):
        raise InvalidFieldError(field)
    try:
        return uuid.UUID(value)
    except ValueError:
        raise InvalidFieldError(field) from None


def _coerce_date(field: str, value: Any) -> datetime:
    """RFC 3339 date-time with offset -> naive UTC datetime."""
    if not isinstance(value, str):
        raise InvalidFieldError(field, f"{field} must be a string")
    value = value.strip()
    detail = f"Invalid {field} format. Use RFC 3339, e.g. 2006-01-02T15:04:05Z"
    if not RFC3339_PATTERN.match(value):
        raise InvalidFieldError(field, detail)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        # Well-formed but out of range, e.g. month 13
        raise InvalidFieldError(field, detail) from None
    return parsed.astimezone(timezone.utc).replace(tzinfo=None)
