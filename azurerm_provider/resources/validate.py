"""Value validators for resource configuration.

Every validator takes ``(value, key)`` and returns ``(warnings, errors)``.
``check`` adapts them to pydantic field validators.
"""

import ipaddress
import re
from typing import Any, Iterable, List, Tuple

from ..resourceids.validate import ValidateFunc

_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

MIN_WORKER_DISK_SIZE_GB = 128


def string_is_not_empty(value: Any, key: str) -> Tuple[List[str], List[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key!r} to be string"]
    if value.strip() == "":
        return [], [f"expected {key!r} to not be an empty string, got {value!r}"]
    return [], []


def string_in_slice(valid: Iterable[str], ignore_case: bool = False) -> ValidateFunc:
    allowed = list(valid)

    def validate(value: Any, key: str) -> Tuple[List[str], List[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key!r} to be string"]
        for candidate in allowed:
            if value == candidate or (ignore_case and value.lower() == candidate.lower()):
                return [], []
        return [], [f"expected {key!r} to be one of {allowed}, got {value!r}"]

    return validate


def cidr(value: Any, key: str) -> Tuple[List[str], List[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key!r} to be string"]
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return [], [f"{key!r} must be a valid CIDR block, got {value!r}"]
    if "/" not in value:
        return [], [f"{key!r} must include a prefix length, got {value!r}"]
    return [], []


def client_id(value: Any, key: str) -> Tuple[List[str], List[str]]:
    if not isinstance(value, str) or not _UUID_PATTERN.match(value):
        return [], [f"{key!r} must be a valid UUID, got {value!r}"]
    return [], []


def disk_size_gb(value: Any, key: str) -> Tuple[List[str], List[str]]:
    if not isinstance(value, int) or isinstance(value, bool):
        return [], [f"expected type of {key!r} to be int"]
    if value < MIN_WORKER_DISK_SIZE_GB:
        return [], [
            f"invalid {key!r}, must be {MIN_WORKER_DISK_SIZE_GB} GB or greater, got {value}"
        ]
    return [], []


def azure_resource_id(value: Any, key: str) -> Tuple[List[str], List[str]]:
    """Accept any absolute ID that names a resource provider namespace.

    Covers IDs whose shape is not registered here, e.g.
    ``/providers/Microsoft.Management/managementGroups/{name}``. Every
    segment must be non-empty and ``providers`` must be followed by a namespace.
    """
    if not isinstance(value, str):
        return [], [f"expected type of {key!r} to be string"]
    parts = value.split("/")
    if parts[0] != "" or len(parts) < 3 or "" in parts[1:]:
        return [], [f"{key!r} must be an Azure resource ID, got {value!r}"]
    if not any(p.lower() == "providers" for p in parts[1:-1]):
        return [], [f"{key!r} must contain a provider segment, got {value!r}"]
    return [], []


def check(validator: ValidateFunc, value: Any, key: str) -> Any:
    """Run ``validator`` and raise ``ValueError`` if it reports errors."""
    _, errors = validator(value, key)
    if errors:
        raise ValueError("; ".join(errors))
    return value
