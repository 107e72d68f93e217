"""Validation entry points built on typed resource IDs."""

from typing import Any, Callable, List, Tuple, Type

from ..exceptions import MalformedResourceIdError
from .shape import ResourceId

ValidateFunc = Callable[[Any, str], Tuple[List[str], List[str]]]


def import_validator(id_type: Type[ResourceId]) -> Callable[[str], None]:
    """Return a callable that raises if an imported ID does not parse.

    The parsed value is discarded; only success or failure matters when
    importing an existing resource.
    """

    def validate(resource_id: str) -> None:
        id_type.parse(resource_id)

    validate.__name__ = f"validate_{id_type.shape().name}_import"
    return validate


def validate_resource_id_for(id_type: Type[ResourceId]) -> ValidateFunc:
    """Return a schema validator accepting only IDs of ``id_type``.

    Validators follow the ``(value, key) -> (warnings, errors)`` convention
    used for all configuration values.
    """

    def validate(value: Any, key: str) -> Tuple[List[str], List[str]]:
        if not isinstance(value, str):
            return [], [f"expected {key!r} to be a string"]
        try:
            id_type.parse(value)
        except MalformedResourceIdError as e:
            return [], [f"{key!r}: {e.message}"]
        return [], []

    return validate
