"""Shape registry for resource ID lookup by name.

The registry is built once at startup and is read-only afterwards, so it can
be shared between threads and passed to whatever needs to parse IDs by shape
name (the CLI, import validation, cross-resource references).
"""

import logging
from dataclasses import fields
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Type

from ..exceptions import MalformedReason, MalformedResourceIdError
from .shape import ResourceId

logger = logging.getLogger(__name__)


class ShapeRegistry:
    """Immutable mapping of shape name to ``ResourceId`` subclass.

    Usage:
        registry = build_default_registry()
        schedule_id = registry.parse("ContainerRegistryTaskSchedule", raw)
        registry.format("ResourceGroup", {"subscription_id": s, "resource_group": g})
    """

    def __init__(self, id_types: Iterable[Type[ResourceId]]) -> None:
        types: Dict[str, Type[ResourceId]] = {}

        for id_type in id_types:
            shape = id_type.shape()
            if shape.name in types:
                raise ValueError(f"Shape {shape.name!r} is registered twice")

            declared = tuple(f.name for f in fields(id_type))
            if declared != shape.field_names:
                raise ValueError(
                    f"Shape {shape.name!r} declares fields {declared} but its "
                    f"segments bind {shape.field_names}"
                )

            types[shape.name] = id_type
            logger.debug(f"Registered resource ID shape {shape.name}")

        self._types: Mapping[str, Type[ResourceId]] = MappingProxyType(types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def names(self) -> List[str]:
        """Get all registered shape names, sorted."""
        return sorted(self._types)

    def find(self, name: str) -> Optional[Type[ResourceId]]:
        return self._types.get(name)

    def get(self, name: str) -> Type[ResourceId]:
        """Get the ID type registered under ``name``.

        Raises:
            KeyError: if no shape is registered under that name
        """
        id_type = self._types.get(name)
        if id_type is None:
            raise KeyError(
                f"Unknown resource ID shape {name!r} "
                f"(known: {', '.join(self.names())})"
            )
        return id_type

    def parse(self, name: str, input: str) -> ResourceId:
        return self.get(name).parse(input)

    def parse_insensitively(self, name: str, input: str) -> ResourceId:
        return self.get(name).parse_insensitively(input)

    def build(self, name: str, values: Mapping[str, str]) -> ResourceId:
        """Build a typed ID from a field mapping.

        Raises:
            MalformedResourceIdError: if a field is missing or empty
            ValueError: if ``values`` holds fields the shape does not declare
        """
        id_type = self.get(name)
        shape = id_type.shape()

        unknown = [k for k in values if k not in shape.field_names]
        if unknown:
            raise ValueError(
                f"Shape {name!r} has no fields {unknown} "
                f"(expected: {', '.join(shape.field_names)})"
            )

        for field_name in shape.field_names:
            if field_name not in values:
                raise MalformedResourceIdError(
                    f"building a {shape.display_name} ID: missing value for "
                    f"{shape.labels[field_name]!r} ({field_name})",
                    reason=MalformedReason.MISSING_SEGMENT,
                    input=", ".join(f"{k}={v!r}" for k, v in values.items()),
                    shape=shape.name,
                    segment=field_name,
                )

        return id_type(**{f: values[f] for f in shape.field_names})

    def format(self, name: str, values: Mapping[str, str]) -> str:
        return self.build(name, values).id()
