"""Generic resource ID engine.

One engine parses and formats every resource ID shape. A shape is declared
once as a tuple of segment descriptors on a ``ResourceId`` subclass; the
subclass's dataclass fields hold the user-specified values in declaration
order.

Usage:
    @dataclass(frozen=True)
    class RegistryId(ResourceId):
        DISPLAY_NAME: ClassVar[str] = "Container Registry"
        SEGMENTS: ClassVar[Tuple[Segment, ...]] = (
            *resource_group_segments(),
            *provider_segments("Microsoft.ContainerRegistry"),
            static_segment("registries"),
            user_segment("registry_name", "Registry Name"),
        )

        subscription_id: str
        resource_group: str
        registry_name: str

    registry_id = RegistryId.parse(raw)
    assert registry_id.id() == raw
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, TypeVar

from ..exceptions import MalformedReason, MalformedResourceIdError
from .segments import Segment, StaticSegment, UserSpecifiedSegment

TId = TypeVar("TId", bound="ResourceId")


@dataclass(frozen=True)
class ResourceIdShape:
    """Declared layout of one resource ID family.

    Attributes:
        name: Registry key, e.g. "ContainerRegistryTaskSchedule"
        display_name: Human readable name used in messages
        segments: Ordered segment descriptors
    """

    name: str
    display_name: str
    segments: Tuple[Segment, ...]

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(
            s.field for s in self.segments if isinstance(s, UserSpecifiedSegment)
        )

    @property
    def labels(self) -> Dict[str, str]:
        return {
            s.field: s.label
            for s in self.segments
            if isinstance(s, UserSpecifiedSegment)
        }

    def example(self) -> str:
        """Return the canonical template, e.g. ``/subscriptions/{subscription_id}/...``."""
        return self.format({f: f"{{{f}}}" for f in self.field_names})

    def parse(self, input: str, insensitively: bool = False) -> Dict[str, str]:
        """Parse ``input`` into an ordered mapping of field name to value.

        Static tokens are compared against their declared casing unless
        ``insensitively`` is set. Values are always returned verbatim.

        Raises:
            MalformedResourceIdError: on the first structural mismatch
        """
        if input == "":
            raise self._malformed(input, MalformedReason.EMPTY_INPUT, "ID was empty")

        if not input.startswith("/"):
            raise self._malformed(
                input,
                MalformedReason.UNEXPECTED_SEGMENT,
                "expected the ID to begin with '/'",
                segment=input.split("/", 1)[0],
            )

        components = input[1:].split("/")
        values: Dict[str, str] = {}

        for position, segment in enumerate(self.segments):
            component: Optional[str] = (
                components[position] if position < len(components) else None
            )
            # A trailing '/' leaves one empty component at the end
            is_last = position == len(components) - 1

            if isinstance(segment, StaticSegment):
                if component is None or (component == "" and is_last):
                    raise self._malformed(
                        input,
                        MalformedReason.MISSING_SEGMENT,
                        f"the segment {segment.token!r} was not found",
                        segment=segment.token,
                    )
                if not segment.matches(component, insensitively=insensitively):
                    raise self._malformed(
                        input,
                        MalformedReason.UNEXPECTED_SEGMENT,
                        f"expected the segment {segment.token!r} at position "
                        f"{position} but got {component!r}",
                        segment=segment.token,
                    )
                continue

            if component is None:
                raise self._malformed(
                    input,
                    MalformedReason.MISSING_SEGMENT,
                    f"the segment for {segment.label!r} ({segment.field}) was not found",
                    segment=segment.field,
                )
            if component == "":
                raise self._malformed(
                    input,
                    MalformedReason.EMPTY_VALUE,
                    f"the value for {segment.label!r} ({segment.field}) was empty",
                    segment=segment.field,
                )
            values[segment.field] = component

        if len(components) > len(self.segments):
            leftover = "/".join(components[len(self.segments) :])
            raise self._malformed(
                input,
                MalformedReason.TRAILING_CONTENT,
                f"unexpected trailing content {leftover!r}",
                segment=leftover,
            )

        return values

    def format(self, values: Mapping[str, str]) -> str:
        """Assemble the canonical string from field values."""
        parts = [
            s.token if isinstance(s, StaticSegment) else values[s.field]
            for s in self.segments
        ]
        return "/" + "/".join(parts)

    def _malformed(
        self,
        input: str,
        reason: MalformedReason,
        detail: str,
        segment: Optional[str] = None,
    ) -> MalformedResourceIdError:
        return MalformedResourceIdError(
            f"parsing {input!r} as a {self.display_name} ID: {detail}",
            reason=reason,
            input=input,
            shape=self.name,
            segment=segment,
        )


@dataclass(frozen=True)
class ResourceId:
    """Base class for typed, immutable resource IDs.

    Subclasses are frozen dataclasses declaring ``SEGMENTS`` and one ``str``
    field per user-specified segment, in the same order. Constructing a
    subclass directly is the way to build an ID for a resource that does not
    exist yet; every field must be a non-empty string without '/'.
    """

    DISPLAY_NAME: ClassVar[str] = ""
    SEGMENTS: ClassVar[Tuple[Segment, ...]] = ()

    _shape: ClassVar[ResourceIdShape]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.__name__[:-2] if cls.__name__.endswith("Id") else cls.__name__
        cls._shape = ResourceIdShape(
            name=name,
            display_name=cls.DISPLAY_NAME or name,
            segments=tuple(cls.SEGMENTS),
        )

    def __post_init__(self) -> None:
        if "_shape" not in type(self).__dict__:
            raise TypeError(
                f"{type(self).__name__} declares no segments; build IDs from a "
                "ResourceId subclass such as SubscriptionId"
            )

        labels = self._shape.labels
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and value and "/" not in value:
                continue

            # A '/' inside a value would shift every later segment on parse
            if isinstance(value, str) and value:
                reason = MalformedReason.UNEXPECTED_SEGMENT
                detail = "must not contain '/'"
            else:
                reason = MalformedReason.EMPTY_VALUE
                detail = "must be a non-empty string"
            rendered = ", ".join(
                f"{g.name}={getattr(self, g.name)!r}" for g in fields(self)
            )
            raise MalformedResourceIdError(
                f"building a {self._shape.display_name} ID: "
                f"{labels.get(f.name, f.name)!r} ({f.name}) {detail}",
                reason=reason,
                input=rendered,
                shape=self._shape.name,
                segment=f.name,
            )

    @classmethod
    def shape(cls) -> ResourceIdShape:
        return cls._shape

    @classmethod
    def segments(cls) -> Tuple[Segment, ...]:
        return cls._shape.segments

    @classmethod
    def parse(cls: Type[TId], input: str) -> TId:
        """Parse ``input``, matching static tokens exactly."""
        return cls(**cls._shape.parse(input))

    @classmethod
    def parse_insensitively(cls: Type[TId], input: str) -> TId:
        """Parse ``input``, matching static tokens case-insensitively.

        Use for IDs handed back by APIs that do not preserve casing; calling
        ``id()`` on the result restores the declared casing of the tokens.
        """
        return cls(**cls._shape.parse(input, insensitively=True))

    def id(self) -> str:
        """Return the canonical resource ID string."""
        return self._shape.format(self.to_dict())

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        labels = self._shape.labels
        components = " / ".join(
            f'{labels[name]}: "{value}"' for name, value in self.to_dict().items()
        )
        return f"{self._shape.display_name} ({components})"
