"""Segment descriptors for resource ID shapes.

A shape is an ordered tuple of descriptors. Each descriptor is either a
static token that must appear verbatim in the path, or a user-specified
value that is bound to a named field of the parsed ID.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class StaticSegment:
    """A fixed path component such as ``resourceGroups`` or ``Microsoft.Sql``."""

    name: str
    token: str

    def matches(self, component: str, insensitively: bool = False) -> bool:
        if insensitively:
            return component.lower() == self.token.lower()
        return component == self.token


@dataclass(frozen=True)
class UserSpecifiedSegment:
    """A variable path component bound to ``field`` (case preserved)."""

    field: str
    label: str


Segment = Union[StaticSegment, UserSpecifiedSegment]


def static_segment(token: str, name: str = "") -> StaticSegment:
    """Declare a fixed token; the descriptor name defaults to the token."""
    return StaticSegment(name=name or f"static{token[:1].upper()}{token[1:]}", token=token)


def user_segment(field: str, label: str) -> UserSpecifiedSegment:
    return UserSpecifiedSegment(field=field, label=label)


def subscription_segments() -> Tuple[Segment, ...]:
    """``subscriptions/{subscription_id}``"""
    return (
        static_segment("subscriptions"),
        user_segment("subscription_id", "Subscription"),
    )


def resource_group_segments() -> Tuple[Segment, ...]:
    """``subscriptions/{subscription_id}/resourceGroups/{resource_group}``"""
    return subscription_segments() + (
        static_segment("resourceGroups"),
        user_segment("resource_group", "Resource Group"),
    )


def provider_segments(namespace: str) -> Tuple[Segment, ...]:
    """``providers/{namespace}`` with a fixed namespace such as ``Microsoft.Sql``."""
    return (
        static_segment("providers"),
        static_segment(namespace, name="staticProviderNamespace"),
    )
