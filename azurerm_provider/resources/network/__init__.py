"""Network resources."""

from .network_group import NetworkGroupResource
from .network_manager import NetworkManagerResource

__all__ = [
    "NetworkGroupResource",
    "NetworkManagerResource",
]
