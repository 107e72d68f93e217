"""Azure Red Hat OpenShift resources."""

from .cluster import OpenShiftClusterResource, generate_random_domain_name

__all__ = ["OpenShiftClusterResource", "generate_random_domain_name"]
