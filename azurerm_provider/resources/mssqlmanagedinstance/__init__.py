"""SQL Managed Instance resources."""

from .security_alert_policy import ManagedInstanceSecurityAlertPolicyResource

__all__ = ["ManagedInstanceSecurityAlertPolicyResource"]
