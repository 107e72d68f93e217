"""
Configuration models for the provider.

Provides type-safe configuration using pydantic with validation,
defaults, and schema enforcement.
"""

import re
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class TimeoutsConfig(BaseModel):
    """Default per-operation timeouts, in minutes.

    Resources with slow provisioning (e.g. OpenShift clusters) override these.
    """

    create: Annotated[int, Field(gt=0)] = Field(
        default=30, description="Create timeout in minutes"
    )
    read: Annotated[int, Field(gt=0)] = Field(
        default=5, description="Read timeout in minutes"
    )
    update: Annotated[int, Field(gt=0)] = Field(
        default=30, description="Update timeout in minutes"
    )
    delete: Annotated[int, Field(gt=0)] = Field(
        default=30, description="Delete timeout in minutes"
    )

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    json_output: bool = Field(
        default=True,
        description="Render structured logs as JSON (False for console output)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


class ProviderConfig(BaseModel):
    """Root configuration model for the provider."""

    subscription_id: Optional[str] = Field(
        default=None,
        description="Azure subscription that resources are created in",
    )
    tenant_id: Optional[str] = Field(
        default=None,
        description="Azure AD tenant ID",
    )
    timeouts: TimeoutsConfig = Field(
        default_factory=TimeoutsConfig,
        description="Default operation timeouts",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("subscription_id", "tenant_id")
    @classmethod
    def validate_uuid(cls, v: Optional[str]) -> Optional[str]:
        """Subscription and tenant IDs must be GUIDs."""
        if v is not None and not _UUID_PATTERN.match(v):
            raise ValueError(f"expected a GUID but got {v!r}")
        return v
