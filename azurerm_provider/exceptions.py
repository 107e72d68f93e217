"""
Custom Exception Hierarchy for the AzureRM provider

This module provides the exception hierarchy used across the provider:
resource ID parsing failures, remote API failures, configuration problems and
schema validation errors. Every error carries structured context so callers
can log it or surface it without string parsing.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ProviderError(Exception):
    """
    Base exception class for all provider related errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


# Resource ID exceptions
class ResourceIdError(ProviderError):
    """Base class for resource ID errors."""

    pass


class MalformedReason(str, Enum):
    """Why a resource ID string did not match its declared shape."""

    EMPTY_INPUT = "empty_input"
    MISSING_SEGMENT = "missing_segment"
    UNEXPECTED_SEGMENT = "unexpected_segment"
    EMPTY_VALUE = "empty_value"
    TRAILING_CONTENT = "trailing_content"


class MalformedResourceIdError(ResourceIdError):
    """Raised when a resource ID does not conform to the declared shape.

    The error is terminal: the same input always fails the same way, so
    callers propagate it instead of retrying.
    """

    def __init__(
        self,
        message: str,
        reason: MalformedReason,
        input: str,
        shape: str,
        segment: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        context["shape"] = shape
        context["input"] = input
        context["reason"] = reason.value
        if segment:
            context["segment"] = segment
        kwargs["context"] = context
        kwargs.setdefault("error_code", "RESOURCE_ID_MALFORMED")
        super().__init__(message, **kwargs)
        self.reason = reason
        self.input = input
        self.shape = shape
        self.segment = segment


# Azure-related exceptions
class AzureError(ProviderError):
    """Base class for Azure-related errors."""

    pass


class AzureAuthenticationError(AzureError):
    """Raised when the credential handed to ``Provider.configure`` is rejected."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "AZURE_AUTH_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check the credential passed to Provider.configure and its tenant",
        )
        super().__init__(message, **kwargs)


class AzureSubscriptionError(AzureError):
    """Raised when ARM reports the configured subscription as unknown or invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "AZURE_SUBSCRIPTION_ERROR")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check subscription_id (or ARM_SUBSCRIPTION_ID) in the provider configuration",
        )
        super().__init__(message, **kwargs)


class RemoteResourceError(AzureError):
    """Raised when a create/read/update/delete call against Azure fails."""

    def __init__(
        self,
        message: str,
        resource_id: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = dict(kwargs.pop("context", None) or {})
        context.update(
            (k, v)
            for k, v in (("resource_id", resource_id), ("operation", operation))
            if v
        )
        kwargs.setdefault("error_code", "AZURE_RESOURCE_OPERATION_FAILED")
        super().__init__(message, context=context, **kwargs)
        self.resource_id = resource_id
        self.operation = operation


class ResourceAlreadyExistsError(AzureError):
    """Raised when creating a resource that already exists remotely."""

    def __init__(self, resource_type: str, resource_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"A resource with the ID {resource_id!r} already exists - to be "
            f"managed this resource needs to be imported into the State.",
            error_code="RESOURCE_ALREADY_EXISTS",
            context={"resource_type": resource_type, "resource_id": resource_id},
            recovery_suggestion=f"Import the existing resource into state as {resource_type}",
            **kwargs,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# Configuration-related exceptions
class ConfigurationError(ProviderError):
    """Base class for configuration-related errors."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when the provider is used before a required setting is known."""

    def __init__(self, message: str, missing_keys: List[str], **kwargs: Any) -> None:
        super().__init__(
            message,
            error_code="MISSING_CONFIG",
            context={"missing_keys": missing_keys},
            recovery_suggestion=f"Set required configuration: {', '.join(missing_keys)}",
            **kwargs,
        )
        self.missing_keys = missing_keys


# Validation-related exceptions
class ValidationError(ProviderError):
    """Base class for validation errors."""

    pass


class SchemaValidationError(ValidationError):
    """Raised when a resource configuration fails schema validation.

    ``validation_errors`` holds one "<field>: <message>" line per problem.
    """

    def __init__(
        self,
        message: str,
        resource_type: str,
        validation_errors: List[str],
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            error_code="SCHEMA_VALIDATION_FAILED",
            context={"resource_type": resource_type, "validation_errors": validation_errors},
            **kwargs,
        )
        self.resource_type = resource_type
        self.validation_errors = validation_errors


# Utility functions for exception handling
def wrap_azure_exception(
    exc: Exception, context: Optional[Dict[str, Any]] = None
) -> AzureError:
    """
    Wrap a generic Azure SDK exception in our custom exception hierarchy.

    Args:
        exc: The original exception
        context: Optional context information

    Returns:
        AzureError: Wrapped exception with enhanced context
    """
    error_message = str(exc)
    lowered = error_message.lower()

    if "authentication" in lowered or "unauthorized" in lowered:
        return AzureAuthenticationError(
            f"Azure authentication failed: {error_message}", context=context, cause=exc
        )
    # Resource IDs embed "/subscriptions/", so match the ARM error codes only
    elif "subscriptionnotfound" in lowered or "invalidsubscriptionid" in lowered:
        return AzureSubscriptionError(
            f"Azure subscription error: {error_message}", context=context, cause=exc
        )
    else:
        context = dict(context or {})
        return RemoteResourceError(
            f"Azure operation failed: {error_message}",
            resource_id=context.pop("resource_id", None),
            operation=context.pop("operation", None),
            context=context,
            cause=exc,
        )
