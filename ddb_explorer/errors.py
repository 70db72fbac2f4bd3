"""Exception hierarchy for ddb_explorer.

All custom exceptions inherit from ExplorerError so callers can catch
every explorer-specific failure with a single except clause.

Exception categories:
- ConfigError: bad profile or malformed operator/value combination.
  Raised before any network call and never retried.
- BackendError: connectivity, permission, not-found or validation failure
  reported by DynamoDB (or by botocore before the request left).
- ExportError: an item could not be serialized or written to disk.

A table whose DescribeTable call fails while listing tables is not an
error here: the table is logged and omitted from the listing.
"""
from __future__ import annotations


class ExplorerError(Exception):
    """Base exception for all ddb_explorer errors."""


class ConfigError(ExplorerError):
    """Raised for invalid configuration or query input.

    Example:
        build_key_condition("id", "u1", sort_key="ts", sort_value="a",
                            operator="between")
        Raises ConfigError because the upper bound is missing.
    """


class BackendError(ExplorerError):
    """Raised when a DynamoDB call fails.

    Attributes:
        operation: Backend operation name (e.g. "Query").
        code: AWS error code when one was returned (e.g.
            "ResourceNotFoundException"), otherwise None.
    """

    def __init__(self, message: str, *, operation: str | None = None, code: str | None = None) -> None:
        self.operation = operation
        self.code = code
        if operation:
            message = f"{operation} failed: {message}"
        super().__init__(message)

    @classmethod
    def from_boto(cls, operation: str, exc: Exception) -> "BackendError":
        """Wrap a botocore ClientError/BotoCoreError."""
        code = None
        response = getattr(exc, "response", None)
        if isinstance(response, dict):
            code = response.get("Error", {}).get("Code")
        return cls(str(exc), operation=operation, code=code)


class ExportError(ExplorerError):
    """Raised when an item cannot be exported as JSON.

    Attributes:
        path: The file the export was aimed at.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)
