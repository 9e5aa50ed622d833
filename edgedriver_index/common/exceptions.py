"""Exception types for manifest pipeline errors.

Every fatal failure derives from EdgeDriverIndexError. NameParseFailure is
the one non-fatal kind: the aggregator catches it and skips the entry.
"""

from typing import Any


class EdgeDriverIndexError(Exception):
    """Base class for pipeline failures.

    Subclasses supply a human-readable message and optional context that
    is appended to the formatted message.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the failure.
            context: Optional dict of additional context (url, path, counts).
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class TransportError(EdgeDriverIndexError):
    """Raised when the manifest could not be fetched.

    Covers connection and DNS failures, timeouts, and any non-2xx response.

    Attributes:
        url: The URL that was requested.
        reason: Short description of what went wrong.
        status_code: HTTP status, or None if no response was received.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code

        context: dict[str, Any] = {"url": url}
        if status_code is not None:
            context["status_code"] = status_code

        super().__init__(f"Failed to fetch manifest: {reason}", context)


class ManifestFormatError(EdgeDriverIndexError):
    """Raised when the manifest document has no recognizable structure."""

    def __init__(
        self,
        reason: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.reason = reason
        super().__init__(f"Unrecognized manifest format: {reason}", context)


class UnexpectedEmptyManifestError(EdgeDriverIndexError):
    """Raised when a parsed manifest lists one entry or none.

    A listing that small means the fetch returned a placeholder or
    truncated document rather than the real container listing.

    Attributes:
        entry_count: Number of entries actually found.
    """

    def __init__(self, entry_count: int) -> None:
        self.entry_count = entry_count
        super().__init__(
            f"Expected more than one manifest entry, found {entry_count}",
            {"entry_count": entry_count},
        )


class NameParseFailure(Exception):
    """Raised when an entry name is not ``<version>/edgedriver_<platform>.zip``.

    Not fatal. The aggregator logs it and skips the entry.

    Attributes:
        name: The raw entry name.
        reason: Which rule the name broke.
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"unknown version/platform format: {name} ({reason})")


class WorkspaceIOError(EdgeDriverIndexError):
    """Raised when a workspace filesystem operation fails.

    Attributes:
        operation: The operation that failed (remove, create, write, read).
        path: The path it was applied to.
    """

    def __init__(self, operation: str, path: str, cause: OSError) -> None:
        self.operation = operation
        self.path = path
        super().__init__(
            f"Workspace {operation} failed: {cause}",
            {"path": path},
        )
