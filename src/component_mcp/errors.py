"""Error kinds raised by component-mcp services.

Tools never let these escape: ``formatting.build_exception_error`` turns them
into structured error envelopes.
"""

from __future__ import annotations


class ComponentMCPError(Exception):
    """Base class for all expected failures."""

    code = "operation_error"

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputError(ComponentMCPError):
    """Malformed caller input, e.g. a design URL without a file key."""

    code = "invalid_input"


class NotFoundError(ComponentMCPError):
    """A referenced design node or catalog entry does not exist."""

    code = "not_found"


class UpstreamError(ComponentMCPError):
    """A remote collaborator returned a failure status or malformed payload."""

    code = "upstream_error"

    def __init__(
        self,
        message: str,
        *,
        service: str,
        status_code: int | None = None,
        details: dict | None = None,
    ) -> None:
        merged = {"service": service}
        if status_code is not None:
            merged["status_code"] = status_code
        merged.update(details or {})
        super().__init__(message, details=merged)
        self.service = service
        self.status_code = status_code


class ProviderError(UpstreamError):
    """Completion provider failure. Both provider kinds raise only this."""

    code = "provider_error"


class ConfigurationError(ComponentMCPError):
    """Required credential or endpoint is missing from the environment."""

    code = "configuration_error"

    def __init__(self, missing: list[str], hint: str | None = None) -> None:
        message = f"Missing required environment variables: {', '.join(missing)}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message, details={"missing": missing})
        self.missing = missing
