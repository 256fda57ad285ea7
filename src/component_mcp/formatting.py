"""Formatting and error rendering helpers for MCP tool outputs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from component_mcp.contracts import EmptyResult, build_error, build_ok
from component_mcp.errors import ComponentMCPError, ConfigurationError, UpstreamError

logger = logging.getLogger("component-mcp.tools")

_ACTIONS = {
    "invalid_input": "check the design URL (expected .../file/<key>/... or .../design/<key>/...)",
    "not_found": "verify the node id or component name, then retry",
    "upstream_error": "check network access and credentials for the remote service, then retry",
    "provider_error": "check the completion provider configuration and quota, then retry",
    "configuration_error": "set the missing environment variables in the MCP server config",
}


def is_connectivity_error(exc: Exception) -> bool:
    """Best-effort detection for transport-level failures."""
    if isinstance(exc, (httpx.TransportError, ConnectionError, TimeoutError)):
        return True

    lowered = str(exc).strip().lower()
    return (
        "connect call failed" in lowered
        or "connection refused" in lowered
        or "connection reset" in lowered
        or "timed out" in lowered
    )


def summarize_error(exc: Exception) -> str:
    """First line of an exception message, with transport errors named plainly."""
    text = str(exc).strip()
    lowered = text.lower()

    if "connection refused" in lowered or "connect call failed" in lowered:
        return "cannot connect to remote service"
    if "timed out" in lowered:
        return "remote request timed out"
    if not text:
        return type(exc).__name__
    return text.splitlines()[0]


def build_exception_error(
    operation: str,
    exc: Exception,
    *,
    design_url: str | None = None,
) -> dict[str, Any]:
    """Build a unified error envelope for any failure raised inside a tool."""
    details: dict[str, Any] = {"operation": operation}
    if design_url:
        details["design_url"] = design_url

    if isinstance(exc, ComponentMCPError):
        details.update(exc.details)
        action = _ACTIONS.get(exc.code)
        if action:
            details["action"] = action
        if isinstance(exc, ConfigurationError):
            logger.warning("%s: configuration incomplete: %s", operation, exc.message)
        elif isinstance(exc, UpstreamError):
            logger.warning("%s: %s failed: %s", operation, exc.service, exc.message)
        return build_error(exc.code, exc.message, details)

    logger.exception("%s: unexpected failure", operation)
    code = "upstream_error" if is_connectivity_error(exc) else "internal_error"
    details["reason"] = summarize_error(exc)
    return build_error(code, f"{operation} failed", details)


def wrap_result(operation: str, result: Any) -> dict[str, Any]:
    """Wrap pipeline output (payload dict or EmptyResult) into a success envelope."""
    if isinstance(result, EmptyResult):
        payload = result.model_dump()
        payload["display"] = "\n".join([result.message, *[f"- {hint}" for hint in result.hints]])
    else:
        payload = dict(result)
    return build_ok({"operation": operation, **payload})


def format_percent(confidence: float) -> str:
    return f"{round(confidence * 100)}%"
