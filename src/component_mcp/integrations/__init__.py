"""Remote collaborators: design source and record store."""

from component_mcp.integrations.figma import FigmaClient
from component_mcp.integrations.store import RecordStore

__all__ = ["FigmaClient", "RecordStore"]
