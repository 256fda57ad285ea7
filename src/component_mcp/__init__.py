"""Component MCP Server - match design nodes to a component library over MCP."""

__version__ = "0.3.0"
