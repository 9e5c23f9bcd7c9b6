"""MCP (Model Context Protocol) Server for teamrisk.

Exposes the risk engine to any MCP-compatible client:
  - Claude Code
  - Cursor
  - Any custom MCP client

Usage:
    teamrisk serve              # Start the MCP server
    teamrisk serve --transport stdio  # Explicit stdio transport
"""

from teamrisk.mcp.server import MCPServer

__all__ = ["MCPServer"]
