"""MCP Server: expose the risk engine via the Model Context Protocol.

Implements the MCP protocol (JSON-RPC 2.0 over stdio) directly, without an
SDK dependency.

Lets any MCP-compatible assistant (Claude Code, Cursor, ...) ask for the
team's current risk report, and read the activity datasets behind it.

Protocol reference: https://modelcontextprotocol.io/specification
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from teamrisk import __version__
from teamrisk.config import ProjectConfig, find_project_root, load_config
from teamrisk.engine import AnalysisOptions, analyze_risk
from teamrisk.loader import load_activity, sample_paths
from teamrisk.report.markdown import render_tool_summary

logger = logging.getLogger("teamrisk.mcp")


class MCPServer:
    """Model Context Protocol server for teamrisk.

    Exposes the risk engine as an MCP tool and the activity datasets as
    resources.
    """

    PROTOCOL_VERSION = "2024-11-05"
    SERVER_NAME = "team-risk-analyzer"
    SERVER_VERSION = __version__

    def __init__(self, root: Path | None = None, config: ProjectConfig | None = None) -> None:
        self.root = root or find_project_root() or Path.cwd()
        self.config = config or load_config(self.root)
        self._tools = self._define_tools()

    def data_paths(self) -> tuple[Path, Path]:
        """Configured dataset paths, falling back to the bundled samples."""
        github = self.root / self.config.data.github_file
        meetings = self.root / self.config.data.meetings_file
        if github.exists() and meetings.exists():
            return github, meetings
        return sample_paths()

    def _define_tools(self) -> list[dict]:
        """Define the MCP tools we expose."""
        thresholds = self.config.thresholds
        return [
            {
                "name": "analyze_team_risk",
                "description": (
                    "Analyzes team risk factors including PR age, blocked issues, "
                    "meeting follow-ups, and contributor workload. Returns a risk "
                    "score (0-100) with detailed breakdown."
                ),
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "prAge": {
                            "type": "number",
                            "description": "PR age threshold in days",
                            "default": thresholds.pr_age_days,
                        },
                        "overload": {
                            "type": "number",
                            "description": "Overload threshold for assigned items",
                            "default": thresholds.overload_items,
                        },
                    },
                },
            },
        ]

    # =========================================================================
    # Tool Implementations
    # =========================================================================

    def _handle_tool_call(self, name: str, arguments: dict) -> Any:
        """Execute a tool and return the result."""
        if name == "analyze_team_risk":
            return self._tool_analyze_team_risk(arguments)
        raise ValueError(f"Unknown tool: {name}")

    def _tool_analyze_team_risk(self, args: dict) -> str:
        thresholds = self.config.thresholds
        options = AnalysisOptions(
            pr_age_threshold=int(args.get("prAge", thresholds.pr_age_days)),
            overload_threshold=int(args.get("overload", thresholds.overload_items)),
        )
        github, meetings = self.data_paths()
        report = analyze_risk(load_activity(github, meetings), options)
        return render_tool_summary(report)

    # =========================================================================
    # MCP Protocol Implementation (JSON-RPC 2.0 over stdio)
    # =========================================================================

    async def run_stdio(self) -> None:
        """Run the MCP server over stdio (the standard transport)."""
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        writer_transport, writer_protocol = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin, sys.stdout.buffer
        )
        writer = asyncio.StreamWriter(writer_transport, writer_protocol, None, loop)

        logger.info("teamrisk MCP server started (stdio transport)")

        while True:
            try:
                message = await self._read_message(reader)
                if message is None:
                    break
                response = self._handle_message(message)
                if response is not None:
                    await self._write_message(writer, response)
            except Exception as e:
                logger.error(f"Error handling message: {e}")
                break

        logger.info("MCP server shutting down")

    async def _read_message(self, reader: asyncio.StreamReader) -> dict | None:
        """Read a JSON-RPC message with Content-Length header."""
        content_length = 0
        while True:
            line = await reader.readline()
            if not line:
                return None
            line = line.decode("utf-8").strip()
            if not line:
                break  # End of headers
            if line.lower().startswith("content-length:"):
                content_length = int(line.split(":")[1].strip())

        if content_length == 0:
            return None

        body = await reader.readexactly(content_length)
        return json.loads(body.decode("utf-8"))

    async def _write_message(self, writer: asyncio.StreamWriter, message: dict) -> None:
        """Write a JSON-RPC response with Content-Length header."""
        body = json.dumps(message).encode("utf-8")
        header = f"Content-Length: {len(body)}\r\n\r\n".encode()
        writer.write(header + body)
        await writer.drain()

    def _handle_message(self, message: dict) -> dict | None:
        """Route a JSON-RPC message to the appropriate handler."""
        method = message.get("method", "")
        msg_id = message.get("id")
        params = message.get("params", {})

        # Notifications (no id) don't get responses
        if msg_id is None:
            self._handle_notification(method, params)
            return None

        try:
            result = self._dispatch(method, params)
            return {"jsonrpc": "2.0", "id": msg_id, "result": result}
        except Exception as e:
            return {
                "jsonrpc": "2.0",
                "id": msg_id,
                "error": {"code": -32603, "message": str(e)},
            }

    def _handle_notification(self, method: str, params: dict) -> None:
        if method == "notifications/initialized":
            logger.info("Client initialized")
        elif method == "notifications/cancelled":
            logger.info(f"Request cancelled: {params.get('requestId')}")

    def _dispatch(self, method: str, params: dict) -> Any:
        """Dispatch a JSON-RPC method to its handler."""
        if method == "initialize":
            return self._rpc_initialize(params)
        elif method == "tools/list":
            return {"tools": self._tools}
        elif method == "tools/call":
            return self._rpc_tools_call(params)
        elif method == "resources/list":
            return self._rpc_resources_list(params)
        elif method == "resources/read":
            return self._rpc_resources_read(params)
        elif method == "ping":
            return {}
        else:
            raise ValueError(f"Unknown method: {method}")

    def _rpc_initialize(self, params: dict) -> dict:
        """Handle the initialize handshake."""
        return {
            "protocolVersion": self.PROTOCOL_VERSION,
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
            },
            "serverInfo": {
                "name": self.SERVER_NAME,
                "version": self.SERVER_VERSION,
            },
        }

    def _rpc_tools_call(self, params: dict) -> dict:
        """Call a tool and return the result."""
        name = params.get("name", "")
        arguments = params.get("arguments", {})

        try:
            result = self._handle_tool_call(name, arguments)
            return {
                "content": [{"type": "text", "text": result}],
                "isError": False,
            }
        except Exception as e:
            logger.warning(f"Tool {name} failed: {e}")
            return {
                "content": [{"type": "text", "text": f"Error: {e}"}],
                "isError": True,
            }

    def _rpc_resources_list(self, params: dict) -> dict:
        """List the activity datasets."""
        resources = []
        for path in self.data_paths():
            resources.append({
                "uri": path.resolve().as_uri(),
                "name": path.name,
                "mimeType": "application/json",
            })
        return {"resources": resources}

    def _rpc_resources_read(self, params: dict) -> dict:
        """Read a dataset by URI. Only the project root and bundled samples are readable."""
        uri = params.get("uri", "")
        fp = unquote(uri.removeprefix("file://"))
        full_path = Path(fp) if Path(fp).is_absolute() else self.root / fp
        resolved = full_path.resolve()

        allowed = [self.root.resolve(), sample_paths()[0].parent.resolve()]
        if not any(resolved.is_relative_to(base) for base in allowed):
            msg = f"Access denied: {fp} is outside the project root"
            return {"contents": [{"uri": uri, "text": msg}]}

        if not resolved.exists():
            return {"contents": [{"uri": uri, "text": f"File not found: {fp}"}]}

        try:
            content = resolved.read_text(encoding="utf-8", errors="replace")
            return {"contents": [{"uri": uri, "mimeType": "application/json", "text": content}]}
        except OSError as e:
            return {"contents": [{"uri": uri, "text": f"Error reading {fp}: {e}"}]}

    # =========================================================================
    # MCP Config Generators
    # =========================================================================

    @staticmethod
    def generate_claude_config(project_path: str | None = None) -> dict:
        """Generate MCP config for Claude Code (~/.claude/mcp_servers.json)."""
        return {
            "teamrisk": {
                "command": "teamrisk",
                "args": ["serve", "--transport", "stdio"],
                "cwd": project_path or ".",
            }
        }

    @staticmethod
    def generate_cursor_config(project_path: str | None = None) -> dict:
        """Generate MCP config for Cursor (.cursor/mcp.json)."""
        return {
            "mcpServers": {
                "teamrisk": {
                    "command": "teamrisk",
                    "args": ["serve", "--transport", "stdio"],
                    "cwd": project_path or ".",
                }
            }
        }
