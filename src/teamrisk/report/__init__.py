"""Report renderers (markdown documents and MCP tool text)."""

from teamrisk.report.markdown import render_markdown_report, render_tool_summary

__all__ = ["render_markdown_report", "render_tool_summary"]
