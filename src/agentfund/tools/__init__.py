"""
Tools - Agent-facing tool registry and dispatch.

- registry: static tool name -> schema/handler table
- handlers: one function per tool, chain calls plus rendering
- dispatch: argument validation and uniform error mapping
"""

from .dispatch import ToolDispatcher, ToolResult, error_result
from .registry import TOOLS, ToolSpec

__all__ = ["TOOLS", "ToolDispatcher", "ToolResult", "ToolSpec", "error_result"]
