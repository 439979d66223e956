from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..chain import EscrowChain
from ..config import Settings
from ..errors import AgentFundError, UnknownToolError
from ..log import get_logger
from .handlers import ToolContext
from .registry import ToolSpec, build_registry
from .schemas import validate_arguments

logger = get_logger("dispatch")


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def error_result(exc: BaseException) -> ToolResult:
    """The one place a failure becomes a tool payload."""
    if isinstance(exc, AgentFundError):
        logger.warning("%s: %s", type(exc).__name__, exc)
    else:
        logger.exception("Unexpected error in tool handler")
    return ToolResult(text=f"Error: {exc}", is_error=True)


class ToolDispatcher:
    """
    Routes tool calls to handlers.

    The registry is fixed at construction.  ``dispatch`` never raises for a
    failed call; it returns an error-flagged result instead.
    """

    def __init__(self, chain: EscrowChain, settings: Optional[Settings] = None) -> None:
        self._context = ToolContext(chain=chain, settings=settings or Settings())
        self._registry = build_registry()

    @property
    def context(self) -> ToolContext:
        return self._context

    def list_tools(self) -> list[ToolSpec]:
        return list(self._registry.values())

    def get_tool(self, name: str) -> ToolSpec:
        tool = self._registry.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def dispatch(self, name: str, arguments: Any = None) -> ToolResult:
        logger.info("Tool call %s with %r", name, arguments)
        try:
            tool = self.get_tool(name)
            args = validate_arguments(arguments, tool.input_schema, tool.name)
            text = tool.handler(self._context, args)
        except Exception as exc:
            return error_result(exc)
        return ToolResult(text=text)
