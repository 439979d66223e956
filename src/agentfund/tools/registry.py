"""
Static tool registry.

Names and required fields are the ``agentfund_*`` contract that agent
integrations already call; do not rename them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..config import SCAN_LIMIT
from . import handlers
from .handlers import ToolContext
from .schemas import (
    AGENT_ADDRESS_SCHEMA,
    CREATE_FUNDRAISE_SCHEMA,
    EMPTY_SCHEMA,
    PROJECT_ID_SCHEMA,
)

Handler = Callable[[ToolContext, dict[str, Any]], str]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Handler

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="agentfund_get_stats",
        description=(
            "Get AgentFund platform statistics: total number of projects, "
            "network, escrow contract address and platform fee."
        ),
        input_schema=EMPTY_SCHEMA,
        handler=handlers.get_stats,
    ),
    ToolSpec(
        name="agentfund_get_project",
        description=(
            "Get details of an AgentFund project including funder, agent, "
            "amounts, milestone progress and status."
        ),
        input_schema=PROJECT_ID_SCHEMA,
        handler=handlers.get_project,
    ),
    ToolSpec(
        name="agentfund_find_my_projects",
        description=(
            "Find AgentFund projects where the given address is the agent "
            f"receiving funds. Scans project ids 1 to {SCAN_LIMIT}."
        ),
        input_schema=AGENT_ADDRESS_SCHEMA,
        handler=handlers.find_my_projects,
    ),
    ToolSpec(
        name="agentfund_create_fundraise",
        description=(
            "Create a milestone-based funding proposal. Returns the unsigned "
            "createProject transaction a funder must sign and send."
        ),
        input_schema=CREATE_FUNDRAISE_SCHEMA,
        handler=handlers.create_fundraise,
    ),
    ToolSpec(
        name="agentfund_check_milestone",
        description=(
            "Check milestone status of a project: progress and remaining "
            "balance, amount received, or refund after cancellation."
        ),
        input_schema=PROJECT_ID_SCHEMA,
        handler=handlers.check_milestone,
    ),
    ToolSpec(
        name="agentfund_generate_release_request",
        description=(
            "Request payment: generate the unsigned releaseMilestone "
            "transaction for the project funder to sign. Active projects only."
        ),
        input_schema=PROJECT_ID_SCHEMA,
        handler=handlers.generate_release_request,
    ),
)


def build_registry() -> dict[str, ToolSpec]:
    return {tool.name: tool for tool in TOOLS}
