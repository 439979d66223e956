"""
Tool handlers.

Each handler takes the tool context and validated arguments, makes its chain
calls, and returns the text payload.  Handlers raise; the dispatcher turns
exceptions into error results.  Nothing here signs or sends a transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..chain import EscrowChain, Project, ProjectStatus, UnsignedTransaction
from ..config import NETWORK_NAME, PLATFORM_FEE_TEXT, Settings
from ..errors import InvalidStateError
from ..log import get_logger
from ..utils import format_ether, normalize_address
from .schemas import parse_project_id

logger = get_logger("tools")

SIGNING_NOTE = (
    "This transaction must be signed and sent from the funder's wallet.\n"
    "AgentFund never signs or broadcasts transactions."
)


@dataclass(frozen=True)
class ToolContext:
    chain: EscrowChain
    settings: Settings


def _eth(wei: int) -> str:
    return f"{format_ether(wei)} ETH"


def _render_transaction(lines: list[str], tx: UnsignedTransaction) -> str:
    return "\n".join([*lines, "", SIGNING_NOTE, "", "Transaction:", tx.to_json()])


# ============ Read tools ============


def get_stats(ctx: ToolContext, args: dict[str, Any]) -> str:
    count = ctx.chain.get_project_count()
    return "\n".join(
        [
            "AgentFund Platform Stats",
            f"  Network:        {NETWORK_NAME} (chain id {ctx.settings.chain_id})",
            f"  Contract:       {ctx.settings.contract_address}",
            f"  Total projects: {count}",
            f"  Platform fee:   {PLATFORM_FEE_TEXT}",
        ]
    )


def get_project(ctx: ToolContext, args: dict[str, Any]) -> str:
    project = ctx.chain.get_project(parse_project_id(args["projectId"]))
    return "\n".join(
        [
            f"Project #{project.project_id}",
            f"  Status:     {project.status_label}",
            f"  Funder:     {project.funder}",
            f"  Agent:      {project.agent}",
            f"  Total:      {_eth(project.total_amount)}",
            f"  Released:   {_eth(project.released_amount)}",
            f"  Remaining:  {_eth(project.remaining_amount)}",
            f"  Milestone:  {project.current_milestone} of {project.total_milestones}",
        ]
    )


def scan_agent_projects(ctx: ToolContext, agent_address: str) -> tuple[list[Project], int, int]:
    """
    Find projects whose agent is ``agent_address``.

    Reads ids 1..min(count, scan_limit) one at a time.  A failed read skips
    that id and never aborts the scan.

    Returns:
        (matches in ascending id order, ids scanned, total project count)
    """
    count = ctx.chain.get_project_count()
    limit = min(count, ctx.settings.scan_limit)
    wanted = agent_address.lower()

    matches: list[Project] = []
    for project_id in range(1, limit + 1):
        try:
            project = ctx.chain.get_project(project_id)
        except Exception as exc:
            logger.debug("Skipping project %d during scan: %s", project_id, exc)
            continue
        if project.agent.lower() == wanted:
            matches.append(project)
    return matches, limit, count


def find_my_projects(ctx: ToolContext, args: dict[str, Any]) -> str:
    address = normalize_address(args["agentAddress"])
    matches, scanned, count = scan_agent_projects(ctx, address)

    lines: list[str] = []
    if not matches:
        lines.append(f"No projects found for {address}.")
    else:
        lines.append(f"Found {len(matches)} project(s) for {address}:")
        for project in matches:
            lines.append(
                f"  #{project.project_id}  {project.status_label:<9}  "
                f"total {_eth(project.total_amount)}, "
                f"released {_eth(project.released_amount)}, "
                f"milestone {project.current_milestone} of {project.total_milestones}"
            )
    if count > scanned:
        lines.append(f"Only the first {scanned} of {count} projects were scanned.")
    return "\n".join(lines)


def check_milestone(ctx: ToolContext, args: dict[str, Any]) -> str:
    project = ctx.chain.get_project(parse_project_id(args["projectId"]))
    header = f"Project #{project.project_id}"

    if project.status == ProjectStatus.COMPLETED:
        return "\n".join(
            [
                f"{header} is Completed: all {project.total_milestones} milestones released.",
                f"  Agent received: {_eth(project.total_amount)} (full amount)",
                f"  Agent:          {project.agent}",
            ]
        )
    if project.status == ProjectStatus.CANCELLED:
        return "\n".join(
            [
                f"{header} was Cancelled after {project.current_milestone} of "
                f"{project.total_milestones} milestones.",
                f"  Released before cancellation: {_eth(project.released_amount)}",
                f"  Refunded to funder:           {_eth(project.remaining_amount)}",
            ]
        )
    if project.status == ProjectStatus.ACTIVE:
        lines = [
            f"{header} is Active.",
            f"  Progress:   {project.current_milestone} of {project.total_milestones} milestones released",
            f"  Released:   {_eth(project.released_amount)}",
            f"  Remaining:  {_eth(project.remaining_amount)}",
        ]
        if project.current_milestone < project.total_milestones:
            lines.append(
                f"  Next:       milestone {project.current_milestone + 1} awaits release by the funder"
            )
        return "\n".join(lines)

    return f"{header} has status Unknown (code {project.status})."


# ============ Transaction request tools ============


def create_fundraise(ctx: ToolContext, args: dict[str, Any]) -> str:
    amounts = args["milestoneAmounts"]
    call = ctx.chain.encode_create_project(args["agentAddress"], amounts)
    total = format_ether(call.total_value)

    tx = UnsignedTransaction(
        to=ctx.settings.contract_address,
        data=call.calldata,
        value=call.total_value,
        chain_id=ctx.settings.chain_id,
        description=f"Create project with {len(call.milestone_wei)} milestones, total {total} ETH",
    )

    lines = [
        f"Fundraise proposal for agent {call.agent}",
        f"  Milestones: {len(call.milestone_wei)}",
    ]
    for index, wei in enumerate(call.milestone_wei, start=1):
        lines.append(f"    {index}. {_eth(wei)}")
    lines.append(f"  Total:      {total} ETH ({call.total_value} wei)")
    description = (args.get("description") or "").strip()
    if description:
        lines.append(f"  About:      {description}")
    lines.append(f"  Send to:    {ctx.settings.contract_address} on {NETWORK_NAME}")
    return _render_transaction(lines, tx)


def _require_active(project: Project, action: str) -> None:
    if not project.is_active:
        raise InvalidStateError(
            f"Cannot {action} project #{project.project_id}: project is {project.status_label}"
        )


def generate_release_request(ctx: ToolContext, args: dict[str, Any]) -> str:
    project = ctx.chain.get_project(parse_project_id(args["projectId"]))
    _require_active(project, "release a milestone for")

    tx = UnsignedTransaction(
        to=ctx.settings.contract_address,
        data=ctx.chain.encode_release_milestone(project.project_id),
        value=0,
        chain_id=ctx.settings.chain_id,
        description=f"Release next milestone for project {project.project_id}",
    )
    lines = [
        f"Release request for project #{project.project_id}",
        f"  Milestone:  {project.current_milestone + 1} of {project.total_milestones}",
        f"  Agent:      {project.agent}",
        f"  In escrow:  {_eth(project.remaining_amount)}",
        f"  Signer:     {project.funder} (project funder)",
    ]
    return _render_transaction(lines, tx)


def generate_cancel_request(ctx: ToolContext, project_id: int) -> str:
    project = ctx.chain.get_project(project_id)
    _require_active(project, "cancel")

    tx = UnsignedTransaction(
        to=ctx.settings.contract_address,
        data=ctx.chain.encode_cancel_project(project.project_id),
        value=0,
        chain_id=ctx.settings.chain_id,
        description=f"Cancel project {project.project_id} and refund remaining funds",
    )
    lines = [
        f"Cancel request for project #{project.project_id}",
        f"  Released so far: {_eth(project.released_amount)}",
        f"  Refund:          {_eth(project.remaining_amount)}",
        f"  Signer:          {project.funder} (project funder)",
    ]
    return _render_transaction(lines, tx)


__all__ = [
    "ToolContext",
    "check_milestone",
    "create_fundraise",
    "find_my_projects",
    "generate_cancel_request",
    "generate_release_request",
    "get_project",
    "get_stats",
    "scan_agent_projects",
]
