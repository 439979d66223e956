"""
Chain client for the AgentFund escrow contract.

Reads go through ``eth_call``; writes are only ever encoded.  The client
holds nothing but its immutable settings, so one instance can serve
concurrent tool calls.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import httpx

from ..config import Settings
from ..errors import ChainError, InvalidAmountError, ProjectNotFoundError
from ..utils import ZERO_ADDRESS, normalize_address, parse_ether
from .abi import ESCROW_ABI
from .models import CreateProjectCall, Project
from .rpc import decode_function_result, encode_function_call, rpc_call


class ProjectQuery(Protocol):
    def get_project(self, project_id: int) -> Project: ...

    def get_project_count(self) -> int: ...


class ProjectEncoder(Protocol):
    def encode_create_project(
        self, agent_address: str, milestone_amounts: Sequence[str]
    ) -> CreateProjectCall: ...

    def encode_release_milestone(self, project_id: int) -> str: ...

    def encode_cancel_project(self, project_id: int) -> str: ...


class EscrowChain(ProjectQuery, ProjectEncoder, Protocol):
    """Both capabilities; what the tool handlers are given."""


class ChainClient:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def contract_address(self) -> str:
        return self._settings.contract_address

    # ---------------------------------------------------------------- reads

    def _read(self, function_name: str, args: Optional[list] = None):
        calldata = encode_function_call(ESCROW_ABI, function_name, args or [])
        result = rpc_call(
            self._settings.rpc_url,
            "eth_call",
            [{"to": self._settings.contract_address, "data": calldata}, "latest"],
            timeout=self._settings.rpc_timeout,
            transport=self._transport,
        )
        if result is None or result == "0x":
            return None
        return decode_function_result(ESCROW_ABI, function_name, result)

    def get_project(self, project_id: int) -> Project:
        """
        Read one project.

        Raises:
            ProjectNotFoundError: If the contract returns no data or an empty slot
            ChainError: On RPC failure or revert
        """
        values = self._read("getProject", [project_id])
        if values is None:
            raise ProjectNotFoundError(project_id)
        project = Project.from_tuple(project_id, values)
        if project.funder.lower() == ZERO_ADDRESS:
            raise ProjectNotFoundError(project_id)
        return project

    def get_project_count(self) -> int:
        count = self._read("projectCount")
        if count is None:
            raise ChainError("projectCount returned no data")
        return int(count)

    # ------------------------------------------------------------- encoding

    def encode_create_project(
        self, agent_address: str, milestone_amounts: Sequence[str]
    ) -> CreateProjectCall:
        """
        Encode ``createProject(agent, milestoneAmounts)``.

        Args:
            agent_address: Recipient of released funds
            milestone_amounts: Decimal ETH strings, one per milestone

        Returns:
            Calldata, the exact wei value to attach, and the checksummed agent

        Raises:
            InvalidAddressError: If the agent address is malformed
            InvalidAmountError: If any amount is invalid or the list is empty
        """
        agent = normalize_address(agent_address)
        if not milestone_amounts:
            raise InvalidAmountError("At least one milestone amount is required")

        milestone_wei = tuple(parse_ether(amount) for amount in milestone_amounts)
        total_value = sum(milestone_wei)

        calldata = encode_function_call(
            ESCROW_ABI, "createProject", [agent, list(milestone_wei)]
        )
        return CreateProjectCall(
            calldata=calldata,
            total_value=total_value,
            milestone_wei=milestone_wei,
            agent=agent,
        )

    def encode_release_milestone(self, project_id: int) -> str:
        return encode_function_call(ESCROW_ABI, "releaseMilestone", [project_id])

    def encode_cancel_project(self, project_id: int) -> str:
        return encode_function_call(ESCROW_ABI, "cancelProject", [project_id])
