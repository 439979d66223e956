"""
ChainClient tests against a mocked JSON-RPC endpoint.

httpx.MockTransport stands in for the node, so these run offline while
still going through the real request/encode/decode path.
"""

from __future__ import annotations

import json

import httpx
import pytest
from eth_abi import decode, encode
from eth_hash.auto import keccak

from agentfund.chain import ChainClient, ProjectStatus
from agentfund.config import CONTRACT_ADDRESS, Settings
from agentfund.errors import (
    ChainError,
    InvalidAddressError,
    InvalidAmountError,
    ProjectNotFoundError,
)
from agentfund.utils import parse_ether

from conftest import AGENT, FUNDER

PROJECT_TUPLE = "(address,address,uint256,uint256,uint256,uint256,uint8)"


def _selector(signature: str) -> str:
    return "0x" + keccak(signature.encode("utf-8"))[:4].hex()


def _rpc_transport(result: str | None = None, error: dict | None = None, status: int = 200):
    requests: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append(body)
        if error is not None:
            return httpx.Response(status, json={"jsonrpc": "2.0", "id": body["id"], "error": error})
        return httpx.Response(status, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return httpx.MockTransport(handler), requests


def _project_result(funder: str = FUNDER, status: int = 0) -> str:
    values = (funder, AGENT, 3 * 10**16, 10**16, 1, 2, status)
    return "0x" + encode([PROJECT_TUPLE], [values]).hex()


@pytest.fixture()
def offline_client() -> ChainClient:
    return ChainClient(Settings(rpc_url="http://rpc.invalid"))


class TestGetProject:
    """Reading projects through eth_call."""

    def test_decodes_project_tuple(self) -> None:
        transport, requests = _rpc_transport(_project_result())
        client = ChainClient(Settings(rpc_url="http://rpc.test"), transport=transport)

        project = client.get_project(7)

        assert project.project_id == 7
        assert project.funder.lower() == FUNDER
        assert project.agent.lower() == AGENT
        assert project.total_amount == 3 * 10**16
        assert project.released_amount == 10**16
        assert project.remaining_amount == 2 * 10**16
        assert (project.current_milestone, project.total_milestones) == (1, 2)
        assert project.status == ProjectStatus.ACTIVE

    def test_sends_eth_call_to_contract(self) -> None:
        transport, requests = _rpc_transport(_project_result())
        client = ChainClient(Settings(rpc_url="http://rpc.test"), transport=transport)

        client.get_project(7)

        assert len(requests) == 1
        call = requests[0]
        assert call["method"] == "eth_call"
        assert call["params"][1] == "latest"
        assert call["params"][0]["to"] == CONTRACT_ADDRESS
        data = call["params"][0]["data"]
        assert data.startswith(_selector("getProject(uint256)"))
        assert decode(["uint256"], bytes.fromhex(data[10:])) == (7,)

    def test_unknown_status_code_is_kept(self) -> None:
        transport, _ = _rpc_transport(_project_result(status=7))
        client = ChainClient(Settings(), transport=transport)

        project = client.get_project(1)

        assert project.status == 7
        assert project.status_label == "Unknown"

    def test_empty_result_is_not_found(self) -> None:
        transport, _ = _rpc_transport("0x")
        client = ChainClient(Settings(), transport=transport)

        with pytest.raises(ProjectNotFoundError):
            client.get_project(99)

    def test_zero_funder_is_not_found(self) -> None:
        transport, _ = _rpc_transport(_project_result(funder="0x" + "0" * 40))
        client = ChainClient(Settings(), transport=transport)

        with pytest.raises(ProjectNotFoundError):
            client.get_project(99)

    def test_revert_is_chain_error(self) -> None:
        transport, _ = _rpc_transport(error={"code": 3, "message": "execution reverted"})
        client = ChainClient(Settings(), transport=transport)

        with pytest.raises(ChainError, match="execution reverted"):
            client.get_project(1)

    def test_http_failure_is_chain_error(self) -> None:
        transport, _ = _rpc_transport(error={"code": -32000, "message": "down"}, status=503)
        client = ChainClient(Settings(), transport=transport)

        with pytest.raises(ChainError, match="RPC request failed"):
            client.get_project(1)

    def test_garbage_result_is_chain_error(self) -> None:
        transport, _ = _rpc_transport("0x1234")
        client = ChainClient(Settings(), transport=transport)

        with pytest.raises(ChainError, match="Cannot decode"):
            client.get_project(1)


class TestGetProjectCount:
    def test_reads_count(self) -> None:
        transport, requests = _rpc_transport("0x" + encode(["uint256"], [12]).hex())
        client = ChainClient(Settings(), transport=transport)

        assert client.get_project_count() == 12
        assert requests[0]["params"][0]["data"] == _selector("projectCount()")

    def test_uses_configured_endpoint(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x" + "00" * 32})

        client = ChainClient(
            Settings(rpc_url="https://base.example/rpc"), transport=httpx.MockTransport(handler)
        )
        assert client.get_project_count() == 0
        assert seen == ["https://base.example/rpc"]


class TestEncodeCreateProject:
    """createProject calldata and attached value."""

    def test_total_is_exact_sum(self, offline_client: ChainClient) -> None:
        call = offline_client.encode_create_project(AGENT, ["0.01", "0.02"])

        assert call.milestone_wei == (10**16, 2 * 10**16)
        assert call.total_value == parse_ether("0.03") == 3 * 10**16

    def test_calldata_layout(self, offline_client: ChainClient) -> None:
        call = offline_client.encode_create_project(AGENT, ["0.01", "0.02"])

        assert call.calldata.startswith(_selector("createProject(address,uint256[])"))
        agent, amounts = decode(["address", "uint256[]"], bytes.fromhex(call.calldata[10:]))
        assert agent.lower() == AGENT
        assert list(amounts) == [10**16, 2 * 10**16]

    def test_deterministic(self, offline_client: ChainClient) -> None:
        first = offline_client.encode_create_project(AGENT, ["0.1", "0.2", "0.3"])
        for _ in range(5):
            again = offline_client.encode_create_project(AGENT, ["0.1", "0.2", "0.3"])
            assert again == first
        assert first.total_value == 6 * 10**17

    def test_address_case_does_not_change_calldata(self, offline_client: ChainClient) -> None:
        lower = offline_client.encode_create_project(
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed", ["1"]
        )
        checksummed = offline_client.encode_create_project(
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed", ["1"]
        )
        assert lower.calldata == checksummed.calldata

    def test_large_amounts_sum_exactly(self, offline_client: ChainClient) -> None:
        call = offline_client.encode_create_project(
            AGENT, ["12345678901.123456789012345678", "0.000000000000000001"]
        )

        assert call.milestone_wei == (12345678901123456789012345678, 1)
        assert call.total_value == 12345678901123456789012345679
        _, amounts = decode(["address", "uint256[]"], bytes.fromhex(call.calldata[10:]))
        assert list(amounts) == [12345678901123456789012345678, 1]

    def test_returns_checksummed_agent(self, offline_client: ChainClient) -> None:
        call = offline_client.encode_create_project(
            "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed", ["1"]
        )
        assert call.agent == "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

    def test_non_numeric_amount(self, offline_client: ChainClient) -> None:
        with pytest.raises(InvalidAmountError, match="abc"):
            offline_client.encode_create_project(AGENT, ["0.01", "abc"])

    def test_negative_amount(self, offline_client: ChainClient) -> None:
        with pytest.raises(InvalidAmountError):
            offline_client.encode_create_project(AGENT, ["-1"])

    def test_empty_milestones(self, offline_client: ChainClient) -> None:
        with pytest.raises(InvalidAmountError, match="At least one"):
            offline_client.encode_create_project(AGENT, [])

    def test_bad_address(self, offline_client: ChainClient) -> None:
        with pytest.raises(InvalidAddressError):
            offline_client.encode_create_project("0xnope", ["1"])


class TestEncodeProjectCalls:
    def test_release_milestone(self, offline_client: ChainClient) -> None:
        data = offline_client.encode_release_milestone(5)
        assert data.startswith(_selector("releaseMilestone(uint256)"))
        assert decode(["uint256"], bytes.fromhex(data[10:])) == (5,)

    def test_cancel_project(self, offline_client: ChainClient) -> None:
        data = offline_client.encode_cancel_project(5)
        assert data.startswith(_selector("cancelProject(uint256)"))
        assert decode(["uint256"], bytes.fromhex(data[10:])) == (5,)

    def test_release_and_cancel_differ(self, offline_client: ChainClient) -> None:
        assert offline_client.encode_release_milestone(1) != offline_client.encode_cancel_project(1)
