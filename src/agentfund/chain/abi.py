"""
Escrow contract ABI.

The deployment is fixed, so the ABI is compiled in rather than loaded from
build artifacts.  Only the functions this server reads or encodes are listed.
"""

from __future__ import annotations

from typing import Any

PROJECT_TUPLE_COMPONENTS = [
    {"name": "funder", "type": "address"},
    {"name": "agent", "type": "address"},
    {"name": "totalAmount", "type": "uint256"},
    {"name": "releasedAmount", "type": "uint256"},
    {"name": "currentMilestone", "type": "uint256"},
    {"name": "totalMilestones", "type": "uint256"},
    {"name": "status", "type": "uint8"},
]

ESCROW_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "createProject",
        "inputs": [
            {"name": "agent", "type": "address"},
            {"name": "milestoneAmounts", "type": "uint256[]"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "payable",
    },
    {
        "type": "function",
        "name": "releaseMilestone",
        "inputs": [{"name": "projectId", "type": "uint256"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "cancelProject",
        "inputs": [{"name": "projectId", "type": "uint256"}],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "getProject",
        "inputs": [{"name": "projectId", "type": "uint256"}],
        "outputs": [
            {"name": "", "type": "tuple", "components": PROJECT_TUPLE_COMPONENTS},
        ],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "projectCount",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
]


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """
    Look up a function entry by name.

    Raises:
        ValueError: If the ABI has no such function
    """
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def canonical_type(param: dict[str, Any]) -> str:
    """Expand ``tuple``/``tuple[]`` params into eth-abi's ``(t1,t2)`` form."""
    type_str = param["type"]
    if not type_str.startswith("tuple"):
        return type_str
    suffix = type_str[len("tuple"):]
    inner = ",".join(canonical_type(c) for c in param.get("components", []))
    return f"({inner}){suffix}"


def function_signature(entry: dict[str, Any]) -> str:
    input_types = [canonical_type(inp) for inp in entry.get("inputs", [])]
    return f"{entry['name']}({','.join(input_types)})"
