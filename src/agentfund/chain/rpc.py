"""
JSON-RPC transport and ABI codec.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for
encoding.  Only read-only ``eth_call`` is needed here; nothing is ever sent.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError

from ..errors import ChainError
from ..utils import keccak256
from .abi import canonical_type, find_function, function_signature


def encode_function_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [canonical_type(inp) for inp in func.get("inputs", [])]

    # Selector = first 4 bytes of keccak256 of the canonical signature
    selector = keccak256(function_signature(func).encode("utf-8"))[:4]

    if input_types:
        encoded_args = encode(input_types, args)
    else:
        encoded_args = b""

    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: list, function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value or tuple)

    Raises:
        ChainError: If the return data does not match the ABI
    """
    func = find_function(abi, function_name)
    output_types = [canonical_type(out) for out in func.get("outputs", [])]
    if not output_types:
        return None

    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
        decoded = decode(output_types, raw)
    except (ValueError, DecodingError) as exc:
        raise ChainError(f"Cannot decode {function_name} result: {exc}") from exc

    if len(decoded) == 1:
        return decoded[0]
    return decoded


def rpc_call(
    url: str,
    method: str,
    params: list,
    timeout: float = 30.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        url: RPC endpoint URL
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests inject a MockTransport)

    Returns:
        Result field from the RPC response

    Raises:
        ChainError: On HTTP failure or a JSON-RPC error object (including reverts)
    """
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPError as exc:
        raise ChainError(f"RPC request failed: {exc}") from exc
    except ValueError as exc:
        raise ChainError(f"RPC returned invalid JSON: {exc}") from exc

    if "error" in data:
        error = data["error"]
        message = error.get("message") if isinstance(error, dict) else None
        raise ChainError(f"RPC error: {message or error}")

    return data.get("result")
