from __future__ import annotations

import re

from eth_hash.auto import keccak

from .errors import InvalidAddressError, InvalidAmountError

ETHER_DECIMALS = 18
WEI_PER_ETHER = 10**ETHER_DECIMALS

_AMOUNT_RE = re.compile(r"^([0-9]+(\.[0-9]*)?|\.[0-9]+)$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

ZERO_ADDRESS = "0x" + "0" * 40


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def parse_ether(amount: str) -> int:
    """
    Convert a decimal ETH string to wei with integer arithmetic only.

    Raises:
        InvalidAmountError: On non-numeric, negative, zero, or over-precise input
    """
    if not isinstance(amount, str):
        raise InvalidAmountError(f"Invalid amount {amount!r}: expected a decimal string")
    text = amount.strip()
    if text.startswith("-"):
        raise InvalidAmountError(f"Invalid amount {amount!r}: must not be negative")
    if not _AMOUNT_RE.match(text):
        raise InvalidAmountError(f"Invalid amount {amount!r}: not a decimal number")

    whole, _, frac = text.partition(".")
    frac = frac.rstrip("0")
    if len(frac) > ETHER_DECIMALS:
        raise InvalidAmountError(
            f"Invalid amount {amount!r}: more than {ETHER_DECIMALS} decimal places"
        )
    wei = int(whole or "0") * WEI_PER_ETHER + int(frac.ljust(ETHER_DECIMALS, "0"))
    if wei <= 0:
        raise InvalidAmountError(f"Invalid amount {amount!r}: must be greater than zero")
    return wei


def format_ether(wei: int) -> str:
    """Render wei as ETH, always with a fractional part ("1.0", "0.03")."""
    sign = "-" if wei < 0 else ""
    whole, frac = divmod(abs(wei), WEI_PER_ETHER)
    frac_text = str(frac).rjust(ETHER_DECIMALS, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_text}"


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format."""
    addr = address.lower().replace("0x", "")
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def is_address(value: str) -> bool:
    """0x + 40 hex chars; mixed-case input must carry a valid checksum."""
    if not isinstance(value, str) or not _ADDRESS_RE.match(value):
        return False
    body = value[2:]
    if body.islower() or body.isupper() or body.isdigit():
        return True
    return to_checksum_address(value) == value


def normalize_address(value: str) -> str:
    """
    Validate an address and return its checksummed form.

    Raises:
        InvalidAddressError: If the value is not a well-formed address
    """
    candidate = value.strip() if isinstance(value, str) else value
    if not is_address(candidate):
        raise InvalidAddressError(f"Invalid address: {value!r}")
    return to_checksum_address(candidate)
