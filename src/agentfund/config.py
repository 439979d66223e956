"""
Runtime configuration.

Only the RPC endpoint (and its timeout / the log level) can be changed from
the environment.  The contract deployment itself is compiled in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# AgentFund escrow deployment on Base Mainnet
CONTRACT_ADDRESS = "0x6a4420f696c9ba6997f41dddc15b938b54aa009a"
NETWORK_NAME = "Base Mainnet"
CHAIN_ID = 8453
PLATFORM_FEE_TEXT = "5% of each released milestone"

DEFAULT_RPC_URL = "https://mainnet.base.org"
DEFAULT_RPC_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"

# Hard cutoff for the agent-address scan.  Ids above it are never read.
SCAN_LIMIT = 100


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    contract_address: str = CONTRACT_ADDRESS
    chain_id: int = CHAIN_ID
    scan_limit: int = SCAN_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, rpc_url: Optional[str] = None, load_env_file: bool = True) -> "Settings":
        """
        Build settings from the environment.

        Args:
            rpc_url: Explicit endpoint, wins over BASE_RPC_URL
            load_env_file: Whether to read a .env file from the working directory

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        if load_env_file:
            load_dotenv()

        raw_timeout = os.environ.get("AGENTFUND_RPC_TIMEOUT", str(DEFAULT_RPC_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"AGENTFUND_RPC_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigurationError("AGENTFUND_RPC_TIMEOUT must be greater than zero")

        return cls(
            rpc_url=rpc_url or os.environ.get("BASE_RPC_URL") or DEFAULT_RPC_URL,
            rpc_timeout=timeout,
            log_level=os.environ.get("AGENTFUND_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
