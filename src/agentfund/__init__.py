__all__ = [
    # Configuration
    "Settings",
    "CONTRACT_ADDRESS",
    "SCAN_LIMIT",
    # Chain
    "ChainClient",
    "EscrowChain",
    "Project",
    "ProjectEncoder",
    "ProjectQuery",
    "ProjectStatus",
    "UnsignedTransaction",
    # Tools
    "ToolDispatcher",
    "ToolResult",
    "ToolSpec",
    # Errors
    "AgentFundError",
    "ChainError",
    "ConfigurationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidStateError",
    "ProjectNotFoundError",
    "UnknownToolError",
    "ValidationError",
    # Units
    "format_ether",
    "parse_ether",
]

from .config import CONTRACT_ADDRESS, SCAN_LIMIT, Settings
from .chain import (
    ChainClient,
    EscrowChain,
    Project,
    ProjectEncoder,
    ProjectQuery,
    ProjectStatus,
    UnsignedTransaction,
)
from .errors import (
    AgentFundError,
    ChainError,
    ConfigurationError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidStateError,
    ProjectNotFoundError,
    UnknownToolError,
    ValidationError,
)
from .tools import ToolDispatcher, ToolResult, ToolSpec
from .utils import format_ether, parse_ether
