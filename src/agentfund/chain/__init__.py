"""
Chain - On-chain read and encode layer for the AgentFund escrow.

Provides the JSON-RPC transport, the compiled-in ABI, and the ChainClient
implementing the ProjectQuery / ProjectEncoder capabilities.

Uses httpx + eth-abi instead of the heavyweight web3.py.
"""

from .client import ChainClient, EscrowChain, ProjectEncoder, ProjectQuery
from .models import CreateProjectCall, Project, ProjectStatus, UnsignedTransaction, status_label

__all__ = [
    "ChainClient",
    "CreateProjectCall",
    "EscrowChain",
    "Project",
    "ProjectEncoder",
    "ProjectQuery",
    "ProjectStatus",
    "UnsignedTransaction",
    "status_label",
]
