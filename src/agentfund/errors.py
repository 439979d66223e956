"""
Error taxonomy for the AgentFund MCP server.

Every error raised by the chain client or a tool handler derives from
AgentFundError.  The dispatcher turns all of them into an error-flagged
text payload; the CLI uses ``exit_code``.
"""

from __future__ import annotations


class AgentFundError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(AgentFundError):
    exit_code = 2


class UnknownToolError(AgentFundError):
    exit_code = 3

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ValidationError(AgentFundError):
    exit_code = 4

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        message = super().__str__()
        if self.errors:
            return f"{message} ({'; '.join(self.errors)})"
        return message


class InvalidAddressError(ValidationError):
    pass


class InvalidAmountError(ValidationError):
    pass


class ChainError(AgentFundError):
    exit_code = 5


class ProjectNotFoundError(ChainError):
    def __init__(self, project_id: int) -> None:
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class InvalidStateError(AgentFundError):
    exit_code = 6


__all__ = [
    "AgentFundError",
    "ChainError",
    "ConfigurationError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidStateError",
    "ProjectNotFoundError",
    "UnknownToolError",
    "ValidationError",
]
