from __future__ import annotations

from typing import Any

import jsonschema

from ..errors import ValidationError

PROJECT_ID_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "projectId": {"type": "string", "description": "The project ID"},
    },
    "required": ["projectId"],
}

EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}

AGENT_ADDRESS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "agentAddress": {
            "type": "string",
            "description": "Ethereum address of the agent (fund recipient) to search for",
        },
    },
    "required": ["agentAddress"],
}

CREATE_FUNDRAISE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "agentAddress": {
            "type": "string",
            "description": "Ethereum address of the agent to receive funds",
        },
        "milestoneAmounts": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Milestone amounts in ETH (e.g., ['0.01', '0.02'])",
        },
        "description": {
            "type": "string",
            "description": "Optional description of the work being funded",
        },
    },
    "required": ["agentAddress", "milestoneAmounts"],
}


def validate_arguments(arguments: Any, schema: dict[str, Any], tool_name: str) -> dict[str, Any]:
    """
    Check tool arguments against the tool's declared input schema.

    Returns:
        The arguments as a dict

    Raises:
        ValidationError: Listing every schema violation
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ValidationError(f"Invalid arguments for {tool_name}: expected an object")

    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(arguments), key=lambda e: list(e.path))
    if errors:
        raise ValidationError(
            f"Invalid arguments for {tool_name}",
            errors=[_format_error(err) for err in errors],
        )
    return arguments


def _format_error(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.path) or "<root>"
    return f"{location}: {error.message}"


def parse_project_id(value: str) -> int:
    """
    Parse a project id sent as a decimal string.

    Raises:
        ValidationError: If it is not a positive uint256
    """
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f"Invalid projectId {value!r}: must be a positive integer")
    project_id = int(text)
    if project_id < 1 or project_id >= 2**256:
        raise ValidationError(f"Invalid projectId {value!r}: must be a positive integer")
    return project_id
