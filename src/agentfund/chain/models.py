from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class ProjectStatus(IntEnum):
    ACTIVE = 0
    COMPLETED = 1
    CANCELLED = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


def status_label(code: int) -> str:
    """Label for a raw status code; codes outside the enum read "Unknown"."""
    try:
        return ProjectStatus(code).label
    except ValueError:
        return "Unknown"


@dataclass(frozen=True)
class Project:
    """
    Escrow project as read from ``getProject``.

    Amounts are in wei.  Instances are snapshots; nothing here writes back.
    """
    project_id: int
    funder: str
    agent: str
    total_amount: int
    released_amount: int
    current_milestone: int
    total_milestones: int
    status: int

    @classmethod
    def from_tuple(cls, project_id: int, values: tuple) -> "Project":
        funder, agent, total, released, current, milestones, status = values
        return cls(
            project_id=project_id,
            funder=str(funder),
            agent=str(agent),
            total_amount=int(total),
            released_amount=int(released),
            current_milestone=int(current),
            total_milestones=int(milestones),
            status=int(status),
        )

    @property
    def remaining_amount(self) -> int:
        return self.total_amount - self.released_amount

    @property
    def status_label(self) -> str:
        return status_label(self.status)

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE


@dataclass(frozen=True)
class CreateProjectCall:
    calldata: str
    total_value: int
    milestone_wei: tuple[int, ...]
    agent: str


@dataclass(frozen=True)
class UnsignedTransaction:
    """
    Transaction request handed to the funder's wallet.

    Never signed or broadcast by this server.
    """
    to: str
    data: str
    value: int
    chain_id: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "data": self.data,
            "value": str(self.value),
            "chainId": self.chain_id,
            "description": self.description,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
