"""Shared fixtures: an in-memory escrow chain and sample projects."""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

import pytest

from agentfund.chain import ChainClient, CreateProjectCall, Project, ProjectStatus
from agentfund.config import Settings
from agentfund.errors import ChainError, ProjectNotFoundError
from agentfund.log import LOGGER_NAME
from agentfund.tools import ToolDispatcher

FUNDER = "0x1111111111111111111111111111111111111111"
AGENT = "0xc2212629ef3b17c755682b9490711a39468da6bb"
OTHER_AGENT = "0x2222222222222222222222222222222222222222"

ETH = 10**18


def make_project(
    project_id: int,
    agent: str = AGENT,
    total: int = 3 * ETH // 100,
    released: int = ETH // 100,
    current: int = 1,
    milestones: int = 2,
    status: int = ProjectStatus.ACTIVE,
) -> Project:
    return Project(
        project_id=project_id,
        funder=FUNDER,
        agent=agent,
        total_amount=total,
        released_amount=released,
        current_milestone=current,
        total_milestones=milestones,
        status=int(status),
    )


class FakeChain:
    """
    Fixed-fixture chain implementing ProjectQuery and ProjectEncoder.

    Reads come from a dict; encoding is delegated to a real ChainClient,
    which never touches the network to encode.  Every call is recorded.
    """

    def __init__(
        self,
        projects: Sequence[Project] = (),
        count: int | None = None,
        failing: Sequence[int] = (),
    ) -> None:
        self.projects = {p.project_id: p for p in projects}
        self.count = len(self.projects) if count is None else count
        self.failing = set(failing)
        self.fetched: list[int] = []
        self.encoded: list[str] = []
        self._encoder = ChainClient(Settings())

    def get_project(self, project_id: int) -> Project:
        self.fetched.append(project_id)
        if project_id in self.failing:
            raise ChainError("RPC error: execution reverted")
        try:
            return self.projects[project_id]
        except KeyError:
            raise ProjectNotFoundError(project_id) from None

    def get_project_count(self) -> int:
        return self.count

    def encode_create_project(self, agent_address: str, milestone_amounts: Sequence[str]) -> CreateProjectCall:
        self.encoded.append("createProject")
        return self._encoder.encode_create_project(agent_address, milestone_amounts)

    def encode_release_milestone(self, project_id: int) -> str:
        self.encoded.append("releaseMilestone")
        return self._encoder.encode_release_milestone(project_id)

    def encode_cancel_project(self, project_id: int) -> str:
        self.encoded.append("cancelProject")
        return self._encoder.encode_cancel_project(project_id)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    # CLI commands attach a stderr handler that outlives CliRunner's streams
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def chain() -> FakeChain:
    return FakeChain(
        [
            make_project(1),
            make_project(2, agent=OTHER_AGENT),
            make_project(3, released=3 * ETH // 100, current=2, status=ProjectStatus.COMPLETED),
            make_project(4, status=ProjectStatus.CANCELLED),
        ]
    )


@pytest.fixture()
def dispatcher(chain: FakeChain, settings: Settings) -> ToolDispatcher:
    return ToolDispatcher(chain, settings)
