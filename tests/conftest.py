"""Shared test fixtures for the polity test suite."""

from __future__ import annotations

import pytest

from polity.config import DetectionConfig
from polity.groups.tracker import GroupTracker
from polity.simulation.entities import Agent
from tests.helpers import connect_all, make_agents


@pytest.fixture
def config() -> DetectionConfig:
    """Default detection thresholds."""
    return DetectionConfig()


@pytest.fixture
def tracker(config: DetectionConfig) -> GroupTracker:
    """A fresh tracker with no history."""
    return GroupTracker(config)


@pytest.fixture
def triangle() -> list[Agent]:
    """Three agents with pairwise mutual trust 0.5."""
    agents = make_agents("a1", "a2", "a3")
    connect_all(agents, 0.5)
    return agents


@pytest.fixture
def two_triangles() -> tuple[list[Agent], list[Agent]]:
    """Two internally trusting triangles with no beliefs across them."""
    group_a = make_agents("a1", "a2", "a3")
    group_b = make_agents("b1", "b2", "b3")
    connect_all(group_a, 0.6)
    connect_all(group_b, 0.6)
    return group_a, group_b
