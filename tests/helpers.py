"""Shared builders for polity test suites.

Agents get deterministic IDs equal to their names so assertions can
refer to them directly.
"""

from __future__ import annotations

from collections.abc import Iterable

from polity.agents.identity import AgentID, PersonalityTraits
from polity.simulation.entities import Agent


def make_agent(name: str, extraversion: float = 0.5) -> Agent:
    """Living agent with ID == name and no beliefs."""
    return Agent.create(
        name,
        traits=PersonalityTraits(extraversion=extraversion),
        agent_id=AgentID(name),
    )


def make_agents(*names: str) -> list[Agent]:
    return [make_agent(name) for name in names]


def ids(*names: str) -> set[AgentID]:
    return {AgentID(name) for name in names}


def trust(source: Agent, target: Agent, value: float, sentiment: float = 0.0) -> None:
    """One-directional belief: source's view of target."""
    source.beliefs.set(target.agent_id, value, sentiment)


def mutual(a: Agent, b: Agent, value: float, sentiment: float = 0.0) -> None:
    trust(a, b, value, sentiment)
    trust(b, a, value, sentiment)


def connect_all(agents: Iterable[Agent], value: float, sentiment: float = 0.0) -> None:
    """Set mutual trust between every pair."""
    agents = list(agents)
    for i, a in enumerate(agents):
        for b in agents[i + 1 :]:
            mutual(a, b, value, sentiment)


def cross(group_a: Iterable[Agent], group_b: Iterable[Agent], value: float) -> None:
    """Set trust in both directions between every member of two sets."""
    group_b = list(group_b)
    for a in group_a:
        for b in group_b:
            mutual(a, b, value)


def distrust(members: Iterable[Agent], enemy: Agent, value: float = -0.5) -> None:
    for member in members:
        trust(member, enemy, value)
