"""Entities in the simulation: the Agent as seen by group detection.

Physical state (position, needs, inventory) lives in the world layer;
this entity carries identity, personality, social beliefs and the
living/dead flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from polity.agents.identity import AgentID, AgentProfile, PersonalityTraits
from polity.memory.social import SocialMemory


@dataclass
class Agent:
    """A simulated agent with beliefs about its peers."""

    agent_id: AgentID
    profile: AgentProfile
    beliefs: SocialMemory = field(default_factory=SocialMemory)
    alive: bool = True

    @classmethod
    def create(
        cls,
        name: str,
        traits: PersonalityTraits | None = None,
        agent_id: AgentID | None = None,
    ) -> Agent:
        """Build an agent with a fresh ID (unless given) and empty beliefs."""
        agent_id = agent_id or AgentID()
        profile = AgentProfile(
            agent_id=agent_id,
            name=name,
            traits=traits or PersonalityTraits(),
        )
        return cls(agent_id=agent_id, profile=profile)

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def extraversion(self) -> float:
        return self.profile.traits.extraversion

    def is_alive(self) -> bool:
        """Check if the agent is still alive."""
        return self.alive

    def die(self) -> None:
        """Mark the agent dead. Its beliefs are kept but no longer count."""
        self.alive = False
