"""Agent identity: IDs, personality traits, and profiles."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


class AgentID:
    """Opaque agent identifier wrapping a short UUID."""

    def __init__(self, value: str | None = None):
        self.value = value or str(uuid.uuid4())[:8]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AgentID) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"AgentID({self.value})"

    def __str__(self) -> str:
        return self.value


@dataclass
class PersonalityTraits:
    """Big Five personality vector. Each trait is 0.0-1.0.

    Only extraversion feeds group detection (leadership bonus); the
    rest are carried for the upstream decision layer.
    """

    openness: float = 0.5  # 0=conventional, 1=curious
    conscientiousness: float = 0.5  # 0=spontaneous, 1=disciplined
    extraversion: float = 0.5  # 0=reserved, 1=outgoing
    agreeableness: float = 0.5  # 0=competitive, 1=cooperative
    neuroticism: float = 0.5  # 0=resilient, 1=anxious

    def as_dict(self) -> dict[str, float]:
        """Return traits as a flat dictionary."""
        return {
            "openness": self.openness,
            "conscientiousness": self.conscientiousness,
            "extraversion": self.extraversion,
            "agreeableness": self.agreeableness,
            "neuroticism": self.neuroticism,
        }


@dataclass
class AgentProfile:
    """Complete agent identity: ID + display name + personality."""

    agent_id: AgentID
    name: str
    traits: PersonalityTraits = field(default_factory=PersonalityTraits)
