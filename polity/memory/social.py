"""Social beliefs: signed trust and sentiment one agent holds about others."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))


@dataclass
class SocialBelief:
    """One agent's belief about another.

    Trust and sentiment are asymmetric: A's trust in B says nothing about
    B's trust in A.
    """

    other_agent_id: object  # AgentID at runtime
    trust: float = 0.0  # -1=complete distrust, 1=complete trust
    sentiment: float = 0.0  # -1=hate, 1=love
    interaction_count: int = 0
    last_interaction_epoch: int = 0

    def update_trust(self, delta: float, epoch: int = 0) -> None:
        """Shift trust by delta, clamped to [-1, 1]."""
        self.trust = _clamp(self.trust + delta)
        self.interaction_count += 1
        self.last_interaction_epoch = epoch

    def update_sentiment(self, delta: float, epoch: int = 0) -> None:
        """Shift sentiment by delta, clamped to [-1, 1]."""
        self.sentiment = _clamp(self.sentiment + delta)
        self.last_interaction_epoch = epoch


class SocialMemory:
    """Tracks beliefs about all known agents."""

    def __init__(self):
        self._beliefs: dict[object, SocialBelief] = {}

    def get_or_create(self, other_id: object) -> SocialBelief:
        """Get existing or create new (neutral) belief entry."""
        if other_id not in self._beliefs:
            self._beliefs[other_id] = SocialBelief(other_agent_id=other_id)
        return self._beliefs[other_id]

    def get(self, other_id: object) -> SocialBelief | None:
        """Get belief if it exists."""
        return self._beliefs.get(other_id)

    def set(self, other_id: object, trust: float, sentiment: float = 0.0) -> SocialBelief:
        """Overwrite trust and sentiment about another agent (clamped)."""
        belief = self.get_or_create(other_id)
        belief.trust = _clamp(trust)
        belief.sentiment = _clamp(sentiment)
        return belief

    def items(self) -> Iterator[tuple[object, SocialBelief]]:
        """Iterate (other_id, belief) pairs."""
        return iter(list(self._beliefs.items()))

    def __contains__(self, other_id: object) -> bool:
        return other_id in self._beliefs

    def __len__(self) -> int:
        return len(self._beliefs)

    def most_trusted(self) -> SocialBelief | None:
        """Agent we trust most."""
        if not self._beliefs:
            return None
        return max(self._beliefs.values(), key=lambda b: b.trust)

    def least_trusted(self) -> SocialBelief | None:
        """Agent we trust least."""
        if not self._beliefs:
            return None
        return min(self._beliefs.values(), key=lambda b: b.trust)

    def allies(self, threshold: float = 0.3) -> list[SocialBelief]:
        """Beliefs with trust strictly above threshold."""
        return [b for b in self._beliefs.values() if b.trust > threshold]

    def enemies(self, threshold: float = -0.3) -> list[SocialBelief]:
        """Beliefs with trust strictly below threshold."""
        return [b for b in self._beliefs.values() if b.trust < threshold]

    def known_agents(self) -> list[object]:
        """All agent IDs we hold beliefs about."""
        return list(self._beliefs.keys())
