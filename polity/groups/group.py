"""Group data structure.

A Group is an alliance detected from the mutual-trust graph. Its id, name
and formation epoch survive membership churn; everything else is
recomputed every epoch.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polity.groups.protocols import SnapshotAgent


def new_group_id() -> str:
    """Generate an 8-character group identifier."""
    return uuid.uuid4().hex[:8]


@dataclass
class Group:
    """A detected alliance of mutually trusting agents.

    Attributes:
        id: Stable 8-character identifier
        name: Human-readable name, assigned on first detection
        members: Set of member agent IDs
        formed_epoch: Epoch the group was first detected
        average_trust: Mean trust over member pairs with a belief
        average_sentiment: Mean sentiment over the same pairs
        shared_enemies: Outside agents distrusted by every member
        leader: Top-ranked member, or None
        hierarchy: (agent_id, leadership score) pairs, highest first
    """

    id: str
    name: str
    members: set = field(default_factory=set)
    formed_epoch: int = 0
    average_trust: float = 0.0
    average_sentiment: float = 0.0
    shared_enemies: list = field(default_factory=list)
    leader: object | None = None
    hierarchy: list[tuple[object, float]] = field(default_factory=list)

    @property
    def size(self) -> int:
        """Number of members in the group."""
        return len(self.members)

    def snapshot(self) -> Group:
        """Detached copy that later epochs will not modify."""
        return replace(
            self,
            members=set(self.members),
            shared_enemies=list(self.shared_enemies),
            hierarchy=list(self.hierarchy),
        )

    def rank_of(self, agent_id: object) -> int | None:
        """Zero-based position of a member in the hierarchy."""
        for rank, (member_id, _) in enumerate(self.hierarchy):
            if member_id == agent_id:
                return rank
        return None

    def member_names(self, agents: Iterable[SnapshotAgent]) -> list[str]:
        """Display names of members found among agents, in hierarchy order."""
        by_id = {agent.agent_id: agent for agent in agents}
        ordered = [member_id for member_id, _ in self.hierarchy] or sorted(self.members, key=str)
        return [by_id[member_id].name for member_id in ordered if member_id in by_id]

    def enemy_names(self, agents: Iterable[SnapshotAgent]) -> list[str]:
        """Display names of shared enemies found among agents."""
        by_id = {agent.agent_id: agent for agent in agents}
        return [by_id[enemy_id].name for enemy_id in self.shared_enemies if enemy_id in by_id]
