"""Per-group metrics: internal cohesion, shared enemies, leadership.

All functions read beliefs through an index of living agents keyed by ID.
Members or peers missing from the index are skipped, never an error.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polity.groups.protocols import SnapshotAgent

ENEMY_THRESHOLD = -0.3
EXTRAVERSION_WEIGHT = 0.2

AgentIndex = dict[object, "SnapshotAgent"]


@dataclass
class GroupMeasurement:
    """Everything computed for one candidate member set."""

    average_trust: float = 0.0
    average_sentiment: float = 0.0
    shared_enemies: list = field(default_factory=list)
    hierarchy: list[tuple[object, float]] = field(default_factory=list)

    @property
    def leader(self) -> object | None:
        return self.hierarchy[0][0] if self.hierarchy else None


def build_index(agents: Iterable[SnapshotAgent]) -> AgentIndex:
    """Map agent ID to agent for every living agent."""
    return {agent.agent_id: agent for agent in agents if agent.is_alive()}


def group_metrics(members: Iterable[object], index: AgentIndex) -> tuple[float, float]:
    """Average trust and sentiment over ordered member pairs with a belief.

    Returns:
        (average_trust, average_sentiment), or (0.0, 0.0) if no pair has a belief
    """
    members = set(members)
    total_trust = 0.0
    total_sentiment = 0.0
    count = 0

    for member_id in members:
        member = index.get(member_id)
        if member is None:
            continue
        for other_id in members:
            if other_id == member_id:
                continue
            belief = member.beliefs.get(other_id)
            if belief is not None:
                total_trust += belief.trust
                total_sentiment += belief.sentiment
                count += 1

    if count == 0:
        return 0.0, 0.0
    return total_trust / count, total_sentiment / count


def find_shared_enemies(
    members: Iterable[object],
    index: AgentIndex,
    threshold: float = ENEMY_THRESHOLD,
) -> list:
    """Living outsiders that every member distrusts (trust below threshold).

    A member missing from the index holds no beliefs, so nobody qualifies.
    """
    members = set(members)
    if not members:
        return []

    enemy_counts: dict[object, int] = {}
    for member_id in members:
        member = index.get(member_id)
        if member is None:
            continue
        for other_id, belief in member.beliefs.items():
            if other_id in members or other_id not in index:
                continue
            if belief.trust < threshold:
                enemy_counts[other_id] = enemy_counts.get(other_id, 0) + 1

    shared = [other_id for other_id, count in enemy_counts.items() if count == len(members)]
    return sorted(shared, key=str)


def calculate_hierarchy(
    members: Iterable[object],
    index: AgentIndex,
    extraversion_weight: float = EXTRAVERSION_WEIGHT,
) -> list[tuple[object, float]]:
    """Rank members by leadership score, highest first.

    Score = sum of trust other members place in this member, plus an
    extraversion bonus. Ties are ordered by agent ID string.
    """
    members = set(members)
    scores: list[tuple[object, float]] = []

    for member_id in members:
        incoming = 0.0
        for other_id in members:
            if other_id == member_id:
                continue
            other = index.get(other_id)
            if other is None:
                continue
            belief = other.beliefs.get(member_id)
            if belief is not None:
                incoming += belief.trust

        member = index.get(member_id)
        bonus = member.extraversion * extraversion_weight if member is not None else 0.0
        scores.append((member_id, incoming + bonus))

    scores.sort(key=lambda entry: (-entry[1], str(entry[0])))
    return scores


def measure_group(
    members: Iterable[object],
    index: AgentIndex,
    enemy_threshold: float = ENEMY_THRESHOLD,
    extraversion_weight: float = EXTRAVERSION_WEIGHT,
) -> GroupMeasurement:
    """Compute cohesion, shared enemies and hierarchy for a member set."""
    members = set(members)
    average_trust, average_sentiment = group_metrics(members, index)
    return GroupMeasurement(
        average_trust=average_trust,
        average_sentiment=average_sentiment,
        shared_enemies=find_shared_enemies(members, index, enemy_threshold),
        hierarchy=calculate_hierarchy(members, index, extraversion_weight),
    )
