"""Inter-group relations: classification and epoch-to-epoch tracking.

Every unordered pair of active groups is scored on the trust its members
place in each other. Pairs that are not Neutral, or that share an enemy,
are tracked as rivalries with a stable since_epoch.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polity.groups.group import Group
    from polity.groups.metrics import AgentIndex


class RivalryType(Enum):
    """Classified relationship between two groups."""

    HOSTILE = "hostile"
    TENSE = "tense"
    NEUTRAL = "neutral"
    FRIENDLY = "friendly"
    ALLIED = "allied"

    def describe(self) -> str:
        """Human-readable label."""
        return self.value

    def is_conflict(self) -> bool:
        return self in (RivalryType.HOSTILE, RivalryType.TENSE)

    def is_cooperative(self) -> bool:
        return self in (RivalryType.FRIENDLY, RivalryType.ALLIED)


@dataclass(frozen=True)
class RivalryThresholds:
    """Cut-offs on average cross-group trust."""

    hostile: float = -0.3
    tense: float = -0.1
    friendly: float = 0.1
    allied: float = 0.3


DEFAULT_THRESHOLDS = RivalryThresholds()


@dataclass
class Rivalry:
    """Relationship between two groups, keyed by the unordered id pair."""

    group_a: str
    group_b: str
    rivalry_type: RivalryType
    avg_cross_trust: float = 0.0
    avg_cross_sentiment: float = 0.0
    shared_enemies: bool = False
    since_epoch: int = 0

    @property
    def key(self) -> frozenset[str]:
        return frozenset((self.group_a, self.group_b))

    def involves(self, group_id: str) -> bool:
        return group_id in (self.group_a, self.group_b)

    def other(self, group_id: str) -> str | None:
        """The group on the other side of this rivalry."""
        if group_id == self.group_a:
            return self.group_b
        if group_id == self.group_b:
            return self.group_a
        return None

    @property
    def is_tracked(self) -> bool:
        """Whether this relationship is worth keeping between epochs."""
        return self.rivalry_type != RivalryType.NEUTRAL or self.shared_enemies

    def snapshot(self) -> Rivalry:
        """Detached copy for change reports."""
        return replace(self)


@dataclass
class RivalryChange:
    """A tracked rivalry whose classification changed this epoch."""

    rivalry: Rivalry
    old_type: RivalryType
    new_type: RivalryType


@dataclass
class RivalryReconciliation:
    """Result of reconciling this epoch's relations with the previous ones."""

    active: list[Rivalry] = field(default_factory=list)
    formed: list[Rivalry] = field(default_factory=list)
    changed: list[RivalryChange] = field(default_factory=list)
    ended: list[Rivalry] = field(default_factory=list)


def _directional_sums(
    sources: Iterable[object],
    targets: set,
    index: AgentIndex,
) -> tuple[float, float, int]:
    """Sum trust/sentiment from each source toward each target it has a belief about."""
    trust = 0.0
    sentiment = 0.0
    count = 0
    for source_id in sorted(sources, key=str):
        source = index.get(source_id)
        if source is None:
            continue
        for target_id in sorted(targets, key=str):
            belief = source.beliefs.get(target_id)
            if belief is not None:
                trust += belief.trust
                sentiment += belief.sentiment
                count += 1
    return trust, sentiment, count


def cross_group_metrics(
    members_a: Iterable[object],
    members_b: Iterable[object],
    index: AgentIndex,
) -> tuple[float, float]:
    """Average trust and sentiment pooled over both directions.

    Returns:
        (avg_cross_trust, avg_cross_sentiment), or (0.0, 0.0) with no beliefs
    """
    members_a = set(members_a)
    members_b = set(members_b)
    trust_ab, sentiment_ab, count_ab = _directional_sums(members_a, members_b, index)
    trust_ba, sentiment_ba, count_ba = _directional_sums(members_b, members_a, index)

    count = count_ab + count_ba
    if count == 0:
        return 0.0, 0.0
    return (trust_ab + trust_ba) / count, (sentiment_ab + sentiment_ba) / count


def classify_rivalry(
    avg_cross_trust: float,
    shared_enemies: bool,
    thresholds: RivalryThresholds = DEFAULT_THRESHOLDS,
) -> RivalryType:
    """Classify a relation; a shared enemy lifts friendly trust to Allied."""
    if avg_cross_trust < thresholds.hostile:
        return RivalryType.HOSTILE
    if avg_cross_trust < thresholds.tense:
        return RivalryType.TENSE
    if avg_cross_trust > thresholds.allied or (
        avg_cross_trust > thresholds.friendly and shared_enemies
    ):
        return RivalryType.ALLIED
    if avg_cross_trust > thresholds.friendly:
        return RivalryType.FRIENDLY
    return RivalryType.NEUTRAL


def evaluate_pair(
    group_a: Group,
    group_b: Group,
    index: AgentIndex,
    epoch: int,
    thresholds: RivalryThresholds = DEFAULT_THRESHOLDS,
) -> Rivalry:
    """Score and classify the relation between two groups."""
    avg_trust, avg_sentiment = cross_group_metrics(group_a.members, group_b.members, index)
    shared = bool(set(group_a.shared_enemies) & set(group_b.shared_enemies))
    return Rivalry(
        group_a=group_a.id,
        group_b=group_b.id,
        rivalry_type=classify_rivalry(avg_trust, shared, thresholds),
        avg_cross_trust=avg_trust,
        avg_cross_sentiment=avg_sentiment,
        shared_enemies=shared,
        since_epoch=epoch,
    )


def reconcile_rivalries(
    groups: Sequence[Group],
    previous: Sequence[Rivalry],
    index: AgentIndex,
    epoch: int,
    thresholds: RivalryThresholds = DEFAULT_THRESHOLDS,
) -> RivalryReconciliation:
    """Evaluate every group pair and diff against the previous rivalries.

    Previous records that are still tracked are updated in place, keeping
    their orientation and since_epoch. The formed, changed and ended lists
    hold copies, so later epochs do not rewrite them.
    """
    previous_by_key = {rivalry.key: rivalry for rivalry in previous}
    result = RivalryReconciliation()

    for i, group_a in enumerate(groups):
        for group_b in groups[i + 1 :]:
            current = evaluate_pair(group_a, group_b, index, epoch, thresholds)
            if not current.is_tracked:
                continue

            existing = previous_by_key.get(current.key)
            if existing is None:
                result.formed.append(current.snapshot())
                result.active.append(current)
                continue

            old_type = existing.rivalry_type
            existing.rivalry_type = current.rivalry_type
            existing.avg_cross_trust = current.avg_cross_trust
            existing.avg_cross_sentiment = current.avg_cross_sentiment
            existing.shared_enemies = current.shared_enemies
            if old_type != current.rivalry_type:
                result.changed.append(
                    RivalryChange(existing.snapshot(), old_type, current.rivalry_type)
                )
            result.active.append(existing)

    active_keys = {rivalry.key for rivalry in result.active}
    result.ended = [
        rivalry.snapshot() for rivalry in previous if rivalry.key not in active_keys
    ]
    return result
