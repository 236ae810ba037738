"""Group tracker: owns active groups and rivalries across epochs.

One detect() call per epoch runs the full pass:

1. Build the mutual-trust graph and prune it to the useful core
2. Enumerate maximal cliques as candidate groups
3. Measure each candidate (cohesion, shared enemies, hierarchy)
4. Match candidates to last epoch's groups for stable identity
5. Classify every group pair and diff against last epoch's rivalries

The tracker is not thread-safe; callers run one detect() at a time.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from polity.config import DetectionConfig
from polity.errors import CliqueBudgetExceeded
from polity.groups.cliques import find_cliques
from polity.groups.continuity import match_groups, membership_delta
from polity.groups.graph import build_trust_graph, edge_count, prune_to_core
from polity.groups.group import Group, new_group_id
from polity.groups.metrics import AgentIndex, GroupMeasurement, build_index, measure_group
from polity.groups.rivalry import (
    Rivalry,
    RivalryChange,
    RivalryThresholds,
    RivalryType,
    reconcile_rivalries,
)
from polity.metrics.timing import DetectionMonitor, DetectionTiming

if TYPE_CHECKING:
    from polity.groups.protocols import SnapshotAgent

logger = logging.getLogger(__name__)


@dataclass
class MembershipChange:
    """A continuing group whose members changed."""

    group: Group
    added: list = field(default_factory=list)
    removed: list = field(default_factory=list)


@dataclass
class LeadershipChange:
    """A continuing group with a new leader."""

    group: Group
    old_leader: object | None
    new_leader: object


@dataclass
class GroupChanges:
    """Everything that changed in one detect() call."""

    formed: list[Group] = field(default_factory=list)
    dissolved: list[Group] = field(default_factory=list)
    changed: list[MembershipChange] = field(default_factory=list)
    leadership_changed: list[LeadershipChange] = field(default_factory=list)
    rivalries_formed: list[Rivalry] = field(default_factory=list)
    rivalries_changed: list[RivalryChange] = field(default_factory=list)
    rivalries_ended: list[Rivalry] = field(default_factory=list)
    skipped: bool = False  # clique guard tripped; state left untouched

    @property
    def is_empty(self) -> bool:
        return not (
            self.formed
            or self.dissolved
            or self.changed
            or self.leadership_changed
            or self.rivalries_formed
            or self.rivalries_changed
            or self.rivalries_ended
        )


class GroupTracker:
    """Tracks groups and rivalries over time.

    Attributes:
        groups: Currently active groups
        dissolved: (group, dissolution_epoch) history
        rivalries: Currently tracked inter-group relations
    """

    def __init__(self, config: DetectionConfig | None = None):
        self.config = config or DetectionConfig()
        self.groups: list[Group] = []
        self.dissolved: list[tuple[Group, int]] = []
        self.rivalries: list[Rivalry] = []
        self._next_group_num = 0
        self.monitor = DetectionMonitor()

    @property
    def thresholds(self) -> RivalryThresholds:
        return RivalryThresholds(
            hostile=self.config.hostile_threshold,
            tense=self.config.tense_threshold,
            friendly=self.config.friendly_threshold,
            allied=self.config.allied_threshold,
        )

    def detect(self, agents: Iterable[SnapshotAgent], epoch: int) -> GroupChanges:
        """Detect groups and rivalries from the current agent snapshot.

        Args:
            agents: All agents (dead ones are ignored)
            epoch: Current epoch, non-decreasing across calls

        Returns:
            Changes since the previous call
        """
        cfg = self.config
        timing = DetectionTiming(epoch=epoch)
        start = time.perf_counter()

        agents = list(agents)
        index = build_index(agents)

        t0 = time.perf_counter()
        graph = build_trust_graph(agents, cfg.trust_threshold)
        core = prune_to_core(graph, cfg.min_group_size - 1)
        t1 = time.perf_counter()
        timing.graph_ms = (t1 - t0) * 1000
        timing.vertices = len(core)
        logger.debug(
            f"Epoch {epoch}: trust graph {len(graph)} agents, {edge_count(graph)} edges, "
            f"core {len(core)} agents"
        )

        if cfg.max_clique_vertices and len(core) > cfg.max_clique_vertices:
            logger.warning(
                f"Epoch {epoch}: skipping group detection, core has {len(core)} agents "
                f"(limit {cfg.max_clique_vertices})"
            )
            return self._skip(timing, start)

        try:
            cliques = find_cliques(core, cfg.min_group_size, cfg.max_clique_calls)
        except CliqueBudgetExceeded as exc:
            logger.warning(f"Epoch {epoch}: skipping group detection, {exc}")
            return self._skip(timing, start)
        t2 = time.perf_counter()
        timing.clique_ms = (t2 - t1) * 1000
        timing.cliques = len(cliques)

        measurements = [
            measure_group(members, index, cfg.enemy_threshold, cfg.extraversion_weight)
            for members in cliques
        ]
        t3 = time.perf_counter()
        timing.metrics_ms = (t3 - t2) * 1000

        changes = GroupChanges()
        self.groups = self._reconcile_groups(cliques, measurements, epoch, changes)
        t4 = time.perf_counter()
        timing.matching_ms = (t4 - t3) * 1000

        reconciliation = reconcile_rivalries(
            self.groups, self.rivalries, index, epoch, self.thresholds
        )
        self.rivalries = reconciliation.active
        changes.rivalries_formed = reconciliation.formed
        changes.rivalries_changed = reconciliation.changed
        changes.rivalries_ended = reconciliation.ended
        timing.rivalry_ms = (time.perf_counter() - t4) * 1000

        self._log_changes(changes, index, epoch)

        timing.total_ms = (time.perf_counter() - start) * 1000
        self.monitor.record(timing)
        return changes

    def _skip(self, timing: DetectionTiming, start: float) -> GroupChanges:
        timing.skipped = True
        timing.total_ms = (time.perf_counter() - start) * 1000
        self.monitor.record(timing)
        return GroupChanges(skipped=True)

    def _reconcile_groups(
        self,
        cliques: list[frozenset],
        measurements: list[GroupMeasurement],
        epoch: int,
        changes: GroupChanges,
    ) -> list[Group]:
        """Give candidates continuity with previous groups; fill in changes."""
        match = match_groups(
            cliques,
            [group.members for group in self.groups],
            self.config.continuity_threshold,
        )

        active: list[Group] = []
        for cand_idx, (members, measurement) in enumerate(zip(cliques, measurements)):
            prev_idx = match.matches.get(cand_idx)

            if prev_idx is None:
                self._next_group_num += 1
                group = Group(
                    id=new_group_id(),
                    name=f"{self.config.group_name_prefix} {self._next_group_num}",
                    formed_epoch=epoch,
                )
                _apply(group, members, measurement)
                changes.formed.append(group.snapshot())
            else:
                group = self.groups[prev_idx]
                old_members = set(group.members)
                old_leader = group.leader
                _apply(group, members, measurement)

                # Reports hold copies; the live record keeps changing
                added, removed = membership_delta(old_members, group.members)
                leader_changed = group.leader is not None and group.leader != old_leader
                if added or removed or leader_changed:
                    snapshot = group.snapshot()
                    if added or removed:
                        changes.changed.append(MembershipChange(snapshot, added, removed))
                    if leader_changed:
                        changes.leadership_changed.append(
                            LeadershipChange(snapshot, old_leader, group.leader)
                        )

            active.append(group)

        for prev_idx in match.unmatched_previous:
            old_group = self.groups[prev_idx]
            changes.dissolved.append(old_group.snapshot())
            self.dissolved.append((old_group, epoch))

        return active

    def _log_changes(self, changes: GroupChanges, index: AgentIndex, epoch: int) -> None:
        def name_of(agent_id: object) -> str:
            agent = index.get(agent_id)
            return agent.name if agent is not None else str(agent_id)

        for group in changes.formed:
            logger.info(f"Epoch {epoch}: group formed: {group.name} with {group.size} members")
        for group in changes.dissolved:
            logger.info(f"Epoch {epoch}: group dissolved: {group.name}")
        for change in changes.changed:
            logger.debug(
                f"Epoch {epoch}: group {change.group.name} changed: "
                f"+{[name_of(a) for a in change.added]} -{[name_of(r) for r in change.removed]}"
            )
        for change in changes.leadership_changed:
            new_name = name_of(change.new_leader)
            if change.old_leader is None:
                logger.info(f"{change.group.name}: {new_name} became leader")
            else:
                logger.info(
                    f"{change.group.name}: {new_name} succeeded "
                    f"{name_of(change.old_leader)} as leader"
                )
        for rivalry in changes.rivalries_formed:
            pair = f"{self.group_name(rivalry.group_a)} and {self.group_name(rivalry.group_b)}"
            if rivalry.rivalry_type.is_conflict():
                logger.info(f"Rivalry: {pair} are now {rivalry.rivalry_type.describe()}")
            elif rivalry.rivalry_type.is_cooperative():
                logger.debug(f"Relations: {pair} are now {rivalry.rivalry_type.describe()}")
        for change in changes.rivalries_changed:
            logger.info(
                f"Relations: {self.group_name(change.rivalry.group_a)} and "
                f"{self.group_name(change.rivalry.group_b)} changed from "
                f"{change.old_type.describe()} to {change.new_type.describe()}"
            )
        for rivalry in changes.rivalries_ended:
            logger.debug(
                f"Relations ended: {self.group_name(rivalry.group_a)} and "
                f"{self.group_name(rivalry.group_b)}"
            )

    # --- Read-only views ---

    def current_groups(self) -> list[Group]:
        return list(self.groups)

    def current_rivalries(self) -> list[Rivalry]:
        return list(self.rivalries)

    def get_group(self, group_id: str) -> Group | None:
        """Active group by ID."""
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def group_of(self, agent_id: object) -> Group | None:
        """First active group containing the agent."""
        for group in self.groups:
            if agent_id in group.members:
                return group
        return None

    def groups_of(self, agent_id: object) -> list[Group]:
        """All active groups containing the agent (cliques may overlap)."""
        return [group for group in self.groups if agent_id in group.members]

    def group_name(self, group_id: str) -> str:
        """Name of an active or dissolved group, or "Unknown"."""
        group = self.get_group(group_id)
        if group is not None:
            return group.name
        for old_group, _ in reversed(self.dissolved):
            if old_group.id == group_id:
                return old_group.name
        return "Unknown"

    def dissolved_since(self, epoch: int) -> list[Group]:
        """Groups dissolved at or after the given epoch."""
        return [group for group, dissolved_at in self.dissolved if dissolved_at >= epoch]

    def rivalry_between(self, group_a: str, group_b: str) -> Rivalry | None:
        key = frozenset((group_a, group_b))
        for rivalry in self.rivalries:
            if rivalry.key == key:
                return rivalry
        return None

    def rivalries_of(self, group_id: str) -> list[Rivalry]:
        return [rivalry for rivalry in self.rivalries if rivalry.involves(group_id)]

    def allies_of(self, group_id: str) -> list[Group]:
        """Active groups on Friendly or Allied terms with the given group."""
        return self._related_groups(group_id, RivalryType.is_cooperative)

    def enemies_of(self, group_id: str) -> list[Group]:
        """Active groups on Hostile or Tense terms with the given group."""
        return self._related_groups(group_id, RivalryType.is_conflict)

    def _related_groups(self, group_id: str, predicate) -> list[Group]:
        related = []
        for rivalry in self.rivalries:
            if not predicate(rivalry.rivalry_type):
                continue
            other = self.get_group(rivalry.other(group_id) or "")
            if other is not None:
                related.append(other)
        return related

    @property
    def last_timing(self) -> DetectionTiming | None:
        return self.monitor.last


def _apply(group: Group, members: frozenset, measurement: GroupMeasurement) -> None:
    """Write this epoch's membership and metrics onto a group."""
    group.members = set(members)
    group.average_trust = measurement.average_trust
    group.average_sentiment = measurement.average_sentiment
    group.shared_enemies = list(measurement.shared_enemies)
    group.hierarchy = list(measurement.hierarchy)
    group.leader = measurement.leader
