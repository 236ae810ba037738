"""Tests for inter-group relation classification and tracking."""

from __future__ import annotations

import pytest

from polity.agents.identity import AgentID
from polity.groups.group import Group
from polity.groups.metrics import build_index
from polity.groups.rivalry import (
    Rivalry,
    RivalryThresholds,
    RivalryType,
    classify_rivalry,
    cross_group_metrics,
    evaluate_pair,
    reconcile_rivalries,
)
from tests.helpers import cross, ids, make_agents, trust


def _group(group_id: str, *names: str, enemies: tuple[str, ...] = ()) -> Group:
    return Group(
        id=group_id,
        name=f"Alliance {group_id}",
        members=ids(*names),
        shared_enemies=[AgentID(e) for e in enemies],
    )


class TestRivalryType:
    def test_describe(self):
        assert RivalryType.HOSTILE.describe() == "hostile"
        assert RivalryType.ALLIED.describe() == "allied"

    def test_conflict_and_cooperation(self):
        assert RivalryType.HOSTILE.is_conflict()
        assert RivalryType.TENSE.is_conflict()
        assert not RivalryType.NEUTRAL.is_conflict()
        assert RivalryType.FRIENDLY.is_cooperative()
        assert RivalryType.ALLIED.is_cooperative()
        assert not RivalryType.TENSE.is_cooperative()


class TestClassifyRivalry:
    """Test threshold precedence."""

    @pytest.mark.parametrize(
        ("avg_trust", "shared", "expected"),
        [
            (-0.5, False, RivalryType.HOSTILE),
            (-0.5, True, RivalryType.HOSTILE),
            (-0.3, False, RivalryType.TENSE),
            (-0.2, True, RivalryType.TENSE),
            (-0.1, False, RivalryType.NEUTRAL),
            (0.0, True, RivalryType.NEUTRAL),
            (0.1, True, RivalryType.NEUTRAL),
            (0.15, False, RivalryType.FRIENDLY),
            (0.15, True, RivalryType.ALLIED),
            (0.3, False, RivalryType.FRIENDLY),
            (0.4, False, RivalryType.ALLIED),
        ],
    )
    def test_classification(self, avg_trust, shared, expected):
        assert classify_rivalry(avg_trust, shared) == expected

    def test_custom_thresholds(self):
        thresholds = RivalryThresholds(hostile=-0.8, tense=-0.6, friendly=0.5, allied=0.7)
        assert classify_rivalry(-0.5, False, thresholds) == RivalryType.NEUTRAL


class TestCrossGroupMetrics:
    def test_pools_both_directions(self):
        a1, a2, b1 = make_agents("a1", "a2", "b1")
        trust(a1, b1, -0.4)
        trust(a2, b1, -0.6)
        trust(b1, a1, 0.1, sentiment=0.3)

        avg_trust, avg_sentiment = cross_group_metrics(
            ids("a1", "a2"), ids("b1"), build_index([a1, a2, b1])
        )

        assert avg_trust == pytest.approx(-0.3)
        assert avg_sentiment == pytest.approx(0.1)

    def test_no_beliefs_yields_zero(self):
        agents = make_agents("a1", "b1")
        assert cross_group_metrics(ids("a1"), ids("b1"), build_index(agents)) == (0.0, 0.0)


class TestEvaluatePair:
    """Test scenario classification of group pairs."""

    def test_hostile_groups(self):
        group_a = make_agents("a1", "a2", "a3")
        group_b = make_agents("b1", "b2", "b3")
        cross(group_a, group_b, -0.5)
        index = build_index(group_a + group_b)

        rivalry = evaluate_pair(
            _group("A", "a1", "a2", "a3"), _group("B", "b1", "b2", "b3"), index, epoch=4
        )

        assert rivalry.rivalry_type == RivalryType.HOSTILE
        assert rivalry.avg_cross_trust == pytest.approx(-0.5)
        assert rivalry.since_epoch == 4

    def test_shared_enemy_promotes_friendly_to_allied(self):
        group_a = make_agents("a1", "a2", "a3")
        group_b = make_agents("b1", "b2", "b3")
        cross(group_a, group_b, 0.15)
        index = build_index(group_a + group_b)

        rivalry = evaluate_pair(
            _group("A", "a1", "a2", "a3", enemies=("x",)),
            _group("B", "b1", "b2", "b3", enemies=("x", "y")),
            index,
            epoch=1,
        )

        assert rivalry.shared_enemies is True
        assert rivalry.rivalry_type == RivalryType.ALLIED

    def test_symmetric(self):
        """(A, B) and (B, A) agree on type and metrics."""
        a1, a2, a3, b1, b2, b3 = make_agents("a1", "a2", "a3", "b1", "b2", "b3")
        trust(a1, b1, -0.7, sentiment=-0.2)
        trust(a2, b3, 0.2)
        trust(b2, a3, -0.35, sentiment=0.4)
        trust(b1, a1, 0.05)
        index = build_index([a1, a2, a3, b1, b2, b3])
        group_a = _group("A", "a1", "a2", "a3")
        group_b = _group("B", "b1", "b2", "b3")

        forward = evaluate_pair(group_a, group_b, index, epoch=1)
        backward = evaluate_pair(group_b, group_a, index, epoch=1)

        assert forward.rivalry_type == backward.rivalry_type
        assert forward.avg_cross_trust == backward.avg_cross_trust
        assert forward.avg_cross_sentiment == backward.avg_cross_sentiment
        assert forward.shared_enemies == backward.shared_enemies
        assert forward.key == backward.key


class TestRivalry:
    def test_other_and_involves(self):
        rivalry = Rivalry("A", "B", RivalryType.TENSE)

        assert rivalry.involves("A")
        assert not rivalry.involves("C")
        assert rivalry.other("A") == "B"
        assert rivalry.other("B") == "A"
        assert rivalry.other("C") is None

    def test_neutral_is_tracked_only_with_shared_enemy(self):
        assert not Rivalry("A", "B", RivalryType.NEUTRAL).is_tracked
        assert Rivalry("A", "B", RivalryType.NEUTRAL, shared_enemies=True).is_tracked

    def test_snapshot_is_detached(self):
        rivalry = Rivalry("A", "B", RivalryType.HOSTILE, avg_cross_trust=-0.5)

        copy = rivalry.snapshot()
        rivalry.rivalry_type = RivalryType.TENSE

        assert copy.rivalry_type == RivalryType.HOSTILE
        assert copy.key == rivalry.key


class TestReconcileRivalries:
    """Test formed/changed/ended bookkeeping across epochs."""

    def setup_method(self):
        self.group_a_agents = make_agents("a1", "a2", "a3")
        self.group_b_agents = make_agents("b1", "b2", "b3")
        self.groups = [_group("A", "a1", "a2", "a3"), _group("B", "b1", "b2", "b3")]

    def _index(self):
        return build_index(self.group_a_agents + self.group_b_agents)

    def test_lifecycle(self):
        cross(self.group_a_agents, self.group_b_agents, -0.5)
        first = reconcile_rivalries(self.groups, [], self._index(), epoch=1)

        assert len(first.formed) == 1
        assert first.formed[0].rivalry_type == RivalryType.HOSTILE
        assert first.changed == [] and first.ended == []

        cross(self.group_a_agents, self.group_b_agents, -0.2)
        second = reconcile_rivalries(self.groups, first.active, self._index(), epoch=2)

        assert second.formed == []
        assert len(second.changed) == 1
        change = second.changed[0]
        assert (change.old_type, change.new_type) == (RivalryType.HOSTILE, RivalryType.TENSE)
        assert change.rivalry.key == first.active[0].key
        assert first.formed[0].rivalry_type == RivalryType.HOSTILE
        assert change.rivalry.since_epoch == 1

        cross(self.group_a_agents, self.group_b_agents, 0.0)
        third = reconcile_rivalries(self.groups, second.active, self._index(), epoch=3)

        assert third.active == []
        assert third.ended == [first.active[0]]

    def test_unchanged_type_updates_metrics_silently(self):
        cross(self.group_a_agents, self.group_b_agents, -0.5)
        first = reconcile_rivalries(self.groups, [], self._index(), epoch=1)

        cross(self.group_a_agents, self.group_b_agents, -0.6)
        second = reconcile_rivalries(self.groups, first.active, self._index(), epoch=2)

        assert second.formed == second.changed == second.ended == []
        assert second.active[0].avg_cross_trust == pytest.approx(-0.6)

    def test_neutral_pairs_are_not_tracked(self):
        result = reconcile_rivalries(self.groups, [], self._index(), epoch=1)
        assert result.active == result.formed == []

    def test_previous_rivalry_with_missing_group_ends(self):
        stale = Rivalry("A", "GONE", RivalryType.HOSTILE, since_epoch=1)

        result = reconcile_rivalries(self.groups, [stale], self._index(), epoch=2)

        assert result.ended == [stale]
