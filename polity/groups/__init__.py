"""Emergent group and rivalry detection.

This package turns per-agent trust beliefs into higher-order structure:
- build_trust_graph: Mutual-trust adjacency over living agents
- find_cliques: Maximal cliques as candidate groups
- Group: A detected alliance with leadership hierarchy and shared enemies
- match_groups: Continuity between epochs by member overlap
- Rivalry / RivalryType: Classified relations between groups
- GroupTracker: Owns state across epochs and reports GroupChanges
"""

from __future__ import annotations

from polity.groups.cliques import find_cliques
from polity.groups.continuity import jaccard_similarity, match_groups
from polity.groups.graph import build_trust_graph
from polity.groups.group import Group
from polity.groups.rivalry import Rivalry, RivalryType, classify_rivalry
from polity.groups.tracker import GroupChanges, GroupTracker

__all__ = [
    "Group",
    "GroupChanges",
    "GroupTracker",
    "Rivalry",
    "RivalryType",
    "build_trust_graph",
    "classify_rivalry",
    "find_cliques",
    "jaccard_similarity",
    "match_groups",
]
