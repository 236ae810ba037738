"""Mutual-trust graph built from per-agent social beliefs.

The graph is an adjacency mapping keyed by agent ID. It is rebuilt from
scratch every epoch and never holds references to agent objects.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from polity.groups.protocols import SnapshotAgent

TRUST_THRESHOLD = 0.3

TrustGraph = dict[object, set[object]]


def build_trust_graph(
    agents: Iterable[SnapshotAgent],
    threshold: float = TRUST_THRESHOLD,
) -> TrustGraph:
    """Build an undirected graph of mutual trust between living agents.

    Every living agent gets an entry, possibly with no neighbors. An edge
    A-B exists iff A trusts B and B trusts A, both strictly above threshold.
    """
    living = {agent.agent_id: agent for agent in agents if agent.is_alive()}
    graph: TrustGraph = {agent_id: set() for agent_id in living}

    for agent_id, agent in living.items():
        for other_id, belief in agent.beliefs.items():
            if other_id == agent_id or belief.trust <= threshold:
                continue
            other = living.get(other_id)
            if other is None:
                continue
            reverse = other.beliefs.get(agent_id)
            if reverse is not None and reverse.trust > threshold:
                graph[agent_id].add(other_id)
                graph[other_id].add(agent_id)

    return graph


def prune_to_core(graph: TrustGraph, min_degree: int) -> TrustGraph:
    """Return the subgraph where every vertex has at least min_degree neighbors.

    This is the k-core with k = min_degree. Any clique of size k survives
    pruning to the (k-1)-core intact.
    """
    if min_degree <= 0:
        return {vertex: set(neighbors) for vertex, neighbors in graph.items()}

    network = nx.Graph()
    network.add_nodes_from(graph)
    network.add_edges_from(
        (vertex, other) for vertex, neighbors in graph.items() for other in neighbors
    )
    core = nx.k_core(network, min_degree)
    return {vertex: set(core.adj[vertex]) for vertex in core}


def edge_count(graph: TrustGraph) -> int:
    """Number of undirected edges."""
    return sum(len(neighbors) for neighbors in graph.values()) // 2
