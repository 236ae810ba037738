"""Maximal clique enumeration (Bron-Kerbosch with pivoting).

Each maximal clique of the mutual-trust graph is a candidate group.
Iteration is ordered by the string form of vertex IDs so that repeated
runs over the same graph emit the same cliques in the same order.
"""

from __future__ import annotations

from polity.errors import CliqueBudgetExceeded
from polity.groups.graph import TrustGraph

MIN_GROUP_SIZE = 3


def _vertex_key(vertex: object) -> str:
    return str(vertex)


def _clique_key(clique: frozenset) -> tuple[int, list[str]]:
    return (-len(clique), sorted(_vertex_key(v) for v in clique))


def find_cliques(
    graph: TrustGraph,
    min_size: int = MIN_GROUP_SIZE,
    max_calls: int = 0,
) -> list[frozenset]:
    """Find all maximal cliques with at least min_size members.

    Args:
        graph: Undirected adjacency mapping
        min_size: Smallest clique to report
        max_calls: Recursion budget; 0 disables the guard

    Returns:
        Cliques ordered by size (largest first), then by member IDs

    Raises:
        CliqueBudgetExceeded: If max_calls > 0 and the search needs more calls
    """
    found: list[frozenset] = []
    calls = 0

    def expand(r: set, p: set, x: set) -> None:
        nonlocal calls
        calls += 1
        if max_calls and calls > max_calls:
            raise CliqueBudgetExceeded(calls, max_calls)

        if not p and not x:
            if len(r) >= min_size:
                found.append(frozenset(r))
            return

        # Nothing reachable from here can grow large enough
        if len(r) + len(p) < min_size:
            return

        # Pivot with the most neighbors in P leaves the fewest branches
        pivot = max(
            sorted(p | x, key=_vertex_key),
            key=lambda u: len(p & graph.get(u, set())),
        )
        pivot_neighbors = graph.get(pivot, set())

        for v in sorted(p - pivot_neighbors, key=_vertex_key):
            neighbors = graph.get(v, set())
            r.add(v)
            expand(r, p & neighbors, x & neighbors)
            r.remove(v)
            p.remove(v)
            x.add(v)

    expand(set(), set(graph), set())

    # Subset filter: guards against the size cut-off interacting with pruning
    maximal: list[frozenset] = []
    for clique in sorted(found, key=_clique_key):
        if not any(clique <= kept for kept in maximal):
            maximal.append(clique)

    return maximal


def is_clique(graph: TrustGraph, members: frozenset | set) -> bool:
    """Check every pair of members is connected."""
    return all(
        other in graph.get(member, set())
        for member in members
        for other in members
        if other != member
    )
