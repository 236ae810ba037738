"""Group continuity: match this epoch's cliques to last epoch's groups.

A candidate continues a previous group when their member sets overlap by
more than the threshold (Jaccard similarity). Matching is one-to-one and
greedy over all eligible pairs, strongest first:

1. higher Jaccard similarity
2. larger absolute overlap
3. lower candidate index
4. lower previous-group index
"""

from __future__ import annotations

from collections.abc import Sequence, Set
from dataclasses import dataclass, field

CONTINUITY_THRESHOLD = 0.5


def jaccard_similarity(a: Set, b: Set) -> float:
    """|a & b| / |a | b|, or 0.0 when both sets are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


@dataclass
class MatchResult:
    """Outcome of matching candidates against previous groups.

    Attributes:
        matches: candidate index -> previous group index
        unmatched_candidates: Candidate indexes with no predecessor (new groups)
        unmatched_previous: Previous group indexes with no successor (dissolved)
    """

    matches: dict[int, int] = field(default_factory=dict)
    unmatched_candidates: list[int] = field(default_factory=list)
    unmatched_previous: list[int] = field(default_factory=list)


def match_groups(
    candidates: Sequence[Set],
    previous: Sequence[Set],
    threshold: float = CONTINUITY_THRESHOLD,
) -> MatchResult:
    """Match candidate member sets to previous member sets one-to-one.

    Args:
        candidates: Member sets detected this epoch
        previous: Member sets of the previously active groups
        threshold: Similarity must be strictly greater than this

    Returns:
        MatchResult with index-based matches
    """
    eligible: list[tuple[float, int, int, int]] = []
    for cand_idx, cand in enumerate(candidates):
        for prev_idx, prev in enumerate(previous):
            similarity = jaccard_similarity(cand, prev)
            if similarity > threshold:
                overlap = len(cand & prev)
                eligible.append((similarity, overlap, cand_idx, prev_idx))

    eligible.sort(key=lambda e: (-e[0], -e[1], e[2], e[3]))

    result = MatchResult()
    taken_previous: set[int] = set()
    for _, _, cand_idx, prev_idx in eligible:
        if cand_idx in result.matches or prev_idx in taken_previous:
            continue
        result.matches[cand_idx] = prev_idx
        taken_previous.add(prev_idx)

    result.unmatched_candidates = [i for i in range(len(candidates)) if i not in result.matches]
    result.unmatched_previous = [i for i in range(len(previous)) if i not in taken_previous]
    return result


def membership_delta(old: Set, new: Set) -> tuple[list, list]:
    """(added, removed) members, each sorted by ID string."""
    added = sorted(new - old, key=str)
    removed = sorted(old - new, key=str)
    return added, removed
