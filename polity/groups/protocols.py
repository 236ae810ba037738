"""Protocols for the agent snapshot consumed by group detection."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class BeliefView(Protocol):
    """Read-only view of one agent's social beliefs, keyed by peer ID."""

    def get(self, other_id: object) -> object | None:
        """Belief about a peer (with .trust and .sentiment), or None."""
        ...

    def items(self) -> Iterator[tuple[object, object]]:
        """Iterate (peer_id, belief) pairs."""
        ...


@runtime_checkable
class SnapshotAgent(Protocol):
    """What group detection reads from an agent each epoch."""

    agent_id: object

    @property
    def name(self) -> str: ...

    @property
    def extraversion(self) -> float: ...

    @property
    def beliefs(self) -> BeliefView: ...

    def is_alive(self) -> bool: ...
