"""Tracker serialization: convert GroupTracker to/from a plain dict.

The dict is meant to be embedded in a full-simulation snapshot written by
the caller's persistence layer. Agent IDs are stored as strings and
rebuilt through an id_factory on load.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from polity.agents.identity import AgentID
from polity.config import DetectionConfig
from polity.errors import SerializationError, ValidationError
from polity.groups.group import Group
from polity.groups.rivalry import Rivalry, RivalryType
from polity.groups.tracker import GroupTracker


class TrackerSerializer:
    """Serialize and deserialize group tracker state."""

    SCHEMA_VERSION = 1

    def serialize(self, tracker: GroupTracker) -> dict:
        """Serialize tracker state to dict.

        Args:
            tracker: The tracker to serialize

        Returns:
            Dictionary containing config, groups, history and rivalries
        """
        return {
            "schema_version": self.SCHEMA_VERSION,
            "timestamp": datetime.now(UTC).isoformat(),
            "config": tracker.config.model_dump(),
            "next_group_num": tracker._next_group_num,
            "groups": [self._serialize_group(group) for group in tracker.groups],
            "dissolved": [
                {"group": self._serialize_group(group), "epoch": epoch}
                for group, epoch in tracker.dissolved
            ],
            "rivalries": [self._serialize_rivalry(rivalry) for rivalry in tracker.rivalries],
        }

    def deserialize(
        self,
        data: dict,
        config: DetectionConfig | None = None,
        id_factory: Callable[[str], Any] = AgentID,
    ) -> GroupTracker:
        """Reconstruct a tracker from serialized dict.

        Args:
            data: Serialized state dictionary
            config: Config to use instead of the stored one
            id_factory: Turns a stored agent ID string back into an ID object

        Returns:
            Reconstructed GroupTracker

        Raises:
            SerializationError: Unsupported schema version or missing fields
            ValidationError: Field values that break tracker invariants
        """
        version = data.get("schema_version")
        if version != self.SCHEMA_VERSION:
            raise SerializationError(f"Unsupported tracker schema version: {version!r}")

        try:
            tracker = GroupTracker(config or DetectionConfig(**data["config"]))
            tracker._next_group_num = int(data["next_group_num"])
            tracker.groups = [
                self._deserialize_group(g, id_factory, tracker.config) for g in data["groups"]
            ]
            tracker.dissolved = [
                (self._deserialize_group(entry["group"], id_factory, tracker.config), entry["epoch"])
                for entry in data["dissolved"]
            ]
            tracker.rivalries = [self._deserialize_rivalry(r) for r in data["rivalries"]]
        except KeyError as exc:
            raise SerializationError(f"Missing field in tracker snapshot: {exc}") from exc

        active_ids = {group.id for group in tracker.groups}
        for rivalry in tracker.rivalries:
            if rivalry.group_a not in active_ids or rivalry.group_b not in active_ids:
                raise ValidationError(
                    f"Rivalry {rivalry.group_a}/{rivalry.group_b} references an inactive group"
                )

        return tracker

    def _serialize_group(self, group: Group) -> dict:
        return {
            "id": group.id,
            "name": group.name,
            "members": sorted(str(m) for m in group.members),
            "formed_epoch": group.formed_epoch,
            "average_trust": group.average_trust,
            "average_sentiment": group.average_sentiment,
            "shared_enemies": [str(e) for e in group.shared_enemies],
            "leader": str(group.leader) if group.leader is not None else None,
            "hierarchy": [[str(agent_id), score] for agent_id, score in group.hierarchy],
        }

    def _deserialize_group(
        self,
        data: dict,
        id_factory: Callable[[str], Any],
        config: DetectionConfig,
    ) -> Group:
        members = {id_factory(m) for m in data["members"]}
        if len(members) < config.min_group_size:
            raise ValidationError(
                f"Group {data['id']} has {len(members)} members "
                f"(minimum {config.min_group_size})"
            )
        leader = data["leader"]
        return Group(
            id=data["id"],
            name=data["name"],
            members=members,
            formed_epoch=data["formed_epoch"],
            average_trust=data["average_trust"],
            average_sentiment=data["average_sentiment"],
            shared_enemies=[id_factory(e) for e in data["shared_enemies"]],
            leader=id_factory(leader) if leader is not None else None,
            hierarchy=[(id_factory(agent_id), score) for agent_id, score in data["hierarchy"]],
        )

    def _serialize_rivalry(self, rivalry: Rivalry) -> dict:
        return {
            "group_a": rivalry.group_a,
            "group_b": rivalry.group_b,
            "type": rivalry.rivalry_type.value,
            "avg_cross_trust": rivalry.avg_cross_trust,
            "avg_cross_sentiment": rivalry.avg_cross_sentiment,
            "shared_enemies": rivalry.shared_enemies,
            "since_epoch": rivalry.since_epoch,
        }

    def _deserialize_rivalry(self, data: dict) -> Rivalry:
        try:
            rivalry_type = RivalryType(data["type"])
        except ValueError as exc:
            raise ValidationError(f"Unknown rivalry type: {data['type']!r}") from exc
        return Rivalry(
            group_a=data["group_a"],
            group_b=data["group_b"],
            rivalry_type=rivalry_type,
            avg_cross_trust=data["avg_cross_trust"],
            avg_cross_sentiment=data["avg_cross_sentiment"],
            shared_enemies=data["shared_enemies"],
            since_epoch=data["since_epoch"],
        )
