"""Persistence package: snapshot group tracker state as plain dicts.

Writing snapshots to storage is left to the caller.
"""

from polity.persistence.serializer import TrackerSerializer

__all__ = ["TrackerSerializer"]
