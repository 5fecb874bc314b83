"""
Port interface for optional meeting persistence.

The store keeps every meeting in memory; a persistence object is only a
collaborator it notifies after each insert and asks once, at construction,
for previously saved meetings.  ``NullPersistence`` is the default and does
neither.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .meetings import Meeting


@runtime_checkable
class MeetingPersistence(Protocol):
    """Abstract interface for saving and reloading meetings."""

    def save(self, meeting: "Meeting") -> None:
        """Persist a newly created meeting.

        Called after the store lock is released.

        Args:
            meeting: The stored meeting, id already assigned.
        """
        ...

    def load(self) -> Iterable["Meeting"]:
        """Return previously saved meetings to preload into a new store."""
        ...


class NullPersistence:
    """Persistence that keeps nothing."""

    def save(self, meeting: "Meeting") -> None:
        return None

    def load(self) -> Iterable["Meeting"]:
        return ()


__all__ = ["MeetingPersistence", "NullPersistence"]
