"""
Module defining the concurrency-safe in‑memory meeting store.

This module exposes a ``MeetingStore`` class used by the HTTP handlers.  It
implements the four operations the service supports: create, list, get by
id and pick at random.  All meetings live in a Python dictionary guarded by
a single ``threading.Lock`` and are lost when the server restarts.  Each
meeting record contains an ``id``, a ``title``, its ``participants``, a
timezone-aware ``start_time``/``end_time`` window and the
``creation_timestamp`` recorded by the store.

Records are frozen dataclasses, so a snapshot handed out by the store can be
serialised after the lock is released without ever observing a half-built
meeting.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from .storage import MeetingPersistence, NullPersistence

logger = logging.getLogger("meeting_scheduler.meetings")


@dataclass(frozen=True)
class Participant:
    """A meeting attendee and their RSVP status."""

    name: str
    email: str
    rsvp: str = ""


@dataclass(frozen=True)
class MeetingDraft:
    """Caller-supplied meeting fields, before the store assigns an id."""

    title: str
    start_time: datetime
    end_time: datetime
    participants: Tuple[Participant, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Meeting:
    """Dataclass representing a single stored meeting."""

    id: str
    title: str
    start_time: datetime
    end_time: datetime
    creation_timestamp: datetime
    participants: Tuple[Participant, ...] = field(default_factory=tuple)


class MeetingStore:
    """Thread-safe store mapping meeting ids to meetings."""

    def __init__(
        self,
        *,
        clock: Callable[[], int] = time.time_ns,
        rng: Optional[random.Random] = None,
        persistence: Optional[MeetingPersistence] = None,
    ) -> None:
        self._lock = threading.Lock()
        # Source of the timestamp half of every id (nanoseconds)
        self._clock = clock
        self._rng = rng or random.Random()
        self._persistence = persistence or NullPersistence()
        # Incremented under the lock; makes ids unique regardless of clock resolution
        self._counter: int = 0
        self._entries: Dict[str, Meeting] = {}
        for meeting in self._persistence.load():
            self._entries[meeting.id] = meeting
        if self._entries:
            logger.info(f"Loaded {len(self._entries)} meetings from persistence")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _next_id(self) -> str:
        # Caller must hold self._lock.
        timestamp = self._clock()
        while True:
            self._counter += 1
            candidate = f"{timestamp}-{self._counter}"
            if candidate not in self._entries:
                return candidate

    def create(self, draft: MeetingDraft) -> Meeting:
        """Store a new meeting and return it with its assigned id.

        Id assignment and insertion happen under one lock acquisition, so two
        concurrent calls can never produce the same id.

        Args:
            draft: Caller-supplied meeting fields.

        Returns:
            The newly stored ``Meeting``.
        """
        with self._lock:
            meeting = Meeting(
                id=self._next_id(),
                title=draft.title,
                start_time=draft.start_time,
                end_time=draft.end_time,
                creation_timestamp=datetime.now(timezone.utc),
                participants=tuple(draft.participants),
            )
            self._entries[meeting.id] = meeting
        logger.info(f"Created meeting {meeting.id} ({meeting.title!r})")
        self._persistence.save(meeting)
        return meeting

    def list(self) -> List[Meeting]:
        """Return a snapshot of all meetings currently stored, in no particular order."""
        with self._lock:
            return list(self._entries.values())

    def get(self, meeting_id: str) -> Optional[Meeting]:
        """Retrieve a single meeting by its identifier.

        Args:
            meeting_id: Identifier of the meeting to return.

        Returns:
            The meeting instance if found, otherwise ``None``.
        """
        with self._lock:
            meeting = self._entries.get(meeting_id)
        logger.debug(f"Lookup {meeting_id}: {'hit' if meeting else 'miss'}")
        return meeting

    def pick_random(self) -> Optional[Meeting]:
        """Return a uniformly chosen meeting, or ``None`` if the store is empty.

        The choice is made against a snapshot of the ids taken under the lock;
        the random draw itself happens after the lock is released.
        """
        with self._lock:
            ids = list(self._entries)

        if not ids:
            return None
        if len(ids) == 1:
            target = ids[0]
        else:
            target = self._rng.choice(ids)
        return self.get(target)


__all__ = ["MeetingStore", "Meeting", "MeetingDraft", "Participant"]
