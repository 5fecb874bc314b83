"""Shared fixtures for the meeting scheduler tests.

Provides:
- A fresh ``MeetingStore`` per test, with a seeded random source
- A FastAPI ``TestClient`` bound to that store
- A valid create body in the service's wire format
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from meeting_scheduler.config import ServiceSettings
from meeting_scheduler.main import create_app
from meeting_scheduler.meetings import MeetingDraft, MeetingStore, Participant

T0 = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def make_draft(**overrides) -> MeetingDraft:
    defaults = {
        "title": "Standup",
        "start_time": T0,
        "end_time": T0 + timedelta(minutes=15),
        "participants": (
            Participant(name="Ada Lovelace", email="ada@example.com", rsvp="yes"),
            Participant(name="Alan Turing", email="alan@example.com", rsvp="maybe"),
        ),
    }
    defaults.update(overrides)
    return MeetingDraft(**defaults)


@pytest.fixture
def store() -> MeetingStore:
    return MeetingStore(rng=random.Random(1234))


@pytest.fixture
def client(store: MeetingStore) -> TestClient:
    return TestClient(create_app(store=store, settings=ServiceSettings()))


@pytest.fixture
def meeting_body() -> dict:
    return {
        "Title": "Standup",
        "Participants": [],
        "Start Time": T0.isoformat(),
        "End Time": (T0 + timedelta(minutes=15)).isoformat(),
    }
