"""Package exposing the meeting scheduler service."""

from .main import app, create_app  # Re-export FastAPI application for uvicorn
from .meetings import Meeting, MeetingDraft, MeetingStore, Participant

__all__ = ["app", "create_app", "Meeting", "MeetingDraft", "MeetingStore", "Participant"]
