"""Pydantic v2 schemas for the meetings wire format.

Defines the JSON contract spoken by the HTTP layer and the conversions to and
from the store's dataclasses.  Keys follow the service's established format
(``"Title"``, ``"Start Time"``, ``"Creation TimeStamp"`` and so on); inbound
bodies may use the snake_case field names instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedBodyError, UnsupportedMediaTypeError
from .meetings import Meeting, MeetingDraft, Participant

JSON_MEDIA_TYPE = "application/json"


class ParticipantPayload(BaseModel):
    """A meeting attendee as it appears on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    email: str = Field(alias="Email")
    rsvp: str = Field("", alias="RSVP")


class MeetingCreate(BaseModel):
    """Body of a create request.  ``Id`` and ``Creation TimeStamp`` are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(alias="Title")
    participants: List[ParticipantPayload] = Field(default_factory=list, alias="Participants")
    start_time: AwareDatetime = Field(alias="Start Time")
    end_time: AwareDatetime = Field(alias="End Time")

    def to_draft(self) -> MeetingDraft:
        return MeetingDraft(
            title=self.title,
            start_time=self.start_time,
            end_time=self.end_time,
            participants=tuple(
                Participant(name=p.name, email=p.email, rsvp=p.rsvp)
                for p in self.participants
            ),
        )


class MeetingResponse(BaseModel):
    """A stored meeting as returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="Id")
    title: str = Field(alias="Title")
    participants: List[ParticipantPayload] = Field(default_factory=list, alias="Participants")
    start_time: datetime = Field(alias="Start Time")
    end_time: datetime = Field(alias="End Time")
    creation_timestamp: datetime = Field(alias="Creation TimeStamp")

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingResponse":
        return cls(
            id=meeting.id,
            title=meeting.title,
            participants=[
                ParticipantPayload(name=p.name, email=p.email, rsvp=p.rsvp)
                for p in meeting.participants
            ],
            start_time=meeting.start_time,
            end_time=meeting.end_time,
            creation_timestamp=meeting.creation_timestamp,
        )


def _media_type(content_type: Optional[str]) -> str:
    # "application/json; charset=utf-8" -> "application/json"
    return (content_type or "").split(";", 1)[0].strip().lower()


def _summarise(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"invalid meeting body: {location}: {first['msg']}"
    return f"invalid meeting body: {first['msg']}"


def decode_meeting(content_type: Optional[str], body: bytes) -> MeetingDraft:
    """Decode a create request into a ``MeetingDraft``.

    The media type is checked before the body is parsed.

    Args:
        content_type: Raw ``Content-Type`` header value, if any.
        body: Raw request body.

    Returns:
        The decoded draft, ready for ``MeetingStore.create``.

    Raises:
        UnsupportedMediaTypeError: If the media type is not ``application/json``.
        MalformedBodyError: If the body is not a well-formed meeting.
    """
    if _media_type(content_type) != JSON_MEDIA_TYPE:
        raise UnsupportedMediaTypeError(content_type or "")
    try:
        payload = MeetingCreate.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedBodyError(_summarise(exc)) from exc
    return payload.to_draft()


def encode_meeting(meeting: Meeting) -> Dict[str, Any]:
    """Return the JSON-ready representation of a meeting."""
    return MeetingResponse.from_meeting(meeting).model_dump(mode="json", by_alias=True)


def encode_meetings(meetings: Iterable[Meeting]) -> List[Dict[str, Any]]:
    return [encode_meeting(m) for m in meetings]


__all__ = [
    "JSON_MEDIA_TYPE",
    "ParticipantPayload",
    "MeetingCreate",
    "MeetingResponse",
    "decode_meeting",
    "encode_meeting",
    "encode_meetings",
]
