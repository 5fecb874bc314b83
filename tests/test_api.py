"""HTTP tests for the meetings endpoints via FastAPI's TestClient."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

from pydantic import TypeAdapter

from conftest import T0, make_draft
from meeting_scheduler import main as main_module
from meeting_scheduler.main import create_app
from meeting_scheduler.meetings import MeetingStore

_datetime = TypeAdapter(datetime)


def _post_raw(client, body, content_type=None):
    headers = {"Content-Type": content_type} if content_type else {}
    return client.post("/meetings", content=body, headers=headers)


# ── create ───────────────────────────────────────────────────────────────────


def test_standup_scenario(client, meeting_body):
    r = client.post("/meetings", json=meeting_body)
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["Id"]

    r = client.get(f"/meetings/{created['Id']}")
    assert r.status_code == 200
    fetched = r.json()
    assert fetched["Title"] == "Standup"
    assert _datetime.validate_python(fetched["Start Time"]) == T0
    assert _datetime.validate_python(fetched["End Time"]) == T0 + timedelta(minutes=15)
    assert fetched["Participants"] == []

    r = client.get("/meetings")
    assert r.status_code == 200
    listed = r.json()
    assert [m["Id"] for m in listed] == [created["Id"]]


def test_create_response_uses_wire_field_names(client):
    body = {
        "Title": "Review",
        "Participants": [{"Name": "Ada", "Email": "ada@example.com", "RSVP": "no"}],
        "Start Time": "2026-10-17T09:00:00+02:00",
        "End Time": "2026-10-17T10:00:00+02:00",
    }
    created = client.post("/meetings", json=body).json()

    assert set(created) == {
        "Id",
        "Title",
        "Participants",
        "Start Time",
        "End Time",
        "Creation TimeStamp",
    }
    assert created["Participants"] == [{"Name": "Ada", "Email": "ada@example.com", "RSVP": "no"}]
    assert _datetime.validate_python(created["Start Time"]) == _datetime.validate_python(
        body["Start Time"]
    )


def test_create_accepts_snake_case_fields(client, store):
    body = {
        "title": "Retro",
        "participants": [{"name": "Alan", "email": "alan@example.com"}],
        "start_time": "2026-10-17T09:00:00Z",
        "end_time": "2026-10-17T09:30:00Z",
    }
    r = client.post("/meetings", json=body)

    assert r.status_code == 201, r.text
    meeting = store.get(r.json()["Id"])
    assert meeting.title == "Retro"
    assert meeting.participants[0].rsvp == ""


def test_create_ignores_client_supplied_id(client, store, meeting_body):
    meeting_body["Id"] = "chosen-by-client"
    meeting_body["Creation TimeStamp"] = "2000-01-01T00:00:00Z"

    created = client.post("/meetings", json=meeting_body).json()

    assert created["Id"] != "chosen-by-client"
    assert store.get("chosen-by-client") is None
    assert _datetime.validate_python(created["Creation TimeStamp"]).year != 2000


def test_create_accepts_json_with_charset(client, meeting_body):
    r = _post_raw(client, json.dumps(meeting_body), "application/json; charset=utf-8")
    assert r.status_code == 201, r.text


# ── rejected requests ────────────────────────────────────────────────────────


def test_text_plain_is_rejected_before_store_mutation(client, store, meeting_body):
    before = client.get("/meetings").json()

    r = _post_raw(client, json.dumps(meeting_body), "text/plain")

    assert r.status_code == 415
    assert r.text == "need content-type 'application/json', but got 'text/plain'"
    assert len(store) == 0
    assert client.get("/meetings").json() == before


def test_missing_content_type_is_rejected(client, store, meeting_body):
    r = _post_raw(client, json.dumps(meeting_body).encode())

    assert r.status_code == 415
    assert len(store) == 0


def test_invalid_json_is_rejected(client, store):
    r = _post_raw(client, "{not json", "application/json")

    assert r.status_code == 400
    assert r.text.startswith("invalid meeting body")
    assert len(store) == 0


def test_missing_title_is_rejected(client, store, meeting_body):
    del meeting_body["Title"]

    r = client.post("/meetings", json=meeting_body)

    assert r.status_code == 400
    assert "Title" in r.text
    assert len(store) == 0


def test_naive_timestamp_is_rejected(client, store, meeting_body):
    meeting_body["Start Time"] = "2026-10-17T09:00:00"

    r = client.post("/meetings", json=meeting_body)

    assert r.status_code == 400
    assert len(store) == 0


def test_unsupported_methods_on_collection(client, store):
    for method in ("PUT", "PATCH", "DELETE"):
        r = client.request(method, "/meetings")
        assert r.status_code == 405
        assert r.text == "method not allowed"
    assert len(store) == 0


# ── get / random ─────────────────────────────────────────────────────────────


def test_unknown_id_is_not_found(client):
    r = client.get("/meetings/123-1")
    assert r.status_code == 404


def test_random_on_empty_store_is_not_found(client):
    r = client.get("/meetings/random", follow_redirects=False)
    assert r.status_code == 404


def test_random_redirects_to_resolved_meeting(client, store):
    ids = {store.create(make_draft(title=t)).id for t in ("A", "B", "C")}

    r = client.get("/meetings/random", follow_redirects=False)

    assert r.status_code == 302
    location = r.headers["location"]
    assert location.startswith("/meetings/")
    assert location.rsplit("/", 1)[1] in ids

    followed = client.get(location)
    assert followed.status_code == 200
    assert followed.json()["Id"] in ids


def test_list_returns_every_meeting(client, store):
    created = {store.create(make_draft(title=t)).id for t in ("A", "B", "C")}

    listed = client.get("/meetings").json()

    assert {m["Id"] for m in listed} == created


# ── app wiring ───────────────────────────────────────────────────────────────


def test_encoding_failure_is_a_server_error(client, store, monkeypatch):
    meeting = store.create(make_draft())

    def broken(_meeting):
        raise ValueError("cannot encode")

    monkeypatch.setattr(main_module, "encode_meeting", broken)
    r = client.get(f"/meetings/{meeting.id}")

    assert r.status_code == 500
    assert r.text == "cannot encode"


def test_apps_do_not_share_stores(meeting_body):
    from fastapi.testclient import TestClient

    first_store, second_store = MeetingStore(), MeetingStore()
    first = TestClient(create_app(store=first_store))
    second = TestClient(create_app(store=second_store))

    first.post("/meetings", json=meeting_body)

    assert len(first_store) == 1
    assert len(second_store) == 0
    assert second.get("/meetings").json() == []


def test_root_describes_service(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "meeting" in r.json()["message"].lower()
