"""
FastAPI server exposing the meeting scheduler over HTTP.

The application is built by ``create_app``, which wires a single
``MeetingStore`` instance into ``app.state`` so every request handler shares
it.  Read endpoints are plain ``def`` handlers and run in Starlette's worker
threadpool, one worker per request; the create endpoint reads its body
asynchronously and then hands the insert to the same threadpool.

Routes:
- ``POST /meetings`` creates a meeting from a JSON body.
- ``GET /meetings`` lists every stored meeting.
- ``GET /meetings/random`` redirects to a randomly chosen meeting.
- ``GET /meetings/{meeting_id}`` returns one meeting.

To start the server run ``uvicorn meeting_scheduler.main:app`` from the
project root, or use the ``meeting-scheduler`` console script.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from .config import ServiceSettings, get_service_settings
from .errors import MeetingRequestError
from .meetings import MeetingStore
from .schemas import decode_meeting, encode_meeting, encode_meetings


_settings = get_service_settings()

# Configure a simple application-wide logger.  The log level comes from the
# service settings (LOG_LEVEL environment variable or scheduler_config.yaml).
# Logs are emitted to standard output, which can be captured by the hosting
# environment.
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger("meeting_scheduler.main")


def _store(request: Request) -> MeetingStore:
    return request.app.state.store


def _encoded_response(encode: Callable[[], Any], status_code: int = 200) -> Response:
    # Encoding runs outside the store lock; a failure here is a server fault.
    try:
        return JSONResponse(encode(), status_code=status_code)
    except (TypeError, ValueError) as e:
        logger.exception("Failed to encode meeting response")
        return PlainTextResponse(str(e), status_code=500)


def _not_found() -> PlainTextResponse:
    return PlainTextResponse("meeting not found", status_code=404)


def create_app(
    store: Optional[MeetingStore] = None,
    settings: Optional[ServiceSettings] = None,
) -> FastAPI:
    """Build the FastAPI application around a meeting store.

    Args:
        store: Store shared by all handlers.  A fresh empty store is created
            when omitted.
        settings: Service settings; defaults to the loaded configuration.

    Returns:
        The configured ``FastAPI`` application.
    """
    settings = settings or _settings
    if store is None:
        store = MeetingStore(rng=random.Random(settings.random_seed))

    app = FastAPI(title="Meeting Scheduler")
    app.state.store = store
    app.state.settings = settings

    @app.exception_handler(MeetingRequestError)
    async def reject_request(request: Request, exc: MeetingRequestError) -> PlainTextResponse:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.get("/")
    def root() -> JSONResponse:
        """Return a brief description of the API."""
        return JSONResponse(
            {
                "message": "Meeting scheduler is running. POST /meetings to create, GET /meetings to list, GET /meetings/{id} or /meetings/random to fetch.",
            }
        )

    @app.post("/meetings")
    async def create_meeting(request: Request) -> Response:
        """Create a meeting from a JSON body and return it with its new id."""
        body = await request.body()
        draft = decode_meeting(request.headers.get("content-type"), body)
        meeting = await run_in_threadpool(_store(request).create, draft)
        return _encoded_response(lambda: encode_meeting(meeting), status_code=201)

    @app.get("/meetings")
    def list_meetings(request: Request) -> Response:
        """Return every stored meeting as a JSON array."""
        meetings = _store(request).list()
        logger.info(f"Listing {len(meetings)} meetings")
        return _encoded_response(lambda: encode_meetings(meetings))

    @app.api_route("/meetings", methods=["PUT", "PATCH", "DELETE"])
    def meetings_method_not_allowed() -> PlainTextResponse:
        return PlainTextResponse("method not allowed", status_code=405)

    # Declared before /meetings/{meeting_id} so "random" is not read as an id.
    @app.get("/meetings/random")
    def random_meeting(request: Request) -> Response:
        """Redirect to a randomly chosen meeting, or 404 if there are none."""
        meeting = _store(request).pick_random()
        if meeting is None:
            logger.info("Random pick requested on an empty store")
            return _not_found()
        return RedirectResponse(url=f"/meetings/{meeting.id}", status_code=302)

    @app.get("/meetings/{meeting_id}")
    def get_meeting(meeting_id: str, request: Request) -> Response:
        """Return a single meeting by id."""
        meeting = _store(request).get(meeting_id)
        if meeting is None:
            logger.info(f"Meeting {meeting_id} not found")
            return _not_found()
        return _encoded_response(lambda: encode_meeting(meeting))

    return app


app = create_app()
