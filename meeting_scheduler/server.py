"""Process entry point: serve the meeting scheduler with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from .config import get_service_settings
from .main import create_app

logger = logging.getLogger("meeting_scheduler.server")


def main() -> None:
    settings = get_service_settings()
    app = create_app(settings=settings)
    logger.info(f"Starting meeting scheduler on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
