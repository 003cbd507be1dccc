#!/usr/bin/env python3
"""
Deskmap Application Starter
Initializes the Application (database, services, scheduler) then starts the API server.
"""

import logging
import signal
import sys

import uvicorn

from deskmap.app import application

# Configure logging once for the whole process
logging.basicConfig(
    level=getattr(logging, application.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def shutdown_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logging.info(f"Received signal {signum}, shutting down...")
    application.stop()
    sys.exit(0)


if __name__ == "__main__":
    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    logging.info("[Application] Starting Deskmap Application...")
    application.start()

    logging.info(
        "Effective config: db_path=%s api=%s:%d scheduled_sync=%s sse_keepalive=%ss",
        application.db_path,
        application.api_host,
        application.api_port,
        application.scheduled_sync_enabled,
        application.sse_keepalive_seconds,
    )

    try:
        uvicorn.run(
            "deskmap.interfaces.api.api_app:api_app",
            host=application.api_host,
            port=application.api_port,
            timeout_keep_alive=90,
            log_level=application.log_level.lower(),
        )
    finally:
        logging.info("API server stopped, cleaning up...")
        application.stop()
