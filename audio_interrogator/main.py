"""
Audio Interrogator Web API
FastAPI interface for discovering and inspecting audio devices.
"""

import logging
import os

from fastapi import FastAPI

from .exceptions import register_exception_handlers
from .routers import devices_router

# OpenAPI tag descriptions
tags_metadata = [
    {
        "name": "devices",
        "description": "Audio device discovery, filtering and capability probing",
    },
]


_logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title="Audio Interrogator",
        description="""
## Audio Interrogator API

Discovers audio devices through PortAudio and ALSA and reports their
capabilities in a single schema.

### Features
- **Device Listing**: Merged PortAudio/ALSA device list with default devices
- **Filtering**: By card ID or name, with plughw/hw and virtual alias removal
- **Cards**: ALSA card listing from /proc/asound
- **Probing**: Channel counts and sample rates of a single ALSA device
    """,
        version="0.1.0",
        openapi_tags=tags_metadata,
    )

    # Register exception handlers for unified error responses
    register_exception_handlers(app)

    app.include_router(devices_router)

    return app


app = create_app()


# ============================================================================
# Main entry point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("AUDIO_INTERROGATOR_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logger.info("Starting Audio Interrogator API")
    uvicorn.run(app, host="127.0.0.1", port=11882)
