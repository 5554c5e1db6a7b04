"""API routers for the audio interrogator."""

from .devices import router as devices_router

__all__ = [
    "devices_router",
]
