"""HTTP API for UI clients."""

from taskgate.api.router import api_router


__all__ = [
    "api_router",
]
