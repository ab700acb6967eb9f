"""HTTP API package: router, schemas, middleware."""

from image_discovery.api.routes import router

__all__ = ["router"]
