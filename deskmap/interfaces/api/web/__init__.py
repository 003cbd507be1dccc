"""Web API package - routers for the editor and viewer."""

from .router import router

__all__ = ["router"]
