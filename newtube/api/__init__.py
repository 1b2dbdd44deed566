"""API routers."""

from newtube.api.router import api_router

__all__ = ["api_router"]
