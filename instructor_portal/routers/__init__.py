"""HTTP routers for the portal API."""

from .portal import router

__all__ = ["router"]
