"""nav_router: minimal path router with middleware chaining."""

from nav_router.middleware import MiddlewareChain
from nav_router.router import RouteGroup, Router
from nav_router.routing import Route
from nav_router.types import Registration, Request, Response, RouterOptions

__version__ = "1.0.0"

__all__ = [
    "MiddlewareChain",
    "Registration",
    "Request",
    "Response",
    "Route",
    "RouteGroup",
    "Router",
    "RouterOptions",
]
