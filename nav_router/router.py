"""Dispatch navigation events to registered handlers."""

import copy
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from nav_router.middleware import MiddlewareChain
from nav_router.patterns import explicit_expr
from nav_router.routing import Route
from nav_router.types import Registration, Request, Response, RouterOptions

Patterns = Union[str, Sequence[str]]


class RouteGroup:
    """Register sub-routes below a set of parent patterns.

    Every pattern given to ``add`` is joined to every parent pattern, so
    ``router.get("/users/*", ...).add("/:id", ...)`` registers ``/users/:id``.
    """

    def __init__(self, router: "Router", routes: Dict[str, Route], prefixes: Sequence[str]):
        self.router = router
        self.routes = routes
        self.prefixes: Tuple[str, ...] = tuple(prefixes)

    def _join(self, patterns: Sequence[str]) -> List[str]:
        return [
            explicit_expr.sub("", prefix) + "/" + pattern
            for prefix in self.prefixes
            for pattern in patterns
        ]

    def add(
        self,
        patterns: Patterns,
        handler: Optional[Callable] = None,
        middlewares: Sequence[Callable] = (),
    ) -> "RouteGroup":
        """Register sub-routes and return this group for sibling chaining."""
        registration = Registration.build(patterns, handler, middlewares)
        self.router.register(
            self.routes,
            Registration(
                patterns=tuple(self._join(registration.patterns)),
                handler=registration.handler,
                middlewares=registration.middlewares,
            ),
        )
        return self

    def group(self, patterns: Patterns) -> "RouteGroup":
        """Return a nested group without registering anything."""
        if isinstance(patterns, str):
            patterns = [patterns]
        return RouteGroup(self.router, self.routes, self._join(patterns))


class Router:
    """Router."""

    FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"

    def __init__(
        self,
        name: str = "nav_router",
        base: str = "",
        initial: Optional[str] = None,
        configure_logs: bool = True,
        debug: bool = False,
    ) -> None:
        """Initialize Router object."""
        if initial is not None and not isinstance(initial, str):
            raise TypeError(
                f"Invalid initial url. Expecting 'str' got: '{type(initial).__name__}'"
            )
        self.name: str = name
        self.options = RouterOptions(base=base, initial=initial)
        self.routes: Dict[str, Route] = {}
        self.catch_routes: Dict[str, Route] = {}
        self.global_middleware: List[Route] = []
        self.debug: bool = debug
        self._subscribed: bool = False
        self._sink: Optional[Callable] = None
        self.log = logging.getLogger(self.name)
        if configure_logs:
            self._configure_logging()

    @property
    def subscribed(self) -> bool:
        return self._subscribed

    def _configure_logging(self) -> None:
        if self._already_configured(self.log):
            return

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(self.FORMAT_STRING)
        handler.setFormatter(formatter)
        self.log.propagate = False
        if self.debug:
            level = logging.DEBUG
        else:
            level = logging.WARNING
        self.log.setLevel(level)
        self.log.addHandler(handler)

    def _already_configured(self, log) -> bool:
        if not log.handlers:
            return False

        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler):
                if handler.stream == sys.stdout:
                    return True

        return False

    def register(self, routes: Dict[str, Route], registration: Registration) -> RouteGroup:
        """Register every pattern of ``registration`` into ``routes``."""
        for path in registration.patterns:
            route = Route(
                registration.handler,
                path,
                registration.middlewares,
                base=self.options.base,
            )
            existing = routes.get(route.route_regex)
            if existing is not None:
                raise ValueError(
                    f'Duplicate route detected: "{path}" and "{existing.path}" '
                    f"({route.route_regex})\nURL paths must be unique."
                )
            routes[route.route_regex] = route
            self.log.debug(f"Registered /{route.route} as {route.route_regex}")
        return RouteGroup(self, routes, registration.patterns)

    def get(
        self,
        patterns: Patterns = "*",
        handler: Optional[Callable] = None,
        middlewares: Sequence[Callable] = (),
    ) -> RouteGroup:
        """Register route."""
        return self.register(
            self.routes, Registration.build(patterns, handler, middlewares)
        )

    def catch(
        self,
        patterns: Patterns = "*",
        handler: Optional[Callable] = None,
        middlewares: Sequence[Callable] = (),
    ) -> RouteGroup:
        """Register fallback route, called with ``(request, response, error)``.

        ``middlewares`` are validated but never run, the fallback handler is
        invoked directly.
        """
        return self.register(
            self.catch_routes, Registration.build(patterns, handler, middlewares)
        )

    def use(self, patterns: Patterns = "*", handler: Optional[Callable] = None) -> None:
        """Register global middleware for every url matching ``patterns``."""
        registration = Registration.build(patterns, handler)
        for path in registration.patterns:
            self.global_middleware.append(
                Route(registration.handler, path, base=self.options.base)
            )

    def _find_route(
        self, url: str, routes: Dict[str, Route], state: Any
    ) -> Optional[Tuple[Route, Request]]:
        for route in routes.values():
            params = route.match(url)
            if params is None:
                continue
            request = Request(
                base=route.base,
                route="/" + route.route,
                path=url,
                params=params,
                state=copy.copy(state) if state is not None else {},
            )
            return route, request

        return None

    def _send(self, *args: Any, **kwargs: Any) -> None:
        if self._sink is None:
            self.log.debug("No subscriber, result dropped")
            return
        self._sink(*args, **kwargs)

    def _fallback(
        self, url: str, state: Any, response: Response, payload: Any = None
    ) -> None:
        found = self._find_route(url, self.catch_routes, state)
        if not found:
            self.log.warning(f"No route or catch fallbacks found for [{url}]")
            return

        route, request = found
        try:
            route.endpoint(request, response, payload)
        except Exception:
            self.log.exception(f"Catch route /{route.route} failed for [{url}]")

    def execute(self, url: str, state: Any = None) -> None:
        """Dispatch ``url`` to the first matching route."""
        if not isinstance(url, str):
            raise TypeError(
                f"Invalid 'execute' argument. Expecting 'str' got: '{type(url).__name__}'"
            )
        if not self._subscribed:
            self.log.debug(f"Not subscribed, ignoring [{url}]")
            return

        self.log.debug(f"Dispatching [{url}]")

        def _error(payload: Any = None) -> None:
            self._fallback(url, state, response, payload)

        response = Response(send=self._send, error=_error)

        found = self._find_route(url, self.routes, state)
        if not found:
            response.error()
            return

        route, request = found
        chain = MiddlewareChain(request, response)
        for middleware in self.global_middleware:
            if middleware.match(url) is not None:
                chain.use(middleware.endpoint)
        for middleware in route.middlewares:
            chain.use(middleware)
        chain.use(route.endpoint)

        try:
            chain.execute()
        except Exception as err:
            self.log.error(str(err))
            response.error(err)

    def subscribe(self, sink: Optional[Callable] = None) -> Callable[[], None]:
        """Activate dispatch, results sent by handlers go to ``sink``."""
        if sink is not None and not callable(sink):
            raise TypeError(
                f"Invalid subscriber. Expecting 'callable' got: '{type(sink).__name__}'"
            )
        self._subscribed = True
        if sink is not None:
            self._sink = sink
        if self.options.initial:
            self.execute(self.options.initial)

        def unsubscribe() -> None:
            self._subscribed = False

        return unsubscribe
