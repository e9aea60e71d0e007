"""Route compilation and route entries."""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from nav_router.patterns import (
    BOUND_SEPARATOR,
    DEFAULT_PARAM_PATTERN,
    OPTIONAL_SLASH,
    edge_slashes_expr,
    explicit_expr,
    slashes_expr,
    token_expr,
)

STRICT = "strict"
OPTIONAL_SLASH_MODE = "optional-slash"


@dataclass(frozen=True)
class Parameter:
    """Path parameter descriptor."""

    index: int
    parameter: str
    identifier: str
    pattern: Optional[str]
    group: int


@dataclass(frozen=True)
class CompiledPath:
    base: str
    route: str
    route_regex: str
    parameters: List[Parameter]
    trailing_mode: str


def _normalize_base(base: str) -> str:
    return "/" + edge_slashes_expr.sub("", base)


def _compile_path(base: str, path: str) -> CompiledPath:
    """Compile ``path`` mounted under ``base`` into a matcher string.

    ``:name`` captures one path segment, ``:name->expr`` captures using
    ``expr`` and a trailing ``*`` leaves the matcher open-ended so longer
    paths match it as a prefix.
    """
    base = _normalize_base(base)
    route = slashes_expr.sub("/", f"{base}/{path}")
    route = edge_slashes_expr.sub("", route)

    if explicit_expr.search(route):
        route = explicit_expr.sub("", route)
        trailing_mode = STRICT
        suffix = ""
    else:
        trailing_mode = OPTIONAL_SLASH_MODE
        suffix = OPTIONAL_SLASH

    parameters: List[Parameter] = []
    group = 1

    def _replace(match: "re.Match") -> str:
        nonlocal group
        token = match.group(0)
        if not match.group("colon"):
            return re.escape(token)

        identifier, sep, bound = match.group("body").partition(BOUND_SEPARATOR)
        duplicates = [p for p in parameters if p.identifier == identifier]
        if duplicates:
            raise ValueError(
                f"Duplicated parameter '{identifier}' in route '/{route}'"
            )

        expr = bound if sep and bound else DEFAULT_PARAM_PATTERN
        try:
            inner_groups = re.compile(expr).groups
        except re.error as err:
            raise ValueError(
                f"Invalid pattern for parameter '{identifier}': {expr} ({err})"
            ) from err

        parameters.append(
            Parameter(
                index=len(parameters),
                parameter=token,
                identifier=identifier,
                pattern=bound if sep and bound else None,
                group=group,
            )
        )
        group += 1 + inner_groups
        return f"({expr})"

    route_regex = "^/" + token_expr.sub(_replace, route) + suffix
    return CompiledPath(
        base=base,
        route=route,
        route_regex=route_regex,
        parameters=parameters,
        trailing_mode=trailing_mode,
    )


class Route:
    """Compiled route bound to a handler and its middlewares."""

    def __init__(
        self,
        endpoint: Callable,
        path: str,
        middlewares: Optional[Sequence[Callable]] = None,
        base: str = "",
    ) -> None:
        """Initialize route object."""
        if not callable(endpoint):
            raise TypeError(
                f"Invalid route handler for '{path}'. Expecting 'callable' "
                f"got: '{type(endpoint).__name__}'"
            )
        middlewares = list(middlewares or [])
        for middleware in middlewares:
            if not callable(middleware):
                raise TypeError(
                    f"Invalid middleware for '{path}'. Expecting 'callable' "
                    f"got: '{type(middleware).__name__}'"
                )

        compiled = _compile_path(base, path)
        self.endpoint = endpoint
        self.middlewares = middlewares
        self.path = path
        self.base = compiled.base
        self.route = compiled.route
        self.route_regex = compiled.route_regex
        self.parameters = compiled.parameters
        self.trailing_mode = compiled.trailing_mode
        self.expr = re.compile(self.route_regex, re.IGNORECASE)

    def __eq__(self, other) -> bool:
        """Check for equality."""
        if not isinstance(other, Route):
            return NotImplemented
        return self.route_regex == other.route_regex

    def __hash__(self) -> int:
        return hash(self.route_regex)

    def __repr__(self) -> str:
        return f"<Route /{self.route} ({self.route_regex})>"

    @property
    def explicit(self) -> bool:
        return self.trailing_mode == STRICT

    def match(self, url: str) -> Optional[Dict[str, str]]:
        """Return path parameters when ``url`` matches, else ``None``."""
        found = self.expr.match(url)
        # ``$`` also matches before a final newline
        if not found or (not self.explicit and found.end() != len(url)):
            return None
        return {param.identifier: found.group(param.group) for param in self.parameters}
