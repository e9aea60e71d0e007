from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Request:
    base: str = ""
    route: str = ""
    path: str = ""
    params: Dict[str, str] = field(default_factory=dict)
    state: Any = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    send: Callable[..., Any]
    error: Callable[..., Any]


@dataclass(frozen=True)
class RouterOptions:
    base: str = ""
    initial: Optional[str] = None


@dataclass(frozen=True)
class Registration:
    """Patterns, middlewares and handler registered together."""

    patterns: Tuple[str, ...]
    handler: Callable
    middlewares: Tuple[Callable, ...] = ()

    @classmethod
    def build(
        cls,
        patterns: Union[str, Sequence[str]],
        handler: Optional[Callable],
        middlewares: Sequence[Callable] = (),
    ) -> "Registration":
        """Validate loose arguments into a registration."""
        if isinstance(patterns, str):
            patterns = (patterns,)
        elif isinstance(patterns, (list, tuple)):
            patterns = tuple(patterns)
        else:
            raise TypeError(
                "Invalid route pattern. Expecting 'str' or a sequence of 'str' "
                f"got: '{type(patterns).__name__}'"
            )
        if not patterns:
            raise TypeError("At least one route pattern is required")
        for pattern in patterns:
            if not isinstance(pattern, str):
                raise TypeError(
                    f"Invalid route pattern. Expecting 'str' got: '{type(pattern).__name__}'"
                )
        if not callable(handler):
            raise TypeError(
                f"Invalid route handler. Expecting 'callable' got: '{type(handler).__name__}'"
            )
        if not isinstance(middlewares, (list, tuple)):
            raise TypeError(
                "Invalid middlewares. Expecting a sequence of 'callable' "
                f"got: '{type(middlewares).__name__}'"
            )
        for middleware in middlewares:
            if not callable(middleware):
                raise TypeError(
                    f"Invalid middleware. Expecting 'callable' got: '{type(middleware).__name__}'"
                )
        return cls(patterns=patterns, handler=handler, middlewares=tuple(middlewares))
