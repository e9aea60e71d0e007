"""Continuation-style middleware composition."""

from functools import partial
from typing import Any, Callable, List


def _terminal() -> None:
    return None


class MiddlewareChain:
    """Fold ordered stages into a single continuation.

    Every stage is called as ``stage(*args, next)``. A stage that does not
    call ``next`` ends the chain, the remaining stages never run.
    """

    def __init__(self, *args: Any) -> None:
        self.args = args
        self.stages: List[Callable] = []

    def __len__(self) -> int:
        return len(self.stages)

    def use(self, fn: Callable) -> "MiddlewareChain":
        """Append a stage."""
        if not callable(fn):
            raise TypeError(
                f"Invalid middleware. Expecting 'callable' got: '{type(fn).__name__}'"
            )
        self.stages.append(fn)
        return self

    def compose(self) -> Callable[[], Any]:
        call_next: Callable[[], Any] = _terminal
        for fn in reversed(self.stages):
            call_next = partial(fn, *self.args, call_next)
        return call_next

    def execute(self) -> Any:
        return self.compose()()
