"""Test middleware chaining."""

import pytest

from nav_router.middleware import MiddlewareChain


def test_chain_runs_stages_in_order(calls, stage):
    chain = MiddlewareChain("request", "response")
    chain.use(stage("first")).use(stage("second")).use(stage("third"))
    assert len(chain) == 3

    chain.execute()
    assert calls == ["first", "second", "third"]


def test_chain_passes_fixed_args():
    seen = []

    def _fn(request, response, next):
        seen.append((request, response))
        next()

    MiddlewareChain("req", "res").use(_fn).use(_fn).execute()
    assert seen == [("req", "res"), ("req", "res")]


def test_chain_short_circuit(calls, stage):
    chain = MiddlewareChain("request", "response")
    chain.use(stage("first")).use(stage("stop", proceed=False)).use(stage("never"))

    chain.execute()
    assert calls == ["first", "stop"]


def test_chain_last_next_is_noop(calls, stage):
    chain = MiddlewareChain().use(stage("only"))
    assert chain.execute() is None
    assert calls == ["only"]


def test_chain_empty():
    assert MiddlewareChain("request").execute() is None


def test_chain_compose_is_reusable(calls, stage):
    continuation = MiddlewareChain(None, None).use(stage("a")).use(stage("b")).compose()
    continuation()
    continuation()
    assert calls == ["a", "b", "a", "b"]


def test_chain_code_after_next_runs_on_unwind(calls):
    def _outer(next):
        calls.append("outer-in")
        next()
        calls.append("outer-out")

    def _inner(next):
        calls.append("inner")

    MiddlewareChain().use(_outer).use(_inner).execute()
    assert calls == ["outer-in", "inner", "outer-out"]


def test_chain_invalid_stage():
    with pytest.raises(TypeError, match="Invalid middleware"):
        MiddlewareChain().use("nope")
