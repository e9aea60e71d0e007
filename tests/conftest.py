from unittest.mock import Mock

import pytest

from nav_router import Router


@pytest.fixture
def funct():
    """Mock function for testing purposes."""
    return Mock(__name__="Mock")


@pytest.fixture
def sink():
    """Mock result callback."""
    return Mock(__name__="sink")


@pytest.fixture
def router(sink):
    """Subscribed router without log handlers."""
    app = Router(name="test", configure_logs=False)
    app.subscribe(sink)
    return app


@pytest.fixture
def calls():
    """Record the order stages ran in."""
    return []


@pytest.fixture
def stage(calls):
    """Build a middleware stage that records its name and continues."""

    def _stage(name, proceed=True):
        def _fn(request, response, next):
            calls.append(name)
            if proceed:
                next()

        return _fn

    return _stage
