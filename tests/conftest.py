"""Pytest configuration and fixtures."""

import os
import pytest

from xhn.core import get_settings, reset_tracer
from xhn.model import Affordance, Affordances, Input
from xhn.api import HypermediaApi


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['XHN_LOG_LEVEL'] = 'DEBUG'
    os.environ['XHN_ENABLE_TRACING'] = 'false'


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset global state after each test."""
    yield
    reset_tracer()
    get_settings.cache_clear()


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def name_input():
    """A labelled, required text input."""
    return Input("name", "").set_label("Name").set_required(True)


@pytest.fixture
def cascade_tree():
    """
    Root R {a: 1} > composite C {a: 2, b: 2} > leaf L {b: 3}.

    Returns (root, composite, leaf).
    """
    leaf = Affordance("L", "GET", "/l").set_metadata({"b": 3})
    composite = Affordances("C").set_metadata({"a": 2, "b": 2}).add_affordance(leaf)
    root = Affordances("R").set_metadata({"a": 1}).add_affordance(composite)
    return root, composite, leaf


@pytest.fixture
def user_tree(name_input):
    """A small API tree: entry point plus a users collection."""
    users = (
        Affordances("users")
        .set_metadata({"Content-Type": "application/json"})
        .add_affordance(Affordance("get-users", "GET", "/users").set_relation("collection"))
        .add_affordance(
            Affordance("create-user", "POST", "/users").add_input(name_input)
        )
    )
    return (
        Affordances("api")
        .set_metadata({"Cache-Control": "no-cache"})
        .add_affordance(Affordance("entry", "GET", "/").set_relation("self"))
        .add_affordance(users)
    )


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
def user_api():
    """Hypermedia API with an entry point and user resources."""
    return (
        HypermediaApi("users-api")
        .add_metadata({"Cache-Control": "no-cache"})
        .add_request("entry", "GET", "/")
        .add_request("get-users", "GET", "/users")
        .add_metadata({"Accept": "application/json"})
        .add_request("create-user", "POST", "/users")
        .add_input({"id": "name", "value": "", "required": True})
        .add_response("entry", "200", ["entry", "get-users", "create-user"])
        .add_response("create-user", "201", ["get-users"])
        .add_response("create-user", "400", ["create-user"])
    )
