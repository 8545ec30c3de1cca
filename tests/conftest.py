"""
Global test fixtures for the fflip Flask integration.

Creates an isolated Flask app around a small in-memory registry, so every
test knows exactly which flags exist and how they evaluate.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import pytest

# ---------------------------------------------------------------------------
# Import target app
# ---------------------------------------------------------------------------
import sys
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app  # type: ignore
from service.registry import FeatureRegistry  # type: ignore

CUSTOM_OPTIONS: Dict[str, Any] = {
    "FFLIP_COOKIE_NAME": "CUSTOM_COOKIE_NAME",
    "FFLIP_COOKIE_MAX_AGE": 123456789,
    "FFLIP_MANUAL_ROUTE": "/custom/path/:name/:action",
}

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def registry() -> FeatureRegistry:
    """
    fEmpty: no check, off
    fOpen:  on for everyone
    fClosed: off for everyone
    fEval:  on for users whose flag is "abc"
    """
    reg = FeatureRegistry()
    reg.register("fEmpty")
    reg.register("fOpen", lambda user: True, description="true for all users")
    reg.register("fClosed", lambda user: False)
    reg.register("fEval", lambda user: (user or {}).get("flag") == "abc")
    return reg


@pytest.fixture()
def user_abc() -> Dict[str, str]:
    return {"flag": "abc"}


@pytest.fixture()
def user_xyz() -> Dict[str, str]:
    return {"flag": "xyz"}


@pytest.fixture()
def app(registry: FeatureRegistry):
    """Flask app fixture (testing mode ON), default options."""
    flask_app = create_app(
        {"SECRET_KEY": "test-secret"},
        registry=registry,
        user_loader=lambda: {"flag": "abc"},
    )
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture()
def custom_app(registry: FeatureRegistry):
    """Flask app with a custom cookie name, cookie max age and route."""
    flask_app = create_app(dict(CUSTOM_OPTIONS), registry=registry)
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def flip(app):
    """The FeatureFlip extension installed on the app fixture."""
    return app.extensions["fflip"]
