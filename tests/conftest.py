import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from warren import create_app  # noqa: E402
from warren.routes import layout_api  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_layout_env(monkeypatch):
    """Keep developer WARREN_* settings (e.g. from a local .env) out of the tests."""
    for key in list(os.environ):
        if key.startswith("WARREN_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True})
    # Redirect instance path so logging setup never writes into the checkout
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    with layout_api._layout_cache_lock:
        layout_api._layout_cache.clear()
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: timing-based guard, may be deselected on slow runners")
