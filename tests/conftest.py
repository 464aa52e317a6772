import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from switchboard.registry import Outlet, OutletRegistry  # noqa: E402
from switchboard.web.app import create_app  # noqa: E402
from tests.fakes import PINS, FakeGpio  # noqa: E402


@pytest.fixture()
def gpio() -> FakeGpio:
    return FakeGpio()


@pytest.fixture()
def registry(gpio) -> OutletRegistry:
    return OutletRegistry([Outlet(id=i, pin=pin) for i, pin in enumerate(PINS)], gpio)


@pytest.fixture()
def client(registry):
    app = create_app(registry, {"TESTING": True})
    return app.test_client()
