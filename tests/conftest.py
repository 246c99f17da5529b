from datetime import datetime, timedelta

import pytest

from material_supermarket import create_app
from material_supermarket.config import TestingConfig
from material_supermarket.models.material import Material
from material_supermarket.services import get_store
from material_supermarket.services.bookkeeping import MaterialStore


class FakeClock:
    """Reloj que avanza un segundo en cada lectura."""

    def __init__(self, start=datetime(2025, 3, 10, 8, 0, 0)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    materials = [
        Material("M-10", "Widget diez", 10, bin1=10),
        Material("M-25", "Eye bolt m12", 25, bin1=25, bin2=25),
        Material("M-EMPTY", "Cage nut M6", 200),
    ]
    return MaterialStore(materials=materials, auto_sync=False, clock=clock)


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        EXPORT_FOLDER = str(tmp_path / "exports")

    app = create_app(Config)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(app, client):
    client.post(
        "/auth/login",
        data={"username": app.config["OWNER_USERNAME"], "password": app.config["OWNER_PASSWORD"]},
    )
    return client


@pytest.fixture
def app_store(app):
    with app.app_context():
        return get_store()
