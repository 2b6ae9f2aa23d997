# tests/conftest.py
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from market.core.config import Settings
from market.core.db import dispose_engines
from market.main import create_app


def make_image(fmt: str = "PNG", size=(4, 4)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def upload_dir(settings):
    return Path(settings.UPLOAD_DIR)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    dispose_engines()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def png_bytes():
    return make_image("PNG")


@pytest.fixture
def create_topic(client, png_bytes):
    def _create(title="Bike", price="19.99", email="seller@example.com", filename="bike.png", **extra):
        data = {"title": title, "description": "Good condition", "price": price, "userEmail": email}
        data.update(extra)
        res = client.post(
            "/api/topics",
            data=data,
            files={"image": (filename, png_bytes, "image/png")},
        )
        assert res.status_code == 201, res.text
        return res.json()["newTopic"]

    return _create


@pytest.fixture
def image_factory():
    return make_image
