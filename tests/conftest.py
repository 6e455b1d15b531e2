import io
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image

from webcam_uploads.core.config import Settings
from webcam_uploads.core.rate_limiter import limiter
from webcam_uploads.main import create_app


def _make_image_bytes(fmt: str = "PNG", color: tuple[int, int, int] = (255, 0, 0)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def reset_limiter() -> Iterator[None]:
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    return Settings(upload_dir=upload_dir)


@pytest.fixture
def production_settings(upload_dir: Path) -> Settings:
    return Settings(upload_dir=upload_dir, environment="production")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def png_bytes() -> bytes:
    return _make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _make_image_bytes("JPEG", color=(0, 128, 255))


@pytest.fixture
def upload(client: TestClient):
    def _upload(filename: str, content: bytes, content_type: str = "image/jpeg"):
        return client.post("/upload", files={"image": (filename, content, content_type)})

    return _upload


@pytest.fixture
def make_image():
    return _make_image_bytes
