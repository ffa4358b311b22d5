import base64

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode()


class FakeExtractor:
    """Deterministic stand-in for an AI provider."""

    def __init__(self, reply: str = "[]", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def extract(self, image_data: str, mime_type: str) -> str:
        self.calls.append((image_data, mime_type))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def scan_app(extractor):
    app = create_app(Settings(gemini_api_key="test-key"))
    app.state.extractor = extractor
    return app


@pytest.fixture
def client(scan_app):
    with TestClient(scan_app) as c:
        yield c


@pytest.fixture
def unconfigured_app():
    return create_app(Settings(gemini_api_key=""))
