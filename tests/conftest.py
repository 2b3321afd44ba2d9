import io
import os

# config refuses to import without a key; the fake client never uses it.
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest
from PIL import Image

import gemini_service
from fakes import FakeClient


def _png(color):
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return _png("blue")


@pytest.fixture
def red_png_bytes():
    return _png("red")


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeClient()
    monkeypatch.setattr(gemini_service, "client", client)
    return client
