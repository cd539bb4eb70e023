import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so tests can import `services`, `routers`, ...
PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def gemini_configured(monkeypatch):
    """Every test runs with a fake Gemini key so calls reach the (mocked) transport."""
    import config
    monkeypatch.setattr(config, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(config, "GEMINI_MODEL_NAME", "gemini-test")
    monkeypatch.setattr(config, "GEMINI_API_BASE", "https://gemini.test/v1beta")


def gemini_body(text: str) -> dict:
    """A generateContent response carrying `text` as the first candidate."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}
