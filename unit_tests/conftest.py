import pytest
import sys
from pathlib import Path

# Add root and this folder to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from fake_clients import FakeGeminiClient, FakeOpenAIClient


@pytest.fixture
def failing_gemini():
    """Gemini client whose every request raises a network error."""
    return FakeGeminiClient(error=ConnectionError("network down"))


@pytest.fixture
def offline_providers(monkeypatch):
    """Both module-level AI clients replaced by clients that always fail."""
    from tools import gemini_client, openai_estimator

    gemini = FakeGeminiClient(error=ConnectionError("network down"))
    openai = FakeOpenAIClient(error=ConnectionError("network down"))
    monkeypatch.setattr(gemini_client, "CLIENT", gemini)
    monkeypatch.setattr(openai_estimator, "CLIENT", openai)
    return gemini, openai
