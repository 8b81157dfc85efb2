import httpx
import pytest

from study import decoders
from study.models import Flashcard, FlashcardDeck


@pytest.fixture(autouse=True)
def openai_env(monkeypatch):
    # Never talk to the real API or pick up a developer's settings
    monkeypatch.setenv('OPENAI_API_KEY', 'sk-test')
    monkeypatch.delenv('OPENAI_MODEL', raising=False)
    monkeypatch.delenv('OPENAI_BASE_URL', raising=False)
    monkeypatch.delenv('AI_STUDY_DEBUG_TRACE', raising=False)
    yield


@pytest.fixture(autouse=True)
def no_prompt_overrides(monkeypatch):
    monkeypatch.setattr(decoders, '_CONFIG_CACHE', {})
    yield


@pytest.fixture
def sample_deck():
    return FlashcardDeck(cards=(
        Flashcard('What is photosynthesis?', 'Turning light into chemical energy.'),
        Flashcard('Where does it happen?', 'In the chloroplasts.'),
        Flashcard('What pigment absorbs light?', 'Chlorophyll.'),
    ))


@pytest.fixture
def mock_transport():
    """Factory for an httpx.MockTransport that records every request it sees."""
    def _make(status=200, body='', exc=None):
        seen = []

        def handler(request):
            seen.append(request)
            if exc is not None:
                raise exc
            return httpx.Response(status, text=body)

        return httpx.MockTransport(handler), seen
    return _make
