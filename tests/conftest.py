"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from phrase_search_service.config import DEFAULT_SEARCH_URL_TEMPLATES
from phrase_search_service.main import app
from phrase_search_service.routers.search import get_phrase_search
from phrase_search_service.variations import (
    FanoutPolicy,
    LinkFanout,
    PhraseSearch,
    TreebankTokenizer,
    VariationGenerator,
)

from .fakes import FlakySynonymProvider

# ============================================================================
# Load Test Environment Variables
# ============================================================================

# Load .env.test before any fixtures run so test-specific settings apply
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def synonyms() -> dict[str, list[str]]:
    """Synonym table shared by API and unit tests."""
    return {
        "fast": ["quick", "rapid"],
        "car": ["auto"],
        "big": ["large", "huge", "vast", "great", "giant", "massive", "grand"],
    }


@pytest.fixture
def synonym_provider(synonyms: dict[str, list[str]]) -> FlakySynonymProvider:
    """Static synonym provider; add words to .failing to simulate outages."""
    return FlakySynonymProvider(synonyms)


@pytest.fixture
def phrase_search(synonym_provider: FlakySynonymProvider) -> PhraseSearch:
    """PhraseSearch wired with the real tokenizer and a static provider."""
    generator = VariationGenerator(TreebankTokenizer(), synonym_provider)
    fanout = LinkFanout(list(DEFAULT_SEARCH_URL_TEMPLATES), FanoutPolicy.INDEXED)
    return PhraseSearch(generator, fanout, max_variations=7)


# ============================================================================
# HTTP Client Fixtures
# ============================================================================


@pytest.fixture
def client(phrase_search: PhraseSearch) -> Generator[TestClient, None, None]:
    """Synchronous test client with the search dependency overridden."""
    app.dependency_overrides[get_phrase_search] = lambda: phrase_search
    try:
        yield TestClient(app)
    finally:
        # Remove this specific override only (don't use .clear())
        app.dependency_overrides.pop(get_phrase_search, None)


@pytest.fixture
async def async_client(phrase_search: PhraseSearch) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the search dependency overridden."""
    app.dependency_overrides[get_phrase_search] = lambda: phrase_search
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_phrase_search, None)
