import pytest
from fastapi.testclient import TestClient

from sitecarbon.core import config
from sitecarbon.fetch.base import BaseFetcher, FetchResult

@pytest.fixture(autouse=True)
def setup_test_environment():
    """Run every test without LLM credentials and with mock mode off"""
    original_use_mock = config.settings.USE_MOCK
    original_api_key = config.settings.GOOGLE_API_KEY

    config.settings.USE_MOCK = False
    config.settings.GOOGLE_API_KEY = None

    yield

    config.settings.USE_MOCK = original_use_mock
    config.settings.GOOGLE_API_KEY = original_api_key

@pytest.fixture
def client():
    from sitecarbon.main import app
    return TestClient(app)

class StubFetcher(BaseFetcher):
    """Returns a fixed byte count without touching the network"""

    def __init__(self, byte_length: int, elapsed_millis: float = 250.0):
        self.byte_length = byte_length
        self.elapsed_millis = elapsed_millis
        self.calls = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        return FetchResult(url=url, byte_length=self.byte_length, elapsed_millis=self.elapsed_millis)

@pytest.fixture
def stub_fetcher():
    return StubFetcher
