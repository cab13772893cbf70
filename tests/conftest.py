"""Shared fixtures for AgentScore tests."""
import pytest
from unittest.mock import MagicMock

from agentscore.models.enrichment import enrich_agent
from agentscore.utils.errors import SourceUnavailable
from agentscore.utils.sources import AgentSource


class StubSource(AgentSource):
    """Source returning canned JSON records, or raising a canned error."""

    def __init__(self, name="stub", records=None, error=None):
        self.name = name
        self.records = records or []
        self.error = error
        self.fetch_calls = 0

    def fetch(self):
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)

    def transform(self, record):
        return enrich_agent(record)


@pytest.fixture
def make_source():
    """Factory for stub sources."""
    return StubSource


@pytest.fixture
def failing_source():
    return StubSource(name="down", error=SourceUnavailable("down", "connection refused"))


@pytest.fixture
def sample_json_agents():
    """Raw agents as found in all-agents-with-reviews.json."""
    return [
        {
            "name": "CENTURY 21",
            "location": "Limassol",
            "url": "https://www.bazaraki.com/c/century21/",
            "ads": 932,
        },
        {
            "name": "Pafilia Property Developers",
            "type": "developer",
            "location": "Paphos",
            "url": "https://www.bazaraki.com/c/pafilia/",
            "ads": 120,
            "established": 1977,
            "description": "Developer of residential resorts and towers.",
            "google_rating": 4.46,
            "google_review_count": 310,
            "google_reviews": ["Great service from start to finish."],
        },
        {
            "name": "Larnaca Homes",
            "location": "Larnaca",
            "ads": 0,
        },
    ]


@pytest.fixture
def sample_supabase_rows():
    """Rows of the Supabase agents table."""
    return [
        {
            "id": "7b0f5a52-5f0e-4d0c-9a59-0d0f3c1f1a01",
            "name": "CENTURY 21",
            "location": "Limassol",
            "bazaraki_url": "https://www.bazaraki.com/c/century21/",
            "website": "https://century21.com.cy",
            "listing_count": 932,
            "google_rating": None,
            "google_reviews_count": 0,
            "logo_url": "https://cdn.example.com/c21.png",
            "sample_review": None,
        },
        {
            "id": "0d8e2a7c-1111-4a4a-8c8c-222233334444",
            "name": "Kalogirou Real Estate",
            "location": "Larnaca",
            "bazaraki_url": None,
            "website": "https://kalogirou.com",
            "listing_count": 1491,
            "google_rating": 4.8,
            "google_reviews_count": 389,
            "sample_review": "Very professional team.",
        },
    ]


@pytest.fixture
def mock_supabase():
    """Mock Supabase client whose query builder chains back to itself."""
    mock_client = MagicMock()

    mock_query = MagicMock()
    for method in ("select", "eq", "ilike", "order", "range", "limit",
                   "insert", "update", "delete"):
        getattr(mock_query, method).return_value = mock_query

    mock_response = MagicMock()
    mock_response.data = []
    mock_query.execute.return_value = mock_response

    mock_client.table.return_value = mock_query
    return mock_client
