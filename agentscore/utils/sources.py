"""
Agent data sources tried in order by the loader.

Each source fetches raw agent records and turns them into EnrichedAgent
objects. Failures are reported as AgentSourceError subclasses so the loader
can move on to the next source.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from agentscore.models.agent import EnrichedAgent
from agentscore.models.enrichment import enrich_agent, transform_supabase_agent
from agentscore.utils.errors import EmptyResult, ParseFailure, SourceUnavailable

logger = logging.getLogger(__name__)


class AgentSource:
    """Base class for a provider of raw agent records."""

    name = "source"

    def fetch(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def transform(self, record: Dict[str, Any]) -> EnrichedAgent:
        raise NotImplementedError

    def load_agents(self) -> List[EnrichedAgent]:
        """
        Fetch and transform every record.

        Raises:
            SourceUnavailable: Source could not be reached
            EmptyResult: Source returned no records
            ParseFailure: A record could not be turned into an agent
        """
        logger.info(f"Loading agents from {self.name}...")
        records = self.fetch()
        if not records:
            raise EmptyResult(self.name, "no agents returned")
        logger.debug(f"{self.name} returned {len(records)} raw records")

        try:
            return [self.transform(record) for record in records]
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            raise ParseFailure(self.name, f"invalid agent record: {e}") from e


class SupabaseAgentSource(AgentSource):
    """Agents table in Supabase."""

    name = "supabase"

    def __init__(self, db, limit: int = 500):
        """
        Args:
            db: DatabaseClient
            limit: Maximum number of agents to fetch
        """
        self.db = db
        self.limit = limit

    def fetch(self) -> List[Dict[str, Any]]:
        try:
            return self.db.get_agents(limit=self.limit)
        except Exception as e:
            raise SourceUnavailable(self.name, str(e)) from e

    def transform(self, record: Dict[str, Any]) -> EnrichedAgent:
        return transform_supabase_agent(record)

    def get(self, agent_id: str) -> Optional[EnrichedAgent]:
        """Point lookup by agent ID."""
        try:
            record = self.db.get_agent(agent_id)
        except Exception as e:
            raise SourceUnavailable(self.name, str(e)) from e

        if record is None:
            return None
        try:
            return self.transform(record)
        except (ValidationError, ValueError, TypeError) as e:
            raise ParseFailure(self.name, f"invalid agent record: {e}") from e


class JsonAgentSource(AgentSource):
    """Static JSON array of agents, over HTTP or from a local file."""

    name = "json"

    def __init__(self, url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session

    def _is_remote(self) -> bool:
        return self.url.startswith(("http://", "https://"))

    def _read(self) -> str:
        if not self._is_remote():
            try:
                return Path(self.url).read_text(encoding="utf-8")
            except OSError as e:
                raise SourceUnavailable(self.name, f"cannot read {self.url}: {e}") from e

        try:
            response = (self.session or requests).get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(self.name, f"GET {self.url} failed: {e}") from e
        return response.text

    def fetch(self) -> List[Dict[str, Any]]:
        text = self._read()
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ParseFailure(self.name, f"invalid JSON from {self.url}: {e}") from e

        if not isinstance(data, list):
            raise ParseFailure(self.name, f"expected a JSON array from {self.url}")
        return data

    def transform(self, record: Dict[str, Any]) -> EnrichedAgent:
        return enrich_agent(record)
