"""
Agent loader.

Tries each configured source in order, caches the first non-empty result on
the loader and falls back to a built-in sample list when every source fails.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from agentscore.config.settings import Settings, settings as default_settings
from agentscore.models.agent import EnrichedAgent, SAMPLE_AGENTS
from agentscore.utils.errors import AgentSourceError
from agentscore.utils.sources import AgentSource, JsonAgentSource, SupabaseAgentSource
from agentscore.utils.stats import city_statistics

logger = logging.getLogger(__name__)


class AgentLoader:
    """
    Loads the agent directory and answers queries over the cached result.
    """

    def __init__(self, sources: Sequence[AgentSource],
                 fallback: Optional[Sequence[EnrichedAgent]] = None):
        """
        Args:
            sources: Sources tried in order
            fallback: Agents returned when every source fails
        """
        self.sources = list(sources)
        self.fallback = list(SAMPLE_AGENTS if fallback is None else fallback)
        self._cache: Optional[List[EnrichedAgent]] = None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None, db=None) -> "AgentLoader":
        """
        Build the default source chain: Supabase when enabled, then the JSON document.

        Args:
            config: Settings to read (defaults to the global settings)
            db: DatabaseClient to use instead of creating one
        """
        config = config or default_settings
        sources: List[AgentSource] = []

        if config.use_supabase and (db is not None or config.supabase_configured):
            if db is None:
                from agentscore.utils.database import DatabaseClient
                db = DatabaseClient(
                    config.supabase_url,
                    config.supabase_anon_key,
                    timeout=config.request_timeout,
                )
            sources.append(SupabaseAgentSource(db, limit=config.agent_load_limit))

        sources.append(JsonAgentSource(config.agents_json_url, timeout=config.request_timeout))
        return cls(sources)

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    def load(self) -> List[EnrichedAgent]:
        """
        Return the agent directory, loading it on first use.

        Returns:
            Agents from the first source that produced any, or the sample
            list (not cached) when none did
        """
        if self._cache is not None:
            return list(self._cache)

        for source in self.sources:
            try:
                agents = source.load_agents()
            except AgentSourceError as e:
                logger.warning(f"Agent source failed, trying next: {e}")
                continue

            logger.info(f"Loaded {len(agents)} agents from {source.name}")
            self._cache = agents
            return list(self._cache)

        logger.error("All agent sources failed, serving sample data")
        return list(self.fallback)

    def load_by_id(self, agent_id: str) -> Optional[EnrichedAgent]:
        """
        Find one agent by ID or name.

        Point lookups are tried first on sources that support them, then the
        full directory is scanned.

        Args:
            agent_id: Agent ID or exact name

        Returns:
            Matching agent or None
        """
        for source in self.sources:
            lookup = getattr(source, "get", None)
            if lookup is None:
                continue
            try:
                agent = lookup(agent_id)
            except AgentSourceError as e:
                logger.info(f"Agent {agent_id} not found in {source.name}, trying by name... ({e})")
                continue
            if agent is not None:
                return agent

        for agent in self.load():
            if agent.name == agent_id or agent.id == agent_id:
                return agent
        return None

    def get_by_city(self, city: str) -> List[EnrichedAgent]:
        if self._cache is None:
            return []
        return [agent for agent in self._cache if agent.location == city]

    def get_by_name(self, name: str) -> Optional[EnrichedAgent]:
        if self._cache is None:
            return None
        return next((agent for agent in self._cache if agent.name == name), None)

    def city_statistics(self) -> Dict[str, Dict[str, Any]]:
        """Per-city agent count, rating and review totals over the loaded agents."""
        if self._cache is None:
            return {}
        return city_statistics(self._cache)
