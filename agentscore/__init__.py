# AgentScore agent directory
__version__ = "1.0.0"

from .loader import AgentLoader
from .models import EnrichedAgent, SAMPLE_AGENTS, enrich_agent, name_hash
from .utils.sources import JsonAgentSource, SupabaseAgentSource

__all__ = [
    'AgentLoader',
    'EnrichedAgent',
    'SAMPLE_AGENTS',
    'enrich_agent',
    'name_hash',
    'JsonAgentSource',
    'SupabaseAgentSource',
]
