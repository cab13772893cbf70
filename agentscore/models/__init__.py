# Models package
from .agent import AgentType, EnrichedAgent, Service, SAMPLE_AGENTS
from .enrichment import (
    enrich_agent,
    generate_rating,
    generate_review_count,
    generate_services,
    generate_tags,
    name_hash,
    transform_supabase_agent,
)

__all__ = [
    'AgentType',
    'EnrichedAgent',
    'Service',
    'SAMPLE_AGENTS',
    'enrich_agent',
    'generate_rating',
    'generate_review_count',
    'generate_services',
    'generate_tags',
    'name_hash',
    'transform_supabase_agent',
]
