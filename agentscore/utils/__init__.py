# Utils package
from .errors import AgentSourceError, EmptyResult, ParseFailure, SourceUnavailable
from .sources import AgentSource, JsonAgentSource, SupabaseAgentSource

__all__ = [
    'AgentSourceError',
    'EmptyResult',
    'ParseFailure',
    'SourceUnavailable',
    'AgentSource',
    'JsonAgentSource',
    'SupabaseAgentSource',
]
