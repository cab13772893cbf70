"""Errors raised by agent data sources."""


class AgentSourceError(Exception):
    """Base class for a source that could not produce agents."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class SourceUnavailable(AgentSourceError):
    """Network, auth or backend failure reaching a source."""


class EmptyResult(AgentSourceError):
    """Source answered but returned no records."""


class ParseFailure(AgentSourceError):
    """Source returned data that could not be decoded or transformed."""
