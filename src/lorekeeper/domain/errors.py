"""Domain error types."""


class LorekeeperError(Exception):
    """Base class for application errors."""


class UpstreamError(LorekeeperError):
    """A collaborator (text generation, document store) failed."""
