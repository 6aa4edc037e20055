"""Error taxonomy shared by the ingestion pipeline and the favorites store."""


class ResourceDirectoryError(Exception):
    """Base class for failures surfaced to callers."""


class SourceUnavailable(ResourceDirectoryError):
    """Raised when an upstream source cannot be fetched or read."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class ParseFailure(SourceUnavailable):
    """Raised when an upstream payload is malformed as a whole."""


class PersistenceFailure(ResourceDirectoryError):
    """Raised when the favorites store cannot be read or written."""
