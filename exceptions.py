class ExtractorError(Exception):
    """Base class for every failure raised by the extractor."""


class PortNotFound(ExtractorError):
    """No listening engine port could be discovered."""


class QueryExecutionError(ExtractorError):
    """A query or command against the engine failed.

    The underlying client error is attached as ``__cause__``.
    """

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query


class MalformedRowEncoding(ExtractorError):
    """A row carried a value that could not be decoded."""

    def __init__(self, field: str, symbol: str | None, detail: str):
        where = f" (row '{symbol}')" if symbol else ""
        super().__init__(f"Cannot decode column '{field}'{where}: {detail}")
        self.field = field
        self.symbol = symbol
