"""Data-access errors."""


class DataFetchError(Exception):
    """
    A query against the collector tables failed.

    Raised by repositories for connectivity and query errors; the original
    driver exception is chained as ``__cause__``. Never raised for empty
    results.
    """

    def __init__(self, source: str, cause: BaseException | None = None) -> None:
        self.source = source
        message = f"Failed to fetch {source} data"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
