# src/watchlist_relay/core/exceptions.py


class RelayError(Exception):
    """
    Base class for every failure the relay reports back to its caller.
    The message is safe to expose; the status code is the HTTP status to return.
    """

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputError(RelayError):
    """Bad method, unparseable body or missing fields. Detected locally."""

    status_code = 400


class MethodNotAllowedError(InputError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class TickerNotFoundError(RelayError):
    status_code = 404

    def __init__(self, ticker: str):
        super().__init__(f"Ticker {ticker} not found in watchlist")
        self.ticker = ticker


class WatchlistLookupError(RelayError):
    """The Notion query failed (network, auth or non-2xx response)."""

    status_code = 500


class DeliveryError(RelayError):
    """The Discord webhook rejected the payload or could not be reached."""

    status_code = 500


class ConfigurationError(ValueError):
    """A required environment variable is missing."""

    pass
