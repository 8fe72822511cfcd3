"""Exceptions for the loader workflow."""


class LoaderError(Exception):
    """Base exception for loader-related errors."""

    pass


class ItemNotFoundError(LoaderError):
    """Raised when an item load resolves to an empty result.

    Only raised when the loader's not-found policy is enabled. Controllers
    are expected to translate this into a 404-style response, which is why
    the error carries an HTTP-like ``code``.

    Attributes:
        code: Numeric error code, always 404.
    """

    code = 404

    def __init__(self, message: str = "Item not found from loader"):
        super().__init__(message)
        self.message = message


class QueryHandleError(LoaderError):
    """Raised when the build hook leaves the query building context empty.

    Listeners and execution hooks rely on a usable query handle, so the
    workflow stops before dispatching anything.
    """

    pass
