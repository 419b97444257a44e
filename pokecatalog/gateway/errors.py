# ABOUTME: Typed failures raised by the remote gateway and the favorites backends.
# ABOUTME: Distinguishes transport problems from missing resources and storage failures.


class CatalogError(Exception):
    """Base class for every failure the catalog reports to its callers."""


class TransportError(CatalogError):
    """The remote source could not be reached: network failure, timeout or server error."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(TransportError):
    """The remote source answered, but the body did not match the expected schema."""


class NotFoundError(CatalogError):
    """The remote source explicitly reported that the resource does not exist."""

    def __init__(self, message: str, status: int = 404) -> None:
        super().__init__(message)
        self.status = status


class PersistenceError(CatalogError):
    """Local favorites storage could not be read or written."""
