"""
Catalog Errors
Error taxonomy shared by providers, cache and slices
"""
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for data-access failures"""

    kind = "unknown"


class MissingCredentialError(CatalogError):
    """No API credential configured; the user has to go through setup"""

    kind = "missing_credential"

    def __init__(self, message: str = "API key is required. Please configure your TMDB API key in settings."):
        super().__init__(message)
        self.message = message


class RemoteError(CatalogError):
    """
    Upstream rejected the request.

    Attributes:
        status_code: HTTP status returned by the API
        message: Provider-supplied message, or one derived from the status
    """

    kind = "remote"

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or f"HTTP {status_code}"
        super().__init__(self.message)


class NotFoundError(RemoteError):
    """Valid request, but no such entity"""

    kind = "not_found"

    def __init__(self, message: str = "Movie not found", status_code: int = 404):
        super().__init__(status_code, message)


class NetworkError(CatalogError):
    """Transport failure (connection refused, DNS, timeout...)"""

    kind = "network"

    def __init__(self, message: str = "Network error occurred"):
        super().__init__(message)
        self.message = message


class SerializationError(CatalogError):
    """Cache payload could not be encoded or decoded"""

    kind = "serialization"


def describe_error(exc: BaseException, resource: str = "data") -> Tuple[str, str]:
    """
    Map an exception to a (kind, user-facing message) pair

    Args:
        exc: Exception raised by a provider call
        resource: Resource name used in generic messages

    Returns:
        Tuple of error kind and message
    """
    if isinstance(exc, MissingCredentialError):
        return exc.kind, exc.message
    if isinstance(exc, NotFoundError):
        return exc.kind, exc.message
    if isinstance(exc, RemoteError):
        return exc.kind, exc.message
    if isinstance(exc, NetworkError):
        return exc.kind, "Network error occurred. Please check your connection and try again."

    logger.error(f"Unexpected error while loading {resource}: {exc}", exc_info=exc)
    return "unknown", f"Failed to load {resource}"
