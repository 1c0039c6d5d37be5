"""
Domain exception to HTTP mapping shared by the routers.
"""

from fastapi import HTTPException, status

from chat_storage.config.settings import Config
from chat_storage.domain.exceptions import (
    DomainValidationError,
    RateLimitExceededError,
    SessionNotFoundError,
)
from chat_storage.domain.ports.repositories import PageRequest, SortDirection

DOMAIN_ERRORS = (RateLimitExceededError, SessionNotFoundError, DomainValidationError)

_STATUS_BY_ERROR = {
    RateLimitExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    DomainValidationError: 422,
}


def to_http_exception(exc: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    raise exc


def page_request(page: int, size: int, direction: SortDirection) -> PageRequest:
    """Build a PageRequest from query params, enforcing the configured max size."""
    if size > Config.MAX_PAGE_SIZE:
        raise DomainValidationError(
            f"Page size cannot exceed {Config.MAX_PAGE_SIZE}", "size"
        )
    return PageRequest(page=page, size=size, direction=direction)
