"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by presentation layer.
Presentation layer maps them to HTTP status codes.
"""

from chat_storage.domain.exceptions.session_not_found import SessionNotFoundError
from chat_storage.domain.exceptions.rate_limit_exceeded import RateLimitExceededError
from chat_storage.domain.exceptions.validation_error import DomainValidationError

__all__ = [
    "SessionNotFoundError",
    "RateLimitExceededError",
    "DomainValidationError",
]
