"""
DomainValidationError - Raised when input breaks a business rule
(blank content, blank session name, bad paging).
Maps to: HTTP 422 Unprocessable Entity
"""

from typing import Optional


class DomainValidationError(Exception):
    """Exception raised for domain validation errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
