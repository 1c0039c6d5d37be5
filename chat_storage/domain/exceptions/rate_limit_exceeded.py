"""
RateLimitExceededError - Raised when a caller exceeds the request ceiling
within the current window.
Maps to: HTTP 429 Too Many Requests
"""


class RateLimitExceededError(Exception):
    """Raised when a user exceeds the configured request ceiling."""

    def __init__(self, max_requests: int, window_seconds: int):
        super().__init__(
            f"Rate limit exceeded. Maximum {max_requests} requests "
            f"per {window_seconds} seconds allowed."
        )
        self.max_requests = max_requests
        self.window_seconds = window_seconds
