class CommitGenError(Exception):
    """Base exception for commit-gen errors."""


class PayloadTooLargeError(CommitGenError):
    """Raised when the completion provider rejects a request as too large."""


class ProviderFailureError(CommitGenError):
    """Raised when the completion provider fails for any other reason."""


class ApiKeyMissingError(CommitGenError):
    """Raised when GROQ_API_KEY is not found."""
