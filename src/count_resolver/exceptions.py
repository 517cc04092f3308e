class CountResolverError(Exception):
    """Base exception for the count resolver."""


class ConfigurationError(CountResolverError):
    """Raised when configuration values are missing or invalid."""


class InvalidRequestError(CountResolverError, ValueError):
    """Raised when a resolution request violates its preconditions."""


class InvalidMutationError(CountResolverError, ValueError):
    """Raised when a count mutation cannot be applied."""


class TranscriptionError(CountResolverError):
    """Base exception for the upstream transcription collaborator."""


class TransientTranscriptionError(TranscriptionError):
    """Raised by a transcriber for retryable network/availability failures."""


class TranscriptionFailedError(TranscriptionError):
    """Raised when transcription still fails after all retry attempts."""
