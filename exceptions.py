"""Error types shared by the generation and publishing pipeline."""


class InvalidArgumentError(ValueError):
    """Raised when caller input is unusable. Never retried."""


class PublishAttemptError(RuntimeError):
    """A single publish attempt failed and may be retried."""
