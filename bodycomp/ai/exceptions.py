class AIClientError(Exception):
    """Raised when the AI provider returns an unusable reply."""


class AIClientNetworkError(AIClientError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
