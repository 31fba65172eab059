"""
Error types for the visibility engine.

Only configuration problems are raised to the caller. Per-model problems
are converted to QueryFailure outcomes inside the adapter.
"""


class VisibilityError(Exception):
    """Base for all engine errors."""


class ConfigurationError(VisibilityError):
    """Provider/model configuration is unusable (empty table, bad YAML)."""


class ProviderError(VisibilityError):
    """
    Transport-level failure talking to a provider.

    Raised by completion functions for network, timeout and HTTP errors.
    """

    def __init__(self, message: str, provider_id: str = "", model_id: str = ""):
        super().__init__(message)
        self.message = message
        self.provider_id = provider_id
        self.model_id = model_id

    def __str__(self) -> str:
        if self.provider_id:
            return f"{self.provider_id}/{self.model_id}: {self.message}"
        return self.message
