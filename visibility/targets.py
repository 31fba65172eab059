"""
Flatten a provider table into query targets.
"""

from models import ProviderTable, QueryTarget
from .errors import ConfigurationError


def enumerate_targets(table: ProviderTable) -> list[QueryTarget]:
    """Every (provider, model) pair in table order. No filtering."""
    targets = [
        QueryTarget(provider_id=provider_id, model_id=model_id)
        for provider_id, models in table.providers.items()
        for model_id in models
    ]
    if not targets:
        raise ConfigurationError("Provider table has no models to query")
    return targets
