"""
Configuration and shared utilities for the visibility engine.

- .env loading
- Provider registry: how to reach each provider (SDK family, key, base URL)
- Provider/model table: which models to ask, from providers.yaml or defaults
- Cached SDK clients
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml
from dotenv import load_dotenv

# Pre-import clients so worker threads don't race on first import
from anthropic import Anthropic
from groq import Groq
from openai import OpenAI

from models import ProviderTable
from visibility.errors import ConfigurationError

# Client cache keyed by (provider, api key)
_client_cache: dict = {}

# Load environment variables
load_dotenv()

DEFAULT_PROVIDERS_CONFIG = Path("providers.yaml")
FAMILIES = ("openai", "anthropic", "groq")


@dataclass(frozen=True)
class ProviderSpec:
    """
    How to reach one provider.

    env_keys are tried in order; the first non-empty value wins.
    """
    provider_id: str
    family: str
    env_keys: Tuple[str, ...]
    base_url: Optional[str] = None


PROVIDER_REGISTRY: Dict[str, ProviderSpec] = {
    "chatgpt": ProviderSpec("chatgpt", "openai", ("OPENAI_API_KEY",)),
    "claude": ProviderSpec("claude", "anthropic", ("ANTHROPIC_API_KEY",)),
    "gemini": ProviderSpec("gemini", "openai", ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
                           "https://generativelanguage.googleapis.com/v1beta/openai/"),
    "perplexity": ProviderSpec("perplexity", "openai", ("PERPLEXITY_API_KEY",),
                               "https://api.perplexity.ai"),
    "groq": ProviderSpec("groq", "groq", ("GROQ_API_KEY",)),
    "xai": ProviderSpec("xai", "openai", ("XAI_API_KEY",), "https://api.x.ai/v1"),
    "deepseek": ProviderSpec("deepseek", "openai", ("DEEPSEEK_API_KEY",), "https://api.deepseek.com/v1"),
    "mistral": ProviderSpec("mistral", "openai", ("MISTRAL_API_KEY",), "https://api.mistral.ai/v1"),
}

# The four AI platforms a visibility report covers by default
DEFAULT_PROVIDERS: Dict[str, Tuple[str, ...]] = {
    "chatgpt": ("gpt-4o", "gpt-4o-mini"),
    "claude": ("claude-sonnet-4-5-20250929", "claude-3-5-haiku-20241022"),
    "gemini": ("gemini-1.5-flash", "gemini-1.5-pro"),
    "perplexity": ("sonar", "sonar-pro"),
}


@dataclass
class ProviderConfig:
    """Loaded configuration: the table to query and the registry to reach it."""
    table: ProviderTable
    registry: Dict[str, ProviderSpec] = field(default_factory=lambda: dict(PROVIDER_REGISTRY))


def providers_config_path() -> Path:
    """providers.yaml location, overridable with VISIBILITY_PROVIDERS."""
    return Path(os.environ.get("VISIBILITY_PROVIDERS", str(DEFAULT_PROVIDERS_CONFIG)))


def _parse_provider_entry(provider_id: str, entry, registry: Dict[str, ProviderSpec]) -> Tuple[str, ...]:
    """
    Parse one provider entry, registering a custom spec if given.

    Short form:  chatgpt: [gpt-4o, gpt-4o-mini]
    Long form:   groq: {models: [...], family: groq, env_key: GROQ_API_KEY, base_url: ...}
    """
    if isinstance(entry, list):
        models = entry
    elif isinstance(entry, dict):
        models = entry.get("models") or []
        if any(k in entry for k in ("family", "env_key", "env_keys", "base_url")):
            known = registry.get(provider_id)
            family = entry.get("family") or (known.family if known else "openai")
            if family not in FAMILIES:
                raise ConfigurationError(f"Provider '{provider_id}': unknown family '{family}'")
            env_keys = entry.get("env_keys") or ([entry["env_key"]] if entry.get("env_key") else [])
            registry[provider_id] = ProviderSpec(
                provider_id=provider_id,
                family=family,
                env_keys=tuple(env_keys) or (known.env_keys if known else ()),
                base_url=entry.get("base_url") or (known.base_url if known else None),
            )
    else:
        raise ConfigurationError(f"Provider '{provider_id}': expected a list of models or a mapping")

    if not isinstance(models, list) or not all(isinstance(m, str) and m.strip() for m in models):
        raise ConfigurationError(f"Provider '{provider_id}': models must be a list of model ids")
    if not models:
        raise ConfigurationError(f"Provider '{provider_id}': no models configured")
    return tuple(m.strip() for m in models)


def parse_provider_config(data: Mapping) -> ProviderConfig:
    """Build a ProviderConfig from already-loaded YAML data."""
    providers = data.get("providers") if isinstance(data, Mapping) else None
    if not isinstance(providers, Mapping) or not providers:
        raise ConfigurationError("Config must contain a non-empty 'providers' mapping")

    registry = dict(PROVIDER_REGISTRY)
    table = {str(pid): _parse_provider_entry(str(pid), entry, registry) for pid, entry in providers.items()}
    return ProviderConfig(table=ProviderTable.from_mapping(table), registry=registry)


def load_provider_config(path: Optional[Path] = None) -> ProviderConfig:
    """
    Load the provider table from YAML.

    Falls back to DEFAULT_PROVIDERS when no file exists at the path.
    """
    path = Path(path) if path else providers_config_path()
    if not path.exists():
        return ProviderConfig(table=ProviderTable.from_mapping(DEFAULT_PROVIDERS))

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    return parse_provider_config(data)


def get_credential(provider_id: str, registry: Optional[Dict[str, ProviderSpec]] = None) -> Optional[str]:
    """API key for a provider from the environment, None if missing or blank."""
    spec = (registry or PROVIDER_REGISTRY).get(provider_id)
    if spec is None:
        return None
    for env_key in spec.env_keys:
        value = os.environ.get(env_key, "").strip()
        if value:
            return value
    return None


def credentials_for(registry: Dict[str, ProviderSpec]):
    """Credential lookup bound to a specific registry."""
    def lookup(provider_id: str) -> Optional[str]:
        return get_credential(provider_id, registry)
    return lookup


def get_client(spec: ProviderSpec, api_key: str):
    """Get or create a cached SDK client for a provider."""
    cache_key = (spec.provider_id, spec.base_url, api_key)
    if cache_key in _client_cache:
        return _client_cache[cache_key]

    if spec.family == "anthropic":
        client = Anthropic(api_key=api_key)
    elif spec.family == "groq":
        client = Groq(api_key=api_key)
    elif spec.family == "openai":
        client = OpenAI(api_key=api_key, base_url=spec.base_url) if spec.base_url else OpenAI(api_key=api_key)
    else:
        raise ValueError(f"Unknown provider family: {spec.family}")

    _client_cache[cache_key] = client
    return client
