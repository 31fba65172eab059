"""
Provider query adapters.

One query per (provider, model): check the credential, send the prompt
through a completion capability, normalize the reply. The completion
capability is a plain callable, so tests and alternative transports can
be swapped in without touching the engine:

    complete(target, api_key, prompt) -> raw reply text

It raises ProviderError for transport problems. Retries and timeouts
belong to the SDK client underneath, not here.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import anthropic
import groq
import openai

from models import Business, FailureReason, ModelResult, ProviderOutcome, QueryFailure, QueryTarget
from .errors import ProviderError
from .normalize import normalize_response
from .prompts import SYSTEM_PROMPT, build_query_prompt


logger = logging.getLogger(__name__)

CompletionFn = Callable[[QueryTarget, str, str], str]
CredentialFn = Callable[[str], Optional[str]]

# All three SDKs share the same error root for connection, timeout and status errors
SDK_ERRORS = (openai.APIError, anthropic.APIError, groq.APIError)


@dataclass
class QuerySettings:
    """Request parameters shared by every provider family."""
    temperature: float = 0.3
    max_tokens: int = 500
    system_prompt: str = SYSTEM_PROMPT


def chat_completion(client, model: str, prompt: str, settings: QuerySettings) -> str:
    """OpenAI-style chat completion (OpenAI, Groq and OpenAI-compatible endpoints)."""
    resp = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": settings.system_prompt},
            {"role": "user", "content": prompt},
        ],
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    return resp.choices[0].message.content or ""


def messages_completion(client, model: str, prompt: str, settings: QuerySettings) -> str:
    """Anthropic messages API - system prompt goes in its own parameter."""
    resp = client.messages.create(
        model=model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
        system=settings.system_prompt,
        messages=[{"role": "user", "content": prompt}],
    )
    return "".join(block.text for block in resp.content if getattr(block, "type", None) == "text")


FAMILY_ADAPTERS = {
    "openai": chat_completion,
    "groq": chat_completion,
    "anthropic": messages_completion,
}


class LiveCompletion:
    """
    Completion capability backed by the real provider SDKs.

    Dispatches on the provider's family from the registry in config.
    """

    def __init__(self, registry: Optional[dict] = None, settings: Optional[QuerySettings] = None,
                 client_factory: Optional[Callable] = None):
        # config imports this package, so resolve its helpers lazily
        from config import PROVIDER_REGISTRY, get_client

        self.registry = registry if registry is not None else PROVIDER_REGISTRY
        self.settings = settings or QuerySettings()
        self.client_factory = client_factory or get_client

    def __call__(self, target: QueryTarget, api_key: str, prompt: str) -> str:
        spec = self.registry.get(target.provider_id)
        if spec is None:
            raise ProviderError("Unknown provider", target.provider_id, target.model_id)

        adapter = FAMILY_ADAPTERS.get(spec.family)
        if adapter is None:
            raise ProviderError(f"Unsupported provider family '{spec.family}'",
                                target.provider_id, target.model_id)

        try:
            client = self.client_factory(spec, api_key)
            return adapter(client, target.model_id, prompt, self.settings)
        except SDK_ERRORS as e:
            raise ProviderError(str(e), target.provider_id, target.model_id) from e
        except (IndexError, AttributeError) as e:
            raise ProviderError(f"Malformed completion payload: {e}",
                                target.provider_id, target.model_id) from e


def query_target(
    target: QueryTarget,
    business: Business,
    complete: CompletionFn,
    credentials: CredentialFn,
) -> ProviderOutcome:
    """
    Run one query and return a ModelResult or QueryFailure.

    Never raises: this is the task boundary for the fan-out.
    """
    api_key = credentials(target.provider_id)
    if not api_key or not api_key.strip():
        logger.warning("[%s] No credential configured, skipping", target.key)
        return QueryFailure(
            target=target,
            reason=FailureReason.MISSING_CREDENTIAL,
            message=f"No API key configured for {target.provider_id}",
        )

    prompt = build_query_prompt(business)
    try:
        raw = complete(target, api_key, prompt)
        assessment = normalize_response(raw)
    except ProviderError as e:
        logger.warning("[%s] Query failed: %s", target.key, e.message)
        return QueryFailure(target=target, reason=FailureReason.PROVIDER_ERROR, message=e.message)
    except Exception as e:
        logger.exception("[%s] Unexpected error handling reply", target.key)
        return QueryFailure(target=target, reason=FailureReason.PROVIDER_ERROR, message=str(e))

    logger.info("[%s] %s knowledge (%d/100, %s)", target.key, assessment.knowledge_level.value,
                assessment.score, assessment.parse_quality.value)
    return ModelResult(target=target, assessment=assessment)
