"""Unit tests for provider query adapters."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import openai
import pytest

from models import FailureReason, KnowledgeLevel, ParseQuality, QueryTarget
from visibility.adapters import (
    LiveCompletion,
    QuerySettings,
    chat_completion,
    messages_completion,
    query_target,
)
from visibility.errors import ProviderError
from visibility.prompts import SYSTEM_PROMPT, build_query_prompt


def chat_response(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


def messages_response(*blocks):
    return SimpleNamespace(content=list(blocks))


class TestQueryTarget:
    """One query: credential check, completion, normalization."""

    TARGET = QueryTarget(provider_id="chatgpt", model_id="gpt-a")

    def test_missing_credential_skips_completion(self, sample_business):
        complete = MagicMock()
        outcome = query_target(self.TARGET, sample_business, complete, lambda pid: None)

        assert outcome.succeeded is False
        assert outcome.reason == FailureReason.MISSING_CREDENTIAL
        assert outcome.target == self.TARGET
        complete.assert_not_called()

    def test_blank_credential_is_missing(self, sample_business):
        complete = MagicMock()
        outcome = query_target(self.TARGET, sample_business, complete, lambda pid: "   ")

        assert outcome.reason == FailureReason.MISSING_CREDENTIAL
        complete.assert_not_called()

    def test_success(self, sample_business, all_keys, json_reply):
        complete = MagicMock(return_value=json_reply(
            mentioned=True, mention_count=2, knowledge_level="Medium", confidence=70,
        ))
        outcome = query_target(self.TARGET, sample_business, complete, all_keys)

        assert outcome.succeeded is True
        assert outcome.provider_id == "chatgpt"
        assert outcome.model_id == "gpt-a"
        assert outcome.assessment.knowledge_level == KnowledgeLevel.MEDIUM
        assert outcome.assessment.score == 71  # 65 + 4 + 2.0
        complete.assert_called_once_with(
            self.TARGET, "key-chatgpt", build_query_prompt(sample_business)
        )

    def test_heuristic_reply_still_succeeds(self, sample_business, all_keys):
        complete = MagicMock(return_value="Yes, a local favourite.")
        outcome = query_target(self.TARGET, sample_business, complete, all_keys)

        assert outcome.succeeded is True
        assert outcome.assessment.parse_quality == ParseQuality.HEURISTIC_FALLBACK

    def test_provider_error_becomes_failure(self, sample_business, all_keys):
        complete = MagicMock(side_effect=ProviderError("rate limited", "chatgpt", "gpt-a"))
        outcome = query_target(self.TARGET, sample_business, complete, all_keys)

        assert outcome.succeeded is False
        assert outcome.reason == FailureReason.PROVIDER_ERROR
        assert outcome.message == "rate limited"

    def test_unexpected_error_becomes_failure(self, sample_business, all_keys):
        complete = MagicMock(side_effect=RuntimeError("socket closed"))
        outcome = query_target(self.TARGET, sample_business, complete, all_keys)

        assert outcome.reason == FailureReason.PROVIDER_ERROR
        assert "socket closed" in outcome.message


class TestFamilyAdapters:
    """Request shape per SDK family."""

    def test_chat_completion(self):
        client = MagicMock()
        client.chat.completions.create.return_value = chat_response("hello")
        settings = QuerySettings(temperature=0.1, max_tokens=50)

        assert chat_completion(client, "gpt-a", "prompt", settings) == "hello"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-a"
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 50
        assert kwargs["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "prompt"},
        ]

    def test_chat_completion_none_content(self):
        client = MagicMock()
        client.chat.completions.create.return_value = chat_response(None)
        assert chat_completion(client, "gpt-a", "prompt", QuerySettings()) == ""

    def test_messages_completion_joins_text_blocks(self):
        client = MagicMock()
        client.messages.create.return_value = messages_response(
            SimpleNamespace(type="text", text="part one, "),
            SimpleNamespace(type="tool_use", id="x"),
            SimpleNamespace(type="text", text="part two"),
        )

        assert messages_completion(client, "claude-a", "prompt", QuerySettings()) == "part one, part two"
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
        assert kwargs["max_tokens"] == 500
        assert kwargs["temperature"] == 0.3


class TestLiveCompletion:
    """Dispatch through the registry with a fake client factory."""

    def test_openai_family(self):
        client = MagicMock()
        client.chat.completions.create.return_value = chat_response('{"mentioned": true}')
        factory = MagicMock(return_value=client)
        complete = LiveCompletion(client_factory=factory)

        text = complete(QueryTarget(provider_id="perplexity", model_id="sonar"), "k", "prompt")

        assert text == '{"mentioned": true}'
        spec, key = factory.call_args.args
        assert spec.provider_id == "perplexity"
        assert spec.base_url == "https://api.perplexity.ai"
        assert key == "k"

    def test_anthropic_family(self):
        client = MagicMock()
        client.messages.create.return_value = messages_response(SimpleNamespace(type="text", text="hi"))
        complete = LiveCompletion(client_factory=lambda spec, key: client)

        assert complete(QueryTarget(provider_id="claude", model_id="claude-a"), "k", "p") == "hi"
        client.chat.completions.create.assert_not_called()

    def test_unknown_provider(self):
        complete = LiveCompletion(client_factory=MagicMock())
        with pytest.raises(ProviderError, match="Unknown provider"):
            complete(QueryTarget(provider_id="nope", model_id="m"), "k", "p")

    @pytest.mark.parametrize("error", [
        openai.APIConnectionError(request=MagicMock()),
        anthropic.APIConnectionError(request=MagicMock()),
    ])
    def test_sdk_errors_wrapped(self, error):
        client = MagicMock()
        client.chat.completions.create.side_effect = error
        client.messages.create.side_effect = error
        complete = LiveCompletion(client_factory=lambda spec, key: client)

        for provider_id in ("chatgpt", "claude"):
            with pytest.raises(ProviderError) as exc_info:
                complete(QueryTarget(provider_id=provider_id, model_id="m"), "k", "p")
            assert exc_info.value.provider_id == provider_id
            assert exc_info.value.__cause__ is error

    def test_empty_choices_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        complete = LiveCompletion(client_factory=lambda spec, key: client)

        with pytest.raises(ProviderError, match="Malformed"):
            complete(QueryTarget(provider_id="chatgpt", model_id="m"), "k", "p")

    def test_sdk_error_through_query_target(self, sample_business, all_keys):
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=MagicMock())
        complete = LiveCompletion(client_factory=lambda spec, key: client)
        target = QueryTarget(provider_id="chatgpt", model_id="gpt-a")

        outcome = query_target(target, sample_business, complete, all_keys)

        assert outcome.reason == FailureReason.PROVIDER_ERROR
        assert outcome.message == "Connection error."
