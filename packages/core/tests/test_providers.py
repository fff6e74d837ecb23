"""Tests for AI provider implementations.

Shared behaviour (model check, prompt → reply → normalize → stamp) lives in
BaseProvider/ChatProvider and is tested once via a lightweight stub. The
provider-specific tests cover only what differs between implementations:
credential checks, the SDK call and how each SDK's reply is unwrapped.
"""

import json
import random
from unittest.mock import MagicMock, patch

import pytest
from anthropic import AnthropicError
from anthropic.types import TextBlock
from openai import OpenAIError

from roastlens_core.errors import ProviderNotConfiguredError, UpstreamError, ValidationError
from roastlens_core.models import ModelDescriptor, ReviewRequest
from roastlens_core.prompts import SYSTEM_PROMPT
from roastlens_core.providers import (
    AnthropicProvider,
    ChatProvider,
    MockProvider,
    OpenAIProvider,
    ProviderRegistry,
    build_registry,
)

VALID_JSON = json.dumps({"summary": "Bad.", "score": 12, "verdict": "Guilty.", "roasts": ["Ouch"]})


class _StubProvider(ChatProvider):
    """Minimal concrete subclass used to test the shared ChatProvider flow."""

    provider_id = "stub"
    name = "Stub"
    supported_models = (ModelDescriptor("stub-1", "Stub 1"),)

    def __init__(self, reply=VALID_JSON):
        self.reply = reply
        self.calls = []

    def _call_api(self, system_prompt: str, user_prompt: str, model_id: str) -> str:
        self.calls.append((system_prompt, user_prompt, model_id))
        return self.reply


def make_request(**kwargs):
    defaults = {"code": "def f():\n    pass", "language": "python"}
    defaults.update(kwargs)
    return ReviewRequest(**defaults)


# ---------------------------------------------------------------------------
# Shared behaviour — tested once through the stub, not per provider
# ---------------------------------------------------------------------------


class TestChatProviderReview:
    def test_stamps_provenance(self):
        result = _StubProvider().review(make_request(), "stub-1")
        assert result.provider_id == "stub"
        assert result.model_id == "stub-1"
        assert result.summary == "Bad."
        assert result.score == 12

    def test_sends_system_prompt_and_built_prompt(self):
        provider = _StubProvider()
        provider.review(make_request(context="legacy"), "stub-1")
        system_prompt, user_prompt, model_id = provider.calls[0]
        assert system_prompt == SYSTEM_PROMPT
        assert "def f():" in user_prompt
        assert "legacy" in user_prompt
        assert model_id == "stub-1"

    def test_unsupported_model_rejected_before_call(self):
        provider = _StubProvider()
        with pytest.raises(ValidationError) as exc_info:
            provider.review(make_request(), "gpt-4o")
        assert exc_info.value.reason == "invalid_model"
        assert provider.calls == []

    def test_malformed_reply_still_stamped(self):
        result = _StubProvider(reply="I refuse to answer in JSON.").review(make_request(), "stub-1")
        assert result.summary == "I refuse to answer in JSON."
        assert result.provider_id == "stub"
        assert result.model_id == "stub-1"

    def test_single_call_per_review(self):
        provider = _StubProvider()
        provider.review(make_request(), "stub-1")
        assert len(provider.calls) == 1


# ---------------------------------------------------------------------------
# Provider-specific — only what differs between Anthropic and OpenAI
# ---------------------------------------------------------------------------


class TestOpenAIProvider:
    def _provider_with_client(self, content="{}"):
        provider = OpenAIProvider(api_key="sk-test")
        client = MagicMock()
        choice = MagicMock()
        choice.message.content = content
        client.chat.completions.create.return_value.choices = [choice]
        provider._client = client
        return provider, client

    def test_missing_key_raises_not_configured(self):
        with pytest.raises(ProviderNotConfiguredError) as exc_info:
            OpenAIProvider(api_key=None).review(make_request(), "gpt-4o")
        assert exc_info.value.reason == "provider_not_configured"
        assert "OPENAI_API_KEY" in exc_info.value.message

    def test_raises_import_error_without_sdk(self):
        with patch("roastlens_core.providers.openai._OpenAI", None):
            with pytest.raises(ImportError):
                OpenAIProvider(api_key="sk-test").client

    def test_client_built_lazily_once(self):
        with patch("roastlens_core.providers.openai._OpenAI") as mock_cls:
            provider = OpenAIProvider(api_key="sk-test")
            mock_cls.assert_not_called()
            assert provider.client is provider.client
        mock_cls.assert_called_once_with(api_key="sk-test")

    def test_call_parameters(self):
        provider, client = self._provider_with_client(VALID_JSON)
        result = provider.review(make_request(), "gpt-4o-mini")

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.8
        assert kwargs["max_tokens"] == 4000
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert kwargs["messages"][1]["role"] == "user"
        assert result.provider_id == "openai"
        assert result.score == 12

    def test_empty_content_raises_upstream(self):
        provider, _ = self._provider_with_client(content=None)
        with pytest.raises(UpstreamError, match="No response from OpenAI"):
            provider.review(make_request(), "gpt-4o")

    def test_sdk_error_wrapped(self):
        provider, client = self._provider_with_client()
        client.chat.completions.create.side_effect = OpenAIError("connection reset")
        with pytest.raises(UpstreamError) as exc_info:
            provider.review(make_request(), "gpt-4o")
        assert exc_info.value.reason == "upstream_failed"

    def test_models(self):
        assert [m.id for m in OpenAIProvider.supported_models] == ["gpt-4o", "gpt-4o-mini", "gpt-4-turbo"]


class TestAnthropicProvider:
    def _provider_with_client(self, blocks):
        provider = AnthropicProvider(api_key="sk-ant-test")
        client = MagicMock()
        client.messages.create.return_value.content = blocks
        provider._client = client
        return provider, client

    def test_missing_key_raises_not_configured(self):
        with pytest.raises(ProviderNotConfiguredError) as exc_info:
            AnthropicProvider(api_key="").review(make_request(), "claude-3-5-haiku-20241022")
        assert "ANTHROPIC_API_KEY" in exc_info.value.message

    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError):
                AnthropicProvider(api_key="sk-ant-test").client

    def test_call_parameters(self):
        provider, client = self._provider_with_client([TextBlock(type="text", text=VALID_JSON)])
        result = provider.review(make_request(), "claude-sonnet-4-20250514")

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-sonnet-4-20250514"
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["temperature"] == 0.8
        assert kwargs["max_tokens"] == 4000
        assert kwargs["messages"][0]["role"] == "user"
        assert result.provider_id == "anthropic"
        assert result.verdict == "Guilty."

    def test_text_blocks_joined(self):
        half = len(VALID_JSON) // 2
        blocks = [TextBlock(type="text", text=VALID_JSON[:half]), TextBlock(type="text", text=VALID_JSON[half:])]
        provider, _ = self._provider_with_client(blocks)
        assert provider.review(make_request(), "claude-3-5-haiku-20241022").score == 12

    def test_no_text_block_raises_upstream(self):
        provider, _ = self._provider_with_client([MagicMock()])
        with pytest.raises(UpstreamError, match="Unexpected response type"):
            provider.review(make_request(), "claude-3-5-haiku-20241022")

    def test_sdk_error_wrapped(self):
        provider, client = self._provider_with_client([])
        client.messages.create.side_effect = AnthropicError("overloaded")
        with pytest.raises(UpstreamError):
            provider.review(make_request(), "claude-3-5-haiku-20241022")


class TestMockProvider:
    def _provider(self, seed=7):
        self.sleeps = []
        return MockProvider(rng=random.Random(seed), sleep=self.sleeps.append)

    def test_sleeps_within_delay_window(self):
        self._provider().review(make_request(), "mock-roaster")
        assert len(self.sleeps) == 1
        assert 1.5 <= self.sleeps[0] <= 2.5

    def test_three_line_code_gets_at_most_three_issues(self):
        for seed in range(20):
            result = self._provider(seed).review(make_request(code="a = 1\nb = 2\nc = 3"), "mock-roaster")
            assert len(result.issues) <= 3
            assert 20 <= result.score <= 80

    def test_trailing_newline_does_not_add_an_issue(self):
        for seed in range(20):
            result = self._provider(seed).review(make_request(code="a = 1\nb = 2\nc = 3\n"), "mock-roaster")
            assert len(result.issues) <= 3
        single = self._provider().review(make_request(code="x = 1\n"), "mock-roaster")
        assert len(single.issues) == 1

    def test_single_line_gets_one_issue(self):
        result = self._provider().review(make_request(code="x = 1"), "mock-roaster")
        assert len(result.issues) == 1

    def test_long_code_capped_at_four_issues(self):
        result = self._provider().review(make_request(code="\n".join(["x"] * 50)), "mock-roaster")
        assert len(result.issues) == 4

    def test_result_shape(self):
        result = self._provider().review(make_request(), "mock-roaster")
        assert result.provider_id == "mock"
        assert result.model_id == "mock-roaster"
        assert len(result.highlight_quotes) == 4
        assert len(result.improvements) == 4
        assert len(result.positives) == 1
        assert result.verdict
        assert "python" in result.summary

    def test_positives_depend_on_score(self):
        for seed in range(20):
            result = self._provider(seed).review(make_request(), "mock-roaster")
            if result.score > 50:
                assert "syntax is valid" in result.positives[0]
            else:
                assert "file extension" in result.positives[0]

    def test_seeded_runs_are_reproducible(self):
        first = self._provider(42).review(make_request(), "mock-roaster")
        second = self._provider(42).review(make_request(), "mock-roaster")
        assert first == second


class TestProviderRegistry:
    def test_build_registry_without_keys(self):
        registry = build_registry({})
        assert registry.ids() == ["openai", "anthropic", "mock"]

    def test_mock_can_be_disabled(self):
        registry = build_registry({"enable_mock": False})
        assert not registry.is_valid_provider("mock")

    def test_keys_passed_to_providers(self):
        registry = build_registry({"openai_api_key": "sk-o", "anthropic_api_key": "sk-a"})
        assert registry.get("openai").api_key == "sk-o"
        assert registry.get("anthropic").api_key == "sk-a"

    def test_get_unknown_provider(self):
        with pytest.raises(ValidationError) as exc_info:
            ProviderRegistry().get("gemini")
        assert exc_info.value.reason == "invalid_provider"

    def test_unknown_provider_lists_available_ids(self):
        with pytest.raises(ValidationError) as exc_info:
            build_registry({}).get("gemini")
        assert exc_info.value.message == "Invalid provider: gemini. Available: openai, anthropic, mock"

    def test_is_valid_model(self):
        registry = build_registry({})
        assert registry.is_valid_model("openai", "gpt-4o")
        assert registry.is_valid_model("mock", "mock-roaster")
        assert not registry.is_valid_model("openai", "mock-roaster")
        assert not registry.is_valid_model("gemini", "gpt-4o")

    def test_describe(self):
        described = dict((pid, (name, models)) for pid, name, models in build_registry({}).describe())
        assert described["anthropic"][0] == "Anthropic"
        assert described["mock"][1][0].id == "mock-roaster"
