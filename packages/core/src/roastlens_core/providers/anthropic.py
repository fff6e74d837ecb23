from __future__ import annotations

from roastlens_core.errors import ProviderNotConfiguredError, UpstreamError
from roastlens_core.models import ModelDescriptor
from roastlens_core.providers.base import ChatProvider


class AnthropicProvider(ChatProvider):
    provider_id = "anthropic"
    name = "Anthropic"
    API_KEY_ENV = "ANTHROPIC_API_KEY"
    supported_models = (
        ModelDescriptor("claude-sonnet-4-20250514", "Claude Sonnet 4", "Latest Sonnet"),
        ModelDescriptor("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", "Balanced performance"),
        ModelDescriptor("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", "Fast and efficient"),
    )

    def __init__(self, api_key: str | None):
        self.api_key = api_key
        self._client = None

    @property
    def client(self):
        if not self.api_key:
            raise ProviderNotConfiguredError(self.provider_id, self.API_KEY_ENV)
        if self._client is None:
            try:
                from anthropic import Anthropic
            except ImportError:
                raise ImportError(
                    "The 'anthropic' package is required for this provider. "
                    "Install it with: pip install 'roastlens[anthropic]'"
                )
            self._client = Anthropic(api_key=self.api_key)
        return self._client

    def _call_api(self, system_prompt: str, user_prompt: str, model_id: str) -> str:
        client = self.client
        # Imported here because the anthropic package is optional; the client
        # property above already verified it is installed.
        from anthropic import AnthropicError
        from anthropic.types import TextBlock

        try:
            response = client.messages.create(
                model=model_id,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except AnthropicError as e:
            raise UpstreamError(f"Anthropic request failed: {e}") from e

        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        if not text_blocks:
            raise UpstreamError("Unexpected response type from Anthropic")
        return "".join(text_blocks).strip()
