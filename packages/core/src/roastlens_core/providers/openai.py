from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
    from openai import OpenAIError as _OpenAIError
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]
    _OpenAIError = None  # type: ignore[assignment,misc]

from roastlens_core.errors import ProviderNotConfiguredError, UpstreamError
from roastlens_core.models import ModelDescriptor
from roastlens_core.providers.base import ChatProvider


class OpenAIProvider(ChatProvider):
    provider_id = "openai"
    name = "OpenAI"
    API_KEY_ENV = "OPENAI_API_KEY"
    supported_models = (
        ModelDescriptor("gpt-4o", "GPT-4o", "Most capable model"),
        ModelDescriptor("gpt-4o-mini", "GPT-4o Mini", "Fast and efficient"),
        ModelDescriptor("gpt-4-turbo", "GPT-4 Turbo", "Previous generation"),
    )

    def __init__(self, api_key: str | None):
        self.api_key = api_key
        self._client = None

    @property
    def client(self):
        if not self.api_key:
            raise ProviderNotConfiguredError(self.provider_id, self.API_KEY_ENV)
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. Install it with: pip install 'roastlens[openai]'"
            )
        if self._client is None:
            self._client = _OpenAI(api_key=self.api_key)
        return self._client

    def _call_api(self, system_prompt: str, user_prompt: str, model_id: str) -> str:
        client = self.client
        try:
            response = client.chat.completions.create(
                model=model_id,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except _OpenAIError as e:
            raise UpstreamError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("No response from OpenAI")
        return content
