"""Provider registry.

Providers are selected at runtime by id from a fixed registry built once
from config and passed to whoever needs it. Building the registry never
touches the network or requires credentials; a provider with no API key is
still listed and fails with ProviderNotConfiguredError only when used.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from roastlens_core.errors import ValidationError
from roastlens_core.models import ModelDescriptor
from roastlens_core.providers.anthropic import AnthropicProvider
from roastlens_core.providers.base import BaseProvider, ChatProvider
from roastlens_core.providers.mock import MockProvider
from roastlens_core.providers.openai import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "BaseProvider",
    "ChatProvider",
    "MockProvider",
    "OpenAIProvider",
    "ProviderRegistry",
    "build_registry",
]


@dataclass
class ProviderRegistry:
    providers: dict[str, BaseProvider] = field(default_factory=dict)

    def get(self, provider_id: str) -> BaseProvider:
        provider = self.providers.get(provider_id)
        if provider is None:
            raise ValidationError(
                f"Invalid provider: {provider_id}. Available: {', '.join(self.ids())}",
                reason="invalid_provider",
                field="provider",
            )
        return provider

    def ids(self) -> list[str]:
        return list(self.providers)

    def is_valid_provider(self, provider_id: str) -> bool:
        return provider_id in self.providers

    def is_valid_model(self, provider_id: str, model_id: str) -> bool:
        provider = self.providers.get(provider_id)
        return provider is not None and provider.supports_model(model_id)

    def describe(self) -> list[tuple[str, str, tuple[ModelDescriptor, ...]]]:
        """Return ``(id, display name, models)`` for every registered provider."""
        return [(pid, p.name, p.supported_models) for pid, p in self.providers.items()]


def build_registry(config: dict) -> ProviderRegistry:
    providers: dict[str, BaseProvider] = {
        OpenAIProvider.provider_id: OpenAIProvider(api_key=config.get("openai_api_key")),
        AnthropicProvider.provider_id: AnthropicProvider(api_key=config.get("anthropic_api_key")),
    }
    if config.get("enable_mock", True):
        providers[MockProvider.provider_id] = MockProvider()
    return ProviderRegistry(providers)
