"""Base providers implementing the Template Method pattern.

All providers share the same roast algorithm:
    review() → _complete()          ← raw reply text, differs per provider
             → parse_response()
             → stamp provider_id / model_id

Chat-style backends extend ChatProvider, whose _complete builds the prompt
and delegates the single network call to _call_api:
    _complete() → build_prompt() → _call_api()   ← only this differs per vendor

There are no retries: a failed call raises UpstreamError to the caller.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod

from roastlens_core.errors import ValidationError
from roastlens_core.models import ModelDescriptor, ReviewRequest, ReviewResult
from roastlens_core.prompts import SYSTEM_PROMPT, build_prompt
from roastlens_core.response import parse_response

logger = logging.getLogger(__name__)

TEMPERATURE = 0.8
MAX_TOKENS = 4000


class BaseProvider(ABC):
    provider_id: str = ""
    name: str = ""
    supported_models: tuple[ModelDescriptor, ...] = ()

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def review(self, request: ReviewRequest, model_id: str) -> ReviewResult:
        """Roast ``request.code`` with ``model_id`` and return a stamped result.

        The normalizer never fails, so the only exceptions out of here are
        ValidationError (unknown model), ProviderNotConfiguredError and
        UpstreamError.
        """
        if not self.supports_model(model_id):
            raise ValidationError(f"Invalid model for {self.provider_id}: {model_id}", reason="invalid_model")

        raw = self._complete(request, model_id)
        result = parse_response(raw)
        return dataclasses.replace(result, provider_id=self.provider_id, model_id=model_id)

    def supports_model(self, model_id: str) -> bool:
        return any(m.id == model_id for m in self.supported_models)

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _complete(self, request: ReviewRequest, model_id: str) -> str:
        """Return the raw reply text for one roast."""


class ChatProvider(BaseProvider):
    TEMPERATURE: float = TEMPERATURE
    MAX_TOKENS: int = MAX_TOKENS

    def _complete(self, request: ReviewRequest, model_id: str) -> str:
        prompt = build_prompt(request)
        logger.debug("%s: sending %d-char prompt to %s", self.__class__.__name__, len(prompt), model_id)
        return self._call_api(SYSTEM_PROMPT, prompt, model_id)

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, model_id: str) -> str:
        """Make a single API call and return the raw text response.

        Raise ProviderNotConfiguredError before touching the network when the
        credential is missing, and UpstreamError for transport failures.
        """
