"""Thin wrapper over the HF Inference API chat endpoint."""
from __future__ import annotations

import logging
from typing import Optional

from huggingface_hub import InferenceClient

from .errors import ConfigurationError

log = logging.getLogger(__name__)


class HFClient:
    """One chat completion per call. Retrying is the caller's job."""

    def __init__(self, token: Optional[str] = None, timeout: Optional[float] = None):
        self.token = token
        if not self.token:
            raise ConfigurationError("API key not configured")
        self.client = InferenceClient(token=self.token, timeout=timeout)

    def chat_completion(
        self,
        model: str,
        prompt: str,
        max_tokens: int = 2000,
        temperature: float = 0.3,
        stop: Optional[list[str]] = None,
    ) -> str:
        messages = [{"role": "user", "content": prompt}]
        log.debug("chat_completion model=%s max_tokens=%d temperature=%.2f", model, max_tokens, temperature)
        response = self.client.chat_completion(
            messages=messages,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            stop=stop,
        )
        return response.choices[0].message.content or ""
