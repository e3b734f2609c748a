"""OpenRouter chat-completions client used for flashcard generation.

One blocking round trip per call: no retries and no streaming. Every failure
surfaces as ``UpstreamError``; the ``kind`` attribute tells a transport or HTTP
status failure apart from a response envelope without message content.
"""

from __future__ import annotations

from typing import Optional

import httpx

from app.core.config import OpenRouterSettings
from app.core.errors import UpstreamError
from app.core.logging import get_logger
from app.modules.flashcards.prompts import SYSTEM_PROMPT

logger = get_logger(__name__)

TEMPERATURE = 0.3
MAX_OUTPUT_TOKENS = 2500


class OpenRouterClient:
    """Sends a prompt to the completion endpoint and returns the raw message text.

    Settings are read from the environment on every call unless a settings
    object is passed in. ``transport`` lets tests swap in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Optional[OpenRouterSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _resolve_settings(self) -> OpenRouterSettings:
        return self._settings or OpenRouterSettings()

    def build_payload(self, prompt: str, model: str) -> dict:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "response_format": {"type": "json_object"},
        }

    async def complete(self, prompt: str) -> str:
        cfg = self._resolve_settings()
        url = f"{cfg.base_url.rstrip('/')}/chat/completions"
        # A missing key is sent as-is; the upstream rejects it
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {cfg.api_key or ''}",
            "HTTP-Referer": cfg.referer,
            "X-Title": cfg.app_title,
        }
        payload = self.build_payload(prompt, cfg.model)

        try:
            async with httpx.AsyncClient(
                timeout=cfg.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error("Completion request to %s failed: %s", url, e)
            raise UpstreamError(
                f"AI service failed: could not reach completion API ({e})",
                kind="transport",
            ) from e

        if not response.is_success:
            body = response.text
            logger.error(
                "Completion API returned %s: %s", response.status_code, body
            )
            raise UpstreamError(
                f"AI service failed: API error {response.status_code} {response.reason_phrase}",
                kind="status",
                upstream_status=response.status_code,
                body=body,
            )

        return self._extract_content(response)

    @staticmethod
    def _extract_content(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            logger.error("Completion API returned a non-JSON envelope: %s", response.text)
            raise UpstreamError(
                "AI service failed: response was not valid JSON",
                kind="envelope",
                upstream_status=response.status_code,
                body=response.text,
            )

        content = None
        choices = data.get("choices") if isinstance(data, dict) else None
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            if isinstance(message, dict):
                content = message.get("content")

        if not isinstance(content, str) or not content:
            logger.error("Invalid completion envelope: %s", data)
            raise UpstreamError(
                "AI service failed: response did not contain expected content",
                kind="envelope",
                upstream_status=response.status_code,
                body=response.text,
            )

        logger.debug("Raw completion content: %s", content)
        return content
