"""Flashcard generation against a hosted completion API.

``generate_flashcards`` runs prompt -> completion -> normalize for one block of
note content. It never raises for bad model output; whether an unreachable API
is tolerated is the caller's choice.
"""

from __future__ import annotations

from typing import Protocol

from app.modules.flashcards.models.flashcards import NormalizationResult
from app.modules.flashcards.normalizer import normalize_response
from app.modules.flashcards.prompts import build_prompt


class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> str: ...


async def generate_flashcards(
    content: str, count: int, client: CompletionClient
) -> NormalizationResult:
    """Generate up to ``count`` flashcards for ``content``.

    Raises ``UpstreamError`` when the completion call itself fails.
    """
    prompt = build_prompt(content, count)
    raw = await client.complete(prompt)
    return normalize_response(raw)
