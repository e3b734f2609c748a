from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.base import get_session
from app.modules.auth import get_current_user_id
from app.modules.flashcards.generator import CompletionClient


async def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


async def get_persist_degraded(request: Request) -> bool:
    return request.app.state.settings.generation.persist_degraded


Session = Annotated[AsyncSession, Depends(get_session)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
Completion = Annotated[CompletionClient, Depends(get_completion_client)]
PersistDegraded = Annotated[bool, Depends(get_persist_degraded)]
