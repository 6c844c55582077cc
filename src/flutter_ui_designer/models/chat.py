from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class ChatSender(str, Enum):
    user = "user"
    assistant = "assistant"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    id: str
    text: str
    sender: ChatSender
    timestamp: datetime = Field(default_factory=_utcnow)


__all__ = ["ChatMessage", "ChatSender"]
