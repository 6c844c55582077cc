from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import List

from .models.chat import ChatMessage, ChatSender

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to the chat! How can I help you with your design?"
REPLY_DELAY_SECONDS = 1.0


def simulated_reply(text: str) -> str:
    return f'I received your message: "{text}". This is a simulated response.'


class ChatSession:
    """Document-level chat log with a simulated assistant.

    Replies are delayed tasks owned by the session. ``close`` cancels any that
    are still pending, and a closed session never appends again.
    """

    def __init__(self, *, reply_delay: float = REPLY_DELAY_SECONDS) -> None:
        self._reply_delay = reply_delay
        self._messages: List[ChatMessage] = [
            ChatMessage(id="welcome-message", text=WELCOME_TEXT, sender=ChatSender.assistant)
        ]
        self._pending: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_replies(self) -> int:
        return len(self._pending)

    def messages(self) -> list[ChatMessage]:
        return [message.model_copy() for message in self._messages]

    def append(self, text: str, sender: ChatSender) -> ChatMessage | None:
        if self._closed:
            logger.debug("Dropped chat message for closed session", extra={"sender": sender.value})
            return None
        message = ChatMessage(id=self._generate_id(), text=text, sender=sender)
        self._messages.append(message)
        return message

    def send(self, text: str) -> ChatMessage | None:
        """Append the user's message and schedule the assistant reply.

        Must be called from a running event loop when a reply is expected;
        without one the user message is still recorded.
        """
        message = self.append(text, ChatSender.user)
        if message is None:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; assistant reply skipped")
            return message
        task = loop.create_task(self._reply_later(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return message

    async def _reply_later(self, text: str) -> None:
        await asyncio.sleep(self._reply_delay)
        self.append(simulated_reply(text), ChatSender.assistant)

    def close(self) -> None:
        self._closed = True
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    def _generate_id(self) -> str:
        return f"msg-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


__all__ = ["ChatSession", "REPLY_DELAY_SECONDS", "WELCOME_TEXT", "simulated_reply"]
