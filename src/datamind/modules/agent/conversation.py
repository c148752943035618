"""
DataMind Agent - Conversation State.

A single linear message log plus the busy flag that serializes turns.

The busy flag is checked and set synchronously, before the first await, so
within one event loop at most one turn per conversation is ever in flight and
the log order always equals submission order.
"""

import logging
from collections.abc import Awaitable, Callable

from datamind.core.ids import IdGenerator
from datamind.exceptions import ConversationBusyException, ValidationException
from datamind.modules.agent.schemas import ChatMessage, ChatTurnResult

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello! Upload a CSV file and I will analyze it for you."
CONNECTION_ERROR_MESSAGE = "Sorry, I had trouble connecting to the brain."

Responder = Callable[[tuple[ChatMessage, ...], str], Awaitable[ChatTurnResult]]


def append_message(log: tuple[ChatMessage, ...], message: ChatMessage) -> tuple[ChatMessage, ...]:
    """Return a new log with ``message`` at the end."""
    return (*log, message)


class ConversationState:
    """Owns the message log and the processing flag for one session."""

    def __init__(self, ids: IdGenerator):
        self._ids = ids
        self._messages: tuple[ChatMessage, ...] = ()
        self._busy = False
        self.reset()

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self._messages

    @property
    def busy(self) -> bool:
        return self._busy

    def reset(self) -> None:
        """Clear the log and seed it with the welcome message."""
        if self._busy:
            raise ConversationBusyException()
        self._messages = (ChatMessage(id="welcome", role="model", content=WELCOME_MESSAGE),)

    def acquire(self) -> None:
        """Mark the conversation busy, rejecting if it already is."""
        if self._busy:
            raise ConversationBusyException()
        self._busy = True

    def release(self) -> None:
        self._busy = False

    def add_message(self, role: str, content: str, related_chart=None) -> ChatMessage:
        message = ChatMessage(
            id=self._ids.next("msg"),
            role=role,
            content=content,
            related_chart=related_chart,
        )
        self._messages = append_message(self._messages, message)
        return message

    async def submit_user_message(self, text: str, responder: Responder) -> tuple[ChatMessage, ChatMessage]:
        """
        Run one conversational turn.

        Appends the user message, marks the conversation busy, awaits
        ``responder(previous_log, text)`` and appends the model reply. The busy
        flag is cleared whatever the outcome.

        Raises:
            ConversationBusyException: a turn is already in flight (nothing appended)
            ValidationException: blank message (nothing appended)
        """
        if self._busy:
            raise ConversationBusyException()
        if not text.strip():
            raise ValidationException("Message must not be empty")

        history = self._messages
        self.acquire()
        try:
            user_message = self.add_message("user", text)
            try:
                result = await responder(history, text)
            except Exception as e:
                logger.error(f"[chat] Turn failed outside the analysis contract: {e}")
                result = ChatTurnResult(text=CONNECTION_ERROR_MESSAGE, failed=True)

            reply = self.add_message("model", result.text, related_chart=result.chart)
            return user_message, reply
        finally:
            self.release()


__all__ = [
    "CONNECTION_ERROR_MESSAGE",
    "ConversationState",
    "WELCOME_MESSAGE",
    "append_message",
]
