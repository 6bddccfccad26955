"""Conversation state for one browser session.

Independent of NiceGUI so it can be driven and tested without a page.
"""

import logging
from collections.abc import Awaitable, Callable

from fee_chat.models.schemas import Message, Sender
from fee_chat.ui.client import Attachment, ChatClientError, post_chat_message

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Sorry, something went wrong."

Poster = Callable[[str, Attachment | None], Awaitable[str]]


class TranscriptController:
    """Holds the transcript and drives one request per send.

    While a reply is awaited further sends are refused. Clearing the
    transcript starts a new generation; a reply that arrives for an older
    generation is dropped.

    Args:
        poster: Coroutine sending a message and attachment, returning the reply.
        on_change: Called whenever visible state changes.
        on_error: Called with a short description when a request fails.
    """

    def __init__(
        self,
        poster: Poster = post_chat_message,
        on_change: Callable[[], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.messages: list[Message] = []
        self.input_text: str = ""
        self.attachment: Attachment | None = None
        self.awaiting_reply: bool = False
        self._poster = poster
        self._on_change = on_change or (lambda: None)
        self._on_error = on_error or (lambda _: None)
        self._generation = 0

    @property
    def can_send(self) -> bool:
        has_content = bool(self.input_text.strip()) or self.attachment is not None
        return has_content and not self.awaiting_reply

    def attach(self, name: str, content: bytes) -> None:
        """Select a file, replacing any previous selection."""
        self.attachment = Attachment(name=name, content=content)
        self._on_change()

    def clear(self) -> None:
        """Start a new conversation, dropping any selected file."""
        self._generation += 1
        self.messages.clear()
        self.attachment = None
        self.awaiting_reply = False
        self._on_change()

    async def send(self) -> None:
        """Send the current input and attachment, then record the reply.

        Failures never propagate: the transcript gets the fallback message
        instead and the controller is ready for the next send.
        """
        if not self.can_send:
            return

        text = self.input_text
        attachment = self.attachment
        generation = self._generation

        self.messages.append(Message(sender=Sender.USER, content=text))
        self.input_text = ""
        self.attachment = None
        self.awaiting_reply = True
        self._on_change()

        try:
            reply = await self._poster(text, attachment)
        except ChatClientError as e:
            logger.warning(f"Chat request failed: {e}")
            self._on_error(str(e))
            reply = FALLBACK_MESSAGE
        except Exception:
            logger.exception("Unexpected error while sending chat message")
            self._on_error("Unexpected error")
            reply = FALLBACK_MESSAGE
        finally:
            if generation == self._generation:
                self.awaiting_reply = False

        if generation != self._generation:
            return

        self.messages.append(Message(sender=Sender.ASSISTANT, content=reply))
        self._on_change()
