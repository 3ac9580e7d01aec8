"""Transcript and the turn loop shared by the screening and consultant chats."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator

from career_coach.clients.genai_client import ChatHandle, GenAIClient
from career_coach.errors import EmptyResponseError, GenAIError, SessionStateError
from career_coach.models.conversation import Message

logger = logging.getLogger(__name__)

EMPTY_REPLY = "..."


class Transcript:
    """Append-only ordered list of chat turns."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, role: str, text: str) -> Message:
        message = Message(role=role, text=text)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def flatten(self) -> str:
        """One ``ROLE: text`` line per turn, the form sent for synthesis."""
        return "\n".join(f"{m.role.upper()}: {m.text}" for m in self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)


class ConversationSession:
    """A chat with optimistic user turns and per-turn failure isolation.

    ``send`` appends the user's message before the network round trip and
    never retracts it; a failed turn only sets ``last_error``.
    """

    error_message = "Erro de comunicação com a IA."

    def __init__(self, llm: GenAIClient):
        self.llm = llm
        self.transcript = Transcript()
        self.draft = ""
        self.busy = False
        self.last_error: str | None = None
        self._chat: ChatHandle | None = None
        self._inflight: asyncio.Task | None = None
        self._cancelled = False

    @property
    def is_open(self) -> bool:
        return self._chat is not None

    def append_to_draft(self, text: str) -> str:
        """Add transcribed speech to the pending input without sending it."""
        text = text.strip()
        if text:
            self.draft = f"{self.draft} {text}" if self.draft else text
        return self.draft

    async def send(self, text: str | None = None) -> Message | None:
        """Send ``text`` (or the pending draft). Returns the model reply, if any.

        The draft is consumed only once its turn is appended; an ignored send
        leaves it pending.
        """
        from_draft = text is None
        if from_draft:
            text = self.draft
        if not text or not text.strip() or self.busy:
            return None
        if self._chat is None:
            raise SessionStateError("Chat session is not open")

        if from_draft:
            self.draft = ""
        self.transcript.append("user", text)
        return await self._exchange(text)

    async def _exchange(self, text: str, empty_reply: str = EMPTY_REPLY) -> Message | None:
        """Run one network round trip and append the reply on success."""
        self.busy = True
        self.last_error = None
        self._cancelled = False
        self._inflight = asyncio.ensure_future(self.llm.send_turn(self._chat, text))
        try:
            response = await self._inflight
            reply = response.text
        except EmptyResponseError:
            logger.warning("Empty chat reply; recording placeholder")
            reply = empty_reply
        except GenAIError as e:
            logger.error("Chat turn failed: %s", e)
            self.last_error = self.error_message
            return None
        except asyncio.CancelledError:
            if not self._cancelled:
                raise
            logger.info("Chat turn cancelled")
            self.last_error = "Envio cancelado."
            return None
        finally:
            self.busy = False
            self._inflight = None
        return self.transcript.append("model", reply)

    def cancel(self) -> bool:
        """Abort the in-flight turn, keeping the user's message recorded."""
        if self._inflight is None or self._inflight.done():
            return False
        self._cancelled = True
        return self._inflight.cancel()
