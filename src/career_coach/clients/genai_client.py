"""Gemini API wrapper with async support, timeouts and typed failures."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import httpx
from google import genai
from google.genai import errors, types
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from career_coach.audio.pcm import decode_base64_audio
from career_coach.config import resolve_api_key
from career_coach.errors import AuthError, EmptyResponseError, NetworkError
from career_coach.models.market import GroundingSource

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE = "Kore"
DEFAULT_TIMEOUT = 120.0

TRANSCRIBE_PROMPT = (
    "Transcreva o áudio fornecido fielmente para o português do Brasil. "
    "Retorne apenas o texto transcrito, sem formatação ou comentários adicionais."
)

SEARCH_JSON_INSTRUCTION = """

Responda SOMENTE com um único objeto JSON (sem texto antes ou depois) seguindo este schema:
{schema}"""


@dataclass
class LLMResponse:
    """Response from the model including usage metadata and web citations."""

    text: str
    input_tokens: int = 0
    output_tokens: int = 0
    sources: list[GroundingSource] = field(default_factory=list)


@dataclass
class ChatHandle:
    """A stateful chat session opened with a fixed system instruction."""

    chat: Any
    system_instruction: str
    model: str


class GenAIClient:
    """Async Gemini client: chat sessions, schema-constrained calls, audio in/out."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        model: str = DEFAULT_MODEL,
        tts_model: str = DEFAULT_TTS_MODEL,
        voice: str = DEFAULT_VOICE,
        max_attempts: int = 1,
    ):
        key = resolve_api_key(api_key)
        seconds = timeout if timeout is not None else DEFAULT_TIMEOUT
        self.client = genai.Client(
            api_key=key,
            http_options=types.HttpOptions(timeout=int(seconds * 1000)),
        )
        self.model = model
        self.tts_model = tts_model
        self.voice = voice
        self.max_attempts = max_attempts
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def _call_api(self, call: Callable[[], Awaitable[Any]], what: str) -> Any:
        """Run one SDK call, translating failures and retrying NetworkError."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(NetworkError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._translate_errors(call, what)

    @staticmethod
    async def _translate_errors(call: Callable[[], Awaitable[Any]], what: str) -> Any:
        try:
            return await call()
        except errors.APIError as e:
            logger.error("%s failed: %s %s", what, e.code, e.message, exc_info=True)
            message = str(e.message or "")
            if e.code in (401, 403) or "API key" in message:
                raise AuthError(f"{what}: credentials rejected ({e.code})") from e
            raise NetworkError(f"{what}: service error {e.code}: {message}") from e
        except httpx.HTTPError as e:
            logger.error("%s failed: %s", what, e, exc_info=True)
            raise NetworkError(f"{what}: {type(e).__name__}: {e}") from e

    def _record_usage(self, model: str, response: Any) -> tuple[int, int]:
        usage = getattr(response, "usage_metadata", None)
        input_tokens = (usage.prompt_token_count or 0) if usage else 0
        output_tokens = (usage.candidates_token_count or 0) if usage else 0
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        return input_tokens, output_tokens

    def _to_response(self, model: str, response: Any, what: str) -> LLMResponse:
        input_tokens, output_tokens = self._record_usage(model, response)
        text = response.text
        if not text or not text.strip():
            raise EmptyResponseError(f"{what}: no text in response")
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            sources=_grounding_sources(response),
        )

    # --- chat sessions ---

    def open_chat(self, system_instruction: str) -> ChatHandle:
        """Open a stateful chat whose every turn sees ``system_instruction``."""
        if not system_instruction or not system_instruction.strip():
            raise ValueError("system_instruction must be a non-empty string")
        chat = self.client.aio.chats.create(
            model=self.model,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        logger.debug("Chat opened: model=%s", self.model)
        return ChatHandle(chat=chat, system_instruction=system_instruction, model=self.model)

    async def send_turn(self, handle: ChatHandle, text: str) -> LLMResponse:
        """Send one user turn on an open chat and return the model's reply."""
        if not text or not text.strip():
            raise ValueError("text must be a non-empty string")
        logger.debug("Chat turn: model=%s", handle.model)
        response = await self._call_api(
            lambda: handle.chat.send_message(text), "Chat turn"
        )
        return self._to_response(handle.model, response, "Chat turn")

    # --- one-shot generation ---

    async def generate_text(self, prompt: str, *, use_search: bool = False) -> LLMResponse:
        """Free-text generation, optionally grounded on Google Search."""
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string")
        config = types.GenerateContentConfig(tools=[_search_tool()]) if use_search else None
        logger.debug("LLM call: model=%s search=%s", self.model, use_search)
        response = await self._call_api(
            lambda: self.client.aio.models.generate_content(
                model=self.model, contents=prompt, config=config
            ),
            "Text generation",
        )
        return self._to_response(self.model, response, "Text generation")

    async def generate_structured(
        self,
        prompt: str,
        schema: dict,
        *,
        use_search: bool = False,
    ) -> LLMResponse:
        """Request output conforming to ``schema``; returns the raw text.

        The service does not combine a response schema with the search
        tool, so grounded calls carry the schema inside the prompt and the
        caller has to extract JSON from free text.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string")
        if use_search:
            contents = prompt + SEARCH_JSON_INSTRUCTION.format(
                schema=json.dumps(schema, ensure_ascii=False, indent=2)
            )
            config = types.GenerateContentConfig(tools=[_search_tool()])
        else:
            contents = prompt
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )
        logger.debug("LLM structured call: model=%s search=%s", self.model, use_search)
        response = await self._call_api(
            lambda: self.client.aio.models.generate_content(
                model=self.model, contents=contents, config=config
            ),
            "Structured generation",
        )
        return self._to_response(self.model, response, "Structured generation")

    # --- audio ---

    async def transcribe_audio(self, audio: bytes, mime_type: str) -> str:
        """Speech-to-text: the recording goes out unchanged with its mime type."""
        if not audio:
            raise ValueError("audio must not be empty")
        contents = [
            types.Part.from_bytes(data=audio, mime_type=mime_type),
            TRANSCRIBE_PROMPT,
        ]
        response = await self._call_api(
            lambda: self.client.aio.models.generate_content(
                model=self.model, contents=contents
            ),
            "Transcription",
        )
        self._record_usage(self.model, response)
        return (response.text or "").strip()

    async def generate_speech(self, text: str) -> bytes:
        """Text-to-speech: returns raw 16-bit little-endian mono PCM at 24 kHz."""
        if not text or not text.strip():
            raise ValueError("text must be a non-empty string")
        config = types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice),
                ),
            ),
        )
        response = await self._call_api(
            lambda: self.client.aio.models.generate_content(
                model=self.tts_model, contents=text, config=config
            ),
            "Speech synthesis",
        )
        self._record_usage(self.tts_model, response)
        data = _first_inline_data(response)
        if not data:
            raise EmptyResponseError("Speech synthesis: no audio in response")
        if isinstance(data, str):
            return decode_base64_audio(data)
        return bytes(data)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary


def _search_tool() -> types.Tool:
    return types.Tool(google_search=types.GoogleSearch())


def _grounding_sources(response: Any) -> list[GroundingSource]:
    """Collect web citations from grounding metadata, if any."""
    sources: list[GroundingSource] = []
    for candidate in getattr(response, "candidates", None) or []:
        metadata = getattr(candidate, "grounding_metadata", None)
        if metadata is None:
            continue
        for chunk in getattr(metadata, "grounding_chunks", None) or []:
            web = getattr(chunk, "web", None)
            if web is not None and web.uri:
                sources.append(GroundingSource(title=web.title or web.uri, uri=web.uri))
    return sources


def _first_inline_data(response: Any) -> bytes | str | None:
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return inline.data
    return None
