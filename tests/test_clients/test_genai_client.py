"""Tests for GenAIClient (Gemini API wrapper)."""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from google.genai import errors

from career_coach.clients.genai_client import GenAIClient, LLMResponse
from career_coach.errors import (
    AuthError,
    ConfigurationError,
    EmptyResponseError,
    NetworkError,
)

CLIENT_PATH = "career_coach.clients.genai_client.genai.Client"


def _make_api_response(
    text: str | None,
    input_tokens: int = 100,
    output_tokens: int = 50,
    candidates: list | None = None,
) -> MagicMock:
    """Build a mock GenerateContentResponse-like object."""
    response = MagicMock()
    response.text = text
    response.usage_metadata.prompt_token_count = input_tokens
    response.usage_metadata.candidates_token_count = output_tokens
    response.candidates = candidates or []
    return response


def _grounded_candidate(*pages: tuple[str, str]) -> MagicMock:
    candidate = MagicMock()
    candidate.grounding_metadata.grounding_chunks = [
        MagicMock(web=MagicMock(title=title, uri=uri)) for title, uri in pages
    ]
    return candidate


def _audio_candidate(data) -> MagicMock:
    candidate = MagicMock()
    candidate.grounding_metadata = None
    candidate.content.parts = [MagicMock(inline_data=MagicMock(data=data))]
    return candidate


def _api_error(code: int, message: str) -> errors.APIError:
    return errors.APIError(code, {"error": {"code": code, "message": message, "status": "ERR"}})


@pytest.fixture
def mock_sdk():
    with patch(CLIENT_PATH) as mock_cls:
        sdk = MagicMock()
        sdk.aio.models.generate_content = AsyncMock(return_value=_make_api_response("ok"))
        mock_cls.return_value = sdk
        yield mock_cls, sdk


class TestGenAIClientInit:
    def test_explicit_key_and_timeout(self, mock_sdk):
        mock_cls, _ = mock_sdk
        GenAIClient(api_key="test-key", timeout=30)
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["api_key"] == "test-key"
        assert kwargs["http_options"].timeout == 30000

    def test_key_from_environment(self, mock_sdk, monkeypatch):
        mock_cls, _ = mock_sdk
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        GenAIClient()
        assert mock_cls.call_args.kwargs["api_key"] == "env-key"

    def test_missing_key_raises_configuration_error(self, mock_sdk, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            GenAIClient()


class TestGenerateText:
    async def test_returns_llm_response(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response("olá", input_tokens=100, output_tokens=50)
        )
        llm = GenAIClient(api_key="k")
        result = await llm.generate_text("diga olá")

        assert isinstance(result, LLMResponse)
        assert result.text == "olá"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_search_collects_sources(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response(
                "relatório",
                candidates=[_grounded_candidate(("Glassdoor", "https://glassdoor.com/x"))],
            )
        )
        llm = GenAIClient(api_key="k")
        result = await llm.generate_text("mercado", use_search=True)

        config = sdk.aio.models.generate_content.call_args.kwargs["config"]
        assert config.tools[0].google_search is not None
        assert [s.uri for s in result.sources] == ["https://glassdoor.com/x"]

    async def test_empty_text_raises(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(return_value=_make_api_response("  "))
        llm = GenAIClient(api_key="k")
        with pytest.raises(EmptyResponseError):
            await llm.generate_text("prompt")

    async def test_blank_prompt_rejected(self, mock_sdk):
        llm = GenAIClient(api_key="k")
        with pytest.raises(ValueError):
            await llm.generate_text("")


class TestGenerateStructured:
    async def test_schema_sent_as_response_schema(self, mock_sdk):
        _, sdk = mock_sdk
        schema = {"type": "OBJECT", "properties": {"a": {"type": "STRING"}}}
        llm = GenAIClient(api_key="k")
        await llm.generate_structured("prompt", schema)

        kwargs = sdk.aio.models.generate_content.call_args.kwargs
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].tools is None

    async def test_search_embeds_schema_in_prompt(self, mock_sdk):
        _, sdk = mock_sdk
        schema = {"type": "OBJECT", "properties": {"salaryMarker": {"type": "NUMBER"}}}
        llm = GenAIClient(api_key="k")
        await llm.generate_structured("prompt", schema, use_search=True)

        kwargs = sdk.aio.models.generate_content.call_args.kwargs
        assert "salaryMarker" in kwargs["contents"]
        assert kwargs["config"].response_schema is None
        assert kwargs["config"].tools


class TestChat:
    async def test_open_chat_and_send_turn(self, mock_sdk):
        _, sdk = mock_sdk
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=_make_api_response("Bem-vindo!"))
        sdk.aio.chats.create.return_value = chat

        llm = GenAIClient(api_key="k", model="gemini-test")
        handle = llm.open_chat("Você é um consultor.")
        reply = await llm.send_turn(handle, "Olá")

        assert handle.model == "gemini-test"
        assert sdk.aio.chats.create.call_args.kwargs["config"].system_instruction == "Você é um consultor."
        chat.send_message.assert_awaited_once_with("Olá")
        assert reply.text == "Bem-vindo!"

    def test_open_chat_requires_instruction(self, mock_sdk):
        llm = GenAIClient(api_key="k")
        with pytest.raises(ValueError):
            llm.open_chat("  ")


class TestErrorTranslation:
    @pytest.mark.parametrize("code", [401, 403])
    async def test_auth_codes(self, mock_sdk, code):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(side_effect=_api_error(code, "denied"))
        llm = GenAIClient(api_key="k")
        with pytest.raises(AuthError):
            await llm.generate_text("prompt")

    async def test_invalid_key_message_is_auth(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            side_effect=_api_error(400, "API key not valid. Please pass a valid API key.")
        )
        llm = GenAIClient(api_key="k")
        with pytest.raises(AuthError):
            await llm.generate_text("prompt")

    async def test_server_error_is_network(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(side_effect=_api_error(503, "overloaded"))
        llm = GenAIClient(api_key="k")
        with pytest.raises(NetworkError):
            await llm.generate_text("prompt")

    async def test_transport_error_is_network(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(side_effect=httpx.ConnectError("offline"))
        llm = GenAIClient(api_key="k")
        with pytest.raises(NetworkError):
            await llm.generate_text("prompt")

    async def test_no_retry_by_default(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        llm = GenAIClient(api_key="k")
        with pytest.raises(NetworkError):
            await llm.generate_text("prompt")
        assert sdk.aio.models.generate_content.await_count == 1

    async def test_retries_network_errors_when_configured(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            side_effect=[httpx.ConnectError("offline"), _make_api_response("ok")]
        )
        llm = GenAIClient(api_key="k", max_attempts=2)
        with patch("asyncio.sleep", new=AsyncMock()):
            result = await llm.generate_text("prompt")
        assert result.text == "ok"
        assert sdk.aio.models.generate_content.await_count == 2

    async def test_auth_errors_not_retried(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(side_effect=_api_error(401, "denied"))
        llm = GenAIClient(api_key="k", max_attempts=3)
        with pytest.raises(AuthError):
            await llm.generate_text("prompt")
        assert sdk.aio.models.generate_content.await_count == 1


class TestAudio:
    async def test_transcribe_sends_bytes_with_mime_type(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response("  olá mundo \n")
        )
        llm = GenAIClient(api_key="k")
        text = await llm.transcribe_audio(b"RIFFdata", "audio/wav")

        assert text == "olá mundo"
        part = sdk.aio.models.generate_content.call_args.kwargs["contents"][0]
        assert part.inline_data.data == b"RIFFdata"
        assert part.inline_data.mime_type == "audio/wav"

    async def test_transcribe_empty_audio_rejected(self, mock_sdk):
        llm = GenAIClient(api_key="k")
        with pytest.raises(ValueError):
            await llm.transcribe_audio(b"", "audio/wav")

    async def test_speech_returns_raw_bytes(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response(None, candidates=[_audio_candidate(b"\x01\x02")])
        )
        llm = GenAIClient(api_key="k", tts_model="tts-test", voice="Kore")
        pcm = await llm.generate_speech("Resumo do plano")

        assert pcm == b"\x01\x02"
        kwargs = sdk.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "tts-test"
        assert kwargs["config"].response_modalities == ["AUDIO"]
        voice = kwargs["config"].speech_config.voice_config.prebuilt_voice_config.voice_name
        assert voice == "Kore"

    async def test_speech_decodes_base64_payload(self, mock_sdk):
        _, sdk = mock_sdk
        payload = base64.b64encode(b"\x00\x40").decode()
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response(None, candidates=[_audio_candidate(payload)])
        )
        llm = GenAIClient(api_key="k")
        assert await llm.generate_speech("oi") == b"\x00\x40"

    async def test_speech_without_audio_raises(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(return_value=_make_api_response(None))
        llm = GenAIClient(api_key="k")
        with pytest.raises(EmptyResponseError):
            await llm.generate_speech("oi")


class TestTokenSummary:
    async def test_summary_accumulates_and_resets(self, mock_sdk):
        _, sdk = mock_sdk
        sdk.aio.models.generate_content = AsyncMock(
            return_value=_make_api_response("r", input_tokens=10, output_tokens=5)
        )
        llm = GenAIClient(api_key="k")
        await llm.generate_text("um")
        await llm.generate_text("dois")

        summary = llm.get_token_summary()
        assert summary["input"] == 20
        assert summary["output"] == 10
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []
