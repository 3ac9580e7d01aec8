"""Audio Pipeline - speech-to-text for chat input and text-to-speech playback."""

from __future__ import annotations

import logging

from career_coach.audio.pcm import TTS_CHANNELS, TTS_SAMPLE_RATE, pcm16_to_float
from career_coach.audio.player import AudioPlayer
from career_coach.audio.recorder import AudioClip
from career_coach.clients.genai_client import GenAIClient

logger = logging.getLogger(__name__)


class AudioService:
    def __init__(self, llm: GenAIClient, player: AudioPlayer | None = None):
        self.llm = llm
        self.player = player or AudioPlayer()
        self.generating = False

    async def transcribe(self, clip: AudioClip) -> str:
        """Send the recording, unchanged and with its mime type, for transcription."""
        text = await self.llm.transcribe_audio(clip.data, clip.mime_type)
        logger.info("Transcribed %d bytes of %s into %d chars", len(clip.data), clip.mime_type, len(text))
        return text

    async def speak(self, text: str) -> bool:
        """Synthesize and play ``text``. Ignored (False) while audio is busy.

        Speech always arrives as 16-bit LE mono PCM at 24 kHz, whatever the
        microphone settings are.
        """
        if self.player.is_playing or self.generating or not text or not text.strip():
            return False
        self.generating = True
        try:
            pcm = await self.llm.generate_speech(text)
        finally:
            self.generating = False
        samples = pcm16_to_float(pcm, TTS_CHANNELS)
        return await self.player.play(samples, TTS_SAMPLE_RATE)
