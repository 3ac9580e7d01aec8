"""Microphone capture into a single WAV clip."""

from __future__ import annotations

import io
import logging
import wave
from dataclasses import dataclass

import numpy as np

from career_coach.errors import DeviceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioClip:
    """A finished recording and the mime type it must be sent with."""

    data: bytes
    mime_type: str = "audio/wav"


def load_sounddevice():
    # PortAudio is loaded at import time; a missing library is a device problem.
    try:
        import sounddevice
    except (ImportError, OSError) as e:
        raise DeviceError(f"Audio device layer unavailable: {e}") from e
    return sounddevice


class MicrophoneRecorder:
    """Start/stop recorder. Chunks are buffered while recording and assembled
    into one WAV blob on stop; the device is released on stop no matter what.
    """

    def __init__(self, sample_rate: int = 16000, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels
        self._stream = None
        self._chunks: list[np.ndarray] = []

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def _on_chunk(self, indata, frames, time, status) -> None:
        if status:
            logger.debug("Input stream status: %s", status)
        self._chunks.append(indata.copy())

    def start(self) -> None:
        if self.is_recording:
            return
        sd = load_sounddevice()
        self._chunks = []
        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="int16",
                callback=self._on_chunk,
            )
            stream.start()
        except Exception as e:
            # PortAudioError, permission and missing-device failures alike
            logger.error("Microphone unavailable", exc_info=True)
            raise DeviceError(f"Permissão de microfone necessária para gravar áudio: {e}") from e
        self._stream = stream
        logger.info("Recording started")

    def stop(self) -> AudioClip:
        if not self.is_recording:
            raise DeviceError("Not recording")
        stream, self._stream = self._stream, None
        try:
            stream.stop()
        finally:
            stream.close()
        chunks, self._chunks = self._chunks, []
        logger.info("Recording stopped: %d chunks", len(chunks))
        return AudioClip(data=self._to_wav(chunks))

    def toggle(self) -> AudioClip | None:
        """Stop if recording (returning the clip), otherwise start."""
        if self.is_recording:
            return self.stop()
        self.start()
        return None

    def _to_wav(self, chunks: list[np.ndarray]) -> bytes:
        if chunks:
            samples = np.concatenate(chunks).astype("<i2")
        else:
            samples = np.zeros((0, self.channels), dtype="<i2")
        buffer = io.BytesIO()
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(self.channels)
            wav.setsampwidth(2)
            wav.setframerate(self.sample_rate)
            wav.writeframes(samples.tobytes())
        return buffer.getvalue()
