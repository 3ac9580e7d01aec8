"""Raw PCM helpers for the speech synthesis payload."""

from __future__ import annotations

import base64
import binascii

import numpy as np

from career_coach.errors import EmptyResponseError

PCM_SCALE = 32768.0
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1


def decode_base64_audio(payload: str) -> bytes:
    """Decode the base64 audio string carried in a response payload."""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EmptyResponseError(f"Audio payload is not valid base64: {e}") from e


def pcm16_to_float(data: bytes, channels: int = TTS_CHANNELS) -> np.ndarray:
    """Signed 16-bit little-endian PCM -> float32 samples in [-1, 1).

    Returns an array shaped ``(frames, channels)``; each value is the
    sample divided by 32768. A trailing partial frame is dropped.
    """
    if channels < 1:
        raise ValueError(f"channels must be >= 1, got {channels}")
    frame_bytes = 2 * channels
    usable = len(data) - (len(data) % frame_bytes)
    samples = np.frombuffer(data[:usable], dtype="<i2")
    return (samples.astype(np.float32) / PCM_SCALE).reshape(-1, channels)
