"""Exclusive playback of decoded samples."""

from __future__ import annotations

import asyncio
import logging

import numpy as np

from career_coach.audio.recorder import load_sounddevice
from career_coach.errors import DeviceError

logger = logging.getLogger(__name__)


class AudioPlayer:
    """One playback at a time; requests made while playing are ignored."""

    def __init__(self) -> None:
        self._playing = False

    @property
    def is_playing(self) -> bool:
        return self._playing

    async def play(self, samples: np.ndarray, sample_rate: int) -> bool:
        """Play to completion. Returns False (and does nothing) if busy."""
        if self._playing:
            logger.debug("Playback already active; request ignored")
            return False
        sd = load_sounddevice()
        self._playing = True
        try:
            await asyncio.to_thread(self._play_blocking, sd, samples, sample_rate)
        finally:
            self._playing = False
        return True

    @staticmethod
    def _play_blocking(sd, samples: np.ndarray, sample_rate: int) -> None:
        try:
            sd.play(samples, samplerate=sample_rate)
            sd.wait()
        except Exception as e:
            raise DeviceError(f"Erro ao reproduzir áudio: {e}") from e
