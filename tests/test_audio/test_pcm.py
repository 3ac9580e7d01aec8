"""Tests for PCM decoding."""

from __future__ import annotations

import base64
import struct

import numpy as np
import pytest

from career_coach.audio.pcm import PCM_SCALE, decode_base64_audio, pcm16_to_float
from career_coach.errors import EmptyResponseError


class TestPcm16ToFloat:
    def test_known_samples(self):
        values = [0, 16384, -16384, 32767, -32768]
        data = struct.pack("<5h", *values)
        samples = pcm16_to_float(data)

        assert samples.shape == (5, 1)
        assert samples.dtype == np.float32
        np.testing.assert_allclose(samples[:, 0], [v / 32768 for v in values])
        assert samples[1, 0] == 0.5
        assert samples[2, 0] == -0.5
        assert samples[4, 0] == -1.0

    def test_little_endian(self):
        # 0x4000 stored little-endian
        assert pcm16_to_float(b"\x00\x40")[0, 0] == 16384 / PCM_SCALE

    def test_trailing_partial_frame_dropped(self):
        samples = pcm16_to_float(b"\x00\x40\x01")
        assert samples.shape == (1, 1)

    def test_stereo_frames(self):
        data = struct.pack("<4h", 0, 16384, -16384, 32767)
        samples = pcm16_to_float(data, channels=2)
        assert samples.shape == (2, 2)
        assert samples[0, 1] == 0.5
        assert samples[1, 0] == -0.5

    def test_empty(self):
        assert pcm16_to_float(b"").shape == (0, 1)

    def test_invalid_channels(self):
        with pytest.raises(ValueError):
            pcm16_to_float(b"\x00\x00", channels=0)


class TestDecodeBase64Audio:
    def test_decodes(self):
        assert decode_base64_audio(base64.b64encode(b"\x01\x02").decode()) == b"\x01\x02"

    def test_invalid_payload(self):
        with pytest.raises(EmptyResponseError):
            decode_base64_audio("não é base64!")
