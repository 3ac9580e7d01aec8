"""Tests for config validation."""

import pytest

from career_coach.config import load_config


class TestConfigValidation:
    def test_valid_defaults(self, tmp_path):
        """Default config passes validation without raising."""
        config = load_config(tmp_path / "missing.yaml")
        assert config.genai.timeout == 120
        assert config.audio.channels == 1

    def test_invalid_timeout(self, tmp_path):
        """timeout of 0 (below minimum of 1) raises ValueError."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("genai:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_max_attempts(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("genai:\n  max_attempts: 10\n")
        with pytest.raises(ValueError, match="max_attempts"):
            load_config(yaml)

    def test_invalid_min_messages(self, tmp_path):
        """min_messages of 0 would allow analysis of an empty transcript."""
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("screening:\n  min_messages: 0\n")
        with pytest.raises(ValueError, match="min_messages"):
            load_config(yaml)

    def test_invalid_channels(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("audio:\n  channels: 6\n")
        with pytest.raises(ValueError, match="channels"):
            load_config(yaml)

    def test_invalid_record_sample_rate(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("audio:\n  record_sample_rate: 100\n")
        with pytest.raises(ValueError, match="record_sample_rate"):
            load_config(yaml)

    def test_unknown_key_raises(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("market:\n  currency: BRL\n")
        with pytest.raises(TypeError):
            load_config(yaml)
