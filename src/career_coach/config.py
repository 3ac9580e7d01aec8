"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from career_coach.errors import ConfigurationError

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


@dataclass(frozen=True)
class GenAIConfig:
    chat_model: str = "gemini-2.5-flash"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    voice_name: str = "Kore"
    timeout: int = 120
    max_attempts: int = 1  # 1 = no automatic retry

    def __post_init__(self):
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"timeout must be between 1 and 600 seconds, got {self.timeout}")
        if not 1 <= self.max_attempts <= 5:
            raise ValueError(f"max_attempts must be between 1 and 5, got {self.max_attempts}")


@dataclass(frozen=True)
class ScreeningConfig:
    min_messages: int = 2

    def __post_init__(self):
        if not 1 <= self.min_messages <= 50:
            raise ValueError(f"min_messages must be between 1 and 50, got {self.min_messages}")


@dataclass(frozen=True)
class MarketConfig:
    country: str = "Brasil"
    fallback_role: str = "Tecnologia"


@dataclass(frozen=True)
class AudioConfig:
    """Microphone capture settings. Speech playback format is fixed."""

    channels: int = 1
    record_sample_rate: int = 16000

    def __post_init__(self):
        if not 8000 <= self.record_sample_rate <= 96000:
            raise ValueError(
                f"record_sample_rate must be between 8000 and 96000, got {self.record_sample_rate}"
            )
        if self.channels not in (1, 2):
            raise ValueError(f"channels must be 1 or 2, got {self.channels}")


@dataclass(frozen=True)
class AppConfig:
    genai: GenAIConfig = field(default_factory=GenAIConfig)
    screening: ScreeningConfig = field(default_factory=ScreeningConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        genai=GenAIConfig(**raw.get("genai", {})),
        screening=ScreeningConfig(**raw.get("screening", {})),
        market=MarketConfig(**raw.get("market", {})),
        audio=AudioConfig(**raw.get("audio", {})),
    )


def resolve_api_key(api_key: str | None = None) -> str:
    """Return the explicit key or the first one set in the environment."""
    if api_key:
        return api_key
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    raise ConfigurationError(
        "Gemini API key required. Set GEMINI_API_KEY (or GOOGLE_API_KEY) or pass api_key."
    )
