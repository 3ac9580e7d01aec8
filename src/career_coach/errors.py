"""Exception taxonomy shared across the package."""

from __future__ import annotations


class CareerCoachError(Exception):
    """Base class for every error raised by career_coach."""


class ConfigurationError(CareerCoachError):
    """Missing credential or invalid setup; blocks the conversational flow."""


class GenAIError(CareerCoachError):
    """Failure talking to the generative service."""


class AuthError(GenAIError):
    """The service rejected the credentials."""


class NetworkError(GenAIError):
    """Transport failure, timeout or server-side error."""


class EmptyResponseError(GenAIError):
    """The service answered without any text or audio payload."""


class JsonExtractionError(CareerCoachError, ValueError):
    """No JSON object could be recovered from a model response."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class DeviceError(CareerCoachError):
    """Microphone or speaker unavailable, or permission denied."""


class ScreeningTooShortError(CareerCoachError):
    """Analysis requested before enough of the interview was exchanged."""

    def __init__(self, messages: int, minimum: int):
        super().__init__(
            f"Screening has {messages} message(s); at least {minimum} required"
        )
        self.messages = messages
        self.minimum = minimum


class SessionStateError(CareerCoachError):
    """Operation not allowed in the session's current state."""
