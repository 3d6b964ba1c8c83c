"""Text-to-speech request and endpoint call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from gptkit.request_builder import ApiCall


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"


class InvalidSpeechModelError(ValueError):
    def __init__(self) -> None:
        super().__init__("invalid speech model")


class InvalidVoiceError(ValueError):
    def __init__(self) -> None:
        super().__init__("invalid voice")


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass
class CreateSpeechRequest:
    model: Union[SpeechModel, str] = ""
    input: str = ""
    voice: Union[SpeechVoice, str] = ""
    response_format: Union[SpeechResponseFormat, str] = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Model, input and voice always; format and speed only when set."""
        out: dict[str, Any] = {
            "model": _text(self.model),
            "input": self.input,
            "voice": _text(self.voice),
        }
        if self.response_format:
            out["response_format"] = _text(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


_MODELS = frozenset(member.value for member in SpeechModel)
_VOICES = frozenset(member.value for member in SpeechVoice)


def create_speech(request: CreateSpeechRequest) -> ApiCall:
    """Call that synthesises speech; the reply is raw audio, so nothing is parsed."""
    model = _text(request.model)
    if model not in _MODELS:
        raise InvalidSpeechModelError()
    if _text(request.voice) not in _VOICES:
        raise InvalidVoiceError()
    return ApiCall(
        "POST",
        "/audio/speech",
        body=request.to_dict(),
        headers={"Content-Type": "application/json; charset=utf-8"},
        model=model,
    )