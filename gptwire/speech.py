"""Text-to-speech requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from gptwire.api import ApiCall, HttpMethod


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


class SpeechModel(str, Enum):
    """Text-to-speech models."""

    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY = "canary-tts"


class SpeechVoice(str, Enum):
    """Available voices."""

    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    """Audio encodings the server can return."""

    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


@dataclass
class CreateSpeechRequest:
    """Body for generating speech; format defaults to mp3 and speed to 1.0 on the server."""

    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": _value(self.model),
            "input": self.input,
            "voice": _value(self.voice),
        }
        if self.response_format:
            out["response_format"] = _value(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


def create_speech(request: CreateSpeechRequest) -> ApiCall[bytes]:
    """Generate audio; the reply body is raw audio, not JSON."""
    return ApiCall(HttpMethod.POST, "/audio/speech", body=request.to_dict())