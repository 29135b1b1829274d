import json

from gptwire.api import HttpMethod
from gptwire.speech import (
    CreateSpeechRequest,
    SpeechModel,
    SpeechResponseFormat,
    SpeechVoice,
    create_speech,
)

BASE = "https://api.example.com/v1"


def test_create_speech_call_shape():
    call = create_speech(
        CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
    )
    assert call.method == HttpMethod.POST
    assert call.url(BASE) == BASE + "/audio/speech"
    assert call.headers("v2")["Content-Type"] == "application/json"
    assert "OpenAI-Beta" not in call.headers("v2")
    assert call.parse is None


def test_body_has_required_fields():
    request = CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
    params = json.loads(json.dumps(create_speech(request).body))
    for name in ("model", "input", "voice"):
        assert name in params
    assert params == {"model": "tts-1", "input": "Hello!", "voice": "alloy"}


def test_optional_fields_sent_when_set():
    request = CreateSpeechRequest(
        model="tts-1-hd",
        input="Hi",
        voice="nova",
        response_format=SpeechResponseFormat.FLAC,
        speed=1.5,
    )
    assert request.to_dict() == {
        "model": "tts-1-hd",
        "input": "Hi",
        "voice": "nova",
        "response_format": "flac",
        "speed": 1.5,
    }


def test_enum_members_serialise_to_wire_values():
    request = CreateSpeechRequest(
        model=SpeechModel.CANARY,
        input="Hi",
        voice=SpeechVoice.SHIMMER,
        response_format=SpeechResponseFormat.PCM,
    )
    params = json.loads(json.dumps(create_speech(request).body))
    assert params == {
        "model": "canary-tts",
        "input": "Hi",
        "voice": "shimmer",
        "response_format": "pcm",
    }