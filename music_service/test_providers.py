import pytest
import requests

from music_service.routes.music import status_for_error
from music_service.services import providers
from music_service.services.providers import (
    ElevenLabsMusicProvider,
    HuggingFaceMusicProvider,
    ProviderError,
)
from music_service.utils.io import extension_for, sniff_mime


class FakeResponse:
    def __init__(self, status_code=200, content=b"", headers=None, text=""):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.text = text


class Recorded(list):
    pass


@pytest.fixture
def post(monkeypatch):
    """Record requests.post calls and answer with the queued replies."""
    recorded = Recorded()
    recorded.replies = []

    def fake_post(url, **kwargs):
        recorded.append((url, kwargs))
        reply = recorded.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(providers.requests, "post", fake_post)
    return recorded


def test_primary_without_key_never_calls_network(post):
    with pytest.raises(ProviderError, match="API key"):
        ElevenLabsMusicProvider(api_key="").generate("calm piano")
    assert post == []


def test_primary_forwards_passthrough_options(post):
    post.replies.append(FakeResponse(200, b"ID3mp3data"))
    provider = ElevenLabsMusicProvider(api_key="k", base_url="https://el.test/", timeout=5)
    audio = provider.generate(
        "calm piano", 45000, {"modelId": "music_v1", "forceInstrumental": True, "signWithC2pa": None}
    )
    url, kwargs = post[0]
    assert url == "https://el.test/v1/music"
    assert kwargs["headers"]["xi-api-key"] == "k"
    assert kwargs["timeout"] == 5
    assert kwargs["json"] == {
        "prompt": "calm piano",
        "music_length_ms": 45000,
        "model_id": "music_v1",
        "force_instrumental": True,
    }
    assert audio.payload == b"ID3mp3data"
    assert audio.mime_type == "audio/mpeg"


@pytest.mark.parametrize(
    "status, expected",
    [(401, 401), (402, 402), (429, 429), (404, 404), (503, 500)],
)
def test_primary_http_errors_carry_status_words(post, status, expected):
    post.replies.append(FakeResponse(status, text="nope"))
    with pytest.raises(ProviderError) as exc:
        ElevenLabsMusicProvider(api_key="k").generate("calm piano")
    assert status_for_error(str(exc.value)) == expected


def test_primary_empty_body_is_an_error(post):
    post.replies.append(FakeResponse(200, b""))
    with pytest.raises(ProviderError, match="empty"):
        ElevenLabsMusicProvider(api_key="k").generate("calm piano")


def test_primary_transport_errors_become_provider_errors(post):
    post.replies.append(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ProviderError, match="not available"):
        ElevenLabsMusicProvider(api_key="k").generate("calm piano")


def test_secondary_request_shape(post):
    post.replies.append(FakeResponse(200, b"fLaC....", headers={"Content-Type": "application/octet-stream"}))
    provider = HuggingFaceMusicProvider("facebook/musicgen-small", api_key="hf", base_url="https://hf.test")
    audio = provider.generate("rainy jazz", 30)
    url, kwargs = post[0]
    assert url == "https://hf.test/models/facebook/musicgen-small"
    assert kwargs["json"] == {"inputs": "rainy jazz", "parameters": {"duration": 30}}
    assert kwargs["headers"]["Authorization"] == "Bearer hf"
    assert kwargs["timeout"] == 120
    assert audio.mime_type == "audio/flac"
    assert audio.source == "facebook/musicgen-small"


def test_secondary_empty_body_returns_none(post):
    post.replies.append(FakeResponse(200, b""))
    assert HuggingFaceMusicProvider("m", api_key="hf").generate("x", 5) is None


def test_secondary_failures_raise(post):
    post.replies.append(requests.exceptions.Timeout("slow"))
    post.replies.append(FakeResponse(503, text="loading"))
    provider = HuggingFaceMusicProvider("m", api_key="hf")
    with pytest.raises(ProviderError):
        provider.generate("x", 5)
    with pytest.raises(ProviderError, match="503"):
        provider.generate("x", 5)


@pytest.mark.parametrize(
    "payload, declared, expected",
    [
        (b"RIFF\x00\x00\x00\x00WAVEfmt ", None, "audio/wav"),
        (b"fLaC\x00", None, "audio/flac"),
        (b"OggS\x00", None, "audio/ogg"),
        (b"ID3\x04", None, "audio/mpeg"),
        (b"\xff\xfb\x90", None, "audio/mpeg"),
        (b"whatever", "audio/x-wav", "audio/wav"),
        (b"fLaC", "audio/flac; charset=binary", "audio/flac"),
        (b"fLaC", "audio/x-flac", "audio/flac"),
        (b"\xff\xfb", "audio/mp3", "audio/mpeg"),
        (b"\xff\xfb", "audio/x-mpeg", "audio/mpeg"),
        (b"\x00\x00\x00\x20ftyp", "audio/x-m4a", "audio/mp4"),
        (b"fLaC", "audio/x-unheard-of", "audio/flac"),
        (b"fLaC", "application/json", "audio/flac"),
    ],
)
def test_sniff_mime(payload, declared, expected):
    assert sniff_mime(payload, declared) == expected


@pytest.mark.parametrize(
    "declared, extension",
    [("audio/x-flac", "flac"), ("audio/mp3", "mp3"), ("audio/x-mpeg", "mp3"),
     ("audio/mp4", "m4a"), ("audio/x-wav", "wav"), ("audio/ogg", "ogg")],
)
def test_declared_aliases_get_a_matching_extension(declared, extension):
    assert extension_for(sniff_mime(b"", declared)) == extension
