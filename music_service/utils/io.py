from __future__ import annotations
import time

_MAGIC = (
    (b"fLaC", "audio/flac"),
    (b"OggS", "audio/ogg"),
    (b"ID3", "audio/mpeg"),
)

# Non-canonical names providers put in Content-Type
_ALIASES = {
    "audio/x-wav": "audio/wav",
    "audio/wave": "audio/wav",
    "audio/vnd.wave": "audio/wav",
    "audio/x-flac": "audio/flac",
    "audio/mp3": "audio/mpeg",
    "audio/x-mp3": "audio/mpeg",
    "audio/x-mpeg": "audio/mpeg",
    "audio/mpeg3": "audio/mpeg",
    "audio/x-mpeg-3": "audio/mpeg",
    "audio/vorbis": "audio/ogg",
    "audio/x-m4a": "audio/mp4",
    "audio/x-aac": "audio/aac",
    "audio/x-aiff": "audio/aiff",
}

EXTENSIONS = {
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/flac": "flac",
    "audio/ogg": "ogg",
    "audio/opus": "opus",
    "audio/webm": "webm",
    "audio/mp4": "m4a",
    "audio/aac": "aac",
    "audio/aiff": "aiff",
}


def sniff_mime(payload: bytes, declared: str | None = None) -> str:
    """Best guess at the content type of an audio payload."""
    if declared:
        declared = declared.split(";")[0].strip().lower()
        declared = _ALIASES.get(declared, declared)
        if declared in EXTENSIONS:
            return declared
    if payload[:4] == b"RIFF" and payload[8:12] == b"WAVE":
        return "audio/wav"
    for magic, mime in _MAGIC:
        if payload.startswith(magic):
            return mime
    # bare MPEG frames and anything unrecognised
    return "audio/mpeg"


def extension_for(mime_type: str) -> str:
    return EXTENSIONS.get(mime_type, "bin")


def timestamped_filename(extension: str, stem: str = "generated-music") -> str:
    return f"{stem}-{int(time.time() * 1000)}.{extension}"
