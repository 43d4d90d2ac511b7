"""Tiered music generation: primary provider, secondary models, then local synthesis."""
from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from music_service.config import DEFAULT_MUSIC_LENGTH_MS, MAX_FALLBACK_SECONDS
from music_service.services import synth, wav
from music_service.utils.io import extension_for
from music_service.utils.logging import log, log_fail, log_provider, log_request, log_tier


class InvalidInput(ValueError):
    """The request cannot be served; no provider was contacted."""


class Tier(str, enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    LOCAL_SYNTHESIS = "local"


@dataclass
class GenerationResult:
    payload: bytes
    mime_type: str
    tier: Tier
    source: str

    @property
    def used_fallback(self) -> bool:
        return self.tier is not Tier.PRIMARY

    @property
    def extension(self) -> str:
        return extension_for(self.mime_type)


def validate_prompt(prompt: Any) -> str:
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidInput("Please provide a text prompt describing the music you want to generate")
    return prompt


def requested_length_ms(music_length_ms: Any) -> Optional[int]:
    """Whole milliseconds from whatever the caller sent, None when unusable."""
    if music_length_ms is None or isinstance(music_length_ms, bool):
        return None
    try:
        return int(float(music_length_ms))
    except (TypeError, ValueError, OverflowError):
        log_fail("request", f"ignoring musicLengthMs={music_length_ms!r}")
        return None


def synthesize_wav(duration_seconds: int) -> GenerationResult:
    samples = synth.synthesize(duration_seconds)
    blob = wav.encode_wav(samples, synth.SAMPLE_RATE)
    return GenerationResult(blob, "audio/wav", Tier.LOCAL_SYNTHESIS, "synth")


def _try_secondaries(prompt: str, seconds: int, secondaries: Iterable) -> Optional[GenerationResult]:
    for provider in secondaries:
        log_provider("secondary", provider.name, "Attempting", f"duration={seconds}s")
        try:
            audio = provider.generate(prompt, seconds)
        except Exception as e:
            log_fail(provider.name, str(e))
            continue
        if audio is None or not audio.payload:
            log_fail(provider.name, "empty payload")
            continue
        log_provider("secondary", provider.name, "Succeeded", f"{len(audio.payload)} bytes {audio.mime_type}")
        return GenerationResult(audio.payload, audio.mime_type, Tier.SECONDARY, audio.source)
    return None


def generate(
    prompt: Any,
    music_length_ms: Any = None,
    options: Optional[Dict[str, Any]] = None,
    primary=None,
    secondaries: Iterable = (),
) -> GenerationResult:
    """Produce audio for ``prompt``; only an invalid prompt raises."""
    prompt = validate_prompt(prompt)
    music_length_ms = requested_length_ms(music_length_ms)
    length_ms = DEFAULT_MUSIC_LENGTH_MS if music_length_ms is None else music_length_ms
    log_request(prompt, length_ms)

    if primary is not None:
        log_provider("primary", primary.name, "Attempting")
        try:
            audio = primary.generate(prompt, music_length_ms, options)
        except Exception as e:
            log_fail(primary.name, f"{e}; trying fallback")
        else:
            if audio is not None and audio.payload:
                log_provider("primary", primary.name, "Succeeded")
                result = GenerationResult(audio.payload, audio.mime_type, Tier.PRIMARY, audio.source)
                log_tier(result.tier.value, result.source, len(result.payload))
                return result
            log_fail(primary.name, "empty payload; trying fallback")

    seconds = synth.clamp_duration(length_ms, MAX_FALLBACK_SECONDS)
    try:
        result = _try_secondaries(prompt, seconds, secondaries)
    except Exception as e:
        log.error(f"[SECONDARY] Fallback loop aborted: {e}")
        result = None

    if result is None:
        log_provider("local", "synth", "Synthesizing", f"duration={seconds}s")
        result = synthesize_wav(seconds)

    log_tier(result.tier.value, result.source, len(result.payload))
    return result
