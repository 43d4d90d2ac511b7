"""Remote music providers: ElevenLabs (primary) and Hugging Face inference models (secondary)."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from music_service import config
from music_service.utils.io import sniff_mime


class ProviderError(Exception):
    """An upstream provider could not produce audio."""


@dataclass
class ProviderAudio:
    payload: bytes
    mime_type: str
    source: str


# Request body keys for the options forwarded verbatim to the primary provider
PASSTHROUGH_OPTIONS = {
    "modelId": "model_id",
    "forceInstrumental": "force_instrumental",
    "respectSectionsDurations": "respect_sections_durations",
    "storeForInpainting": "store_for_inpainting",
    "signWithC2pa": "sign_with_c2pa",
}


def _http_error_message(provider: str, response: requests.Response) -> str:
    status = response.status_code
    detail = response.text[:200] if response.text else ""
    if status == 401:
        return f"{provider}: Invalid API key or unauthorized"
    if status == 402:
        return f"{provider}: Payment Required - music generation needs a paid subscription, upgrade your plan"
    if status == 429:
        return f"{provider}: rate limit exceeded, try again later"
    if status == 404:
        return f"{provider}: music endpoint not found or model not available"
    return f"{provider}: request failed with status {status}" + (f" ({detail})" if detail else "")


class ElevenLabsMusicProvider:
    """Primary tier. Returns MP3 audio from the ElevenLabs music endpoint."""

    name = "elevenlabs"

    def __init__(self, api_key: str = None, base_url: str = None, timeout: float = None):
        self.api_key = config.ELEVENLABS_API_KEY if api_key is None else api_key
        self.base_url = (base_url or config.ELEVENLABS_BASE_URL).rstrip("/")
        self.timeout = config.PRIMARY_TIMEOUT_S if timeout is None else timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str, music_length_ms: Optional[int] = None,
                 options: Optional[Dict[str, Any]] = None) -> ProviderAudio:
        if not self.api_key:
            raise ProviderError("ElevenLabs API key is not configured")

        body: Dict[str, Any] = {"prompt": prompt}
        if music_length_ms is not None:
            body["music_length_ms"] = int(music_length_ms)
        for key, value in (options or {}).items():
            if value is not None:
                body[PASSTHROUGH_OPTIONS.get(key, key)] = value

        try:
            response = requests.post(
                f"{self.base_url}/v1/music",
                json=body,
                headers={"xi-api-key": self.api_key, "Accept": "audio/mpeg"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise ProviderError(f"ElevenLabs request timed out after {self.timeout:.0f}s")
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"ElevenLabs service not available: {e}")

        if response.status_code != 200:
            raise ProviderError(_http_error_message("ElevenLabs", response))
        if not response.content:
            raise ProviderError("ElevenLabs returned an empty audio payload")
        return ProviderAudio(response.content, "audio/mpeg", self.name)


class HuggingFaceMusicProvider:
    """Secondary tier. One hosted text-to-music model on the HF inference API."""

    def __init__(self, model_id: str, api_key: str = None, base_url: str = None,
                 timeout: float = None):
        self.model_id = model_id
        self.api_key = config.HUGGINGFACE_API_KEY if api_key is None else api_key
        self.base_url = (base_url or config.HUGGINGFACE_BASE_URL).rstrip("/")
        self.timeout = config.SECONDARY_TIMEOUT_S if timeout is None else timeout

    @property
    def name(self) -> str:
        return self.model_id

    def generate(self, prompt: str, duration_seconds: int) -> Optional[ProviderAudio]:
        """Return the model's audio, or None when it answers with an empty body."""
        try:
            response = requests.post(
                f"{self.base_url}/models/{self.model_id}",
                json={"inputs": prompt, "parameters": {"duration": duration_seconds}},
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"{self.model_id}: {e}")

        if response.status_code != 200:
            raise ProviderError(_http_error_message(self.model_id, response))
        if not response.content:
            return None
        declared = response.headers.get("Content-Type")
        return ProviderAudio(response.content, sniff_mime(response.content, declared), self.model_id)


def default_secondaries():
    return [HuggingFaceMusicProvider(m) for m in config.SECONDARY_MODELS]
