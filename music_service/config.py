"""Configuration and constants for the music service."""
import os

# Primary provider (ElevenLabs music)
ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
ELEVENLABS_BASE_URL = os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io")
PRIMARY_TIMEOUT_S = float(os.getenv("PRIMARY_TIMEOUT_S", "120"))

# Secondary providers (Hugging Face inference models, tried in order)
HUGGINGFACE_API_KEY = os.getenv("HUGGINGFACE_API_KEY", "")
HUGGINGFACE_BASE_URL = os.getenv("HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co")
SECONDARY_TIMEOUT_S = float(os.getenv("SECONDARY_TIMEOUT_S", "120"))
SECONDARY_MODELS = [
    m.strip()
    for m in os.getenv(
        "SECONDARY_MODELS",
        "facebook/musicgen-small,facebook/musicgen-medium,audiocraft/musicgen-small",
    ).split(",")
    if m.strip()
]

# Free-tier ceiling applied to every fallback tier
MAX_FALLBACK_SECONDS = 30
DEFAULT_MUSIC_LENGTH_MS = 30000

BUILD_TAG = os.getenv("BUILD_TAG", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8000"))
