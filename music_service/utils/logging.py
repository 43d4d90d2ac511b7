"""Logging utilities and structured logging helpers."""
import logging

from music_service.config import LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

log = logging.getLogger("music_service")


def short(prompt: str, limit: int = 50) -> str:
    return f"{prompt[:limit]}{'...' if len(prompt) > limit else ''}"


# Structured logging helpers
def log_request(prompt: str, music_length_ms: int):
    """Log incoming music generation request."""
    log.info(f"[REQUEST] Prompt: '{short(prompt)}' | Length: {music_length_ms}ms")


def log_provider(tier: str, source: str, action: str, detail: str = ""):
    """Log a provider attempt or outcome."""
    log.info(f"[{tier.upper()}] {action}: {source}" + (f" | {detail}" if detail else ""))


def log_tier(tier: str, source: str, size: int):
    """Log which tier ultimately served the response."""
    log.info(f"[SERVED] tier={tier} source={source} | {size} bytes")


def log_fail(source: str, reason: str):
    """Log failed operations."""
    log.warning(f"[FAIL] {source} | Reason: {reason}")
