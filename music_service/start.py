# music_service/start.py
from __future__ import annotations
import logging
import platform

import uvicorn

from music_service import config


def _log(msg: str) -> None:
    logging.getLogger("uvicorn.error").info(msg)


def _diagnostics():
    _log("=== Startup Diagnostics ===")
    _log(f"Python: {platform.python_version()} on {platform.platform()}")
    _log(f"Build tag: {config.BUILD_TAG}")
    _log(f"ElevenLabs key set: {bool(config.ELEVENLABS_API_KEY)}  timeout={config.PRIMARY_TIMEOUT_S:.0f}s")
    _log(f"Hugging Face key set: {bool(config.HUGGINGFACE_API_KEY)}  models={','.join(config.SECONDARY_MODELS)}")


def main():
    _diagnostics()
    uvicorn.run("music_service.main:app", host="0.0.0.0", port=config.PORT, log_level="info")


if __name__ == "__main__":
    main()
