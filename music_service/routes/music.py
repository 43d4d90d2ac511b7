"""Music generation route."""
import traceback
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from music_service.models.schemas import MusicGenerateRequest
from music_service.services import orchestrator
from music_service.services.orchestrator import InvalidInput
from music_service.utils.io import timestamped_filename
from music_service.utils.logging import log

router = APIRouter(prefix="/api/music")

# Substrings of upstream error messages and the status they map to, checked in order
_STATUS_RULES = (
    (401, ("API key",)),
    (402, ("Payment Required", "paid subscription", "upgrade your plan")),
    (429, ("rate limit",)),
    (404, ("not available", "endpoint not found")),
)


def status_for_error(message: str) -> int:
    for status, needles in _STATUS_RULES:
        if any(n in message for n in needles):
            return status
    return 500


@router.post("/generate", tags=["music"])
def generate_music(request: Request, payload: Optional[MusicGenerateRequest] = None):
    """Generate music for a prompt, falling back until some tier produces audio."""
    app = request.app
    # a missing body is a missing prompt
    if payload is None:
        payload = MusicGenerateRequest()
    try:
        result = orchestrator.generate(
            payload.prompt,
            payload.music_length_ms,
            payload.provider_options(),
            primary=app.state.primary_provider,
            secondaries=app.state.secondary_providers,
        )
    except InvalidInput as e:
        return JSONResponse(status_code=400, content={"error": "Prompt is required", "message": str(e)})
    except Exception as e:
        message = str(e) or "An error occurred while generating music"
        log.error(f"[API] Music generation error: {message}\n{traceback.format_exc()}")
        return JSONResponse(
            status_code=status_for_error(message),
            content={"error": "Failed to generate music", "message": message},
        )

    headers = {
        "Content-Disposition": f'attachment; filename="{timestamped_filename(result.extension)}"',
        "X-Music-Tier": result.tier.value,
    }
    if result.used_fallback:
        headers["X-Music-Source"] = "fallback"
    # Response sets Content-Length from the body
    return Response(content=result.payload, media_type=result.mime_type, headers=headers)
