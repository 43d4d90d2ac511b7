from fastapi import APIRouter, Request

from music_service.config import BUILD_TAG

router = APIRouter()


@router.get("/health", tags=["meta"])
@router.get("/api/health", tags=["meta"])
def health(request: Request):
    primary = request.app.state.primary_provider
    secondaries = request.app.state.secondary_providers
    return {
        "ok": True,
        "build": BUILD_TAG,
        "primary_configured": bool(getattr(primary, "configured", primary is not None)),
        "secondary_models": [p.name for p in secondaries],
    }
