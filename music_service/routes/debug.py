import io
import time

import numpy as np
import soundfile as sf
from fastapi import APIRouter, Request

from music_service.services import orchestrator, wav

router = APIRouter(prefix="/api/debug")


@router.get("/routes", tags=["debug"])
def debug_routes(request: Request):
    items = []
    for r in request.app.router.routes:
        methods = sorted(getattr(r, "methods", None) or ["GET"])
        items.append({"path": getattr(r, "path", ""), "methods": methods})
    return {"count": len(items), "routes": items}


@router.post("/selftest", tags=["debug"])
def debug_selftest():
    # 1-second local synthesis, decoded back to check the container is playable
    t0 = time.time()
    result = orchestrator.synthesize_wav(1)
    header = wav.read_wav_header(result.payload)
    y, sr = sf.read(io.BytesIO(result.payload), dtype="float32")
    return {
        "ok": sr == header.sample_rate and len(y) == header.data_size // 2,
        "ms": int((time.time() - t0) * 1000),
        "samples": int(len(y)),
        "sample_rate": int(sr),
        "rms": float(np.sqrt((y ** 2).mean())),
    }
