import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from music_service.routes import debug as debug_routes
from music_service.routes import health as health_routes
from music_service.routes import music as music_routes
from music_service.services.providers import ElevenLabsMusicProvider, default_secondaries

LG = logging.getLogger("uvicorn.error")


def create_app(primary=None, secondaries=None) -> FastAPI:
    app = FastAPI(title="Invisible Interface Music", version="1.0")

    # Providers are the only thing requests share, and they hold no per-request state
    app.state.primary_provider = primary if primary is not None else ElevenLabsMusicProvider()
    app.state.secondary_providers = list(secondaries) if secondaries is not None else default_secondaries()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Music-Source", "X-Music-Tier"],
    )

    app.include_router(health_routes.router)
    app.include_router(music_routes.router)
    app.include_router(debug_routes.router)

    LG.info(
        "Music providers: primary=%s secondaries=%s",
        getattr(app.state.primary_provider, "name", None),
        [p.name for p in app.state.secondary_providers],
    )
    return app
