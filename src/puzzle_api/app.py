from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from puzzle_api.config import Settings, get_settings
from puzzle_api.error_handling import register_error_handlers
from puzzle_api.modules.health.router import router as health_router
from puzzle_api.modules.leaderboard.router import router as leaderboard_router
from puzzle_api.modules.leagues.router import router as leagues_router
from puzzle_api.modules.players.router import router as players_router
from puzzle_api.modules.scores.router import router as scores_router
from puzzle_api.observability import configure_logging, register_request_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    cfg = settings or get_settings()
    configure_logging(cfg)
    app = FastAPI(
        title=cfg.app_name,
        debug=cfg.app_debug,
        docs_url=cfg.docs_url,
        redoc_url=cfg.redoc_url,
    )
    register_error_handlers(app)
    if cfg.app_log_requests:
        register_request_logging(app)
    if cfg.app_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cfg.app_cors_origins,
            allow_credentials=cfg.app_cors_allow_credentials,
            allow_methods=cfg.app_cors_allow_methods,
            allow_headers=cfg.app_cors_allow_headers,
        )
    app.state.settings = cfg
    app.include_router(health_router)
    app.include_router(leagues_router, prefix="/api/v1")
    app.include_router(leaderboard_router, prefix="/api/v1")
    app.include_router(players_router, prefix="/api/v1")
    app.include_router(scores_router, prefix="/api/v1")
    return app


app = create_app()
