from __future__ import annotations

from fastapi import Request

from puzzle_api.config import Settings, get_settings


def resolve_settings(request: Request) -> Settings:
    state_settings = getattr(request.app.state, "settings", None)
    if isinstance(state_settings, Settings):
        return state_settings
    return get_settings()
