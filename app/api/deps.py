from __future__ import annotations

from fastapi import Request

from app.core.config import Settings


def get_settings(request: Request) -> Settings:
    # set once by create_app(); handlers never read the environment themselves
    return request.app.state.settings
