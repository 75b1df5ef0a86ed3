from fastapi import Request

from easybuk.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings injected at startup by create_app()."""
    return request.app.state.settings
