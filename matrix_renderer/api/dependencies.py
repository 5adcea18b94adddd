"""
API Dependencies
================

FastAPI dependencies shared by the routers.
"""

from fastapi import Request

from matrix_renderer.config.settings import Settings


def get_current_settings(request: Request) -> Settings:
    """Dependency returning the settings the application was built with."""
    return request.app.state.settings
