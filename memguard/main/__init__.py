"""
Main module - Main/Composition Root Layer

Entry points and composition root: settings, the dependency-injector
container, the FastAPI app factory and the uvicorn server.

The app itself lives in ``memguard.main.app`` and is not imported here, so
that importing settings or the container does not build an application.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
