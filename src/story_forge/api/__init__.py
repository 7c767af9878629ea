"""Public API surface for HTTP serving and Python-first interfaces."""

from story_forge.api.app import create_app
from story_forge.api.contracts import (
    CatalogResponse,
    FieldResponse,
    RerollResponse,
    StoryCreateRequest,
    StoryResponse,
)
from story_forge.api.python_interface import StoryForgeClient

__all__ = [
    "CatalogResponse",
    "FieldResponse",
    "RerollResponse",
    "StoryCreateRequest",
    "StoryForgeClient",
    "StoryResponse",
    "create_app",
]
