"""FastAPI application for generating stories and rerolling their fields."""

from __future__ import annotations

import logging
import os
import threading
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from story_forge.adapters.memory_story_store import DEFAULT_MAX_SESSIONS, InMemoryStoryStore
from story_forge.adapters.observability import int_env
from story_forge.api.contracts import (
    BeatSummary,
    CatalogResponse,
    FieldResponse,
    GenreSummary,
    RerollResponse,
    StoryCreateRequest,
    StoryResponse,
)
from story_forge.application.story_service import (
    CORE_FIELD_IDS,
    field_ids,
    generate_story,
    get_field,
    reroll,
)
from story_forge.core.beat_sheet import BEATS, beat_field_id, beat_field_ids
from story_forge.core.genre_library import GENRE_REGISTRY, template_for
from story_forge.core.vocabulary import THEMES
from story_forge.domain.models import StoryInstance

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Simple health payload used by probes."""

    status: Literal["ok"] = "ok"
    service: str = "story_forge"


class ApiRootResponse(BaseModel):
    """Describes currently available API capabilities and runtime mode."""

    name: str = "story_forge"
    persistence: Literal["memory"] = "memory"
    endpoints: list[str] = Field(
        default_factory=lambda: [
            "/healthz",
            "/api/v1",
            "/api/v1/catalog",
            "/api/v1/stories",
            "/api/v1/stories/{story_id}",
            "/api/v1/stories/{story_id}/fields/{field_id}",
            "/api/v1/stories/{story_id}/fields/{field_id}/reroll",
        ]
    )


def _cors_origins() -> list[str]:
    raw = os.environ.get("STORY_FORGE_CORS_ORIGINS", "").strip()
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    return [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]


def _catalog() -> CatalogResponse:
    return CatalogResponse(
        genres=[
            GenreSummary(
                name=template.name,
                description=template.description,
                display_fields=list(template.display_fields),
            )
            for template in GENRE_REGISTRY.values()
        ],
        themes=list(THEMES),
        core_field_ids=list(CORE_FIELD_IDS),
        beats=[
            BeatSummary(
                name=beat.name,
                act=beat.act,
                prompt=beat.prompt,
                field_ids=[beat_field_id(beat.name, sub.name) for sub in beat.sub_elements],
            )
            for beat in BEATS
        ],
    )


def _story_response(instance: StoryInstance, *, include_beats: bool = False) -> StoryResponse:
    display_fields = template_for(instance.genre).display_fields
    return StoryResponse(
        story_id=instance.story_id,
        genre=instance.genre,
        theme=instance.theme,
        logline=get_field(instance, "logline"),
        core_fields={field_id: get_field(instance, field_id) for field_id in CORE_FIELD_IDS},
        genre_fields={field_id: get_field(instance, field_id) for field_id in display_fields},
        beats=(
            {field_id: get_field(instance, field_id) for field_id in beat_field_ids()}
            if include_beats
            else {}
        ),
    )


def create_app(store: InMemoryStoryStore | None = None) -> FastAPI:
    """Create the API application."""
    sessions = store or InMemoryStoryStore(
        int_env("STORY_FORGE_MAX_SESSIONS", DEFAULT_MAX_SESSIONS, minimum=1, maximum=100_000)
    )
    catalog = _catalog()

    app = FastAPI(
        title="story_forge API",
        version=API_VERSION,
        description="Generate Save-the-Cat style story outlines and reroll individual fields.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "system", "description": "Service health and runtime metadata."},
            {"name": "api", "description": "API discovery and the genre/theme/beat catalog."},
            {"name": "stories", "description": "Story generation, field reads, and rerolls."},
        ],
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("api.start max_sessions=%s", sessions.max_sessions)

    def require_story(story_id: str) -> tuple[StoryInstance, threading.Lock]:
        checked_out = sessions.checkout(story_id)
        if checked_out is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Story not found")
        return checked_out

    @app.get("/healthz", response_model=HealthResponse, tags=["system"])
    def healthz() -> HealthResponse:
        return HealthResponse()

    @app.get("/api/v1", response_model=ApiRootResponse, tags=["api"])
    def api_root() -> ApiRootResponse:
        return ApiRootResponse()

    @app.get("/api/v1/catalog", response_model=CatalogResponse, tags=["api"])
    def get_catalog() -> CatalogResponse:
        return catalog

    @app.post(
        "/api/v1/stories",
        response_model=StoryResponse,
        status_code=status.HTTP_201_CREATED,
        tags=["stories"],
    )
    def create_story(payload: StoryCreateRequest) -> StoryResponse:
        instance = generate_story(payload.genre, payload.theme, seed=payload.seed)
        response = _story_response(instance)
        sessions.add(instance)
        return response

    @app.get("/api/v1/stories/{story_id}", response_model=StoryResponse, tags=["stories"])
    def get_story(story_id: str, include_beats: bool = Query(default=False)) -> StoryResponse:
        instance, lock = require_story(story_id)
        with lock:
            return _story_response(instance, include_beats=include_beats)

    @app.delete(
        "/api/v1/stories/{story_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        tags=["stories"],
    )
    def delete_story(story_id: str) -> Response:
        if not sessions.remove(story_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Story not found")
        logger.info("story.deleted story_id=%s", story_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get(
        "/api/v1/stories/{story_id}/fields/{field_id}",
        response_model=FieldResponse,
        tags=["stories"],
    )
    def read_field(story_id: str, field_id: str) -> FieldResponse:
        instance, lock = require_story(story_id)
        with lock:
            text = get_field(instance, field_id)
            known = field_id in field_ids(instance)
        return FieldResponse(story_id=story_id, field_id=field_id, text=text, known=known)

    @app.post(
        "/api/v1/stories/{story_id}/fields/{field_id}/reroll",
        response_model=RerollResponse,
        tags=["stories"],
    )
    def reroll_story_field(story_id: str, field_id: str) -> RerollResponse:
        instance, lock = require_story(story_id)
        with lock:
            outcome = reroll(instance, field_id)
            logline = get_field(instance, "logline")
        return RerollResponse(
            story_id=story_id,
            field_id=field_id,
            text=outcome.text,
            known=outcome.known,
            logline=logline,
            invalidated=list(outcome.invalidated),
        )

    return app


app = create_app()
