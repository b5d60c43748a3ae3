"""FastAPI web server for the exercise tracker."""
from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, ClassVar, Optional, Type, TypeVar, Union

import pydantic
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt

from exercise_tracker.db.database import Database
from exercise_tracker.errors import TrackerError
from exercise_tracker.services.tracker_service import (
    FIELDS_REQUIRED,
    INVALID_DATE,
    INVALID_DURATION,
    USERNAME_REQUIRED,
    TrackerService,
)

logger = logging.getLogger(__name__)

static_dir = Path(__file__).parent / "static"

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# Request Models
class UserCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    username: Optional[str] = None

    # message for a field whose value has the wrong shape
    field_errors: ClassVar[dict[str, str]] = {"username": USERNAME_REQUIRED}


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    description: Optional[str] = None
    # strict numbers so JSON booleans are not read as 0 or 1
    duration: Optional[Union[StrictInt, StrictFloat, str]] = None
    date: Optional[str] = None

    field_errors: ClassVar[dict[str, str]] = {
        "description": FIELDS_REQUIRED,
        "duration": INVALID_DURATION,
        "date": INVALID_DATE,
    }


Body = TypeVar("Body", UserCreate, ExerciseCreate)


async def _read_body(request: Request) -> dict[str, Any]:
    """JSON or form body as a plain dict; undecodable bodies read as empty."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(_FORM_TYPES):
            form = await request.form()
            return {k: v for k, v in form.items() if isinstance(v, str)}
        raw = await request.body()
        data = json.loads(raw) if raw else {}
    except (ValueError, UnicodeDecodeError):
        logger.debug("Ignoring undecodable %s request body", content_type or "untyped")
        return {}
    return data if isinstance(data, dict) else {}


def _validate(model: Type[Body], data: dict[str, Any]) -> Body:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        field = str(exc.errors()[0]["loc"][0])
        raise HTTPException(status_code=400, detail=model.field_errors.get(field, FIELDS_REQUIRED))


async def user_body(request: Request) -> UserCreate:
    return _validate(UserCreate, await _read_body(request))


async def exercise_body(request: Request) -> ExerciseCreate:
    return _validate(ExerciseCreate, await _read_body(request))


def get_service(request: Request) -> TrackerService:
    """Build a service around the connection opened at startup."""
    return TrackerService(request.app.state.db)


def _http_error(exc: TrackerError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def create_app(db_path: Optional[Path | str] = None) -> FastAPI:
    """Build the application; the database is opened and migrated on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(path=db_path)
        try:
            db.init()
        except sqlite3.Error:
            logger.critical("Error during database creation at %s", db.path, exc_info=True)
            db.close()
            raise
        app.state.db = db
        logger.info("Server started - DB: %s", db.path)
        yield

        logger.info("Server shutting down")
        db.close()

    app = FastAPI(
        title="Exercise Tracker API",
        description="Create users, log exercises and read back filtered logs",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if static_dir.exists():
        app.mount("/public", StaticFiles(directory=str(static_dir)), name="public")

    # Routes
    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Serve the main HTML page."""
        index_path = static_dir / "index.html"
        if index_path.exists():
            return FileResponse(str(index_path))
        return HTMLResponse("<h1>Exercise Tracker</h1><p>Visit /docs for API documentation</p>")

    @app.post("/api/users")
    async def create_user(
        body: UserCreate = Depends(user_body),
        service: TrackerService = Depends(get_service),
    ):
        """Create a user."""
        try:
            return service.create_user(body.username)
        except TrackerError as exc:
            raise _http_error(exc)

    @app.get("/api/users")
    async def list_users(service: TrackerService = Depends(get_service)):
        """List every user in insertion order."""
        try:
            return service.list_users()
        except TrackerError as exc:
            raise _http_error(exc)

    @app.post("/api/users/{user_id}/exercises")
    async def add_exercise(
        user_id: str,
        body: ExerciseCreate = Depends(exercise_body),
        service: TrackerService = Depends(get_service),
    ):
        """Log an exercise for a user."""
        try:
            return service.add_exercise(user_id, body.description, body.duration, body.date)
        except TrackerError as exc:
            raise _http_error(exc)

    @app.get("/api/users/{user_id}/logs")
    async def get_logs(
        user_id: str,
        from_: Optional[str] = Query(None, alias="from"),
        to: Optional[str] = None,
        limit: Optional[str] = None,
        service: TrackerService = Depends(get_service),
    ):
        """A user's exercise log, optionally bounded by date and capped by ``limit``."""
        try:
            return service.get_log(user_id, from_=from_, to=to, limit=limit)
        except TrackerError as exc:
            raise _http_error(exc)

    return app


app = create_app()
