import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .auth import NotAuthenticated, get_settings, require_basic_auth
from .config import Settings, configure_logging, load_settings
from .responders import annotations, query_series, search_targets
from .schemas import (
    AnnotationOut,
    AnnotationsIn,
    ErrorEnvelope,
    Health,
    Hello,
    QueryIn,
    QueryOut,
    SearchResult,
)
from .timerange import TimestampParseError, parse_range

logger = logging.getLogger(__name__)

protected = APIRouter(dependencies=[Depends(require_basic_auth)])
public = APIRouter()


# === Health ===


@public.get("/health", response_model=Health)
def health() -> Health:
    return Health()


# === Simple JSON datasource ===


@protected.get("/", response_model=Hello)
def hello() -> Hello:
    return Hello()


@protected.post("/search", response_model=list[SearchResult])
def search():
    return search_targets()


@protected.post("/query", response_model=QueryOut)
def query(payload: QueryIn, settings: Settings = Depends(get_settings)):
    time_range = parse_range(payload.range.from_, payload.range.to, settings.tz)
    target = payload.targets[0].target
    result = query_series(time_range, target)
    logger.debug("query target=%s points=%d", target, len(result.datapoints))
    return result


@protected.post("/annotations", response_model=list[AnnotationOut])
def list_annotations(payload: AnnotationsIn, settings: Settings = Depends(get_settings)):
    time_range = parse_range(payload.range.from_, payload.range.to, settings.tz)
    records = annotations(time_range, payload.annotation.query)
    logger.debug("annotations step=%dh records=%d", payload.annotation.query, len(records))
    return records


# === Error handlers ===


def unauthorized(_: Request, exc: NotAuthenticated) -> PlainTextResponse:
    return PlainTextResponse("Unauthorized", status_code=401, headers={"WWW-Authenticate": "Basic"})


def invalid_timestamp(_: Request, exc: TimestampParseError) -> JSONResponse:
    payload = ErrorEnvelope(
        code="invalid_timestamp",
        message=str(exc),
        details={"field": exc.field, "value": exc.value},
    )
    return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))


def internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    payload = ErrorEnvelope(code="internal_error", message="Internal server error")
    return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))


# === App factory ===


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    if not settings.http_user:
        logger.warning("HTTP_USER is not set; every protected request will be rejected")

    app = FastAPI(title="Mock Datasource API", version="1.0.0")
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(NotAuthenticated, unauthorized)
    app.add_exception_handler(TimestampParseError, invalid_timestamp)
    app.add_exception_handler(Exception, internal_error)
    app.include_router(public)
    app.include_router(protected)
    return app


app = create_app()
