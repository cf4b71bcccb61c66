from __future__ import annotations

from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from blog_schemas.api_schemas import CredentialIn, CredentialOut, HealthOut, RecommendationsIn, TitlesIn
from blog_schemas.models import ErrorBody, OperationKind, OperationState, OperationStatus, TitleSet
from shared.logging import configure_logging, get_logger
from shared.redis_client import RedisClient

from .config import BACKOFF_BASE_SECONDS, LOG_LEVEL, MAX_ATTEMPTS, REQUEST_TIMEOUT_SECONDS
from .context import AppContext
from .credentials import CredentialStore
from .errors import ValidationError
from .executor import RequestExecutor
from .export import export_filename, format_category, format_title_document
from .orchestrator import Orchestrator

logger = get_logger(__name__)

app = FastAPI(title="travel-title-maker", version="0.1.0")


@app.on_event("startup")
async def startup() -> None:
    configure_logging(LOG_LEVEL)
    logger.info("title service starting")

    app.state.redis = RedisClient.from_env()
    ok = await app.state.redis.ping()
    logger.info("redis ping ok=%s", ok)

    executor = RequestExecutor(
        max_attempts=MAX_ATTEMPTS,
        base_delay=BACKOFF_BASE_SECONDS,
        timeout_s=REQUEST_TIMEOUT_SECONDS,
    )
    ctx = await AppContext.initialize(CredentialStore(app.state.redis), executor)
    app.state.orchestrator = Orchestrator(ctx)
    logger.info("credential configured=%s", ctx.has_credential)


@app.on_event("shutdown")
async def shutdown() -> None:
    await app.state.redis.close()


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError) -> JSONResponse:
    body = ErrorBody(error="validation_error", message=str(exc), needs_credential=exc.needs_credential)
    return JSONResponse(status_code=400, content=body.model_dump())


def _orchestrator() -> Orchestrator:
    return app.state.orchestrator


def _titles() -> tuple[TitleSet, str]:
    state = _orchestrator().state(OperationKind.TITLES)
    if state.status is not OperationStatus.SUCCEEDED or not isinstance(state.payload, TitleSet):
        raise HTTPException(
            status_code=409,
            detail=ErrorBody(error="conflict", message="No generated titles yet.").model_dump(),
        )
    return state.payload, state.subject or ""


@app.get("/health", response_model=HealthOut)
async def health() -> HealthOut:
    return HealthOut(ok=True, service="title_service", redis=await app.state.redis.ping())


@app.get("/v1/credential", response_model=CredentialOut)
async def get_credential() -> CredentialOut:
    credential = await _orchestrator().ctx.current_credential()
    return CredentialOut(configured=bool(credential))


@app.put("/v1/credential", response_model=CredentialOut)
async def put_credential(body: CredentialIn) -> CredentialOut:
    ctx = _orchestrator().ctx
    await ctx.set_credential(body.api_key)
    return CredentialOut(configured=ctx.has_credential)


@app.post("/v1/titles", response_model=OperationState)
async def generate_titles(body: TitlesIn) -> OperationState:
    return await _orchestrator().generate_titles(body.destination)


@app.post("/v1/recommendations", response_model=OperationState)
async def recommend(body: RecommendationsIn) -> OperationState:
    return await _orchestrator().recommend_cities(body.theme)


@app.post("/v1/recommendations/{index}/titles", response_model=OperationState)
async def titles_for_recommendation(index: int) -> OperationState:
    return await _orchestrator().generate_titles_for_recommendation(index)


@app.get("/v1/operations/{kind}", response_model=OperationState)
async def operation_state(kind: OperationKind) -> OperationState:
    return _orchestrator().state(kind)


@app.get("/v1/titles/export", response_class=PlainTextResponse)
async def export_titles() -> PlainTextResponse:
    titles, destination = _titles()
    filename = export_filename(destination, titles.total())
    return PlainTextResponse(
        format_title_document(titles, destination),
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@app.get("/v1/titles/{category}/text", response_class=PlainTextResponse)
async def category_text(category: str) -> PlainTextResponse:
    titles, _ = _titles()
    categories = titles.categories()
    if category not in categories:
        raise HTTPException(
            status_code=404,
            detail=ErrorBody(error="not_found", message=f"Unknown category: {category}").model_dump(),
        )
    return PlainTextResponse(format_category(categories[category]))
