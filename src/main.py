import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.config.logging import setup_logging
from src.config.settings import settings
from src.errors import EventValidationError, UnauthenticatedError
from src.events.effects import side_effects
from src.events.routers import router as events_router
from src.routers.healthz.router import router as healthz_router

logger = logging.getLogger(__name__)


async def run_migrations():
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    yield
    # Let pending confirmation emails and image cleanups finish
    await side_effects.drain()


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Event Planner API",
    description="API for discovering events, managing them and RSVPing",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnauthenticatedError)
async def unauthenticated_handler(request: Request, exc: UnauthenticatedError) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={
            "message": exc.message,
            "detail": {"message": exc.message, "login_url": exc.login_url},
        },
    )


@app.exception_handler(EventValidationError)
async def validation_handler(request: Request, exc: EventValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "message": exc.message,
            "detail": {"field": exc.field, "message": exc.message},
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "detail": exc.detail},
        headers=exc.headers,
    )


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(events_router, tags=["Events"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Event Planner API"}
