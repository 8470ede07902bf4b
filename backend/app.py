"""
Pitch Deck Backend - Application Entry Point
Mounts the generation, chat, project, slide and auth routers on one FastAPI app
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from database import check_database_connection, init_database
from services.auth import router as auth_router
from services.chat.routes import router as chat_router
from services.generation.routes import router as generation_router
from services.projects.routes import router as projects_router
from services.slides.routes import router as slides_router
from shared.response_models import ErrorResponse, HealthResponse
from shared.utils import config, setup_logging

logger = setup_logging("pitch-deck-backend")

VERSION = "1.0.0"
STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.get("auto_create_tables", True):
        init_database()
    logger.info(f"Pitch Deck Backend ready (CORS origins: {config.get('allowed_origins')})")
    yield


app = FastAPI(
    title="Pitch Deck Backend API",
    description="""
    Generate pitch decks from a business idea, edit slides through chat, and
    manage projects and slides for the signed-in user.
    """,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Authentication", "description": "Identity verification and access tokens"},
        {"name": "Health", "description": "Service health and status endpoints"},
        {"name": "generation", "description": "AI pitch deck generation"},
        {"name": "chat", "description": "Chat-driven slide editing"},
        {"name": "projects", "description": "Project management"},
        {"name": "slides", "description": "Slide management and ordering"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ErrorResponse(message=str(exc.detail), error_code=f"HTTP_{exc.status_code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {len(exc.errors())} validation error(s)")
    body = ErrorResponse(
        message="Request validation failed",
        error=jsonable_encoder(exc.errors()),
        error_code="VALIDATION_ERROR",
    )
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(auth_router, tags=["Authentication"])
app.include_router(generation_router)
app.include_router(chat_router)
app.include_router(projects_router)
app.include_router(slides_router)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "Pitch Deck Backend API",
        "version": VERSION,
        "endpoints": {
            "auth": {"login": "/auth/login", "verify": "/auth/verify", "me": "/auth/me"},
            "generate": {"generate": "/generate", "test": "/generate/test"},
            "chat": "/chat",
            "projects": "/projects",
            "slides": "/slides",
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check including database reachability"""
    database_ok = check_database_connection()
    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        message="Pitch Deck Backend is running",
        version=VERSION,
        uptime=time.monotonic() - STARTED_AT,
        dependencies={"database": "operational" if database_ok else "unavailable"},
    )


if __name__ == "__main__":
    import uvicorn

    host = config.get("host", "0.0.0.0")
    port = config.get("port", 3001)
    logger.info(f"Starting Pitch Deck Backend on http://{host}:{port}")
    uvicorn.run("app:app", host=host, port=port, reload=config.get("debug", False), log_level="info")
