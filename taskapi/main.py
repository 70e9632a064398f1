"""
Task API - FastAPI Backend

Main application entry point with lifespan management, middleware, and routing.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskapi.config import settings
from taskapi.database import init_db, close_db
from taskapi.logging_config import setup_logging, get_logger
from taskapi.middleware.error_handler import register_exception_handlers
from taskapi.middleware.request_context import REQUEST_ID_HEADER, RequestContextMiddleware

# Import API routers
from taskapi.api.v1 import health
from taskapi.api.v1 import auth
from taskapi.api.v1 import tasks

# Setup logging
setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Verifies the database connection on startup and disposes of the
    connection pool on shutdown.
    """
    logger.info("Starting Task API", version=settings.APP_VERSION, auth_strategy=settings.AUTH_STRATEGY)

    try:
        await init_db()
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Task API")
    await close_db()
    logger.info("Shutdown complete")


openapi_tags = [
    {
        "name": "Health",
        "description": "Service health checks",
    },
    {
        "name": "Authentication",
        "description": "User registration, login, and the current user",
    },
    {
        "name": "Tasks",
        "description": "Per-user task management",
    },
]

app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Task API

A small REST API for personal task lists.

### Quick Start

1. **Register**: `POST /api/register` → Get an API key
2. **Login** (optional): `POST /api/login` → Get an access token
3. **Create Task**: `POST /api/tasks`
4. **Update Task**: `PATCH /api/tasks/{id}` with only the fields to change

### Authentication

Every `/api/tasks` endpoint requires one of:
```
X-API-Key: <your_api_key>
Authorization: Bearer <your_token>
```
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    openapi_tags=openapi_tags,
)

app.add_middleware(RequestContextMiddleware)

# Explicit methods and headers, never "*"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        settings.API_KEY_HEADER,
        REQUEST_ID_HEADER,
        "Accept",
        "Origin",
    ],
    expose_headers=[REQUEST_ID_HEADER, "Allow"],
    max_age=600,
)

register_exception_handlers(app)


@app.get("/")
async def root():
    """
    Root endpoint

    Returns basic API information.
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else "disabled",
        "health": "/health",
    }


app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api", tags=["Authentication"])
app.include_router(tasks.router, prefix="/api", tags=["Tasks"])

logger.info("FastAPI application configured", debug=settings.DEBUG)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taskapi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD or settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
