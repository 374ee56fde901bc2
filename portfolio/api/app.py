"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from portfolio.api.limiter import limiter
from portfolio.config import settings
from portfolio.db.base import init_db
from portfolio.errors import (
    AgentTaskError,
    InferenceError,
    InsufficientDataError,
    MalformedResponseError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[AgentTaskError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    InsufficientDataError: 409,
    InferenceError: 502,
    MalformedResponseError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize database on startup."""
    logging.basicConfig(level=settings.log_level)
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not set, skipping table creation")
    yield


app = FastAPI(
    title="Portfolio Agents API",
    description="Portfolio backend with AI job search, chat and content agents",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(AgentTaskError)
async def agent_error_handler(request: Request, exc: AgentTaskError):
    """Map agent task failures to HTTP status codes (500 for store and unexpected errors)."""
    status_code = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 500)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from portfolio.api.routes import chat, jobs, manager, profile  # noqa: E402

app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
app.include_router(chat.router, prefix="/chat", tags=["Chat"])
app.include_router(manager.router, prefix="/portfolio", tags=["Portfolio"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
