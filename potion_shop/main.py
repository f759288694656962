"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from potion_shop.api.v1.router import router as api_v1_router
from potion_shop.config import settings
from potion_shop.logging_config import configure_logging
from potion_shop.middleware import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Configure application resources on startup."""
    configure_logging(log_level=settings.log_level)
    yield


app = FastAPI(
    title="Wizard's Potion Shop API",
    description="Potion order drafting, listing and deletion",
    version="0.1.0",
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_v1_router)


@app.get("/health", tags=["health"])
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
