"""Main entry point for the Wallet Sign-in application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wallet_signin import __version__
from wallet_signin.api.v1 import auth_router
from wallet_signin.core.settings import settings
from wallet_signin.services.nonce_store import get_nonce_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Wallet Sign-in API",
    description="Password-less login by Ed25519 wallet signature",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info(
        "%s %s serving %s (wallet auth %s)",
        settings.app_name,
        __version__,
        settings.server_name,
        "enabled" if settings.wallet_auth_enabled else "disabled",
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    # Outstanding challenges do not survive a restart.
    get_nonce_store().clear()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "server_name": settings.server_name,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("wallet_signin.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
