"""
JIDI Institute website API
FastAPI application for the contact form and newsletter signup.
"""

import logging
import os
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from jidi_api.errors import ConfigurationError
from jidi_api.routers import contact, email_signup
from jidi_api.services.mail_transport import get_transport, reset_transport

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="JIDI Institute API",
    description="Contact form and email signup backend for the JIDI Institute website",
    version="0.1.0",
)


def get_cors_origins() -> List[str]:
    """
    Build the list of allowed CORS origins.

    Always includes http://localhost:3000 (Next.js dev server). Additional
    origins are read from the CORS_ORIGINS environment variable as a
    comma-separated list, e.g.:
        CORS_ORIGINS=https://jidiinstitute.org,https://www.jidiinstitute.org

    Duplicates are removed while preserving order.
    """
    always_included = ["http://localhost:3000"]

    extra_origins: List[str] = []
    cors_env = os.getenv("CORS_ORIGINS", "").strip()
    if cors_env:
        extra_origins = [o.strip() for o in cors_env.split(",") if o.strip()]

    seen: set = set()
    origins: List[str] = []
    for origin in always_included + extra_origins:
        if origin not in seen:
            seen.add(origin)
            origins.append(origin)

    return origins


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(contact.router, tags=["contact"])
app.include_router(email_signup.router, tags=["signup"])


@app.on_event("shutdown")
async def release_transport() -> None:
    reset_transport()


@app.get("/")
async def root():
    return {"message": "JIDI Institute API", "version": "0.1.0"}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/health/smtp")
async def health_smtp():
    """
    Check that the mail server accepts a connection with the configured
    credentials. Returns 503 on failure; detail stays in the server log.
    """
    try:
        transport = get_transport()
    except ConfigurationError as exc:
        logger.error(f"SMTP health check failed: {exc}")
        raise HTTPException(status_code=503, detail="Mail transport is not configured")

    try:
        await transport.verify()
    except Exception as exc:
        logger.error(f"SMTP health check failed: {exc}")
        raise HTTPException(status_code=503, detail="Mail server unreachable")

    return {"status": "ok", "smtp": "reachable"}
