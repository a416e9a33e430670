"""FastAPI backend for the RefundHunter reimbursement auditor."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import __version__
from .classifier_client import ClassifierClient
from .config import CORS_ORIGINS, LOG_LEVEL, UPLOAD_SIZE_LIMIT_MB
from .mapping import ALIAS_TABLE_VERSION
from .routes import audit_router, mappings_router
from .routes.audit import build_pipeline, run_audit_request
from .utils import sanitize_filename

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

UPLOAD_LIMIT_BYTES = UPLOAD_SIZE_LIMIT_MB * 1024 * 1024


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration."""
    logger.info(
        f"RefundHunter {__version__} starting (alias table v{ALIAS_TABLE_VERSION}, "
        f"upload limit {UPLOAD_SIZE_LIMIT_MB}MB)"
    )
    if not ClassifierClient().is_configured:
        logger.warning("ANTHROPIC_API_KEY not set; enrichment requests will return 503")
    yield
    logger.info("RefundHunter shutdown complete")


app = FastAPI(
    title="RefundHunter",
    description="Inventory reimbursement auditor for FBA adjustment reports",
    version=__version__,
    lifespan=lifespan,
)

# Rate limiting configuration
# Uploads: 10 requests/minute (large payloads, optional LLM call)
limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(audit_router)
app.include_router(mappings_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "classifier_configured": ClassifierClient().is_configured,
    }


@app.get("/", response_class=PlainTextResponse)
def root():
    return f"RefundHunter backend {__version__} is running"


@app.post("/api/audit-upload")
@limiter.limit("10/minute")
def audit_upload(
    request: Request,
    file: UploadFile = File(...),
    enrich: bool = Query(default=False),
    include_messages: bool = Query(default=True),
    template: str | None = Query(default=None),
):
    """Audit an uploaded CSV or TSV export."""
    # Sanitize filename to prevent log injection
    filename = sanitize_filename(file.filename or "upload")

    content = file.file.read(UPLOAD_LIMIT_BYTES + 1)
    if len(content) > UPLOAD_LIMIT_BYTES:
        logger.warning(f"Rejected upload {filename}: larger than {UPLOAD_SIZE_LIMIT_MB}MB")
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum {UPLOAD_SIZE_LIMIT_MB}MB.",
        )

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail="File must be UTF-8 text") from e

    logger.info(f"Auditing upload {filename} ({len(content)} bytes)")
    pipeline = build_pipeline(template)
    return run_audit_request(pipeline, text, enrich=enrich, include_messages=include_messages)
