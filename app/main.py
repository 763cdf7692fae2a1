import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.app_logging import configure_logging
from app.database import init_db
from app.config import get_settings
from app.errors import ErrorCode, TicketError
from app.rate_limit import limiter
from app.routers import tickets, ui

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Gala Ticket Service",
    description="Issues QR-coded event tickets and regenerates them on demand",
    version="1.0.0",
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ============== Global Error Handlers ==============

TICKET_ERROR_STATUS = {
    ErrorCode.INVALID_REQUEST: (400, "Invalid request"),
    ErrorCode.TEMPLATE_NOT_FOUND: (404, "Ticket template not found"),
    ErrorCode.ENCODING_FAILED: (500, "Failed to generate tickets"),
    ErrorCode.COMPOSITING_FAILED: (500, "Failed to generate tickets"),
    ErrorCode.STORE_FAILED: (500, "Ticket store unavailable"),
}


@app.exception_handler(TicketError)
async def ticket_exception_handler(request: Request, exc: TicketError):
    """Translate pipeline and store errors into {error, detail} responses."""
    status_code, title = TICKET_ERROR_STATUS.get(exc.code, (500, "Internal server error"))
    if status_code >= 500:
        logger.error("%s on %s %s: %s", title, request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": title, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return a consistent JSON format for validation errors."""
    errors = []
    for err in exc.errors():
        field = " -> ".join(str(loc) for loc in err["loc"] if loc != "body")
        errors.append(f"{field}: {err['msg']}" if field else err["msg"])
    return JSONResponse(
        status_code=422,
        content={"error": "Validation error", "detail": "; ".join(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions: log full traceback, return safe message."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": "An unexpected error occurred."},
    )


app.include_router(tickets.router)
app.include_router(ui.router)


# ============== CORS Middleware ==============
_settings = get_settings()
_origins = [o.strip() for o in _settings.cors_origins.split(",") if o.strip()] if _settings.cors_origins else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    """Configure logging and create tables on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    init_db()
    logger.info("Ticket template: %s", settings.ticket_template_path)


@app.get("/health")
def health_check():
    """Health check endpoint: verifies DB connectivity."""
    from sqlalchemy import text
    from app.database import SessionLocal

    checks = {"db": "ok"}
    status = "healthy"

    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
    except Exception as e:
        checks["db"] = str(e)
        status = "unhealthy"

    code = 200 if status == "healthy" else 503
    return JSONResponse(status_code=code, content={"status": status, "checks": checks})
