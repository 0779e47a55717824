import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# ✅ Import All API Routes
from app.api.routes import company, jobs, system, users, webhooks
from app.core.config import Settings, get_settings
from app.core.errors import InternalError, JobPortalError
from app.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


# ============================================
# ✅ ERROR ENVELOPES
# ============================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def job_portal_error_handler(request: Request, exc: JobPortalError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append(".".join(location) or error.get("msg", "request"))
    message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request"
    return _error(status.HTTP_400_BAD_REQUEST, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error(InternalError.status_code, InternalError.message)


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        # Unreachable database is fatal at startup
        if settings.run_migrations:
            from app.db.migrate import run_migrations
            run_migrations(settings)
        else:
            from app.db.init_db import init_db
            init_db()
        logger.info("Job Portal API started")
        yield

    app = FastAPI(title="Job Portal API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "token"],
    )

    app.add_exception_handler(JobPortalError, job_portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # ============================================
    # ✅ REGISTER ALL ROUTERS
    # ============================================

    app.include_router(jobs.router)
    app.include_router(company.router)
    app.include_router(users.router)
    app.include_router(webhooks.router)
    app.include_router(system.router)

    @app.get("/")
    def root():
        return {"success": True, "status": "Job Portal API running"}

    return app


app = create_app()
