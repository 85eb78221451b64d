"""
FastAPI entrypoint for the Emingo backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.errors import LedgerError, ValidationError, translate_db_error
from app.core.utils import format_error
from app.api.router import api_router
from app.db.session import engine
from app.db.migrator import SchemaMigrator

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bring the schema up to date on cold start."""
    try:
        SchemaMigrator(engine).create_all_tables()
        logger.info("Database setup complete")
    except (LedgerError, SQLAlchemyError) as exc:
        # Requests heal missing schema lazily, so the server still starts
        logger.error("Database setup failed: %s", exc)
    yield


app = FastAPI(
    title="Emingo API",
    description="Backend API for personal finance tracking",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Structured error with a machine kind and a human message."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=format_error(exc.kind, exc.message))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Database errors that escaped the store surface as store errors."""
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    error = translate_db_error(exc)
    return JSONResponse(status_code=error.status_code, content=format_error(error.kind, error.message))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies use the same structured error shape."""
    return JSONResponse(
        status_code=422,
        content=format_error(ValidationError.kind, "Invalid request", jsonable_encoder(exc.errors()))
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Emingo API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
