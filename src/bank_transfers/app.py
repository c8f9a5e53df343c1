"""
bank_transfers/app.py

FastAPI application entrypoint for the bank transfers service.

This module wires together:
- Logging configuration (file-based under LOG_DIR)
- CORS and request logging middleware
- Domain routers under api/ (accounts & transfers, banks, admin)
- Mapping of domain exceptions to HTTP responses
"""

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from bank_transfers import __version__
from bank_transfers.db.session import engine, init_models
from bank_transfers.domain.exceptions import (
    BankServiceException,
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
)
from bank_transfers.logging_config import get_logger, setup_logging
from bank_transfers.api.accounts import router as accounts_router
from bank_transfers.api.admin import router as admin_router
from bank_transfers.api.banks import router as banks_router

# Load environment variables early
load_dotenv()

# Configure logging before creating the app
setup_logging()
logger = get_logger("bank_transfers")

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, release the pool on shutdown."""
    await init_models()
    logger.info("Bank transfers service starting up")

    yield

    try:
        await engine.dispose()
    except Exception:
        logger.exception("Error disposing engine on shutdown")
    logger.info("Bank transfers service shutting down")


app = FastAPI(title="Bank Transfers API", version=__version__, lifespan=lifespan)

# CORS (open for demo)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Lightweight request logger to help trace traffic.
    """
    logger.info(
        "HTTP %s %s from %s",
        request.method,
        request.url.path,
        request.client.host if request.client else "?",
    )
    response = await call_next(request)
    logger.info("HTTP %s %s -> %s", request.method, request.url.path, response.status_code)
    return response


def _error_response(status_code: int, exc: BankServiceException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(404, exc)


@app.exception_handler(InsufficientFundsError)
async def insufficient_funds_handler(request: Request, exc: InsufficientFundsError):
    logger.warning("%s %s: %s details=%s", request.method, request.url.path, exc.message, exc.details)
    return _error_response(409, exc)


@app.exception_handler(InvalidAmountError)
async def invalid_amount_handler(request: Request, exc: InvalidAmountError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(400, exc)


@app.exception_handler(BankServiceException)
async def bank_service_handler(request: Request, exc: BankServiceException):
    logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return _error_response(400, exc)


@app.get("/api/health")
async def health():
    """
    Simple health check endpoint.
    """
    return {"status": "healthy"}


# Include domain routers
app.include_router(accounts_router, prefix=API_PREFIX)
app.include_router(banks_router, prefix=API_PREFIX)
app.include_router(admin_router, prefix=API_PREFIX)


def main() -> None:
    import uvicorn

    uvicorn.run(
        "bank_transfers.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").lower(),
    )


if __name__ == "__main__":
    main()
