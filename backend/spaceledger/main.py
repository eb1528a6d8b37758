"""
Main FastAPI application entry point.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from spaceledger.api import auth, spaces, shipments, transactions, tracking
from spaceledger.db.database import engine, Base, settings
from spaceledger.services.errors import (
    LedgerError,
    NotFound,
    DuplicateKey,
    Conflict,
    InvalidArgument,
    InvalidTransition,
    Unauthenticated,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Space Ledger",
    description="Logistics space booking and shipment lifecycle service",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS_CODES = {
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateKey: status.HTTP_400_BAD_REQUEST,
    Conflict: status.HTTP_400_BAD_REQUEST,
    InvalidArgument: status.HTTP_400_BAD_REQUEST,
    InvalidTransition: status.HTTP_409_CONFLICT,
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
}


def status_code_for(exc: LedgerError) -> int:
    for error_cls, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {code} {type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(spaces.router, prefix="/api/spaces", tags=["spaces"])
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["transactions"])
app.include_router(tracking.router, prefix="/api/tracking", tags=["tracking"])


@app.get("/")
async def root():
    return {"message": "Space Ledger API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
