"""
Account Ledger API Application Factory
"""

import time
import uuid
from typing import Dict, Optional, Type

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .clients import router as clients_router
from .. import __version__
from ..config import LedgerConfig, get_config
from ..exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    LedgerError,
    TransactionLimitExceededError,
)
from ..logging_config import get_logger, log_action, setup_logging
from ..store import AccountStore


CORRELATION_HEADER = "X-Correlation-ID"

ERROR_STATUS_CODES: Dict[Type[LedgerError], int] = {
    AccountNotFoundError: 404,
    TransactionLimitExceededError: 422,
    InvalidRequestError: 422,
}


def status_code_for(exc: LedgerError) -> int:
    """Map a ledger error to its HTTP status code"""
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return 400


class RequestLogger:
    """
    HTTP middleware that tags requests with a correlation ID and logs them.
    
    Unhandled errors are logged with their traceback and answered with a
    500 that still carries the correlation header.
    """
    
    def __init__(self):
        self.logger = get_logger("account_ledger.api")
    
    async def __call__(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                f"Unhandled error on {request.method} {request.url.path}",
                extra={"correlation_id": correlation_id}
            )
            response = JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
        
        elapsed_ms = round((time.perf_counter() - started) * 1000, 3)
        log_action(
            self.logger, "info", f"{request.method} {request.url.path} {response.status_code}",
            action="http_request", correlation_id=correlation_id,
            extra={"status_code": response.status_code, "duration_ms": elapsed_ms}
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content={"detail": exc.message})


def create_app(
    config: Optional[LedgerConfig] = None,
    store: Optional[AccountStore] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        config: Service configuration; the environment-backed config when omitted
        store: Account store to serve; built from ``config`` when omitted
    """
    config = config or get_config()
    setup_logging(config.log_level, config.log_format, config.log_file)
    
    app = FastAPI(
        title="Account Ledger API",
        description="In-memory account ledger with overdraft limits and statements",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    
    # One store per application; handlers reach it through get_account_store
    app.state.config = config
    app.state.account_store = store or AccountStore.from_config(config)
    
    app.middleware("http")(RequestLogger())
    app.add_exception_handler(LedgerError, ledger_error_handler)
    
    app.include_router(clients_router, prefix="/clientes", tags=["Clients"])
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "account_ledger_api",
            "version": __version__,
            "accounts": len(app.state.account_store.account_ids())
        }
    
    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the API server with uvicorn"""
    config = get_config()
    uvicorn.run(
        "account_ledger.api:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
