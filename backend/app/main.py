"""
NR Student Tax API
"""

from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import InvalidTaxInputError, TaxEngineError
from app.core.logging import configure_logging
from app.models.common import ErrorResponse
from app.monitoring.metrics import metrics_collector

configure_logging()
logger = structlog.get_logger()


def _error_response(status_code: int, error: str, message: str, details: dict = None) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc)
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidTaxInputError)
    async def invalid_input_handler(request: Request, exc: InvalidTaxInputError):
        logger.warning("Invalid tax input", path=request.url.path, field=exc.field, error=str(exc))
        return _error_response(
            422,
            "invalid_input",
            str(exc),
            {"field": exc.field} if exc.field else None
        )

    @app.exception_handler(TaxEngineError)
    async def engine_error_handler(request: Request, exc: TaxEngineError):
        logger.error("Tax engine failure", path=request.url.path, error=str(exc))
        metrics_collector.record_error(type(exc).__name__, str(exc))
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "tax_engine_error",
            "Failed to compute tax"
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    logger.info("Application configured",
                environment=settings.ENVIRONMENT,
                tax_year=settings.TAX_YEAR)

    return app


app = create_app()
