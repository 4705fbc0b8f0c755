from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse
from starlette import status

from clouddrive.api import entry_router, blob_router
from clouddrive.configs.settings import settings
from clouddrive.core.exceptions import AppError
from clouddrive.databases import mongodb
from clouddrive.middlewares import init_sentry
from clouddrive.models import DOCUMENT_MODELS
from clouddrive.schemas.response import ApiError, ErrorDetail, HealthCheck
from clouddrive.utils import setup_logging, get_logger

API_VERSION = "1.0.0"
API_PREFIX = "/api/v1"

logger = get_logger(__name__)


def _configure_logging() -> None:
    is_prod = settings.APP_ENV == "prod"
    setup_logging(
        level="DEBUG" if settings.APP_DEBUG else "INFO",
        app_name=settings.APP_NAME,
        enable_json=is_prod,
        log_file="logs/clouddrive.log" if is_prod else None
    )


def _configure_sentry() -> None:
    if settings.APP_ENV != "prod":
        logger.info("Sentry disabled outside production")
        return
    if not settings.SENTRY_DSN:
        logger.warning("Sentry DSN not configured - error reporting disabled")
        return

    init_sentry(
        dsn=settings.SENTRY_DSN,
        environment=settings.APP_ENV,
        release=settings.RELEASE,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=settings.SENTRY_SEND_DEFAULT_PII
    )
    logger.info("Sentry error reporting enabled")


async def _connect_storage() -> None:
    """Metadata store first, then the bucket that holds file content"""
    await mongodb.connect(document_models=DOCUMENT_MODELS)

    from clouddrive.services.minio_client_service import MinIOBlobStore
    await MinIOBlobStore().ensure_bucket()
    logger.info(f"Storage ready - database: {settings.MONGO_DB}, bucket: {settings.MINIO_BUCKET}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_logging()
    logger.info(f"Starting {settings.APP_NAME} ({settings.APP_ENV})")

    try:
        _configure_sentry()
        await _connect_storage()
        yield
    except Exception as e:
        logger.error(f"{settings.APP_NAME} failed: {str(e)}", exc_info=True)
        raise
    finally:
        await mongodb.disconnect()
        logger.info(f"{settings.APP_NAME} stopped")


def _error_response(status_code: int, message: str, code: str | None = None, errors=None, details=None) -> JSONResponse:
    body = ApiError(
        success=False,
        message=message,
        code=code,
        errors=[ErrorDetail(**e) for e in errors] if errors else None,
        details=details
    ).model_dump(mode="json", exclude_none=True)
    return JSONResponse(content=body, status_code=status_code)


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    errors = list(exc.errors or [])
    if exc.field:
        errors.append({"code": exc.code, "message": exc.message, "field": exc.field})

    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"[{exc.code}] {request.method} {request.url.path}: {exc.message} {exc.details or ''}")
    else:
        logger.debug(f"[{exc.code}] {request.method} {request.url.path}: {exc.message}")

    return _error_response(exc.status_code, exc.message, exc.code, errors, exc.details)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), code="http_error")


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        errors.append({
            "code": error.get("type", "validation_error"),
            "message": error.get("msg", ""),
            "field": location or None
        })
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        "Validation error",
        code="validation_error",
        errors=errors
    )


def install_middlewares(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
        # Browsers need Content-Disposition to name downloads
        expose_headers=settings.CORS_EXPOSE_HEADERS,
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _handle_app_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)


def include_routers(app: FastAPI) -> None:
    app.include_router(entry_router, prefix=f"{API_PREFIX}/entries")
    app.include_router(blob_router, prefix=f"{API_PREFIX}/blobs")

    @app.get("/health", response_model=HealthCheck, include_in_schema=False)
    async def health():
        mongo_ok = await mongodb.ping()
        return HealthCheck(
            status="healthy" if mongo_ok else "degraded",
            version=API_VERSION,
            checks={"mongodb": "up" if mongo_ok else "down"},
        )


def create_app() -> FastAPI:
    """Build the API application: middlewares, error envelopes and routes"""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Personal cloud storage: folders, file uploads and usage quotas",
        version=API_VERSION,
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.APP_DEBUG else None,
        redoc_url="/redoc" if settings.APP_DEBUG else None,
    )

    install_middlewares(app)
    install_exception_handlers(app)
    include_routers(app)

    return app
