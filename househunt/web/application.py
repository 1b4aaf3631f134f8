from importlib import metadata

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from househunt.log import configure_logging
from househunt.schemas import Envelope
from househunt.settings import settings
from househunt.web.api.monitoring import router as monitoring_router
from househunt.web.api.router import api_router
from househunt.web.lifespan import lifespan_setup


def _failure(status_code: int, error: str, headers=None, **extra) -> JSONResponse:
    content = Envelope[None](success=False, error=error).model_dump()
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    return _failure(exc.status_code, str(detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    return _failure(
        status.HTTP_400_BAD_REQUEST,
        "Missing required fields",
        details=jsonable_encoder(exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    message = str(exc) if settings.environment.lower() == "dev" else "Internal server error"
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def get_app() -> FastAPI:
    """
    Get FastAPI application.

    This is the main constructor of an application.

    :return: application.
    """
    configure_logging()
    app = FastAPI(
        title="househunt",
        version=metadata.version("househunt"),
        lifespan=lifespan_setup,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Main router for the API.
    app.include_router(router=api_router, prefix="/api")
    app.include_router(router=monitoring_router)

    return app
