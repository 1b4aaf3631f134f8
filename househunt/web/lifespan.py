from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from loguru import logger
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import DEPLOYMENT_ENVIRONMENT, SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import set_tracer_provider
from prometheus_fastapi_instrumentator.instrumentation import (
    PrometheusFastApiInstrumentator,
)
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from househunt.db.models import load_all_models
from househunt.settings import settings
from househunt.tkq import broker

# Never traced: liveness probes, API docs and the metrics scrape.
UNTRACED_PATHS = ("/health", "/api/docs", "/api/redoc", "/api/openapi.json", "/metrics")


def _setup_db(app: FastAPI) -> None:  # pragma: no cover
    """Engine and session factory, kept on app.state for get_db_session."""
    load_all_models()
    engine = create_async_engine(str(settings.db_url), echo=settings.db_echo)
    app.state.db_engine = engine
    app.state.db_session_factory = async_sessionmaker(engine, expire_on_commit=False)


def setup_opentelemetry(app: FastAPI) -> None:  # pragma: no cover
    """
    Trace requests and SQL to the OTLP collector.

    Does nothing unless HOUSEHUNT_OPENTELEMETRY_ENDPOINT is set.
    """
    if not settings.opentelemetry_endpoint:
        return

    tracer_provider = TracerProvider(
        resource=Resource(
            attributes={
                SERVICE_NAME: "househunt",
                DEPLOYMENT_ENVIRONMENT: settings.environment,
            },
        ),
    )
    tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=settings.opentelemetry_endpoint, insecure=True),
        ),
    )

    FastAPIInstrumentor().instrument_app(
        app,
        tracer_provider=tracer_provider,
        excluded_urls=",".join(UNTRACED_PATHS),
    )
    SQLAlchemyInstrumentor().instrument(
        tracer_provider=tracer_provider,
        engine=app.state.db_engine.sync_engine,
    )
    set_tracer_provider(tracer_provider=tracer_provider)
    logger.info("OpenTelemetry exporting to {}", settings.opentelemetry_endpoint)


def stop_opentelemetry(app: FastAPI) -> None:  # pragma: no cover
    if not settings.opentelemetry_endpoint:
        return
    FastAPIInstrumentor().uninstrument_app(app)
    SQLAlchemyInstrumentor().uninstrument()


def setup_prometheus(app: FastAPI) -> None:  # pragma: no cover
    """Request metrics on /metrics."""
    PrometheusFastApiInstrumentator(
        should_group_status_codes=False,
        excluded_handlers=["/health", "/metrics"],
    ).instrument(app).expose(app, should_gzip=True, name="prometheus_metrics")


@asynccontextmanager
async def lifespan_setup(
    app: FastAPI,
) -> AsyncGenerator[None, None]:  # pragma: no cover
    """
    Start the broker and the database, then instrument the app.

    The middleware stack is rebuilt because the instrumentors add
    middleware after the app was created.
    """
    app.middleware_stack = None
    if not broker.is_worker_process:
        await broker.startup()
    _setup_db(app)
    setup_opentelemetry(app)
    setup_prometheus(app)
    app.middleware_stack = app.build_middleware_stack()
    logger.info("HouseHunt started ({} environment)", settings.environment)

    yield

    if not broker.is_worker_process:
        await broker.shutdown()
    await app.state.db_engine.dispose()
    stop_opentelemetry(app)
