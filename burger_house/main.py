"""
Burger House - ordering and table booking API
"""

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from burger_house import __version__
from burger_house.api import orders, reservations
from burger_house.clock import Clock, SystemClock
from burger_house.config import Settings, get_settings
from burger_house.database import create_engine, create_session_factory, init_models
from burger_house.errors import (
    ConflictError,
    DomainError,
    InvalidInputError,
    NotFoundError,
    StoreError,
)
from burger_house.services import BookingArbiter, BookingManager, OrderManager
from burger_house.store import BaseStore, InMemoryStore

logger = structlog.get_logger()


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


ERROR_STATUS = (
    (InvalidInputError, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StoreError, 503),
)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = 500
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BaseStore] = None,
    clock: Optional[Clock] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the API application.

    Each app owns its own store and services; nothing is shared at module
    level. Passing ``store`` skips the backend chosen by settings.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    clock = clock or SystemClock()

    engine = None
    if store is None:
        if settings.store_backend == "sql":
            from burger_house.store.sql import SqlAlchemyStore

            engine = create_engine(settings.database_url, echo=settings.api_debug)
            store = SqlAlchemyStore(create_session_factory(engine))
        elif settings.store_backend == "memory":
            store = InMemoryStore()
        else:
            raise ValueError(f"Unknown store backend: {settings.store_backend}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info(
            "Starting Burger House API",
            version=__version__,
            store=type(store).__name__,
        )
        if engine is not None:
            await init_models(engine)
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("Shutting down Burger House API")

    app = FastAPI(
        title="Burger House",
        description="Ordering and table booking for Burger House",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.order_manager = OrderManager(
        store,
        clock=clock,
        rng=rng,
        tax_rate=settings.default_tax_rate,
        ready_window=(settings.ready_min_minutes, settings.ready_max_minutes),
    )
    app.state.booking_arbiter = BookingArbiter(
        store,
        clock=clock,
        capacity=settings.slot_capacity,
        max_party_size=settings.max_party_size,
    )
    app.state.booking_manager = BookingManager(store, max_tables=settings.max_tables)

    app.add_exception_handler(DomainError, domain_error_handler)

    @app.get("/health")
    async def health():
        """Basic health check"""
        return {"status": "healthy", "service": "api", "version": __version__}

    app.include_router(orders.router, tags=["Orders"])
    app.include_router(reservations.router, tags=["Reservations"])

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "burger_house.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )


if __name__ == "__main__":
    run()
