"""
Shared FastAPI App Factory

Builds the application for production (src.main) and for the test client.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    ORDER_BASE,
    PAYMENT_BASE,
    PERFORMANCE_BASE,
    TICKET_BASE,
)
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.box_office.driving_adapter.http_controller.order_controller import (
    router as order_router,
)
from src.service.box_office.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.box_office.driving_adapter.http_controller.performance_controller import (
    router as performance_router,
)
from src.service.box_office.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Box office ticketing and inventory service',
    service_name: str = 'box-office',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Auto-instrument FastAPI (must be done before mounting routes)
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(payment_router, prefix=PAYMENT_BASE, tags=['payment'])
    app.include_router(performance_router, prefix=PERFORMANCE_BASE, tags=['performance'])
    app.include_router(order_router, prefix=ORDER_BASE, tags=['order'])
    app.include_router(ticket_router, prefix=TICKET_BASE, tags=['ticket'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
