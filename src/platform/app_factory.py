"""
FastAPI App Factory

Builds the HTTP surface of the booking engine: package registration, seat
layout administration and checkout/hold endpoints under ``/api``.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.tour_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.tour_booking.driving_adapter.http_controller.package_controller import (
    router as package_router,
)
from src.service.tour_booking.driving_adapter.http_controller.seat_layout_controller import (
    router as seat_layout_router,
)


ROUTERS: tuple[tuple[APIRouter, str, str], ...] = (
    (package_router, '/api/package', 'package'),
    (seat_layout_router, '/api/package', 'seat-layout'),
    (booking_router, '/api/booking', 'booking'),
)


def create_app(*, lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]]) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description='Tour seat layout and multi-package booking allocation',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Instrument before routes are mounted
    TracingConfig.instrument_fastapi(app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    return app
