"""
Production FastAPI Application

Seat layouts, bookings and holds are kept in process memory; an external
scheduler calls ``POST /api/booking/holds/release-expired``.

Run with ``granian src.main:app --interface asgi --port 8100`` or
``python -m src.main``. State is per process, so run a single worker.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Tour Booking] Starting up...')

    tracing = TracingConfig()
    tracing.setup()
    Logger.base.info('📊 [Tour Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Tour Booking] Dependency injection wired')

    Logger.base.info('✅ [Tour Booking] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Tour Booking] Shutting down...')

    tracing.shutdown()
    Logger.base.info('📊 [Tour Booking] Tracing shutdown complete')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Tour Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')


if __name__ == '__main__':
    import os

    from granian import Granian
    from granian.constants import Interfaces

    Granian(
        'src.main:app',
        address=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', '8100')),
        interface=Interfaces.ASGI,
        workers=int(os.getenv('WORKERS', '1')),
    ).serve()
