from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from observable_app.api import router
from observable_app.config import load_settings
from observable_app.log import configure_logging
from observable_app.metrics import MetricsRegistry, create_app_metrics
from observable_app.random_source import NumpyRandomSource
from observable_app.sampler import ActiveUsersSampler


def create_app(settings=None, metrics=None, random_source=None) -> FastAPI:
    settings = settings if settings is not None else load_settings()
    if metrics is None:
        metrics = create_app_metrics(MetricsRegistry(include_runtime_collectors=True))
    if random_source is None:
        random_source = NumpyRandomSource()

    sampler = ActiveUsersSampler(
        metrics.active_users, random_source, interval_seconds=settings.sample_interval_seconds
    )

    @asynccontextmanager
    async def lifespan(_app):
        sampler.start()
        try:
            yield
        finally:
            await sampler.stop()

    app = FastAPI(title="observable-app", lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.random_source = random_source
    app.state.sampler = sampler
    app.include_router(router)
    return app


app = create_app()


def run():
    settings = app.state.settings
    # global logging is set up by the entry point only
    configure_logging(settings.log_level)
    structlog.get_logger(__name__).info("Server starting", port=settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)
