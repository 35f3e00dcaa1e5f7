from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from charging_profile.api.dependencies import get_settings
from charging_profile.api.v1 import health, profiles
from charging_profile.config.logging import setup_logging
from charging_profile.monitoring.metrics import init_app_info, setup_instrumentator


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting charging-profile service")
    yield
    logger.info("Shutting down charging-profile service")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="This API provides an endpoint for charging profile generation.",
        version=settings.app_version,
        lifespan=lifespan,
    )

    if settings.metrics_enabled:
        instrumentator = setup_instrumentator()
        instrumentator.instrument(app).expose(app)
        init_app_info(settings.app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(
        profiles.router, prefix="/api/v1", tags=["charging-profile"]
    )

    return app


def main():
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "charging_profile.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


app = create_app()


if __name__ == "__main__":
    main()
