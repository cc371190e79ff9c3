from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from ledgerlens import __version__
from ledgerlens.core.config import get_settings
from ledgerlens.core.container import ApplicationContainer, get_container
from ledgerlens.core.log import configure_logging
from ledgerlens.interfaces.http import create_api_router
from ledgerlens.interfaces.http.errors import register_exception_handlers


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    container = container or get_container()
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await container.shutdown()

    app = FastAPI(
        title=settings.project_name,
        description="Decoded chain state and usage attestation verification",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(GZipMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))
    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "ledgerlens.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    run()
