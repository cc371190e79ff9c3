"""HTTP interface: routers, dependencies and error translation."""

from fastapi import APIRouter

from .routers import modules, verify


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=f"{prefix}/{{version}}")
    router.include_router(modules.router, prefix="/modules", tags=["modules"])
    router.include_router(verify.router, tags=["attestations"])
    return router


__all__ = ["create_api_router"]
