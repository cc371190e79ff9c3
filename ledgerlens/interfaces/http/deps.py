"""Dependency providers for the HTTP routers."""

from fastapi import Depends, Path, Request

from ledgerlens.core.container import ApplicationContainer
from ledgerlens.core.crypto import AttestationVerifier
from ledgerlens.domain.common.repository import LedgerReader
from ledgerlens.domain.modules import ModuleService

from .errors import UnknownVersionError

SUPPORTED_VERSIONS = {"v1"}


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_ledger_reader(container: ApplicationContainer = Depends(get_app_container)) -> LedgerReader:
    return container.ledger_reader()


def get_module_service(reader: LedgerReader = Depends(get_ledger_reader)) -> ModuleService:
    return ModuleService(reader)


def get_verifier(container: ApplicationContainer = Depends(get_app_container)) -> AttestationVerifier:
    return container.verifier


def get_ss58_format(container: ApplicationContainer = Depends(get_app_container)) -> int:
    return container.settings.ss58_format


def api_version(version: str = Path(..., description="API version")) -> str:
    if version not in SUPPORTED_VERSIONS:
        raise UnknownVersionError(version)
    return version


__all__ = [
    "SUPPORTED_VERSIONS",
    "api_version",
    "get_app_container",
    "get_ledger_reader",
    "get_module_service",
    "get_ss58_format",
    "get_verifier",
]
