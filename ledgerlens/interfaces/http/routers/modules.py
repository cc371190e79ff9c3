"""Module listing endpoints."""

from fastapi import APIRouter, Depends

from ledgerlens.domain.modules import Module, ModuleService
from ledgerlens.interfaces.http.deps import api_version, get_module_service, get_ss58_format
from ledgerlens.schemas import ErrorResponse, ModuleResponse

router = APIRouter(
    dependencies=[Depends(api_version)],
    responses={
        404: {"model": ErrorResponse, "description": "Unknown API version or module"},
        500: {"model": ErrorResponse, "description": "Ledger read or decode failure"},
    },
)


def _to_schema(module: Module, ss58_format: int) -> ModuleResponse:
    return ModuleResponse(
        owner=module.owner.to_ss58(ss58_format),
        id=module.id,
        name=module.name,
        data=module.data,
        url=module.url,
        collateral=str(module.collateral),
        take=module.take,
        tier=module.tier.value if module.tier else None,
        created_at=module.created_at,
        last_updated=module.last_updated,
    )


@router.get("", response_model=list[ModuleResponse], summary="List registered modules")
async def list_modules(
    service: ModuleService = Depends(get_module_service),
    ss58_format: int = Depends(get_ss58_format),
) -> list[ModuleResponse]:
    batch = await service.list_modules()
    return [_to_schema(module, ss58_format) for module in batch.records]


@router.get("/{module_id}", response_model=ModuleResponse, summary="Get a module by id")
async def get_module(
    module_id: int,
    service: ModuleService = Depends(get_module_service),
    ss58_format: int = Depends(get_ss58_format),
) -> ModuleResponse:
    module = await service.get_module(module_id)
    return _to_schema(module, ss58_format)
