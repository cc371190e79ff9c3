"""Domain layer utilities for registered modules."""

from .models import Module, ModuleTier
from .service import ModuleService, decode_module_entry

__all__ = [
    "Module",
    "ModuleService",
    "ModuleTier",
    "decode_module_entry",
]
