"""Android.bp module emission."""

from .formatter import render_module, write_blueprint_key_value
from .service import (
    LIBS_BLUEPRINT_HEADER,
    STATIC_LIBS_HEADER,
    ModuleEmitter,
)

__all__ = [
    "render_module",
    "write_blueprint_key_value",
    "LIBS_BLUEPRINT_HEADER",
    "STATIC_LIBS_HEADER",
    "ModuleEmitter",
]
