"""
Soong module declaration models.

Each declaration kind is its own model with its required fields validated up
front, so rendering never has to guess which properties a module carries.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

APEX_AVAILABLE = (
    "//apex_available:platform",
    "//apex_available:anyapex",
)
JAVA_LANGUAGE_VERSION = "1.7"
NODEPS_SUFFIX = "-nodeps"


class DeclarationKind(str, Enum):
    """Soong module types emitted for vendored artifacts."""

    IMPORT_ARCHIVE = "android_library_import"
    LIBRARY_ARCHIVE = "android_library"
    IMPORT_FLAT = "java_import"
    LIBRARY_FLAT = "java_library_static"


class ModuleDeclaration(BaseModel):
    """Fields shared by every emitted module."""

    kind: ClassVar[DeclarationKind]

    name: str = Field(min_length=1, description="Soong module name")
    sdk_version: int = Field(ge=1)
    min_sdk_version: int = Field(ge=1)
    apex_available: list[str] = Field(default_factory=lambda: list(APEX_AVAILABLE))

    @property
    def module_type(self) -> str:
        return self.kind.value

    def properties(self) -> list[tuple[str, Any]]:
        """Ordered ``(key, value)`` pairs to render."""
        raise NotImplementedError


class _ImportDeclaration(ModuleDeclaration):
    """Import-only module exposing the raw payload, never carrying edges."""

    @model_validator(mode="after")
    def _check_nodeps_name(self) -> _ImportDeclaration:
        if not self.name.endswith(NODEPS_SUFFIX):
            raise ValueError(f"import module '{self.name}' must end with '{NODEPS_SUFFIX}'")
        return self


class _LibraryDeclaration(ModuleDeclaration):
    """Full module depending on its import counterpart plus transitive edges."""

    static_libs: list[str] = Field(default_factory=list)
    java_version: str = Field(default=JAVA_LANGUAGE_VERSION)

    @model_validator(mode="after")
    def _check_self_edge(self) -> _LibraryDeclaration:
        expected = f"{self.name}{NODEPS_SUFFIX}"
        if not self.static_libs or self.static_libs[0] != expected:
            raise ValueError(f"first static_libs entry of '{self.name}' must be '{expected}'")
        return self


class ImportArchive(_ImportDeclaration):
    """``android_library_import`` for an aar payload."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.IMPORT_ARCHIVE

    aars: list[str] = Field(min_length=1)

    def properties(self) -> list[tuple[str, Any]]:
        return [
            ("name", self.name),
            ("aars", self.aars),
            ("sdk_version", str(self.sdk_version)),
            ("min_sdk_version", str(self.min_sdk_version)),
            ("apex_available", self.apex_available),
        ]


class LibraryArchive(_LibraryDeclaration):
    """``android_library`` wrapping an imported aar."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.LIBRARY_ARCHIVE

    manifest: str = Field(min_length=1)

    def properties(self) -> list[tuple[str, Any]]:
        return [
            ("name", self.name),
            ("sdk_version", str(self.sdk_version)),
            ("min_sdk_version", str(self.min_sdk_version)),
            ("apex_available", self.apex_available),
            ("manifest", self.manifest),
            ("static_libs", self.static_libs),
            ("java_version", self.java_version),
        ]


class ImportFlat(_ImportDeclaration):
    """``java_import`` for a jar payload."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.IMPORT_FLAT

    jars: list[str] = Field(min_length=1)

    def properties(self) -> list[tuple[str, Any]]:
        return [
            ("name", self.name),
            ("jars", self.jars),
            ("sdk_version", str(self.sdk_version)),
            ("min_sdk_version", str(self.min_sdk_version)),
            ("apex_available", self.apex_available),
        ]


class LibraryFlat(_LibraryDeclaration):
    """``java_library_static`` wrapping an imported jar."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.LIBRARY_FLAT

    def properties(self) -> list[tuple[str, Any]]:
        return [
            ("name", self.name),
            ("sdk_version", str(self.sdk_version)),
            ("min_sdk_version", str(self.min_sdk_version)),
            ("apex_available", self.apex_available),
            ("static_libs", self.static_libs),
            ("java_version", self.java_version),
        ]
