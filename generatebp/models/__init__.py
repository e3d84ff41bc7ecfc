"""Data models for generatebp."""

from .artifact import (
    ArtifactKind,
    ModuleIdentity,
    ResolutionReport,
    ResolvedArtifact,
    SdkBounds,
    TopLevelDependency,
)
from .blueprint import (
    APEX_AVAILABLE,
    JAVA_LANGUAGE_VERSION,
    NODEPS_SUFFIX,
    DeclarationKind,
    ImportArchive,
    ImportFlat,
    LibraryArchive,
    LibraryFlat,
    ModuleDeclaration,
)

__all__ = [
    "ArtifactKind",
    "ModuleIdentity",
    "ResolutionReport",
    "ResolvedArtifact",
    "SdkBounds",
    "TopLevelDependency",
    "APEX_AVAILABLE",
    "JAVA_LANGUAGE_VERSION",
    "NODEPS_SUFFIX",
    "DeclarationKind",
    "ImportArchive",
    "ImportFlat",
    "LibraryArchive",
    "LibraryFlat",
    "ModuleDeclaration",
]
