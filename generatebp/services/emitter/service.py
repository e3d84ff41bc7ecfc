"""
Module Emitter.

Builds the two declarations of each vendored artifact, appends them to
libs/Android.bp, and regenerates the static_libs region of the module's own
Android.bp from the project's top-level dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.artifact import ArtifactKind, ModuleIdentity, TopLevelDependency
from ...models.blueprint import (
    ImportArchive,
    ImportFlat,
    LibraryArchive,
    LibraryFlat,
    ModuleDeclaration,
)
from ...storage import StagingBackend
from ..classification import KOTLIN_BOM, AvailabilityClassifier
from ..edges import DependencyEdgeResolver
from ..naming import NamingStrategy
from ..staging import StagedArtifact
from .formatter import render_list_items, render_module, tabs

logger = get_logger(__name__)

LIBS_BLUEPRINT_HEADER = "// DO NOT EDIT THIS FILE MANUALLY\n"
STATIC_LIBS_HEADER = "// DO NOT EDIT THIS SECTION MANUALLY"
STATIC_LIBS_REGION = re.compile(r"static_libs: \[.*?\]", re.DOTALL)


class ModuleEmitter:
    """Writes Soong module declarations for staged artifacts."""

    def __init__(
        self,
        storage: StagingBackend,
        naming: NamingStrategy,
        classifier: AvailabilityClassifier,
        edge_resolver: DependencyEdgeResolver,
        libs_dir: str = "libs",
        blueprint_name: str = "Android.bp",
    ) -> None:
        """Initialize the emitter.

        Args:
            storage: Backend rooted at the module directory
            naming: Module naming strategy
            classifier: Platform availability classifier
            edge_resolver: Edge resolver bound to this run's resolved artifacts
            libs_dir: Staging directory key
            blueprint_name: Descriptor file name
        """
        self.storage = storage
        self.naming = naming
        self.classifier = classifier
        self.edge_resolver = edge_resolver
        self.libs_dir = libs_dir
        self.blueprint_name = blueprint_name
        self._builders: dict[ArtifactKind, Callable[[StagedArtifact], list[ModuleDeclaration]]] = {
            ArtifactKind.AAR: self._archive_declarations,
            ArtifactKind.JAR: self._flat_declarations,
        }

    @property
    def libs_blueprint_key(self) -> str:
        return f"{self.libs_dir}/{self.blueprint_name}"

    def _archive_declarations(self, staged: StagedArtifact) -> list[ModuleDeclaration]:
        identity = staged.artifact.identity
        return [
            ImportArchive(
                name=self.naming.nodeps_name(identity),
                aars=[staged.payload_path],
                sdk_version=staged.sdk.target_sdk,
                min_sdk_version=staged.sdk.min_sdk,
            ),
            LibraryArchive(
                name=self.naming.module_name(identity),
                sdk_version=staged.sdk.target_sdk,
                min_sdk_version=staged.sdk.min_sdk,
                manifest=staged.manifest_path or "",
                static_libs=self.edge_resolver.resolve_edges(
                    staged.artifact, staged.dependencies, want_nodeps_edge=True
                ),
            ),
        ]

    def _flat_declarations(self, staged: StagedArtifact) -> list[ModuleDeclaration]:
        identity = staged.artifact.identity
        return [
            ImportFlat(
                name=self.naming.nodeps_name(identity),
                jars=[staged.payload_path],
                sdk_version=staged.sdk.target_sdk,
                min_sdk_version=staged.sdk.min_sdk,
            ),
            LibraryFlat(
                name=self.naming.module_name(identity),
                sdk_version=staged.sdk.target_sdk,
                min_sdk_version=staged.sdk.min_sdk,
                static_libs=self.edge_resolver.resolve_edges(
                    staged.artifact, staged.dependencies, want_nodeps_edge=True
                ),
            ),
        ]

    def build_declarations(self, staged: StagedArtifact) -> list[ModuleDeclaration]:
        """Import module followed by library module for one staged artifact.

        Raises:
            UnknownArtifactKindError: For payloads other than jar and aar.
        """
        return self._builders[staged.artifact.kind](staged)

    def emit(self, staged: StagedArtifact) -> list[str]:
        """Append the declarations of a staged artifact to libs/Android.bp.

        Returns:
            Names of the emitted modules
        """
        declarations = self.build_declarations(staged)

        if self.storage.is_empty(self.libs_blueprint_key):
            self.storage.write_text(self.libs_blueprint_key, LIBS_BLUEPRINT_HEADER)

        self.storage.append_text(
            self.libs_blueprint_key,
            "".join(f"\n{render_module(declaration)}\n" for declaration in declarations),
        )
        return [declaration.name for declaration in declarations]

    def top_level_names(self, dependencies: Iterable[TopLevelDependency]) -> list[str]:
        """Render the project's declared dependencies, without the toolchain BOM."""
        identities: dict[str, ModuleIdentity] = {}
        for dependency in dependencies:
            identity = dependency.identity
            if identity.key != KOTLIN_BOM:
                identities.setdefault(identity.key, identity)

        ordered = sorted(identities.values(), key=lambda identity: identity.sort_key)
        return [self.naming.render(identity.key, self.classifier) for identity in ordered]

    def rewrite_top_level(self, dependencies: Iterable[TopLevelDependency]) -> ServiceResult[list[str]]:
        """Replace every static_libs region of the module's Android.bp.

        Each module in the descriptor gets the same list; the rest of the file is
        left untouched. A descriptor without any region is not modified.

        Raises:
            FileNotFoundError: If the descriptor does not exist.
        """
        names = self.top_level_names(dependencies)
        content = self.storage.read_text(self.blueprint_name)

        lines = [tabs(2) + STATIC_LIBS_HEADER, *render_list_items(names, 2)]
        replacement = "static_libs: [\n%s\n%s]" % ("\n".join(lines), tabs(1))

        updated, count = STATIC_LIBS_REGION.subn(lambda _: replacement, content)
        if count == 0:
            logger.warning("No static_libs region found", descriptor=self.blueprint_name)
            return ServiceResult.fail(
                f"{self.blueprint_name} has no static_libs region", descriptor=self.blueprint_name
            )

        self.storage.write_text(self.blueprint_name, updated)
        logger.debug(
            "Updated top-level dependencies",
            descriptor=self.blueprint_name,
            regions=count,
            count=len(names),
        )
        return ServiceResult.ok(names, regions=count)
