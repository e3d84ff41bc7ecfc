"""
Availability Classifier.

Decides whether a module is already provided by the target platform or has to
be vendored, and owns the list of identities that are never declared as edges.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from fnmatch import fnmatchcase
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import ResolutionReportError
from ...core.logging import get_logger

logger = get_logger(__name__)

AvailabilityPredicate = Callable[[str, str], bool]

# The toolchain's common stdlib shows up in POM scans but is never an edge
KOTLIN_STDLIB_COMMON = "org.jetbrains.kotlin:kotlin-stdlib-common"
# The toolchain's bill of materials is never a top-level dependency
KOTLIN_BOM = "org.jetbrains.kotlin:kotlin-bom"


class Classification(str, Enum):
    """Where a module comes from at build time."""

    PLATFORM = "platform"
    VENDORED = "vendored"


class PlatformCatalog(BaseModel):
    """Modules the target platform already provides.

    Each entry is a case-sensitive glob matched against ``group:artifactId``,
    e.g. ``androidx.*:*`` or ``com.google.android.material:material``.
    """

    modules: list[str] = Field(default_factory=list, description="group:artifactId globs")

    def is_available(self, group: str, artifact_id: str) -> bool:
        identity = f"{group}:{artifact_id}"
        return any(fnmatchcase(identity, pattern) for pattern in self.modules)

    @classmethod
    def load(cls, path: Path) -> PlatformCatalog:
        """Load a catalog from JSON.

        Raises:
            ResolutionReportError: If the file does not match the catalog schema.
        """
        try:
            catalog = cls.model_validate_json(path.read_text(encoding="utf-8"))
        except PydanticValidationError as e:
            raise ResolutionReportError(
                message="platform catalog does not match the expected schema",
                report_path=str(path),
                cause=e,
            )
        logger.debug("Loaded platform catalog", path=str(path), patterns=len(catalog.modules))
        return catalog


class AvailabilityClassifier:
    """Classifies module identities as platform-provided or vendored."""

    def __init__(
        self,
        is_available: AvailabilityPredicate,
        excluded_edges: Iterable[str] = (KOTLIN_STDLIB_COMMON,),
    ) -> None:
        """Initialize the classifier.

        Args:
            is_available: ``(group, artifactId) -> bool`` availability oracle
            excluded_edges: ``group:artifactId`` identities never rendered as edges
        """
        self._is_available = is_available
        self.excluded_edges = frozenset(excluded_edges)

    @classmethod
    def from_catalog(cls, catalog: PlatformCatalog) -> AvailabilityClassifier:
        return cls(catalog.is_available)

    def classify(self, group: str, artifact_id: str) -> Classification:
        if self._is_available(group, artifact_id):
            return Classification.PLATFORM
        return Classification.VENDORED

    def is_platform(self, group: str, artifact_id: str) -> bool:
        return self.classify(group, artifact_id) is Classification.PLATFORM

    def is_excluded_edge(self, dependency: str) -> bool:
        return dependency in self.excluded_edges
