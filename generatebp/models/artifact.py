"""
Resolved-artifact data models.

These models describe what the host build's dependency resolution hands over:
the resolved artifacts with their payload files, and the dependencies the
project declares directly. The engine only reads them.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ResolutionReportError, UnknownArtifactKindError


class ArtifactKind(str, Enum):
    """Payload packaging of a resolved artifact."""

    JAR = "jar"
    AAR = "aar"

    @classmethod
    def from_path(cls, path: Path) -> ArtifactKind:
        """Derive the kind from a payload file extension.

        Raises:
            UnknownArtifactKindError: If the extension is neither jar nor aar.
        """
        extension = path.suffix.lstrip(".")
        try:
            return cls(extension)
        except ValueError:
            raise UnknownArtifactKindError(
                message="only jar and aar payloads can be declared",
                artifact=path.name,
                extension=extension,
            )


class ModuleIdentity(BaseModel):
    """Version-independent ``group:name`` key of a module."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(min_length=1, description="Maven group ID")
    name: str = Field(min_length=1, description="Maven artifact ID")

    @property
    def key(self) -> str:
        """Identity in ``group:name`` notation."""
        return f"{self.group}:{self.name}"

    @property
    def sort_key(self) -> str:
        """Ordering key, matching the underscore-joined vendor name."""
        return f"{self.group}_{self.name}"

    def __str__(self) -> str:
        return self.key


class TopLevelDependency(BaseModel):
    """A dependency declared directly by the project."""

    group: str = Field(min_length=1)
    name: str = Field(min_length=1)

    @property
    def identity(self) -> ModuleIdentity:
        return ModuleIdentity(group=self.group, name=self.name)


class ResolvedArtifact(BaseModel):
    """A resolved artifact with its payload file."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(min_length=1, description="Maven group ID")
    name: str = Field(min_length=1, description="Maven artifact ID")
    version: str = Field(min_length=1, description="Resolved version")
    file: Path = Field(description="Payload file (.jar or .aar)")
    pom_files: tuple[Path, ...] = Field(
        default=(), description="POM files exported by the resolver, if any"
    )

    @property
    def identity(self) -> ModuleIdentity:
        return ModuleIdentity(group=self.group, name=self.name)

    @property
    def kind(self) -> ArtifactKind:
        """Payload kind.

        Raises:
            UnknownArtifactKindError: For payloads other than jar and aar.
        """
        try:
            return ArtifactKind.from_path(self.file)
        except UnknownArtifactKindError as e:
            e.artifact = f"{self.identity}:{self.version}"
            raise

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"


class SdkBounds(BaseModel):
    """SDK versions declared for a module."""

    target_sdk: int = Field(ge=1)
    min_sdk: int = Field(ge=1)


class ResolutionReport(BaseModel):
    """Resolution output exported by the host build."""

    project_name: str | None = Field(default=None, description="Root project name")
    dependencies: list[TopLevelDependency] = Field(default_factory=list)
    artifacts: list[ResolvedArtifact] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> ResolutionReport:
        """Load a report from JSON, resolving relative paths against its directory.

        Args:
            path: Report file

        Returns:
            The parsed report

        Raises:
            ResolutionReportError: If the file is not valid JSON or fails validation.
        """
        try:
            report = cls.model_validate_json(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise ResolutionReportError(
                message="report does not match the expected schema",
                report_path=str(path),
                cause=e,
            )

        base = path.parent
        artifacts = [
            artifact.model_copy(
                update={
                    "file": base / artifact.file,
                    "pom_files": tuple(base / pom for pom in artifact.pom_files),
                }
            )
            for artifact in report.artifacts
        ]
        return report.model_copy(update={"artifacts": artifacts})
