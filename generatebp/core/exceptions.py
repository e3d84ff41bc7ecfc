"""
Custom exception hierarchy for generatebp.

All exceptions inherit from GenerateBpError so the CLI can report every
expected failure the same way. Each exception type carries context for
debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenerateBpError(Exception):
    """Base exception for all generatebp errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(GenerateBpError):
    """Raised when input validation fails."""

    field_name: str | None = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class ResolutionReportError(GenerateBpError):
    """Raised when a resolution report or platform catalog cannot be loaded."""

    report_path: str = ""

    def __str__(self) -> str:
        return f"Invalid resolution input '{self.report_path}': {super().__str__()}"


@dataclass
class UnknownArtifactKindError(GenerateBpError):
    """Raised for a payload that is neither a jar nor an aar.

    This is a configuration error, not a data error: nothing can be emitted
    for the artifact, so the whole run aborts.
    """

    artifact: str = ""
    extension: str = ""

    def __str__(self) -> str:
        return f"Unknown file extension '{self.extension}' for {self.artifact}: {self.message}"


@dataclass
class ModuleNameCollisionError(GenerateBpError):
    """Raised when two distinct module identities render to the same module name."""

    module_name: str = ""
    identities: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        clashing = ", ".join(self.identities)
        return f"Module name '{self.module_name}' is produced by {clashing}: {self.message}"


@dataclass
class ArchiveEntryError(GenerateBpError):
    """Raised when a required entry is missing from an archive artifact."""

    archive_path: str = ""
    entry: str = ""

    def __str__(self) -> str:
        return f"Missing '{self.entry}' in {self.archive_path}: {self.message}"


@dataclass
class PipelineError(GenerateBpError):
    """Raised when the generation pass fails."""

    stage: str = ""
    run_id: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Pipeline error at stage '{self.stage}' (run: {self.run_id}): {base}"
