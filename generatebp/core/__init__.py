"""Core infrastructure components for generatebp."""

from .config import Config, get_config
from .exceptions import (
    ArchiveEntryError,
    GenerateBpError,
    ModuleNameCollisionError,
    PipelineError,
    ResolutionReportError,
    UnknownArtifactKindError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .types import ServiceResult

__all__ = [
    "Config",
    "get_config",
    "ArchiveEntryError",
    "GenerateBpError",
    "ModuleNameCollisionError",
    "PipelineError",
    "ResolutionReportError",
    "UnknownArtifactKindError",
    "ValidationError",
    "get_logger",
    "setup_logging",
    "ServiceResult",
]
