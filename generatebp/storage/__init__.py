"""Staging storage abstraction for generatebp."""

from .interface import StagingBackend
from .local import LocalStagingBackend

__all__ = ["StagingBackend", "LocalStagingBackend"]
