"""Transitive dependency edge resolution."""

from .service import DependencyEdgeResolver

__all__ = ["DependencyEdgeResolver"]
