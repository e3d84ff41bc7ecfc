"""Services package for generatebp."""

from .classification import AvailabilityClassifier, Classification, PlatformCatalog
from .edges import DependencyEdgeResolver
from .emitter import ModuleEmitter
from .naming import NamingStrategy
from .staging import ArtifactStager, GradleCachePomLocator

__all__ = [
    "AvailabilityClassifier",
    "Classification",
    "PlatformCatalog",
    "DependencyEdgeResolver",
    "ModuleEmitter",
    "NamingStrategy",
    "ArtifactStager",
    "GradleCachePomLocator",
]
