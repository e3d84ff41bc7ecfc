"""Artifact staging into libs/."""

from .service import (
    ArtifactStager,
    GradleCachePomLocator,
    PomLocator,
    StagedArtifact,
    StagingPlan,
    parse_pom_dependencies,
    parse_sdk_bounds,
)

__all__ = [
    "ArtifactStager",
    "GradleCachePomLocator",
    "PomLocator",
    "StagedArtifact",
    "StagingPlan",
    "parse_pom_dependencies",
    "parse_sdk_bounds",
]
