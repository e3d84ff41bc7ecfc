"""Platform availability classification."""

from .service import (
    KOTLIN_BOM,
    KOTLIN_STDLIB_COMMON,
    AvailabilityClassifier,
    AvailabilityPredicate,
    Classification,
    PlatformCatalog,
)

__all__ = [
    "KOTLIN_BOM",
    "KOTLIN_STDLIB_COMMON",
    "AvailabilityClassifier",
    "AvailabilityPredicate",
    "Classification",
    "PlatformCatalog",
]
