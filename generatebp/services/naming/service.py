"""
Naming Strategy.

Maps module identities to Soong module names: a fixed platform name for modules
AOSP already ships, or a project-prefixed vendor name for everything staged
under libs/.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from ...models.artifact import ModuleIdentity
from ...models.blueprint import NODEPS_SUFFIX

if TYPE_CHECKING:
    from ..classification import AvailabilityClassifier

# Platform modules whose Soong name differs from group_artifactId
PLATFORM_MODULE_NAMES: dict[str, str] = {
    "androidx.constraintlayout:constraintlayout": "androidx-constraintlayout_constraintlayout",
    "com.google.auto.value:auto-value-annotations": "auto_value_annotations",
    "com.google.guava:guava": "guava",
    "com.google.guava:listenablefuture": "guava",
    "org.jetbrains.kotlin:kotlin-stdlib": "kotlin-stdlib",
    "org.jetbrains.kotlin:kotlin-stdlib-jdk8": "kotlin-stdlib-jdk8",
    "org.jetbrains.kotlinx:kotlinx-coroutines-android": "kotlinx-coroutines-android",
}


class NamingStrategy:
    """Renders module identities into Soong module names.

    Vendor names are ``{prefix}_{group}_{artifactId}``; they are injective only
    as long as no two identities join to the same string, which the stager
    checks while planning.
    """

    def __init__(
        self,
        project_prefix: str,
        platform_overrides: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the naming strategy.

        Args:
            project_prefix: Root project name prepended to vendor names
            platform_overrides: ``group:artifactId`` to platform module name table
        """
        self.project_prefix = project_prefix
        self.platform_overrides = dict(
            PLATFORM_MODULE_NAMES if platform_overrides is None else platform_overrides
        )

    def platform_name(self, group: str, artifact_id: str) -> str:
        return self.platform_overrides.get(f"{group}:{artifact_id}", f"{group}_{artifact_id}")

    def vendor_name(self, group_or_token: str, artifact_id: str | None = None) -> str:
        """Project-prefixed name.

        ``vendor_name(group, artifact_id)`` gives ``{prefix}_{group}_{artifactId}``,
        ``vendor_name(token)`` gives ``{prefix}_{token}`` for names without a group.
        """
        if artifact_id is None:
            return f"{self.project_prefix}_{group_or_token}"
        return f"{self.project_prefix}_{group_or_token}_{artifact_id}"

    def module_name(self, identity: ModuleIdentity) -> str:
        return self.vendor_name(identity.group, identity.name)

    def nodeps_name(self, identity: ModuleIdentity) -> str:
        return f"{self.module_name(identity)}{NODEPS_SUFFIX}"

    @staticmethod
    def module_path(identity: ModuleIdentity) -> str:
        """Directory of a vendored module, relative to libs/."""
        return f"{identity.group}/{identity.name}"

    def render(self, dependency: str, classifier: AvailabilityClassifier) -> str:
        """Render a dependency string as a Soong module name.

        ``group:artifactId`` strings take the platform name when the classifier
        says AOSP provides them; everything else takes the vendor name.
        """
        if ":" in dependency:
            group, artifact_id = dependency.split(":", 1)
            if classifier.is_platform(group, artifact_id):
                return self.platform_name(group, artifact_id)
            return self.vendor_name(group, artifact_id)
        return self.vendor_name(dependency)
