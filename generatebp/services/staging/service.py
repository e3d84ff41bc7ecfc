"""
Artifact Staging Service.

Plans which resolved artifacts get vendored, copies their payloads into
libs/{group}/{artifactId}/, extracts aar manifests to discover SDK bounds, and
flattens POM dependency lists into raw transitive edges.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field

from ...core.config import DEFAULT_MIN_SDK_VERSION
from ...core.exceptions import ModuleNameCollisionError
from ...core.logging import get_logger
from ...models.artifact import ArtifactKind, ModuleIdentity, ResolvedArtifact, SdkBounds
from ...storage import StagingBackend
from ..classification import AvailabilityClassifier
from ..naming import NamingStrategy

logger = get_logger(__name__)

ANDROID_MANIFEST = "AndroidManifest.xml"
ANDROID_NS = "http://schemas.android.com/apk/res/android"
MAVEN_NS = {"m": "http://maven.apache.org/POM/4.0.0"}


class StagingPlan(BaseModel):
    """Deduplicated, classified view of a resolved artifact list."""

    vendored: list[ResolvedArtifact] = Field(default_factory=list)
    platform: list[ResolvedArtifact] = Field(default_factory=list)
    duplicates: list[ResolvedArtifact] = Field(default_factory=list)
    resolved_identities: frozenset[str] = Field(
        default_factory=frozenset, description="Every resolved group:name, any version"
    )


class StagedArtifact(BaseModel):
    """A vendored artifact after its files were staged."""

    artifact: ResolvedArtifact
    payload_path: str = Field(description="Payload path relative to libs/")
    manifest_path: str | None = Field(default=None, description="Manifest path relative to libs/")
    sdk: SdkBounds
    dependencies: list[str] = Field(
        default_factory=list, description="Raw group:artifactId entries from every POM found"
    )


class PomLocator(ABC):
    """Finds the POM files describing an artifact's dependencies."""

    @abstractmethod
    def locate(self, artifact: ResolvedArtifact) -> list[Path]:
        """Return POM paths in a stable order."""
        ...


class GradleCachePomLocator(PomLocator):
    """Locates POMs in the Gradle module cache.

    The cache stores ``group/name/version/<hash>/file``, with the POM in a
    sibling hash directory, so every POM under the payload's grandparent belongs
    to the same version. POMs listed in the resolution report take precedence.
    """

    def locate(self, artifact: ResolvedArtifact) -> list[Path]:
        if artifact.pom_files:
            return list(artifact.pom_files)

        version_dir = artifact.file.parent.parent
        if not version_dir.is_dir():
            return []
        return sorted(version_dir.rglob("*.pom"))


def _find(el: ET.Element, tag: str) -> ET.Element | None:
    """Find a direct child element with or without the Maven namespace."""
    result = el.find(f"m:{tag}", MAVEN_NS)
    if result is not None:
        return result
    return el.find(tag)


def _text(el: ET.Element, tag: str) -> str:
    child = _find(el, tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def parse_pom_dependencies(pom_path: Path) -> list[str]:
    """Flatten a POM's project-level ``<dependencies>`` into ``group:artifactId`` strings.

    Entries keep document order; duplicates are kept. ``<dependencyManagement>``
    is not a direct child list and is ignored.

    Args:
        pom_path: POM file to read

    Returns:
        Ordered ``group:artifactId`` strings
    """
    root = ET.parse(pom_path).getroot()
    dependencies = _find(root, "dependencies")
    if dependencies is None:
        return []

    result = []
    for dependency in dependencies:
        group = _text(dependency, "groupId")
        artifact_id = _text(dependency, "artifactId")
        if not group or not artifact_id:
            logger.debug("Skipping incomplete POM dependency", pom=str(pom_path))
            continue
        result.append(f"{group}:{artifact_id}")
    return result


def _sdk_attribute(uses_sdk: ET.Element, attribute: str) -> int | None:
    value = uses_sdk.get(f"{{{ANDROID_NS}}}{attribute}", uses_sdk.get(attribute))
    if value is None:
        return None
    try:
        version = int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric SDK attribute", attribute=attribute, value=value)
        return None
    if version < 1:
        logger.debug("Ignoring out-of-range SDK attribute", attribute=attribute, value=value)
        return None
    return version


def parse_sdk_bounds(manifest_xml: bytes, default_target_sdk: int, default_min_sdk: int) -> SdkBounds:
    """Read ``uses-sdk`` bounds from an AndroidManifest.xml.

    The manifest is parsed from bytes so a byte order mark or a declared
    encoding is honoured. Missing or unusable attributes fall back to the
    given defaults; API levels start at 1.
    """
    root = ET.fromstring(manifest_xml)
    uses_sdk = root.find("uses-sdk")

    target_sdk = default_target_sdk
    min_sdk = default_min_sdk
    if uses_sdk is not None:
        declared_target = _sdk_attribute(uses_sdk, "targetSdkVersion")
        if declared_target is not None:
            target_sdk = declared_target
        declared_min = _sdk_attribute(uses_sdk, "minSdkVersion")
        if declared_min is not None:
            min_sdk = declared_min
    else:
        logger.debug("Manifest has no uses-sdk element, using defaults")

    return SdkBounds(target_sdk=target_sdk, min_sdk=min_sdk)


class ArtifactStager:
    """Stages vendored artifacts into the libs/ tree.

    This service:
    1. Sorts and deduplicates the resolved artifacts by module identity
    2. Classifies them, skipping platform modules
    3. Copies vendored payloads into libs/{group}/{artifactId}/
    4. Extracts aar manifests and reads their SDK bounds
    5. Collects raw transitive edges from the artifact's POMs
    """

    def __init__(
        self,
        storage: StagingBackend,
        classifier: AvailabilityClassifier,
        naming: NamingStrategy,
        default_target_sdk: int,
        default_min_sdk: int = DEFAULT_MIN_SDK_VERSION,
        libs_dir: str = "libs",
        pom_locator: PomLocator | None = None,
    ) -> None:
        """Initialize the staging service.

        Args:
            storage: Backend rooted at the module directory
            classifier: Platform availability classifier
            naming: Module naming strategy
            default_target_sdk: Target SDK when a manifest declares none
            default_min_sdk: Minimum SDK when a manifest declares none
            libs_dir: Staging directory key
            pom_locator: POM discovery, defaults to the Gradle cache layout
        """
        self.storage = storage
        self.classifier = classifier
        self.naming = naming
        self.default_target_sdk = default_target_sdk
        self.default_min_sdk = default_min_sdk
        self.libs_dir = libs_dir
        self.pom_locator = pom_locator or GradleCachePomLocator()

    def plan(self, artifacts: Iterable[ResolvedArtifact]) -> StagingPlan:
        """Sort, deduplicate and classify resolved artifacts.

        Validation happens here, before anything on disk changes.

        Raises:
            UnknownArtifactKindError: A vendored payload is neither jar nor aar.
            ModuleNameCollisionError: Two identities render to the same module name.
        """
        artifacts = list(artifacts)
        plan = StagingPlan(resolved_identities=frozenset(a.identity.key for a in artifacts))

        seen: set[ModuleIdentity] = set()
        names: dict[str, ModuleIdentity] = {}
        for artifact in sorted(artifacts, key=lambda a: a.identity.sort_key):
            identity = artifact.identity
            if identity in seen:
                plan.duplicates.append(artifact)
                logger.debug("Skipping duplicate version", artifact=str(artifact))
                continue
            seen.add(identity)

            if self.classifier.is_platform(identity.group, identity.name):
                plan.platform.append(artifact)
                logger.debug("Skipping module available in AOSP", module=identity.key)
                continue

            # Raises on payloads that cannot be declared
            kind = artifact.kind

            name = self.naming.module_name(identity)
            if name in names:
                raise ModuleNameCollisionError(
                    message="vendored module names must be unique",
                    module_name=name,
                    identities=[names[name].key, identity.key],
                )
            names[name] = identity
            plan.vendored.append(artifact)
            logger.debug("Vendoring module", module=identity.key, kind=kind.value, name=name)

        return plan

    def reset(self) -> None:
        """Delete and recreate the libs/ tree."""
        self.storage.reset(self.libs_dir)

    def stage(self, artifact: ResolvedArtifact) -> StagedArtifact:
        """Copy one vendored artifact and collect what its declarations need."""
        identity = artifact.identity
        module_path = self.naming.module_path(identity)

        payload_path = f"{module_path}/{artifact.file.name}"
        self.storage.copy_file(artifact.file, f"{self.libs_dir}/{payload_path}")

        sdk = SdkBounds(target_sdk=self.default_target_sdk, min_sdk=self.default_min_sdk)
        manifest_path = None
        if artifact.kind is ArtifactKind.AAR:
            manifest_path = f"{module_path}/{ANDROID_MANIFEST}"
            manifest_key = f"{self.libs_dir}/{manifest_path}"
            self.storage.extract_entry(artifact.file, ANDROID_MANIFEST, manifest_key)
            sdk = parse_sdk_bounds(
                self.storage.read_bytes(manifest_key),
                self.default_target_sdk,
                self.default_min_sdk,
            )

        dependencies = [
            dependency
            for pom in self.pom_locator.locate(artifact)
            for dependency in parse_pom_dependencies(pom)
        ]

        logger.debug(
            "Staged artifact",
            module=identity.key,
            payload=payload_path,
            target_sdk=sdk.target_sdk,
            min_sdk=sdk.min_sdk,
            raw_dependencies=len(dependencies),
        )

        return StagedArtifact(
            artifact=artifact,
            payload_path=payload_path,
            manifest_path=manifest_path,
            sdk=sdk,
            dependencies=dependencies,
        )
