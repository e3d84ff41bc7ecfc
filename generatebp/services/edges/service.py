"""
Dependency Edge Resolver.

Turns the raw ``group:artifactId`` strings collected from an artifact's POMs
into the ordered list of Soong module names its library module depends on.
"""

from __future__ import annotations

from collections.abc import Iterable

from ...core.logging import get_logger
from ...models.artifact import ResolvedArtifact
from ...models.blueprint import NODEPS_SUFFIX
from ..classification import AvailabilityClassifier
from ..naming import NamingStrategy

logger = get_logger(__name__)


class DependencyEdgeResolver:
    """Filters, deduplicates and renders transitive edges.

    An edge survives only if its identity was resolved (at any version, platform
    or vendored) and it is not on the classifier's exclusion list.
    """

    def __init__(
        self,
        resolved_identities: Iterable[str],
        classifier: AvailabilityClassifier,
        naming: NamingStrategy,
    ) -> None:
        """Initialize the resolver.

        Args:
            resolved_identities: ``group:name`` of every resolved artifact
            classifier: Platform availability classifier
            naming: Module naming strategy
        """
        self.resolved_identities = frozenset(resolved_identities)
        self.classifier = classifier
        self.naming = naming
        self.dropped_count = 0

    def resolve_edges(
        self,
        artifact: ResolvedArtifact,
        raw_dependencies: Iterable[str],
        want_nodeps_edge: bool,
    ) -> list[str]:
        """Render the edge list of one of an artifact's modules.

        Args:
            artifact: Artifact whose modules are being declared
            raw_dependencies: ``group:artifactId`` strings in POM discovery order
            want_nodeps_edge: Prepend the artifact's own ``-nodeps`` module

        Returns:
            Rendered module names, empty if no edge survives
        """
        identity = artifact.identity
        module_name = self.naming.module_name(identity)
        if not want_nodeps_edge:
            module_name = f"{module_name}{NODEPS_SUFFIX}"

        edges: list[str] = []
        for dependency in raw_dependencies:
            if dependency not in self.resolved_identities:
                self.dropped_count += 1
                logger.debug(
                    "Skipping dependency not in resolved artifacts",
                    module=module_name,
                    dependency=dependency,
                )
                continue
            if self.classifier.is_excluded_edge(dependency):
                continue
            if dependency not in edges:
                edges.append(dependency)

        if want_nodeps_edge:
            edges.insert(0, f"{identity.group}_{identity.name}{NODEPS_SUFFIX}")

        return [self.naming.render(edge, self.classifier) for edge in edges]
