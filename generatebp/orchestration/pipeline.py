"""
Generation pipeline for generatebp.

Runs the single synchronous pass: plan, reset libs/, rewrite the top-level
static_libs region, then stage and emit every vendored artifact in sorted
identity order.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from ..core.config import Config
from ..core.exceptions import GenerateBpError, PipelineError, ValidationError
from ..core.logging import bind_context, clear_context, get_logger
from ..models.artifact import ResolutionReport
from ..services.classification import AvailabilityClassifier, PlatformCatalog
from ..services.edges import DependencyEdgeResolver
from ..services.emitter import ModuleEmitter
from ..services.naming import NamingStrategy
from ..services.staging import ArtifactStager, PomLocator
from ..storage import LocalStagingBackend, StagingBackend

logger = get_logger(__name__)


class PipelineResult(BaseModel):
    """Result of a generation run."""

    run_id: str
    success: bool
    started_at: datetime
    completed_at: datetime

    # Outputs
    vendored_modules: list[str] = Field(default_factory=list, description="Emitted module names")
    platform_artifacts: list[str] = Field(default_factory=list)
    duplicate_artifacts: list[str] = Field(default_factory=list)
    top_level_dependencies: list[str] = Field(default_factory=list)
    dropped_edges: int = 0
    warnings: list[str] = Field(default_factory=list)

    # Output location
    libs_directory: str = ""
    blueprint_path: str = ""

    # Errors
    error: str | None = None
    failed_stage: str | None = None

    def raise_for_failure(self) -> None:
        """Raise a PipelineError if the run failed."""
        if not self.success:
            raise PipelineError(
                message=self.error or "generation failed",
                stage=self.failed_stage or "",
                run_id=self.run_id,
            )


class GenerateBpPipeline:
    """High-level pipeline interface for programmatic use."""

    def __init__(
        self,
        config: Config,
        classifier: AvailabilityClassifier,
        storage: StagingBackend | None = None,
        pom_locator: PomLocator | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Project configuration
            classifier: Platform availability classifier
            storage: Staging backend, defaults to the local project directory
            pom_locator: POM discovery, defaults to the Gradle cache layout
        """
        self.config = config
        self.classifier = classifier
        self.storage = storage or LocalStagingBackend(config.project_dir)
        self.pom_locator = pom_locator

    def run(self, report: ResolutionReport) -> PipelineResult:
        """Run one full generation pass.

        Planning errors (unknown payload kinds, module name collisions) fail the
        run before anything on disk changes. I/O errors propagate.

        Args:
            report: Resolution report from the host build

        Returns:
            PipelineResult with the emitted modules and diagnostics
        """
        run_id = str(uuid.uuid4())[:8]
        started_at = datetime.utcnow()
        stage = "plan"
        project_name = self.config.project_name or report.project_name
        bind_context(run_id=run_id, project=project_name)

        try:
            if not project_name:
                raise ValidationError(
                    message="a project name is required as the module name prefix",
                    field_name="project_name",
                )

            naming = NamingStrategy(project_name)
            stager = ArtifactStager(
                storage=self.storage,
                classifier=self.classifier,
                naming=naming,
                default_target_sdk=self.config.default_target_sdk,
                default_min_sdk=self.config.default_min_sdk,
                libs_dir=self.config.libs_dir_name,
                pom_locator=self.pom_locator,
            )
            plan = stager.plan(report.artifacts)
            edge_resolver = DependencyEdgeResolver(plan.resolved_identities, self.classifier, naming)
            emitter = ModuleEmitter(
                storage=self.storage,
                naming=naming,
                classifier=self.classifier,
                edge_resolver=edge_resolver,
                libs_dir=self.config.libs_dir_name,
                blueprint_name=self.config.blueprint_name,
            )

            stage = "reset"
            stager.reset()

            stage = "top_level"
            warnings = []
            top_level = emitter.rewrite_top_level(report.dependencies)
            if not top_level.success and top_level.error:
                warnings.append(top_level.error)

            stage = "emit"
            emitted: list[str] = []
            for artifact in plan.vendored:
                staged = stager.stage(artifact)
                emitted.extend(emitter.emit(staged))

        except GenerateBpError as e:
            logger.error("Generation failed", stage=stage, error=str(e))
            return PipelineResult(
                run_id=run_id,
                success=False,
                started_at=started_at,
                completed_at=datetime.utcnow(),
                error=str(e),
                failed_stage=stage,
            )
        finally:
            clear_context()

        return PipelineResult(
            run_id=run_id,
            success=True,
            started_at=started_at,
            completed_at=datetime.utcnow(),
            vendored_modules=emitted,
            platform_artifacts=[str(a) for a in plan.platform],
            duplicate_artifacts=[str(a) for a in plan.duplicates],
            top_level_dependencies=top_level.data or [],
            dropped_edges=edge_resolver.dropped_count,
            warnings=warnings,
            libs_directory=str(self.config.libs_dir),
            blueprint_path=str(self.config.blueprint_path),
        )


def build_classifier(catalog_path: Path | None) -> AvailabilityClassifier:
    """Classifier backed by a platform catalog file, or vendoring everything."""
    catalog = PlatformCatalog.load(catalog_path) if catalog_path else PlatformCatalog()
    return AvailabilityClassifier.from_catalog(catalog)


def run_pipeline(report_path: str | Path, config: Config) -> PipelineResult:
    """Convenience function to run the pipeline from a report file.

    The report's project name is used as the module prefix unless the
    configuration sets one.

    Args:
        report_path: Resolution report JSON
        config: Project configuration

    Returns:
        PipelineResult with all outputs
    """
    report = ResolutionReport.load(Path(report_path))
    pipeline = GenerateBpPipeline(config, build_classifier(config.platform_catalog))
    return pipeline.run(report)
