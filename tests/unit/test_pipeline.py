"""Unit tests for the generation pipeline."""

import pytest

from generatebp.core.exceptions import PipelineError
from generatebp.models.artifact import ResolutionReport
from generatebp.orchestration import GenerateBpPipeline, run_pipeline


@pytest.fixture
def run(config, write_report, vendor_all):
    """Run the pipeline over a report built from cache entries."""

    def _run(artifacts, dependencies=(), classifier=None, **overrides):
        report = ResolutionReport.load(write_report(artifacts, dependencies))
        pipeline = GenerateBpPipeline(
            config.model_copy(update=overrides), classifier or vendor_all
        )
        return pipeline.run(report)

    return _run


class TestGenerateBpPipeline:
    """Tests for full generation runs."""

    def test_guava_scenario(self, run, gradle_cache, project_dir):
        """Test a single vendored jar declared as a top-level dependency."""
        result = run(
            [gradle_cache.add("com.google.guava", "guava", "31.0")],
            dependencies=["com.google.guava:guava"],
        )

        assert result.success
        assert result.vendored_modules == [
            "Example_com.google.guava_guava-nodeps",
            "Example_com.google.guava_guava",
        ]
        assert result.top_level_dependencies == ["Example_com.google.guava_guava"]
        assert (project_dir / "libs/com.google.guava/guava/guava-31.0.jar").is_file()
        modules = (project_dir / "libs/Android.bp").read_text()
        assert '        "com.google.guava/guava/guava-31.0.jar",\n' in modules
        assert '        "Example_com.google.guava_guava-nodeps",\n    ],\n    java_version' in modules

    def test_constraintlayout_platform_scenario(
        self, run, gradle_cache, project_dir, androidx_platform
    ):
        """Test that a platform-only dependency stages nothing."""
        result = run(
            [gradle_cache.add("androidx.constraintlayout", "constraintlayout", "2.1.4", "aar")],
            dependencies=["androidx.constraintlayout:constraintlayout"],
            classifier=androidx_platform,
        )

        assert result.success
        assert result.vendored_modules == []
        assert result.platform_artifacts == ["androidx.constraintlayout:constraintlayout:2.1.4"]
        assert result.top_level_dependencies == ["androidx-constraintlayout_constraintlayout"]
        assert not (project_dir / "libs" / "androidx.constraintlayout").exists()
        assert not (project_dir / "libs/Android.bp").exists()
        assert '"androidx-constraintlayout_constraintlayout",' in (
            project_dir / "Android.bp"
        ).read_text()

    def test_default_min_sdk_scenario(self, run, gradle_cache, project_dir, make_manifest):
        """Test that an aar without minSdkVersion is declared with minimum 14."""
        run(
            [
                gradle_cache.add(
                    "com.example", "widget", "1.0", "aar", manifest=make_manifest(target_sdk=33)
                )
            ]
        )

        modules = (project_dir / "libs/Android.bp").read_text()
        assert 'min_sdk_version: "14",' in modules
        assert 'sdk_version: "33",' in modules
        assert 'manifest: "com.example/widget/AndroidManifest.xml",' in modules

    def test_transitive_edges(self, run, gradle_cache, project_dir):
        """Test that resolved transitive edges are declared and dangling ones dropped."""
        result = run(
            [
                gradle_cache.add(
                    "com.squareup.okhttp3",
                    "okhttp",
                    "4.12.0",
                    dependencies=[
                        "com.squareup.okio:okio",
                        "org.jetbrains.kotlin:kotlin-stdlib-common",
                        "com.example:not-resolved",
                    ],
                ),
                gradle_cache.add("com.squareup.okio", "okio", "3.6.0"),
                gradle_cache.add("org.jetbrains.kotlin", "kotlin-stdlib-common", "1.9.0"),
            ]
        )

        assert result.success
        assert result.dropped_edges == 1
        modules = (project_dir / "libs/Android.bp").read_text()
        assert (
            "    static_libs: [\n"
            '        "Example_com.squareup.okhttp3_okhttp-nodeps",\n'
            '        "Example_com.squareup.okio_okio",\n'
            "    ],\n"
        ) in modules

    def test_duplicate_versions_emit_once(self, run, gradle_cache, project_dir):
        """Test that two versions of a module produce one declaration pair."""
        result = run(
            [
                gradle_cache.add("com.google.guava", "guava", "31.0"),
                gradle_cache.add("com.google.guava", "guava", "30.0"),
            ]
        )

        assert len(result.vendored_modules) == 2
        assert result.duplicate_artifacts == ["com.google.guava:guava:30.0"]
        assert (project_dir / "libs/Android.bp").read_text().count("java_import {") == 1

    def test_deterministic_output(self, run, gradle_cache, project_dir):
        """Test that input order does not change the generated files."""
        a = gradle_cache.add("com.b", "lib", dependencies=["com.a:lib"])
        b = gradle_cache.add("com.a", "lib")

        run([a, b], dependencies=["com.b:lib", "com.a:lib"])
        first = (
            (project_dir / "libs/Android.bp").read_text(),
            (project_dir / "Android.bp").read_text(),
        )
        run([b, a], dependencies=["com.a:lib", "com.b:lib"])
        second = (
            (project_dir / "libs/Android.bp").read_text(),
            (project_dir / "Android.bp").read_text(),
        )

        assert first == second

    def test_previous_tree_removed(self, run, gradle_cache, project_dir):
        """Test that libs/ is rebuilt from scratch on every run."""
        stale = project_dir / "libs" / "com.old" / "gone" / "gone-1.0.jar"
        stale.parent.mkdir(parents=True)
        stale.write_bytes(b"old")

        run([gradle_cache.add("com.google.guava", "guava", "31.0")])

        assert not stale.exists()

    def test_unknown_kind_fails_without_touching_tree(self, run, gradle_cache, project_dir):
        """Test that an unsupported payload fails the run before libs/ is reset."""
        keep = project_dir / "libs" / "keep.txt"
        keep.parent.mkdir()
        keep.write_text("keep")

        result = run([gradle_cache.add("com.example", "native", extension="so")])

        assert not result.success
        assert result.failed_stage == "plan"
        assert "Unknown file extension 'so'" in result.error
        assert keep.exists()

    def test_collision_fails(self, run, gradle_cache):
        """Test that colliding vendor names fail the run."""
        result = run([gradle_cache.add("a_b", "c"), gradle_cache.add("a", "b_c")])

        assert not result.success
        assert "Example_a_b_c" in result.error
        with pytest.raises(PipelineError) as exc_info:
            result.raise_for_failure()
        assert exc_info.value.stage == "plan"

    def test_missing_region_is_a_warning(self, run, gradle_cache, project_dir):
        """Test that a descriptor without static_libs still gets libs/ generated."""
        (project_dir / "Android.bp").write_text('android_app {\n    name: "Example",\n}\n')

        result = run(
            [gradle_cache.add("com.google.guava", "guava", "31.0")],
            dependencies=["com.google.guava:guava"],
        )

        assert result.success
        assert result.warnings
        assert result.top_level_dependencies == []
        assert (project_dir / "libs/Android.bp").exists()

    def test_project_name_from_report(self, run, gradle_cache):
        """Test that the report's project name is the prefix when none is configured."""
        result = run(
            [gradle_cache.add("com.google.guava", "guava", "31.0")], project_name=None
        )

        assert result.vendored_modules[1] == "Example_com.google.guava_guava"


class TestRunPipeline:
    """Tests for the file-based entry point."""

    def test_run_pipeline_with_catalog(self, config, gradle_cache, write_report, temp_dir):
        """Test a run driven by a report file and a platform catalog."""
        catalog = temp_dir / "catalog.json"
        catalog.write_text('{"modules": ["com.google.guava:*"]}')
        report = write_report(
            [gradle_cache.add("com.google.guava", "guava", "31.0")],
            dependencies=["com.google.guava:guava"],
        )

        result = run_pipeline(report, config.model_copy(update={"platform_catalog": catalog}))

        assert result.success
        assert result.vendored_modules == []
        assert result.top_level_dependencies == ["guava"]

    def test_missing_project_name(self, config, gradle_cache, write_report):
        """Test that a run without any project name fails validation."""
        report = write_report([gradle_cache.add("g", "a")], project_name=None)

        result = run_pipeline(report, config.model_copy(update={"project_name": None}))

        assert not result.success
        assert "project_name" in result.error
