"""Test configuration for generatebp."""

import io
import json
import logging
import tempfile
import zipfile
from pathlib import Path

import pytest
import structlog

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group}</groupId>
  <artifactId>{name}</artifactId>
  <version>{version}</version>
  <dependencies>
{dependencies}
  </dependencies>
</project>
"""

POM_DEPENDENCY = """    <dependency>
      <groupId>{group}</groupId>
      <artifactId>{name}</artifactId>
      <version>1.0</version>
    </dependency>"""

TOP_LEVEL_BLUEPRINT = """android_app {
    name: "Example",
    srcs: ["src/**/*.kt"],
    static_libs: [
        "stale-module",
    ],
    platform_apis: true,
}
"""


def manifest_xml(min_sdk=None, target_sdk=None):
    """Build an AndroidManifest.xml with optional uses-sdk attributes."""
    attributes = ""
    if min_sdk is not None:
        attributes += f' android:minSdkVersion="{min_sdk}"'
    if target_sdk is not None:
        attributes += f' android:targetSdkVersion="{target_sdk}"'
    uses_sdk = f"<uses-sdk{attributes}/>" if attributes else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<manifest xmlns:android="http://schemas.android.com/apk/res/android" '
        f'package="com.example.lib">{uses_sdk}</manifest>'
    )


def aar_bytes(manifest=None):
    """Minimal aar archive, with a root AndroidManifest.xml unless manifest is False."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        if manifest is not False:
            zf.writestr("AndroidManifest.xml", manifest or manifest_xml())
        zf.writestr("classes.jar", b"PK\x05\x06" + b"\x00" * 18)
    return buffer.getvalue()


class GradleCache:
    """Writes artifacts in the Gradle module cache layout.

    Payload and POM land in sibling hash directories of
    ``{group}/{name}/{version}/``, as Gradle stores them.
    """

    def __init__(self, root: Path):
        self.root = root

    def add(
        self,
        group,
        name,
        version="1.0",
        extension="jar",
        dependencies=(),
        manifest=None,
        pom=True,
    ):
        """Add an artifact and return its report entry."""
        version_dir = self.root / group / name / version
        payload = version_dir / "a1b2c3" / f"{name}-{version}.{extension}"
        payload.parent.mkdir(parents=True, exist_ok=True)

        if extension == "aar":
            payload.write_bytes(aar_bytes(manifest))
        else:
            payload.write_bytes(b"PK\x05\x06" + b"\x00" * 18)

        if pom:
            pom_path = version_dir / "d4e5f6" / f"{name}-{version}.pom"
            pom_path.parent.mkdir(parents=True, exist_ok=True)
            pom_path.write_text(
                POM_TEMPLATE.format(
                    group=group,
                    name=name,
                    version=version,
                    dependencies="\n".join(
                        POM_DEPENDENCY.format(group=g, name=n)
                        for g, n in (d.split(":") for d in dependencies)
                    ),
                ),
                encoding="utf-8",
            )

        return {
            "group": group,
            "name": name,
            "version": version,
            "file": str(payload),
        }


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop logging configuration left behind by a previous test."""
    level = logging.getLogger().level
    yield
    logging.getLogger().setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def gradle_cache(temp_dir):
    """Fake Gradle module cache under the temporary directory."""
    return GradleCache(temp_dir / "gradle-cache")


@pytest.fixture
def project_dir(temp_dir):
    """Module directory with an Android.bp holding a static_libs region.

    Returns:
        Path: The module directory.
    """
    path = temp_dir / "project"
    path.mkdir()
    (path / "Android.bp").write_text(TOP_LEVEL_BLUEPRINT, encoding="utf-8")
    return path


@pytest.fixture
def storage(project_dir):
    """Create a staging backend rooted at the project directory.

    Returns:
        LocalStagingBackend: A local staging backend for the module directory.
    """
    from generatebp.storage import LocalStagingBackend
    return LocalStagingBackend(project_dir)


@pytest.fixture
def naming():
    """Naming strategy with the ``Example`` prefix."""
    from generatebp.services.naming import NamingStrategy
    return NamingStrategy("Example")


@pytest.fixture
def vendor_all():
    """Classifier that treats every module as vendored."""
    from generatebp.services.classification import AvailabilityClassifier
    return AvailabilityClassifier(lambda group, artifact_id: False)


@pytest.fixture
def androidx_platform():
    """Classifier that treats every androidx module as provided by the platform."""
    from generatebp.services.classification import AvailabilityClassifier
    return AvailabilityClassifier(lambda group, artifact_id: group.startswith("androidx."))


@pytest.fixture
def config(project_dir):
    """Configuration pointing at the project directory."""
    from generatebp.core.config import Config
    return Config(project_name="Example", project_dir=project_dir, default_target_sdk=34)


@pytest.fixture
def write_report(temp_dir):
    """Factory writing a resolution report JSON file.

    Returns:
        Callable taking artifacts and dependencies, returning the report path.
    """

    def _write(artifacts, dependencies=(), project_name="Example"):
        path = temp_dir / "report.json"
        payload = {
            "project_name": project_name,
            "dependencies": [
                {"group": g, "name": n} for g, n in (d.split(":") for d in dependencies)
            ],
            "artifacts": list(artifacts),
        }
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_manifest():
    """Factory for AndroidManifest.xml content."""
    return manifest_xml


@pytest.fixture
def make_aar():
    """Factory for aar archive bytes."""
    return aar_bytes
