"""Unit tests for configuration."""

from pathlib import Path

from generatebp.core.config import Config


class TestConfig:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test the defaults when no variables are set."""
        for name in ("PROJECT_NAME", "PROJECT_DIR", "TARGET_SDK", "MIN_SDK", "DEBUG"):
            monkeypatch.delenv(f"GENERATEBP_{name}", raising=False)
        monkeypatch.delenv("GENERATEBP_PLATFORM_CATALOG", raising=False)
        monkeypatch.delenv("GENERATEBP_LOG_LEVEL", raising=False)

        config = Config.from_env()

        assert config.project_name is None
        assert config.default_min_sdk == 14
        assert config.default_target_sdk == 34
        assert config.platform_catalog is None
        assert config.libs_dir == Path("libs")
        assert config.blueprint_path == Path("Android.bp")
        assert config.effective_log_level == "INFO"

    def test_from_env(self, monkeypatch, temp_dir):
        """Test reading every supported variable."""
        monkeypatch.setenv("GENERATEBP_PROJECT_NAME", "Example")
        monkeypatch.setenv("GENERATEBP_PROJECT_DIR", str(temp_dir))
        monkeypatch.setenv("GENERATEBP_TARGET_SDK", "33")
        monkeypatch.setenv("GENERATEBP_MIN_SDK", "21")
        monkeypatch.setenv("GENERATEBP_PLATFORM_CATALOG", str(temp_dir / "catalog.json"))
        monkeypatch.setenv("GENERATEBP_DEBUG", "true")

        config = Config.from_env()

        assert config.project_name == "Example"
        assert config.libs_dir == temp_dir / "libs"
        assert (config.default_target_sdk, config.default_min_sdk) == (33, 21)
        assert config.platform_catalog == temp_dir / "catalog.json"
        assert config.effective_log_level == "DEBUG"

    def test_empty_project_name_means_unset(self, monkeypatch):
        """Test that an empty prefix variable falls back to the report's name."""
        monkeypatch.setenv("GENERATEBP_PROJECT_NAME", "")

        assert Config.from_env().project_name is None
