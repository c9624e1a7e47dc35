"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.build_pipeline.config import DEFAULT_TEMPLATES_DIR, StackSettings, get_settings


class TestStackSettings:
    """Tests for StackSettings."""

    def test_defaults(self, monkeypatch):
        """Test that default values are used when env vars are not set."""
        for name in ("TEMPLATES_DIR", "PIPELINE_SUFFIX", "SOURCE_BRANCH", "PARTITION",
                     "LOG_LEVEL", "CODE_PIPELINE_NAME"):
            monkeypatch.delenv(f"BUILD_PIPELINE_{name}", raising=False)

        settings = get_settings()

        assert settings.templates_dir == DEFAULT_TEMPLATES_DIR
        assert settings.pipeline_suffix == "DockerPipelineStack"
        assert settings.source_branch == "master"
        assert settings.partition == "aws"
        assert settings.log_level == "INFO"
        assert settings.code_pipeline_name is None

    def test_packaged_templates_exist(self):
        assert (DEFAULT_TEMPLATES_DIR / "CodeBuildECRChangePolicyStatement.json").is_file()

    def test_from_env(self, monkeypatch, tmp_path):
        """Test that settings load from prefixed environment variables."""
        monkeypatch.setenv("BUILD_PIPELINE_TEMPLATES_DIR", str(tmp_path))
        monkeypatch.setenv("BUILD_PIPELINE_SOURCE_BRANCH", "main")
        monkeypatch.setenv("BUILD_PIPELINE_CODE_PIPELINE_NAME", "demo")
        monkeypatch.setenv("BUILD_PIPELINE_LOG_JSON", "false")

        settings = get_settings()

        assert settings.templates_dir == tmp_path
        assert settings.source_branch == "main"
        assert settings.code_pipeline_name == "demo"
        assert settings.log_json is False

    def test_log_level_normalised(self):
        assert StackSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            StackSettings(log_level="chatty")

    def test_blank_branch_rejected(self):
        with pytest.raises(PydanticValidationError):
            StackSettings(source_branch="  ")

    def test_blank_suffix_rejected(self):
        with pytest.raises(PydanticValidationError):
            StackSettings(pipeline_suffix="")
