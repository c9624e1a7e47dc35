"""Deterministic names derived from the pipeline name.

Every derived resource name is a pure function of the validated pipeline
name, so assembling twice with the same inputs yields identical names.
"""

from src.build_pipeline.config import DEFAULT_PIPELINE_SUFFIX

BUILD_PROJECT_SUFFIX = "CodeBuild"


def full_pipeline_name(pipeline_name: str, suffix: str = DEFAULT_PIPELINE_SUFFIX) -> str:
    """Return the unique pipeline name, e.g. "demo-DockerPipelineStack"."""
    return f"{pipeline_name}-{suffix}"


def build_project_name(full_name: str) -> str:
    """Return the build project name, e.g. "demo-DockerPipelineStack-CodeBuild"."""
    return f"{full_name}-{BUILD_PROJECT_SUFFIX}"
