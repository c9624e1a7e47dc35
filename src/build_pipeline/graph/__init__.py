"""Pipeline graph model and assembler.

The graph has exactly two stages, Source then Build, with one action each.
The source action's output artifact is the build action's input.
"""

from src.build_pipeline.graph.assembler import (
    BUILD_ARTIFACT_NAME,
    SOURCE_ARTIFACT_NAME,
    PipelineGraphAssembler,
)
from src.build_pipeline.graph.models import (
    STAGE_ORDER,
    Artifact,
    BuildAction,
    BuildExecutor,
    EnvironmentVariable,
    EnvironmentVariableType,
    LocalCacheMode,
    PipelineGraph,
    SourceAction,
    SourceTrigger,
    Stage,
    StageKind,
)

__all__ = [
    "Artifact",
    "BUILD_ARTIFACT_NAME",
    "BuildAction",
    "BuildExecutor",
    "EnvironmentVariable",
    "EnvironmentVariableType",
    "LocalCacheMode",
    "PipelineGraph",
    "PipelineGraphAssembler",
    "SOURCE_ARTIFACT_NAME",
    "STAGE_ORDER",
    "SourceAction",
    "SourceTrigger",
    "Stage",
    "StageKind",
]
