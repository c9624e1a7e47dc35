"""Pipeline graph assembler.

Builds the two-stage graph from validated parameters, bound resources and
resolved policies:

    Source (CodeCommitSourceAction) --SourceArtifact--> Build (CodeBuildBuildAction)

The build action produces BuildArtifact, which has no downstream consumer
in this graph. The build project runs privileged with local docker-layer
and custom caches, receives the deployment region and account as
environment variables, and carries the three ECR statements on its role.
"""

import structlog

from src.build_pipeline.graph.models import (
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
from src.build_pipeline.naming import build_project_name, full_pipeline_name
from src.build_pipeline.parameters.models import StackParameters
from src.build_pipeline.policy.models import ResolvedPolicies
from src.build_pipeline.references import ACCOUNT_ID, REGION
from src.build_pipeline.resources.binder import BoundResources

logger = structlog.get_logger(__name__)

SOURCE_ARTIFACT_NAME = "SourceArtifact"
BUILD_ARTIFACT_NAME = "BuildArtifact"


class PipelineGraphAssembler:
    """Assembles the pipeline graph in its fixed two-stage topology.

    Attributes:
        pipeline_suffix: Suffix appended to the pipeline name.
        source_branch: Branch whose changes trigger the pipeline.
    """

    def __init__(self, pipeline_suffix: str, source_branch: str):
        self.pipeline_suffix = pipeline_suffix
        self.source_branch = source_branch

    def assemble(
        self,
        parameters: StackParameters,
        resources: BoundResources,
        policies: ResolvedPolicies,
    ) -> PipelineGraph:
        """Build the pipeline graph.

        Args:
            parameters: Validated stack inputs.
            resources: The bound repository and declared registry.
            policies: Statements to attach to the build project's role.

        Returns:
            The immutable pipeline graph.
        """
        full_name = full_pipeline_name(parameters.pipeline_name, self.pipeline_suffix)
        source_artifact = Artifact(name=SOURCE_ARTIFACT_NAME)
        build_artifact = Artifact(name=BUILD_ARTIFACT_NAME)

        source_stage = Stage(
            kind=StageKind.SOURCE,
            actions=(
                SourceAction(
                    repository=resources.repository,
                    branch=self.source_branch,
                    trigger=SourceTrigger.EVENTS,
                    output=source_artifact,
                ),
            ),
        )

        executor = self.build_executor(full_name, policies)
        build_stage = Stage(
            kind=StageKind.BUILD,
            actions=(
                BuildAction(
                    executor=executor,
                    input=source_artifact,
                    outputs=(build_artifact,),
                ),
            ),
        )

        graph = PipelineGraph(
            name=full_name,
            stages=(source_stage, build_stage),
            repository=resources.repository,
            registry=resources.registry,
            cross_account_keys=False,
        )
        logger.info(
            "Pipeline graph assembled",
            pipeline=graph.name,
            stages=graph.stage_names,
            build_project=executor.name,
        )
        return graph

    @staticmethod
    def build_executor(full_name: str, policies: ResolvedPolicies) -> BuildExecutor:
        """Configure the CodeBuild project for the build action."""
        return BuildExecutor(
            name=build_project_name(full_name),
            privileged=True,
            cache_modes=(LocalCacheMode.DOCKER_LAYER, LocalCacheMode.CUSTOM),
            environment_variables=(
                EnvironmentVariable(
                    name="AWS_DEFAULT_REGION",
                    value=REGION,
                    type=EnvironmentVariableType.PLAINTEXT,
                ),
                EnvironmentVariable(
                    name="AWS_ACCOUNT_ID",
                    value=ACCOUNT_ID,
                    type=EnvironmentVariableType.PLAINTEXT,
                ),
            ),
            check_secrets_in_plaintext_env_variables=True,
            policy_statements=policies.statements,
        )
