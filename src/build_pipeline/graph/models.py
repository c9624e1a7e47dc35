"""Pipeline graph models.

This module defines the immutable value produced by assembly:
- StageKind: the two stage kinds, in their fixed order
- Artifact: named bundle handed from one action to the next
- SourceAction / BuildAction: the action sum type, discriminated by kind
- BuildExecutor: the CodeBuild project that runs the build action
- Stage and PipelineGraph: the ordered topology

PipelineGraph validates its topology on construction: stages appear as
[Source, Build], each holds exactly one action of its own kind, and the
source output artifact is the build input artifact.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.build_pipeline.policy.models import PolicyStatement
from src.build_pipeline.references import LateBoundReference
from src.build_pipeline.resources.models import RegistryResource, RepositoryReference


class StageKind(str, Enum):
    """Kinds of pipeline stage. The value is the stage name."""

    SOURCE = "Source"
    BUILD = "Build"


STAGE_ORDER: Tuple[StageKind, ...] = (StageKind.SOURCE, StageKind.BUILD)


class SourceTrigger(str, Enum):
    """How the source action detects repository changes."""

    EVENTS = "EVENTS"


class LocalCacheMode(str, Enum):
    """CodeBuild local cache modes."""

    DOCKER_LAYER = "LOCAL_DOCKER_LAYER_CACHE"
    CUSTOM = "LOCAL_CUSTOM_CACHE"


class EnvironmentVariableType(str, Enum):
    """How a build environment variable value is supplied."""

    PLAINTEXT = "PLAINTEXT"


class Artifact(BaseModel):
    """Opaque bundle produced by one action and consumed by the next."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)


class EnvironmentVariable(BaseModel):
    """Build environment variable whose value is bound at deployment."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    value: LateBoundReference
    type: EnvironmentVariableType = EnvironmentVariableType.PLAINTEXT


class BuildExecutor(BaseModel):
    """CodeBuild project that runs the build action.

    Attributes:
        name: Project name, derived from the full pipeline name.
        privileged: Run the build container privileged (needed for docker build).
        cache_modes: Local cache modes enabled on the project.
        environment_variables: Variables exposed to the build.
        check_secrets_in_plaintext_env_variables: Reject plaintext variables
            that look like secrets.
        policy_statements: Statements attached to the project's role.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    privileged: bool = True
    cache_modes: Tuple[LocalCacheMode, ...] = ()
    environment_variables: Tuple[EnvironmentVariable, ...] = ()
    check_secrets_in_plaintext_env_variables: bool = True
    policy_statements: Tuple[PolicyStatement, ...] = ()

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "privileged": self.privileged,
            "cache": {"type": "LOCAL", "modes": [m.value for m in self.cache_modes]},
            "environmentVariables": {
                var.name: {"type": var.type.value, "value": var.value.render()}
                for var in self.environment_variables
            },
            "checkSecretsInPlainTextEnvVariables": self.check_secrets_in_plaintext_env_variables,
            "rolePolicy": [s.to_json() for s in self.policy_statements],
        }


class SourceAction(BaseModel):
    """CodeCommit source action triggered by repository changes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[StageKind.SOURCE] = StageKind.SOURCE
    name: str = "CodeCommitSourceAction"
    repository: RepositoryReference
    branch: str = Field(..., min_length=1)
    trigger: SourceTrigger = SourceTrigger.EVENTS
    output: Artifact

    @property
    def inputs(self) -> Tuple[Artifact, ...]:
        return ()

    @property
    def outputs(self) -> Tuple[Artifact, ...]:
        return (self.output,)

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "provider": "CodeCommit",
            "repository": self.repository.name,
            "repositoryArn": self.repository.arn.render(),
            "branch": self.branch,
            "trigger": self.trigger.value,
            "outputs": [a.name for a in self.outputs],
        }


class BuildAction(BaseModel):
    """CodeBuild action consuming the source artifact."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[StageKind.BUILD] = StageKind.BUILD
    name: str = "CodeBuildBuildAction"
    executor: BuildExecutor
    input: Artifact
    outputs: Tuple[Artifact, ...] = Field(..., min_length=1)

    @property
    def inputs(self) -> Tuple[Artifact, ...]:
        return (self.input,)

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "provider": "CodeBuild",
            "project": self.executor.name,
            "inputs": [a.name for a in self.inputs],
            "outputs": [a.name for a in self.outputs],
        }


Action = Annotated[Union[SourceAction, BuildAction], Field(discriminator="kind")]


class Stage(BaseModel):
    """Ordered pipeline stage."""

    model_config = ConfigDict(frozen=True)

    kind: StageKind
    actions: Tuple[Action, ...] = Field(..., min_length=1)

    @property
    def name(self) -> str:
        return self.kind.value

    @model_validator(mode="after")
    def check_action_kinds(self) -> "Stage":
        for action in self.actions:
            if action.kind is not self.kind:
                raise ValueError(
                    f"{action.kind.value} action {action.name} cannot run in "
                    f"the {self.kind.value} stage"
                )
        return self


class PipelineGraph(BaseModel):
    """The assembled pipeline and everything attached to it.

    Attributes:
        name: Full pipeline name.
        stages: Stages in execution order.
        repository: The referenced source repository.
        registry: The declared image registry.
        cross_account_keys: Whether a KMS key is created for cross-account
            artifact access.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    stages: Tuple[Stage, ...]
    repository: RepositoryReference
    registry: RegistryResource
    cross_account_keys: bool = False

    @model_validator(mode="after")
    def check_topology(self) -> "PipelineGraph":
        kinds = tuple(stage.kind for stage in self.stages)
        if kinds != STAGE_ORDER:
            raise ValueError(
                f"stages must be {[k.value for k in STAGE_ORDER]}, "
                f"got {[k.value for k in kinds]}"
            )
        for stage in self.stages:
            if len(stage.actions) != 1:
                raise ValueError(f"stage {stage.name} must have exactly one action")

        source, build = self.source_action, self.build_action
        if build.inputs != source.outputs:
            raise ValueError(
                "build action input must be the sole source action output"
            )
        return self

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    @property
    def source_action(self) -> SourceAction:
        return self.stages[0].actions[0]

    @property
    def build_action(self) -> BuildAction:
        return self.stages[1].actions[0]

    @property
    def build_executor(self) -> BuildExecutor:
        return self.build_action.executor

    @property
    def source_artifact(self) -> Artifact:
        return self.source_action.output

    @property
    def build_artifact(self) -> Artifact:
        return self.build_action.outputs[0]

    @property
    def policy_statements(self) -> Tuple[PolicyStatement, ...]:
        return self.build_executor.policy_statements

    def to_document(self) -> Dict[str, Any]:
        """Render the graph as a JSON-serialisable document.

        Pending references are rendered as CloudFormation intrinsics for the
        deployment engine to bind.
        """
        return {
            "pipeline": {
                "name": self.name,
                "crossAccountKeys": self.cross_account_keys,
                "stages": [
                    {
                        "name": stage.name,
                        "actions": [a.to_document() for a in stage.actions],
                    }
                    for stage in self.stages
                ],
            },
            "repository": {
                "name": self.repository.name,
                "arn": self.repository.arn.render(),
            },
            "registry": {
                "name": self.registry.name,
                "imageScanOnPush": self.registry.scan_on_push,
                "imageTagMutability": self.registry.tag_mutability.value,
                "arn": self.registry.arn.render(),
            },
            "buildProject": self.build_executor.to_document(),
        }
