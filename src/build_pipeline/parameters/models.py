"""Stack parameter declarations and the validated parameter model.

Each stack input is declared with its stack parameter name, allowed pattern
and description. StackParameters applies the patterns through pydantic
field constraints; validator.py translates failures into the assembly
error taxonomy.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

NAME_PATTERN = r"^[a-zA-Z0-9._-]{1,100}$"
REGISTRY_NAME_PATTERN = r"^[a-zA-Z0-9/._-]{1,100}$"


class ParameterSpec(BaseModel):
    """Declaration of a single stack input parameter.

    Attributes:
        field: Attribute name on StackParameters.
        name: Stack parameter name as presented to the deployment engine.
        pattern: Anchored regular expression the raw value must match.
        description: Human-readable description of the parameter.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    name: str
    pattern: str
    description: str


CODE_PIPELINE_NAME = ParameterSpec(
    field="pipeline_name",
    name="CodePipelineName",
    pattern=NAME_PATTERN,
    description=(
        "The name of the pipeline to be created. The provided name would be "
        "suffixed with '-DockerPipelineStack'"
    ),
)

CODE_COMMIT_REPOSITORY_NAME = ParameterSpec(
    field="repository_name",
    name="CodeCommitRepositoryName",
    pattern=NAME_PATTERN,
    description="The existing CodeCommit repository name.",
)

ECR_REPOSITORY_NAME = ParameterSpec(
    field="registry_name",
    name="ECRRepositoryName",
    pattern=REGISTRY_NAME_PATTERN,
    description="The ECR repository name",
)

# Declaration order is the order offending parameters are reported in
PARAMETER_SPECS: Dict[str, ParameterSpec] = {
    spec.field: spec
    for spec in (CODE_PIPELINE_NAME, CODE_COMMIT_REPOSITORY_NAME, ECR_REPOSITORY_NAME)
}


class StackParameters(BaseModel):
    """Validated stack inputs.

    Values are kept exactly as supplied; a StackParameters instance only
    exists if every value matched its declared pattern.

    Attributes:
        pipeline_name: Base name of the pipeline.
        repository_name: Name of the existing CodeCommit repository.
        registry_name: Name of the ECR repository to declare.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    pipeline_name: str = Field(
        ...,
        pattern=NAME_PATTERN,
        description=CODE_PIPELINE_NAME.description,
    )

    repository_name: str = Field(
        ...,
        pattern=NAME_PATTERN,
        description=CODE_COMMIT_REPOSITORY_NAME.description,
    )

    registry_name: str = Field(
        ...,
        pattern=REGISTRY_NAME_PATTERN,
        description=ECR_REPOSITORY_NAME.description,
    )
