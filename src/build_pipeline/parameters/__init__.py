"""Stack input parameters and their validation.

The three raw inputs (pipeline name, repository name, registry name) are
checked against their declared character class and length before any
resource is bound. Validation is purely syntactic.
"""

from src.build_pipeline.parameters.models import (
    CODE_COMMIT_REPOSITORY_NAME,
    CODE_PIPELINE_NAME,
    ECR_REPOSITORY_NAME,
    PARAMETER_SPECS,
    ParameterSpec,
    StackParameters,
)
from src.build_pipeline.parameters.validator import validate_parameters

__all__ = [
    "CODE_COMMIT_REPOSITORY_NAME",
    "CODE_PIPELINE_NAME",
    "ECR_REPOSITORY_NAME",
    "PARAMETER_SPECS",
    "ParameterSpec",
    "StackParameters",
    "validate_parameters",
]
