"""Parameter validation for stack inputs."""

from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from src.build_pipeline.errors import ValidationError
from src.build_pipeline.parameters.models import PARAMETER_SPECS, StackParameters

logger = structlog.get_logger(__name__)


def validate_parameters(
    pipeline_name: Any,
    repository_name: Any,
    registry_name: Any,
) -> StackParameters:
    """Validate the raw stack inputs against their declared patterns.

    Args:
        pipeline_name: Raw pipeline name.
        repository_name: Raw CodeCommit repository name.
        registry_name: Raw ECR repository name.

    Returns:
        StackParameters holding the three values unchanged.

    Raises:
        ValidationError: If any value is not a string matching its pattern.
            The first offending parameter is named; all are listed.
    """
    raw = {
        "pipeline_name": pipeline_name,
        "repository_name": repository_name,
        "registry_name": registry_name,
    }
    try:
        return StackParameters(**raw)
    except PydanticValidationError as exc:
        offending = [
            field
            for field in PARAMETER_SPECS
            if any(error["loc"] and error["loc"][0] == field for error in exc.errors())
        ]
        spec = PARAMETER_SPECS[offending[0]]
        logger.warning(
            "Stack parameter rejected",
            parameter=spec.field,
            stack_parameter=spec.name,
            offending=offending,
        )
        raise ValidationError(
            parameter=spec.field,
            value=raw[spec.field],
            message=(
                f"Parameter {spec.field} ({spec.name}) must match "
                f"{spec.pattern}, got {raw[spec.field]!r}"
            ),
            parameters=offending,
        ) from exc
