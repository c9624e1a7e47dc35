"""Models for the repository reference and the declared registry.

The repository is owned externally and only referenced; the registry is
declared by the stack. Neither ARN is known during assembly, so both are
carried as late-bound references.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.build_pipeline.references import JoinedReference, LateBoundReference

REPOSITORY_LOGICAL_ID = "CodeCommit"
REGISTRY_LOGICAL_ID = "ECRRepository"


class TagMutability(str, Enum):
    """Image tag mutability setting of an ECR repository."""

    MUTABLE = "MUTABLE"


class RepositoryReference(BaseModel):
    """Handle to a pre-existing CodeCommit repository.

    Attributes:
        name: Repository name.
        logical_id: Identifier of the import within the stack.
        arn: Late-bound ARN built from partition, region, account and name.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    logical_id: str = REPOSITORY_LOGICAL_ID
    arn: JoinedReference


class RegistryResource(BaseModel):
    """ECR repository declared by the stack.

    Attributes:
        name: Repository name.
        logical_id: Identifier of the resource within the stack.
        scan_on_push: Whether images are scanned when pushed.
        tag_mutability: Whether tags may be overwritten.
        arn: Pending reference to the ARN allocated at deployment.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    logical_id: str = REGISTRY_LOGICAL_ID
    scan_on_push: bool = True
    tag_mutability: TagMutability = TagMutability.MUTABLE
    arn: LateBoundReference
