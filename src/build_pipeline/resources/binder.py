"""Resource binder for the repository and registry.

Resolves the CodeCommit repository through a SourceControlProvider and
declares the ECR repository. Existence of the repository is not checked
here; the default provider imports it by name and a missing repository
surfaces when the stack is deployed. Provider errors are propagated
unchanged and never retried.
"""

from typing import Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, ConfigDict

from src.build_pipeline.parameters.models import StackParameters
from src.build_pipeline.references import arn_reference, attribute_reference
from src.build_pipeline.resources.models import (
    REGISTRY_LOGICAL_ID,
    RegistryResource,
    RepositoryReference,
    TagMutability,
)

logger = structlog.get_logger(__name__)


@runtime_checkable
class SourceControlProvider(Protocol):
    """Protocol for resolving a repository name to a live reference.

    Implementations raise UnresolvedReferenceError when the name cannot be
    resolved.
    """

    def resolve_repository(self, name: str) -> RepositoryReference:
        """Resolve a repository by name.

        Args:
            name: Validated repository name.

        Returns:
            Reference to the repository.

        Raises:
            UnresolvedReferenceError: If the repository cannot be resolved.
        """
        ...


class CodeCommitProvider:
    """Imports CodeCommit repositories by name without an existence check."""

    def __init__(self, partition: str = "aws"):
        self.partition = partition

    def resolve_repository(self, name: str) -> RepositoryReference:
        return RepositoryReference(
            name=name,
            arn=arn_reference(self.partition, "codecommit", name),
        )


class BoundResources(BaseModel):
    """Resources the pipeline depends on.

    Attributes:
        repository: The referenced source repository.
        registry: The declared image registry.
    """

    model_config = ConfigDict(frozen=True)

    repository: RepositoryReference
    registry: RegistryResource


class ResourceBinder:
    """Binds the external repository and declares the registry.

    Attributes:
        provider: Source-control provider used to resolve the repository.
    """

    def __init__(self, provider: SourceControlProvider):
        self.provider = provider

    def bind(self, parameters: StackParameters) -> BoundResources:
        """Resolve the repository and declare the registry.

        Args:
            parameters: Validated stack inputs.

        Returns:
            BoundResources with both dependencies of the stack.

        Raises:
            UnresolvedReferenceError: Propagated from the provider.
        """
        repository = self.provider.resolve_repository(parameters.repository_name)
        registry = self.declare_registry(parameters.registry_name)

        logger.info(
            "Resources bound",
            repository=repository.name,
            registry=registry.name,
        )
        return BoundResources(repository=repository, registry=registry)

    @staticmethod
    def declare_registry(name: str) -> RegistryResource:
        """Declare an ECR repository with scan on push and mutable tags."""
        return RegistryResource(
            name=name,
            scan_on_push=True,
            tag_mutability=TagMutability.MUTABLE,
            arn=attribute_reference(REGISTRY_LOGICAL_ID, "Arn"),
        )
