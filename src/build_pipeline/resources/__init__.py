"""Resource binding for the pipeline's external and declared resources.

The existing CodeCommit repository is resolved by name through a
source-control provider; the ECR repository is declared new with scan on
push enabled and mutable tags.
"""

from src.build_pipeline.resources.binder import (
    BoundResources,
    CodeCommitProvider,
    ResourceBinder,
    SourceControlProvider,
)
from src.build_pipeline.resources.models import (
    RegistryResource,
    RepositoryReference,
    TagMutability,
)

__all__ = [
    "BoundResources",
    "CodeCommitProvider",
    "RegistryResource",
    "RepositoryReference",
    "ResourceBinder",
    "SourceControlProvider",
    "TagMutability",
]
