"""Policy template resolver.

Produces the three ECR statements for the build project's role. The
scopes differ on purpose:

- mutate is limited to the declared registry's ARN
- authenticate carries no resource, ecr:GetAuthorizationToken is
  account-wide and cannot be scoped to a repository
- pull covers every repository in the account and region so builds can
  pull base images from repositories other than the declared one

Narrowing the pull scope to the declared registry breaks builds whose
Dockerfiles start from unrelated images.
"""

import structlog

from src.build_pipeline.policy.models import PolicyStatement, ResolvedPolicies
from src.build_pipeline.policy.templates import (
    REGISTRY_AUTHENTICATE_TEMPLATE,
    REGISTRY_MUTATE_TEMPLATE,
    REGISTRY_PULL_TEMPLATE,
    TemplateStore,
)
from src.build_pipeline.references import JoinedReference, arn_reference
from src.build_pipeline.resources.models import RegistryResource

logger = structlog.get_logger(__name__)


class PolicyTemplateResolver:
    """Resolves policy templates into statements with computed scopes.

    Attributes:
        store: Template store the three templates are loaded from.
        partition: ARN partition used for the wildcard pull scope.
    """

    def __init__(self, store: TemplateStore, partition: str = "aws"):
        self.store = store
        self.partition = partition

    def resolve(self, registry: RegistryResource) -> ResolvedPolicies:
        """Resolve all three statements for the given registry.

        All templates are loaded before anything is returned; a failure on
        any of them leaves no partial result.

        Args:
            registry: The declared ECR repository.

        Returns:
            ResolvedPolicies with the mutate, authenticate and pull statements.

        Raises:
            TemplateLoadError: If any template is missing or malformed.
        """
        policies = ResolvedPolicies(
            registry_mutate=self.registry_mutate(registry),
            registry_authenticate=self.registry_authenticate(),
            registry_pull=self.registry_pull(),
        )
        logger.info(
            "Policy statements resolved",
            registry=registry.name,
            statements=len(policies.statements),
        )
        return policies

    def registry_mutate(self, registry: RegistryResource) -> PolicyStatement:
        template = self.store.load(REGISTRY_MUTATE_TEMPLATE)
        return template.with_resource(registry.arn)

    def registry_authenticate(self) -> PolicyStatement:
        template = self.store.load(REGISTRY_AUTHENTICATE_TEMPLATE)
        return template.with_resource(None)

    def registry_pull(self) -> PolicyStatement:
        template = self.store.load(REGISTRY_PULL_TEMPLATE)
        return template.with_resource(self.pull_scope())

    def pull_scope(self) -> JoinedReference:
        """Wildcard over every ECR repository in the current account and region."""
        return arn_reference(self.partition, "ecr", "repository/*")
