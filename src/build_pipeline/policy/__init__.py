"""ECR policy statements for the build project's role.

Three statements are produced from externally authored JSON templates,
each with a resource scope computed at assembly time:
- registry mutate: scoped to the declared ECR repository's ARN
- registry authenticate: unscoped, the auth token action is account-wide
- registry pull: every repository in the account and region
"""

from src.build_pipeline.policy.models import (
    Effect,
    PolicyStatement,
    PolicyTemplate,
    ResolvedPolicies,
)
from src.build_pipeline.policy.resolver import PolicyTemplateResolver
from src.build_pipeline.policy.templates import (
    REGISTRY_AUTHENTICATE_TEMPLATE,
    REGISTRY_MUTATE_TEMPLATE,
    REGISTRY_PULL_TEMPLATE,
    TemplateStore,
)

__all__ = [
    "Effect",
    "PolicyStatement",
    "PolicyTemplate",
    "PolicyTemplateResolver",
    "REGISTRY_AUTHENTICATE_TEMPLATE",
    "REGISTRY_MUTATE_TEMPLATE",
    "REGISTRY_PULL_TEMPLATE",
    "ResolvedPolicies",
    "TemplateStore",
]
