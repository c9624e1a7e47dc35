"""Policy template and policy statement models.

A PolicyTemplate is the immutable, parsed form of a template file: effect,
actions and optional Sid, with any resource field in the file discarded.
A PolicyStatement is produced from a template by attaching a resource
scope; the template itself is never modified, so loaded templates can be
cached and shared between assemblies.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.build_pipeline.references import Reference

# Identity policies require a Resource element; an unscoped statement
# renders as the provider-global wildcard.
UNSCOPED_RESOURCE = "*"


class Effect(str, Enum):
    """Statement effect. Only allow statements are produced."""

    ALLOW = "Allow"


class PolicyTemplate(BaseModel):
    """Parsed policy statement template.

    Accepts IAM-style keys (Effect, Action, Sid) or their lower-case forms.
    Action may be a single string or a list of strings.

    Attributes:
        sid: Optional statement identifier.
        effect: Statement effect (must be Allow).
        actions: Action names, verbatim from the template.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sid: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("Sid", "sid"),
    )

    effect: Effect = Field(
        ...,
        validation_alias=AliasChoices("Effect", "effect"),
    )

    actions: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("Action", "action", "actions"),
    )

    @field_validator("effect", mode="before")
    @classmethod
    def normalize_effect(cls, v: Any) -> Any:
        """Accept the effect in any letter case."""
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("actions", mode="before")
    @classmethod
    def normalize_actions(cls, v: Any) -> Any:
        """Wrap a single action string in a tuple."""
        if isinstance(v, str):
            return (v,)
        return v

    def with_resource(self, resource: Optional[Reference]) -> "PolicyStatement":
        """Produce a statement from this template with the given resource scope."""
        return PolicyStatement(
            sid=self.sid,
            effect=self.effect,
            actions=self.actions,
            resource=resource,
        )


class PolicyStatement(BaseModel):
    """Allow rule attached to the build project's role.

    Attributes:
        sid: Optional statement identifier.
        effect: Always Allow.
        actions: Action names.
        resource: Late-bound resource scope, or None for an unscoped statement.
    """

    model_config = ConfigDict(frozen=True)

    sid: Optional[str] = None
    effect: Effect = Effect.ALLOW
    actions: Tuple[str, ...] = Field(..., min_length=1)
    resource: Optional[Reference] = None

    @property
    def is_scoped(self) -> bool:
        return self.resource is not None

    def to_json(self) -> Dict[str, Any]:
        """Render the statement as IAM policy JSON.

        Pending references render as CloudFormation intrinsics.
        """
        statement: Dict[str, Any] = {}
        if self.sid:
            statement["Sid"] = self.sid
        statement["Effect"] = self.effect.value
        statement["Action"] = list(self.actions)
        statement["Resource"] = (
            self.resource.render() if self.resource is not None else UNSCOPED_RESOURCE
        )
        return statement


class ResolvedPolicies(BaseModel):
    """The three statements bound to the build project's role.

    Attributes:
        registry_mutate: Push layers and manifests to the declared registry.
        registry_authenticate: Obtain a registry authorization token.
        registry_pull: Pull images from any registry in the account.
    """

    model_config = ConfigDict(frozen=True)

    registry_mutate: PolicyStatement
    registry_authenticate: PolicyStatement
    registry_pull: PolicyStatement

    @property
    def statements(self) -> Tuple[PolicyStatement, ...]:
        return (self.registry_mutate, self.registry_authenticate, self.registry_pull)
