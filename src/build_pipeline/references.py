"""Late-bound references for values only known at deployment time.

Account identity, region identity and the ARNs of declared resources are
allocated by the deployment engine, not during assembly. They are modelled
as typed references tagged pending or resolved so a graph can be built and
inspected before any real resource exists:

- LateBoundReference: a single pseudo parameter or resource attribute
- JoinedReference: literal text and references concatenated in order

Unresolved references render as CloudFormation intrinsics (Ref, Fn::GetAtt,
Fn::Join). Binding concrete values is a separate pass owned by the
deployment engine; resolve() returns new values and never mutates.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ReferenceKind(str, Enum):
    """Kinds of late-bound values.

    Attributes:
        PSEUDO_PARAMETER: Deployment context value (AWS::AccountId, AWS::Region).
        ATTRIBUTE: Attribute of a resource declared in the same stack.
    """

    PSEUDO_PARAMETER = "pseudo_parameter"
    ATTRIBUTE = "attribute"


class ReferenceStatus(str, Enum):
    """Whether a reference has been bound to a concrete value."""

    PENDING = "pending"
    RESOLVED = "resolved"


class LateBoundReference(BaseModel):
    """A value that exists but is only concrete after deployment.

    Attributes:
        kind: Pseudo parameter or resource attribute.
        logical_id: Pseudo parameter name or logical id of the resource.
        attribute: Attribute name for ATTRIBUTE references (e.g., "Arn").
        value: The bound value, None while pending.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReferenceKind
    logical_id: str = Field(..., min_length=1)
    attribute: Optional[str] = None
    value: Optional[str] = None

    @property
    def key(self) -> str:
        """Binding key, e.g. "AWS::Region" or "ECRRepository.Arn"."""
        if self.attribute:
            return f"{self.logical_id}.{self.attribute}"
        return self.logical_id

    @property
    def status(self) -> ReferenceStatus:
        if self.value is None:
            return ReferenceStatus.PENDING
        return ReferenceStatus.RESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.status is ReferenceStatus.RESOLVED

    def resolve(self, bindings: Mapping[str, str]) -> "LateBoundReference":
        """Return a copy bound to the value in bindings, if one is present."""
        if self.is_resolved or self.key not in bindings:
            return self
        return self.model_copy(update={"value": bindings[self.key]})

    def render(self) -> Any:
        """Render the concrete value, or the intrinsic that produces it."""
        if self.value is not None:
            return self.value
        if self.kind is ReferenceKind.ATTRIBUTE:
            return {"Fn::GetAtt": [self.logical_id, self.attribute]}
        return {"Ref": self.logical_id}


class JoinedReference(BaseModel):
    """Literal text and late-bound references concatenated in order.

    Attributes:
        parts: Ordered parts; strings are literal, references are late-bound.
    """

    model_config = ConfigDict(frozen=True)

    parts: Tuple[Union[str, LateBoundReference], ...] = Field(..., min_length=1)

    @property
    def references(self) -> Tuple[LateBoundReference, ...]:
        return tuple(p for p in self.parts if isinstance(p, LateBoundReference))

    @property
    def status(self) -> ReferenceStatus:
        if all(ref.is_resolved for ref in self.references):
            return ReferenceStatus.RESOLVED
        return ReferenceStatus.PENDING

    @property
    def is_resolved(self) -> bool:
        return self.status is ReferenceStatus.RESOLVED

    def resolve(self, bindings: Mapping[str, str]) -> "JoinedReference":
        parts = tuple(
            p.resolve(bindings) if isinstance(p, LateBoundReference) else p
            for p in self.parts
        )
        return self.model_copy(update={"parts": parts})

    def render(self) -> Any:
        """Render the joined string, or an Fn::Join while any part is pending."""
        if self.is_resolved:
            return "".join(
                p.value if isinstance(p, LateBoundReference) else p
                for p in self.parts
            )
        return {
            "Fn::Join": [
                "",
                [p.render() if isinstance(p, LateBoundReference) else p for p in self.parts],
            ]
        }


Reference = Union[LateBoundReference, JoinedReference]

ACCOUNT_ID = LateBoundReference(
    kind=ReferenceKind.PSEUDO_PARAMETER, logical_id="AWS::AccountId"
)
REGION = LateBoundReference(
    kind=ReferenceKind.PSEUDO_PARAMETER, logical_id="AWS::Region"
)


def attribute_reference(logical_id: str, attribute: str) -> LateBoundReference:
    """Build a pending reference to an attribute of a declared resource."""
    return LateBoundReference(
        kind=ReferenceKind.ATTRIBUTE, logical_id=logical_id, attribute=attribute
    )


def arn_reference(partition: str, service: str, resource: str) -> JoinedReference:
    """Build the ARN arn:<partition>:<service>:<region>:<account>:<resource>.

    Region and account are late-bound; partition, service and resource are
    literal.
    """
    return JoinedReference(
        parts=(
            f"arn:{partition}:{service}:",
            REGION,
            ":",
            ACCOUNT_ID,
            f":{resource}",
        )
    )
