"""Unit tests for late-bound references."""

from src.build_pipeline.references import (
    ACCOUNT_ID,
    REGION,
    JoinedReference,
    LateBoundReference,
    ReferenceKind,
    ReferenceStatus,
    arn_reference,
    attribute_reference,
)


class TestLateBoundReference:

    def test_pseudo_parameters_start_pending(self):
        assert ACCOUNT_ID.status is ReferenceStatus.PENDING
        assert REGION.status is ReferenceStatus.PENDING
        assert ACCOUNT_ID.key == "AWS::AccountId"

    def test_pending_pseudo_parameter_renders_ref(self):
        assert REGION.render() == {"Ref": "AWS::Region"}

    def test_pending_attribute_renders_get_att(self):
        ref = attribute_reference("ECRRepository", "Arn")
        assert ref.kind is ReferenceKind.ATTRIBUTE
        assert ref.key == "ECRRepository.Arn"
        assert ref.render() == {"Fn::GetAtt": ["ECRRepository", "Arn"]}

    def test_resolve_returns_new_value(self):
        resolved = REGION.resolve({"AWS::Region": "eu-west-1"})
        assert resolved.status is ReferenceStatus.RESOLVED
        assert resolved.render() == "eu-west-1"
        assert REGION.status is ReferenceStatus.PENDING

    def test_resolve_without_binding_stays_pending(self):
        assert REGION.resolve({"AWS::AccountId": "123"}) is REGION

    def test_resolved_reference_ignores_later_bindings(self):
        resolved = REGION.resolve({"AWS::Region": "eu-west-1"})
        assert resolved.resolve({"AWS::Region": "us-east-1"}).value == "eu-west-1"

    def test_equal_references_compare_equal(self):
        assert attribute_reference("ECRRepository", "Arn") == LateBoundReference(
            kind=ReferenceKind.ATTRIBUTE, logical_id="ECRRepository", attribute="Arn")


class TestJoinedReference:

    def test_arn_reference_parts(self):
        arn = arn_reference("aws", "ecr", "repository/*")
        assert arn.parts == ("arn:aws:ecr:", REGION, ":", ACCOUNT_ID, ":repository/*")
        assert arn.references == (REGION, ACCOUNT_ID)

    def test_pending_join_renders_fn_join(self):
        arn = arn_reference("aws", "ecr", "repository/*")
        assert arn.status is ReferenceStatus.PENDING
        assert arn.render() == {
            "Fn::Join": [
                "",
                ["arn:aws:ecr:", {"Ref": "AWS::Region"}, ":",
                 {"Ref": "AWS::AccountId"}, ":repository/*"],
            ]
        }

    def test_partially_resolved_join_stays_pending(self):
        arn = arn_reference("aws", "ecr", "repository/*").resolve({"AWS::Region": "eu-west-1"})
        assert arn.status is ReferenceStatus.PENDING
        assert arn.render()["Fn::Join"][1][1] == "eu-west-1"

    def test_fully_resolved_join_renders_string(self):
        arn = arn_reference("aws", "ecr", "repository/*").resolve(
            {"AWS::Region": "eu-west-1", "AWS::AccountId": "123456789012"})
        assert arn.is_resolved
        assert arn.render() == "arn:aws:ecr:eu-west-1:123456789012:repository/*"

    def test_literal_only_join_is_resolved(self):
        assert JoinedReference(parts=("arn:aws:s3:::bucket",)).render() == "arn:aws:s3:::bucket"
