"""Docker build pipeline stack assembly.

This package assembles the definition of a two-stage CI pipeline
(CodeCommit source, CodeBuild container build) and binds least-privilege
ECR permissions to the build project's role:
- Parameter validation for the pipeline, repository and registry names
- Resource binding for the existing repository and the new registry
- Policy statements resolved from JSON templates with late-bound scopes
- Pipeline graph assembly with artifact hand-off between stages

The assembled graph is handed to an external deployment engine, which binds
late-bound references (account, region, registry ARN) to concrete values.
"""
