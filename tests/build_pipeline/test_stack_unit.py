"""Unit tests for the PipelineStackAssembler and the entry point.

Verifies the end-to-end scenarios: a valid assembly, rejected inputs,
missing templates and unresolved repositories, and that no graph is
produced when any step fails.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.build_pipeline.config import StackSettings
from src.build_pipeline.errors import (
    TemplateLoadError,
    UnresolvedReferenceError,
    ValidationError,
)
from src.build_pipeline.main import run
from src.build_pipeline.policy import (
    REGISTRY_MUTATE_TEMPLATE,
    REGISTRY_PULL_TEMPLATE,
    TemplateStore,
)
from src.build_pipeline.stack import PipelineStackAssembler, assemble_pipeline


class TestDemoScenario:

    def test_names(self, stack_assembler):
        graph = stack_assembler.assemble("demo", "svc-repo", "svc/img")
        assert graph.name == "demo-DockerPipelineStack"
        assert graph.build_executor.name == "demo-DockerPipelineStack-CodeBuild"

    def test_stages_and_statements(self, stack_assembler):
        graph = stack_assembler.assemble("demo", "svc-repo", "svc/img")
        assert graph.stage_names == ["Source", "Build"]
        mutate, authenticate, pull = graph.policy_statements
        assert mutate.resource == graph.registry.arn
        assert authenticate.resource is None
        assert pull.resource != graph.registry.arn
        assert pull.resource.render()["Fn::Join"][1][-1] == ":repository/*"

    def test_bound_resources(self, stack_assembler):
        graph = stack_assembler.assemble("demo", "svc-repo", "svc/img")
        assert graph.repository.name == "svc-repo"
        assert graph.registry.name == "svc/img"

    def test_module_level_helper(self, settings):
        graph = assemble_pipeline("demo", "svc-repo", "svc/img", settings=settings)
        assert graph.name == "demo-DockerPipelineStack"

    def test_default_settings_use_packaged_templates(self):
        graph = PipelineStackAssembler().assemble("demo", "svc-repo", "svc/img")
        assert len(graph.policy_statements) == 3


class TestFailures:

    def test_bad_pipeline_name(self, stack_assembler):
        with patch.object(stack_assembler.binder, "bind") as bind:
            with pytest.raises(ValidationError) as exc_info:
                stack_assembler.assemble("bad name!", "svc-repo", "svc/img")
        assert exc_info.value.parameter == "pipeline_name"
        bind.assert_not_called()

    def test_missing_template(self, stack_assembler, templates_dir):
        (templates_dir / REGISTRY_PULL_TEMPLATE).unlink()
        with patch.object(stack_assembler.assembler, "assemble") as assemble:
            with pytest.raises(TemplateLoadError) as exc_info:
                stack_assembler.assemble("demo", "svc-repo", "svc/img")
        assert exc_info.value.template == REGISTRY_PULL_TEMPLATE
        assemble.assert_not_called()

    def test_malformed_template(self, stack_assembler, write_template):
        write_template(REGISTRY_MUTATE_TEMPLATE, "")
        with pytest.raises(TemplateLoadError):
            stack_assembler.assemble("demo", "svc-repo", "svc/img")

    def test_undecodable_template(self, stack_assembler, templates_dir):
        (templates_dir / REGISTRY_MUTATE_TEMPLATE).write_bytes(
            b'{"Effect": "Allow", "Action": ["\xff\xfe"]}')
        with pytest.raises(TemplateLoadError):
            stack_assembler.assemble("demo", "svc-repo", "svc/img")

    def test_unresolved_repository(self, settings):
        provider = MagicMock()
        provider.resolve_repository.side_effect = UnresolvedReferenceError("svc-repo")
        assembler = PipelineStackAssembler(settings=settings, source_control=provider)
        with pytest.raises(UnresolvedReferenceError):
            assembler.assemble("demo", "svc-repo", "svc/img")

    def test_recovers_after_template_restored(self, settings, templates_dir):
        path = templates_dir / REGISTRY_PULL_TEMPLATE
        original = path.read_text(encoding="utf-8")
        path.unlink()
        with pytest.raises(TemplateLoadError):
            PipelineStackAssembler(settings=settings).assemble("demo", "svc-repo", "svc/img")
        path.write_text(original, encoding="utf-8")
        graph = PipelineStackAssembler(settings=settings).assemble("demo", "svc-repo", "svc/img")
        assert len(graph.policy_statements) == 3


class TestCollaborators:

    def test_custom_suffix_and_branch(self, templates_dir):
        settings = StackSettings(
            templates_dir=templates_dir, pipeline_suffix="Images", source_branch="main")
        graph = PipelineStackAssembler(settings=settings).assemble("demo", "svc-repo", "svc/img")
        assert graph.name == "demo-Images"
        assert graph.build_executor.name == "demo-Images-CodeBuild"
        assert graph.source_action.branch == "main"

    def test_shared_template_store(self, settings, templates_dir):
        store = TemplateStore(templates_dir)
        first = PipelineStackAssembler(settings=settings, template_store=store)
        second = PipelineStackAssembler(settings=settings, template_store=store)
        a = first.assemble("one", "repo-a", "img/a")
        b = second.assemble("two", "repo-b", "img/b")
        assert a.policy_statements[1] == b.policy_statements[1]
        assert a.registry.name != b.registry.name


class TestEntryPoint:

    def test_prints_graph_document(self, templates_dir, capsys):
        settings = StackSettings(
            templates_dir=templates_dir,
            code_pipeline_name="demo",
            code_commit_repository_name="svc-repo",
            ecr_repository_name="svc/img",
        )
        assert run(settings) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["pipeline"]["name"] == "demo-DockerPipelineStack"

    def test_missing_inputs(self, templates_dir, capsys):
        assert run(StackSettings(templates_dir=templates_dir)) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_input(self, templates_dir, capsys):
        settings = StackSettings(
            templates_dir=templates_dir,
            code_pipeline_name="bad name!",
            code_commit_repository_name="svc-repo",
            ecr_repository_name="svc/img",
        )
        assert run(settings) == 1
        assert capsys.readouterr().out == ""
