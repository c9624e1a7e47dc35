"""Stack assembler connecting all assembly components.

Runs the components strictly in order, each consuming only the previous
one's output:

    validate parameters → bind resources → resolve policies → assemble graph

Every step completes before the next starts. Policies are fully resolved
before the graph is built, so a template failure never leaves a graph with
a partial set of statements. Errors are logged and re-raised unchanged.
"""

from typing import Optional

import structlog

from src.build_pipeline.config import StackSettings
from src.build_pipeline.errors import AssemblyError
from src.build_pipeline.graph.assembler import PipelineGraphAssembler
from src.build_pipeline.graph.models import PipelineGraph
from src.build_pipeline.parameters.validator import validate_parameters
from src.build_pipeline.policy.resolver import PolicyTemplateResolver
from src.build_pipeline.policy.templates import TemplateStore
from src.build_pipeline.resources.binder import (
    CodeCommitProvider,
    ResourceBinder,
    SourceControlProvider,
)

logger = structlog.get_logger(__name__)


class PipelineStackAssembler:
    """Assembles a pipeline stack from its three named inputs.

    Accepts collaborators via constructor injection; anything omitted is
    built from settings.

    Attributes:
        settings: Stack settings.
        binder: Resolves the repository and declares the registry.
        resolver: Produces the build role's policy statements.
        assembler: Builds the pipeline graph.
    """

    def __init__(
        self,
        settings: Optional[StackSettings] = None,
        source_control: Optional[SourceControlProvider] = None,
        template_store: Optional[TemplateStore] = None,
    ):
        self.settings = settings or StackSettings()
        self.binder = ResourceBinder(
            source_control or CodeCommitProvider(partition=self.settings.partition)
        )
        self.resolver = PolicyTemplateResolver(
            template_store or TemplateStore(self.settings.templates_dir),
            partition=self.settings.partition,
        )
        self.assembler = PipelineGraphAssembler(
            pipeline_suffix=self.settings.pipeline_suffix,
            source_branch=self.settings.source_branch,
        )

    def assemble(
        self,
        pipeline_name: str,
        repository_name: str,
        registry_name: str,
    ) -> PipelineGraph:
        """Assemble the pipeline graph.

        Args:
            pipeline_name: Base name of the pipeline.
            repository_name: Name of the existing CodeCommit repository.
            registry_name: Name of the ECR repository to declare.

        Returns:
            The complete pipeline graph.

        Raises:
            ValidationError: If an input fails its pattern check.
            UnresolvedReferenceError: If the repository cannot be resolved.
            TemplateLoadError: If a policy template is missing or malformed.
        """
        log = logger.bind(pipeline_name=pipeline_name)
        try:
            parameters = validate_parameters(pipeline_name, repository_name, registry_name)
            resources = self.binder.bind(parameters)
            policies = self.resolver.resolve(resources.registry)
            graph = self.assembler.assemble(parameters, resources, policies)
        except AssemblyError as exc:
            log.error(
                "Pipeline assembly aborted",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        log.info("Pipeline stack assembled", pipeline=graph.name)
        return graph


def assemble_pipeline(
    pipeline_name: str,
    repository_name: str,
    registry_name: str,
    settings: Optional[StackSettings] = None,
) -> PipelineGraph:
    """Assemble a pipeline graph with the default collaborators.

    Convenience wrapper around PipelineStackAssembler.
    """
    return PipelineStackAssembler(settings=settings).assemble(
        pipeline_name, repository_name, registry_name
    )
