"""Entry point that assembles the stack and prints its graph document.

Inputs are read from the environment (BUILD_PIPELINE_CODE_PIPELINE_NAME,
BUILD_PIPELINE_CODE_COMMIT_REPOSITORY_NAME, BUILD_PIPELINE_ECR_REPOSITORY_NAME);
the JSON document is written to stdout for the deployment engine.
"""

import json
import logging
import sys

import structlog

from src.build_pipeline.config import StackSettings, get_settings
from src.build_pipeline.errors import AssemblyError
from src.build_pipeline.stack import PipelineStackAssembler

logger = structlog.get_logger(__name__)


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog on top of stdlib logging.

    Log events go to stderr so stdout carries only the graph document.
    """
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s")
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def run(settings: StackSettings) -> int:
    """Assemble the stack described by settings and print its document.

    Returns:
        Process exit code: 0 on success, 1 on missing inputs or assembly error.
    """
    inputs = {
        "code_pipeline_name": settings.code_pipeline_name,
        "code_commit_repository_name": settings.code_commit_repository_name,
        "ecr_repository_name": settings.ecr_repository_name,
    }
    missing = [name for name, value in inputs.items() if value is None]
    if missing:
        logger.error("Missing stack inputs", missing=missing)
        return 1

    try:
        graph = PipelineStackAssembler(settings=settings).assemble(
            settings.code_pipeline_name,
            settings.code_commit_repository_name,
            settings.ecr_repository_name,
        )
    except AssemblyError:
        return 1

    print(json.dumps(graph.to_document(), indent=2))
    return 0


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    sys.exit(run(settings))


if __name__ == "__main__":
    main()
