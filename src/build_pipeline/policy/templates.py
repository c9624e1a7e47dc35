"""Template store for policy statement JSON files.

Reads the three policy statement templates from a local directory. Each
template is parsed into an immutable PolicyTemplate and cached per store,
so repeated assemblies read each file once. A missing, unreadable or
malformed file raises TemplateLoadError.
"""

import json
from pathlib import Path
from typing import Dict

import structlog
from pydantic import ValidationError as PydanticValidationError

from src.build_pipeline.errors import TemplateLoadError
from src.build_pipeline.policy.models import PolicyTemplate

logger = structlog.get_logger(__name__)

REGISTRY_MUTATE_TEMPLATE = "CodeBuildECRChangePolicyStatement.json"
REGISTRY_AUTHENTICATE_TEMPLATE = "CodeBuildECRGetAuthorizationPolicyStatement.json"
REGISTRY_PULL_TEMPLATE = "CodeBuildECRPullImagesPolicyStatement.json"


class TemplateStore:
    """Loads policy statement templates from a directory.

    Attributes:
        templates_dir: Directory containing the template files.
    """

    def __init__(self, templates_dir: Path):
        self.templates_dir = Path(templates_dir)
        self._cache: Dict[str, PolicyTemplate] = {}

    def load(self, name: str) -> PolicyTemplate:
        """Load and parse a template by file name.

        Args:
            name: Template file name within the templates directory.

        Returns:
            The parsed, immutable template.

        Raises:
            TemplateLoadError: If the file is missing, not JSON, or does
                not describe an allow statement with at least one action.
        """
        if name in self._cache:
            return self._cache[name]

        path = self.templates_dir / name
        template = self._parse(name, path, self._read(name, path))
        self._cache[name] = template

        logger.debug(
            "Policy template loaded",
            template=name,
            path=str(path),
            actions=len(template.actions),
        )
        return template

    def _read(self, name: str, path: Path) -> object:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateLoadError(name, path, f"cannot read file: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise TemplateLoadError(name, path, f"invalid encoding: {exc}") from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise TemplateLoadError(name, path, f"invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise TemplateLoadError(name, path, "JSON nested too deeply") from exc

    def _parse(self, name: str, path: Path, document: object) -> PolicyTemplate:
        if not isinstance(document, dict):
            raise TemplateLoadError(name, path, "template must be a JSON object")

        try:
            return PolicyTemplate.model_validate(document)
        except PydanticValidationError as exc:
            fields = ", ".join(
                ".".join(str(part) for part in error["loc"]) or "template"
                for error in exc.errors()
            )
            raise TemplateLoadError(
                name, path, f"invalid statement fields: {fields}"
            ) from exc
