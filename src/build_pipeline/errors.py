"""Assembly error taxonomy.

Every error raised while assembling a pipeline stack derives from
AssemblyError. All of them are fatal to the assembly attempt: nothing is
retried here and no partial graph is returned. Callers decide whether to
retry with corrected inputs.
"""

from pathlib import Path
from typing import Any, Optional, Sequence


class AssemblyError(Exception):
    """Base class for errors that abort a pipeline stack assembly."""

    pass


class ValidationError(AssemblyError):
    """Raised when a raw input parameter fails its pattern or length check.

    Attributes:
        parameter: Name of the first offending parameter.
        value: The rejected raw value.
        parameters: Names of every offending parameter, in declaration order.
    """

    def __init__(
        self,
        parameter: str,
        value: Any,
        message: Optional[str] = None,
        parameters: Sequence[str] = (),
    ):
        self.parameter = parameter
        self.value = value
        self.parameters = tuple(parameters) or (parameter,)
        self.message = message or f"Invalid value for parameter {parameter}: {value!r}"
        super().__init__(self.message)


class TemplateLoadError(AssemblyError):
    """Raised when a policy statement template is missing or malformed.

    Attributes:
        template: Name of the template that failed to load.
        path: Filesystem path the template was read from.
    """

    def __init__(self, template: str, path: Path, reason: str):
        self.template = template
        self.path = path
        super().__init__(f"Failed to load policy template {template} from {path}: {reason}")


class UnresolvedReferenceError(AssemblyError):
    """Raised by a source-control provider when a repository cannot be resolved.

    Attributes:
        reference: Name of the repository that could not be resolved.
    """

    def __init__(self, reference: str, reason: Optional[str] = None):
        self.reference = reference
        message = f"Unable to resolve repository reference: {reference}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
