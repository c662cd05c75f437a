"""mdagen exception hierarchy.

All generation failures inherit from GenerationError and carry an ErrorKind.
The kind decides what the pipeline does with the condition: fatal kinds
abort the run, advisory kinds are recorded on the generation report and
logged while the run continues.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Kind of generation problem.

    Attributes:
        MODEL_VALIDATION: The model failed validation - abort before output
        UNKNOWN_OUTPUT_DIRECTIVE: A template emitted an unknown output mode
        OUTPUT_DIRECTIVE: A malformed or unusable output directive
        PLUGIN_LOAD: A plugin script, helper or partial could not be loaded
        MISSING_HOOK: A plugin lacks an optional lifecycle hook - skipped
        EMPTY_DISCOVERY: No scripts or templates were found for the run
    """

    MODEL_VALIDATION = "model_validation"
    UNKNOWN_OUTPUT_DIRECTIVE = "unknown_output_directive"
    OUTPUT_DIRECTIVE = "output_directive"
    PLUGIN_LOAD = "plugin_load"
    MISSING_HOOK = "missing_hook"
    EMPTY_DISCOVERY = "empty_discovery"

    @property
    def fatal(self) -> bool:
        """Return True for kinds that must stop the run."""
        return self not in (ErrorKind.MISSING_HOOK, ErrorKind.EMPTY_DISCOVERY)


class GenerationError(Exception):
    """Base exception for all fatal generation errors.

    Attributes:
        message: Human-readable error description
        kind: Error kind
        technical_details: Additional debugging information
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        technical_details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.technical_details = technical_details or {}


class ModelValidationError(GenerationError):
    """The meta-model failed validation.

    Raised before any plugin is loaded or any file is written.
    """

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        self.problems = list(problems or [])
        super().__init__(
            message,
            ErrorKind.MODEL_VALIDATION,
            technical_details={"problems": self.problems},
        )

    def __str__(self) -> str:
        if not self.problems:
            return self.message
        lines = "\n".join(f"  - {problem}" for problem in self.problems)
        return f"{self.message}\n{lines}"


class OutputDirectiveError(GenerationError):
    """A template produced an output directive that cannot be honoured."""

    def __init__(
        self,
        message: str,
        template: str | None = None,
        kind: ErrorKind = ErrorKind.OUTPUT_DIRECTIVE,
    ) -> None:
        self.template = template
        super().__init__(message, kind, technical_details={"template": template})


class UnknownOutputDirectiveError(OutputDirectiveError):
    """A template emitted an output mode outside the closed set of modes."""

    def __init__(self, mode: str, template: str | None = None) -> None:
        self.mode = mode
        location = f" in template {template}" if template else ""
        super().__init__(
            f"Unknown output directive '{mode}'{location}",
            template=template,
            kind=ErrorKind.UNKNOWN_OUTPUT_DIRECTIVE,
        )


class PluginLoadError(GenerationError):
    """A plugin script, helper or partial could not be loaded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message, ErrorKind.PLUGIN_LOAD, technical_details={"path": path})


@dataclass(frozen=True)
class Advisory:
    """A non-fatal condition recorded during a run."""

    kind: ErrorKind
    message: str
