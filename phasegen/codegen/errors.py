"""Exceptions raised by the generation pipeline.

Every error is terminal for the current generation run.  Each carries enough
context (template id, offending value) to diagnose the failure without
re-running.
"""

from __future__ import annotations

from typing import Any


class PhasegenError(Exception):
    """Base class for all generation failures."""


class MalformedDescriptor(PhasegenError):
    """Raised when the project descriptor fails structural validation."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        if value is not None:
            message = f"{message} (got {value!r})"
        super().__init__(message)


class ResolutionError(PhasegenError):
    """Raised when the module root or a template cannot be located."""


class TemplateSyntaxError(PhasegenError):
    """Raised when a template fails to parse."""

    def __init__(self, template_id: str, message: str, lineno: int | None = None) -> None:
        self.template_id = template_id
        self.lineno = lineno
        location = f"{template_id}:{lineno}" if lineno else template_id
        super().__init__(f"Template syntax error in {location}: {message}")


class TemplateExecutionError(PhasegenError):
    """Raised when a template fails while executing against its context."""

    def __init__(self, template_id: str, message: str) -> None:
        self.template_id = template_id
        super().__init__(f"Failed to render {template_id}: {message}")
