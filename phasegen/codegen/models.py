"""Pydantic v2 models for the phasegen generation pipeline.

Defines the project descriptor read from ``phasegen.yaml``, the derived
``TemplateData`` rendering context computed once per run, and the
``PlannedFile`` records handed back to the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from phasegen.utils import (
    kebab_case,
    lower_camel,
    module_path,
    pluralize,
    snake_case,
    upper_camel,
)


# ---------------------------------------------------------------------------
# Descriptor Models
# ---------------------------------------------------------------------------

class Phase(BaseModel):
    """A named processing stage of the operator's control loop.

    After loading, each phase is bound to the ``TemplateData`` of its run so
    that worker templates can resolve project-level import paths.  The
    binding is a read-only lookup, assigned exactly once.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Phase name, unique within the project")
    description: str = Field(default="", description="What the phase does")
    initial: bool = Field(default=False, description="Whether resources start in this phase")
    final: bool = Field(default=False, description="Whether the phase is terminal")
    inputs: list[str] = Field(default_factory=list, description="Declared input names")
    outputs: list[str] = Field(default_factory=list, description="Declared output names")

    _project: Optional[TemplateData] = PrivateAttr(default=None)

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("inputs", "outputs")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def __eq__(self, other: object) -> bool:
        # The back-reference is excluded: comparing it would recurse through
        # the owning model back into this phase.
        if not isinstance(other, Phase):
            return NotImplemented
        return self.model_dump() == other.model_dump()

    # -- Capabilities ------------------------------------------------------

    @property
    def has_inputs(self) -> bool:
        return bool(self.inputs)

    @property
    def has_outputs(self) -> bool:
        return bool(self.outputs)

    @property
    def generates_files(self) -> bool:
        """Whether the phase gets its own parameters and worker modules."""
        return self.has_inputs or self.has_outputs

    # -- Back-reference ----------------------------------------------------

    @property
    def project(self) -> TemplateData:
        if self._project is None:
            raise RuntimeError(f"Phase {self.name!r} is not bound to a project")
        return self._project

    def bind(self, project: TemplateData) -> None:
        """Attach the owning ``TemplateData``.  May only be called once."""
        if self._project is not None:
            raise RuntimeError(f"Phase {self.name!r} is already bound to a project")
        self._project = project

    # -- Derived names -----------------------------------------------------

    @property
    def worker_import_prefix(self) -> str:
        return snake_case(self.name)

    @property
    def worker_import_path(self) -> str:
        return f"{self.project.project_package}/workers/{self.worker_import_prefix}"

    # -- Rendering ---------------------------------------------------------

    def context(self) -> dict[str, Any]:
        """Template variables for rendering this phase's worker files."""
        return {
            "phase": self,
            "name": self.name,
            "description": self.description,
            "initial": self.initial,
            "final": self.final,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "worker_import_path": self.worker_import_path,
            "data": self.project,
        }

    def functions(self) -> dict[str, Callable[..., Any]]:
        """Project functions, with the phase queries defaulting to this phase."""

        def has_inputs(phase: Phase | None = None) -> bool:
            return (phase if phase is not None else self).has_inputs

        def has_outputs(phase: Phase | None = None) -> bool:
            return (phase if phase is not None else self).has_outputs

        def worker_import_prefix(phase: Phase | None = None) -> str:
            return (phase if phase is not None else self).worker_import_prefix

        return {
            **self.project.functions(),
            "has_inputs": has_inputs,
            "has_outputs": has_outputs,
            "worker_import_prefix": worker_import_prefix,
        }


class ProjectDescriptor(BaseModel):
    """The ``phasegen.yaml`` document describing the operator to scaffold."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_version: str = Field(..., alias="apiVersion", description="'<group>/<version>'")
    kind: str = Field(..., min_length=1, description="Custom resource kind, e.g. 'Widget'")
    operator_name: Optional[str] = Field(
        default=None, alias="operatorName", description="Deployment/service name"
    )
    phases: list[Phase] = Field(default_factory=list, description="Ordered processing phases")

    @field_validator("phases", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _unique_phase_names(self) -> ProjectDescriptor:
        seen: set[str] = set()
        for phase in self.phases:
            if phase.name in seen:
                raise ValueError(f"duplicate phase name {phase.name!r}")
            seen.add(phase.name)
        return self


# ---------------------------------------------------------------------------
# Derived Rendering Context
# ---------------------------------------------------------------------------

class TemplateData(BaseModel):
    """Immutable rendering context derived from a descriptor.

    All fields are computed once by the loader from the descriptor and the
    module root.  Import paths are slash-separated on every platform.
    """

    model_config = ConfigDict(frozen=True)

    project: ProjectDescriptor
    project_package: str = Field(..., description="Importable root package of the operator")
    operator_name: str
    group: str
    version: str
    types_import_path: str
    scheduler_import_path: str
    config_import_path: str
    kind_lower_camel: str

    @property
    def phases(self) -> list[Phase]:
        return self.project.phases

    def context(self) -> dict[str, Any]:
        """Template variables for rendering project-level files."""
        return {
            "data": self,
            "project": self.project,
            "kind": self.project.kind,
            "api_version": self.project.api_version,
            "phases": self.phases,
            "operator_name": self.operator_name,
            "project_package": self.project_package,
            "group": self.group,
            "version": self.version,
            "types_import_path": self.types_import_path,
            "scheduler_import_path": self.scheduler_import_path,
            "config_import_path": self.config_import_path,
            "kind_lower_camel": self.kind_lower_camel,
        }

    def functions(self) -> dict[str, Callable[..., Any]]:
        """Named helpers exposed to templates rendered against this project."""
        return {
            "lower": str.lower,
            "upper": str.upper,
            "lower_camel": lower_camel,
            "upper_camel": upper_camel,
            "snake": snake_case,
            "kebab": kebab_case,
            "pluralize": pluralize,
            "module_path": module_path,
            "has_inputs": lambda phase: phase.has_inputs,
            "has_outputs": lambda phase: phase.has_outputs,
            "worker_import_prefix": lambda phase: phase.worker_import_prefix,
        }


# ---------------------------------------------------------------------------
# Generation Output
# ---------------------------------------------------------------------------

class PlannedFile(BaseModel):
    """One artifact to generate; ``content`` is filled in by rendering."""

    output_path: str = Field(..., description="Path relative to the output root")
    template_id: str = Field(..., description="Logical template reference")
    skip_if_exists: bool = Field(
        default=False, description="Never overwrite an existing file (hand-edited output)"
    )
    executable: bool = Field(default=False, description="Set the executable bit when written")
    content: Optional[str] = Field(default=None, description="Rendered text")
