"""phasegen code generation pipeline.

This package takes a ``phasegen.yaml`` descriptor (API group/version, a
custom resource kind, and an ordered list of phases) and renders the source
scaffold of a control-loop operator: entrypoint, scheduler, custom resource
types, container build files, and a worker module per phase.

Quick usage::

    from phasegen.codegen import ProjectGenerator, load_file, write_files

    data = load_file("phasegen.yaml")
    files = ProjectGenerator().generate(data)
    report = await write_files(files, ".")
"""

from phasegen.codegen.errors import (
    MalformedDescriptor,
    PhasegenError,
    ResolutionError,
    TemplateExecutionError,
    TemplateSyntaxError,
)
from phasegen.codegen.generator import ProjectGenerator, generate
from phasegen.codegen.loader import load, load_file, resolve_module_root
from phasegen.codegen.models import Phase, PlannedFile, ProjectDescriptor, TemplateData
from phasegen.codegen.planner import plan
from phasegen.codegen.templates import TemplateRenderer
from phasegen.codegen.writer import WriteReport, write_files

__all__ = [
    "MalformedDescriptor",
    "Phase",
    "PhasegenError",
    "PlannedFile",
    "ProjectDescriptor",
    "ProjectGenerator",
    "ResolutionError",
    "TemplateData",
    "TemplateExecutionError",
    "TemplateRenderer",
    "TemplateSyntaxError",
    "WriteReport",
    "generate",
    "load",
    "load_file",
    "plan",
    "resolve_module_root",
    "write_files",
]
