"""File-set planning.

Enumerates which (output path, template) pairs a project generates: a fixed
set of project-level files, plus a parameters and a worker module for every
phase that declares inputs or outputs.
"""

from __future__ import annotations

from .models import Phase, PlannedFile, TemplateData


def project_files(data: TemplateData) -> list[PlannedFile]:
    """Return the fixed list of project-level files, ``content`` unset."""
    pkg = data.project_package
    types_path = data.types_import_path
    return [
        PlannedFile(output_path=f"{pkg}/__main__.py", template_id="code/main.py.j2"),
        PlannedFile(
            output_path=f"{data.scheduler_import_path}/scheduler.py",
            template_id="code/scheduler.py.j2",
        ),
        PlannedFile(
            output_path=f"{data.config_import_path}/config.py",
            template_id="code/config.py.j2",
            skip_if_exists=True,
        ),
        PlannedFile(output_path=f"{types_path}/__init__.py", template_id="code/doc.py.j2"),
        PlannedFile(output_path=f"{types_path}/phases.py", template_id="code/phases.py.j2"),
        PlannedFile(output_path=f"{types_path}/register.py", template_id="code/register.py.j2"),
        PlannedFile(
            output_path=f"{types_path}/spec.py",
            template_id="code/spec.py.j2",
            skip_if_exists=True,
        ),
        PlannedFile(output_path=f"{types_path}/types.py", template_id="code/types.py.j2"),

        PlannedFile(output_path="build/Dockerfile", template_id="build/Dockerfile.j2"),
        PlannedFile(
            output_path="build/bin/user_setup",
            template_id="build/user_setup.j2",
            executable=True,
        ),
        PlannedFile(
            output_path="build/bin/entrypoint",
            template_id="build/entrypoint.j2",
            executable=True,
        ),
    ]


def phase_files(phase: Phase) -> list[PlannedFile]:
    """Return the worker files for a single (bound) phase, ``content`` unset."""
    worker_path = phase.worker_import_path
    return [
        PlannedFile(
            output_path=f"{worker_path}/parameters.py",
            template_id="code/parameters.py.j2",
        ),
        PlannedFile(
            output_path=f"{worker_path}/worker.py",
            template_id="code/worker.py.j2",
            skip_if_exists=True,
        ),
    ]


def planned_phases(data: TemplateData) -> list[Phase]:
    """Phases that contribute files, in descriptor order.

    A phase with neither inputs nor outputs is degenerate and is skipped.
    """
    return [phase for phase in data.phases if phase.generates_files]


def plan(data: TemplateData) -> list[PlannedFile]:
    """Full ordered file plan: project files first, then phase files."""
    files = project_files(data)
    for phase in planned_phases(data):
        files.extend(phase_files(phase))
    return files
