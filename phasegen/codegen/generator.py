"""Generation orchestrator.

Drives the planner and the renderer for a loaded ``TemplateData`` and
returns every planned file with its content filled in.  Nothing is written
here: the caller receives either the complete list or an exception.
"""

from __future__ import annotations

import asyncio

from .models import PlannedFile, TemplateData
from .planner import phase_files, planned_phases, project_files
from .templates import RenderContext, TemplateRenderer


class ProjectGenerator:
    """Renders the full file set of an operator project.

    Project-level files are rendered against the ``TemplateData``; worker
    files against their owning ``Phase``.  The first failure aborts the run.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, data: TemplateData) -> list[PlannedFile]:
        """Render every planned file in plan order.

        Raises:
            PhasegenError: The first rendering or resolution failure.
        """
        return [
            self._render(planned, context)
            for planned, context in self._jobs(data)
        ]

    async def generate_async(self, data: TemplateData) -> list[PlannedFile]:
        """Render every planned file concurrently on worker threads.

        Results come back in plan order.  If any render fails the first
        exception propagates and the other results are discarded.
        """
        return list(
            await asyncio.gather(*[
                asyncio.to_thread(self._render, planned, context)
                for planned, context in self._jobs(data)
            ])
        )

    # -- Internal ----------------------------------------------------------

    def _jobs(self, data: TemplateData) -> list[tuple[PlannedFile, RenderContext]]:
        """Pair each planned file with the context it renders against."""
        jobs: list[tuple[PlannedFile, RenderContext]] = [
            (planned, data) for planned in project_files(data)
        ]
        for phase in planned_phases(data):
            jobs.extend((planned, phase) for planned in phase_files(phase))
        return jobs

    def _render(self, planned: PlannedFile, context: RenderContext) -> PlannedFile:
        content = self.renderer.render(planned.template_id, context)
        return planned.model_copy(update={"content": content})


def generate(data: TemplateData, renderer: TemplateRenderer | None = None) -> list[PlannedFile]:
    """Shorthand for ``ProjectGenerator(renderer).generate(data)``."""
    return ProjectGenerator(renderer).generate(data)
