"""Jinja2 template rendering for operator scaffolding.

Provides the TemplateRenderer class which resolves logical template ids
through a Jinja2 loader (by default the versioned ``templates/v1`` directory
shipped with the package) and renders them against a rendering context.  A
rendering context supplies both the template variables and the table of
helper functions templates may call; the renderer itself knows nothing about
either.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol

import jinja2
from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    UndefinedError,
    select_autoescape,
)

from .errors import ResolutionError, TemplateExecutionError, TemplateSyntaxError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

TEMPLATE_VERSION = "v1"

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates" / TEMPLATE_VERSION


class RenderContext(Protocol):
    """Anything templates can be rendered against (project or phase)."""

    def context(self) -> dict[str, Any]: ...

    def functions(self) -> dict[str, Callable[..., Any]]: ...


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for operator scaffolding.

    Templates are looked up by logical id (e.g. ``"code/worker.py.j2"``).
    Undefined variables are errors, and nothing is cached between renders,
    so each call is a pure function of template source and context.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        loader: BaseLoader | None = None,
    ) -> None:
        if loader is None:
            if template_dir is None:
                template_dir = DEFAULT_TEMPLATE_DIR
            self.template_dir: Path | None = Path(template_dir)
            loader = FileSystemLoader(str(self.template_dir))
        else:
            self.template_dir = None
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            cache_size=0,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_id: str, context: RenderContext) -> str:
        """Render one template against a project or phase context.

        Args:
            template_id: Template path relative to the template root.
            context: Supplies the template variables and helper functions.

        Returns:
            The rendered text.

        Raises:
            ResolutionError: The template store has no such template.
            TemplateSyntaxError: The template does not parse.
            TemplateExecutionError: Rendering failed, e.g. on an undefined
                field or an exception raised by a helper function.
        """
        template = self._load(template_id)
        variables = {**context.functions(), **context.context()}
        try:
            return template.render(variables)
        except TemplateNotFound as exc:
            raise ResolutionError(
                f"Template {exc.name!r} included from {template_id} not found"
            ) from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateSyntaxError(
                exc.name or template_id, exc.message or str(exc), exc.lineno
            ) from exc
        except UndefinedError as exc:
            raise TemplateExecutionError(template_id, exc.message or str(exc)) from exc
        except Exception as exc:
            raise TemplateExecutionError(template_id, f"{type(exc).__name__}: {exc}") from exc

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template ids under *prefix*."""
        return sorted(
            name
            for name in self.env.list_templates(extensions=["j2"])
            if name.startswith(prefix)
        )

    def _load(self, template_id: str) -> jinja2.Template:
        """Resolve and parse a template."""
        try:
            return self.env.get_template(template_id)
        except TemplateNotFound as exc:
            raise ResolutionError(f"Template not found: {template_id}") from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateSyntaxError(template_id, exc.message or str(exc), exc.lineno) from exc
        except OSError as exc:
            raise ResolutionError(f"Cannot read template {template_id}: {exc}") from exc
