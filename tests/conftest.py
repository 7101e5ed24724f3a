"""Shared pytest fixtures for the phasegen test suite.

Provides reusable fixtures for:
- Sample descriptors (the Widget operator, with and without worker phases)
- Loaded ``TemplateData`` bound to a fixed module root
- An in-memory template store covering every planned template id
- Temporary projects with a ``pyproject.toml``
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest
from jinja2 import DictLoader

from phasegen.codegen.loader import load
from phasegen.codegen.models import TemplateData
from phasegen.codegen.templates import TemplateRenderer


MODULE_ROOT = "widget_operator"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@pytest.fixture
def widget_descriptor() -> dict[str, Any]:
    """Descriptor with one phase declaring an input."""
    return {
        "apiVersion": "apps.example.com/v1",
        "kind": "Widget",
        "phases": [{"name": "build", "inputs": ["spec"], "outputs": []}],
    }


@pytest.fixture
def noop_descriptor() -> dict[str, Any]:
    """Descriptor with one phase declaring neither inputs nor outputs."""
    return {
        "apiVersion": "apps.example.com/v1",
        "kind": "Widget",
        "phases": [{"name": "noop", "inputs": [], "outputs": []}],
    }


@pytest.fixture
def lifecycle_descriptor_yaml() -> str:
    """A richer YAML descriptor with initial/final phases and mixed capabilities."""
    return textwrap.dedent(
        """\
        apiVersion: mesh.example.com/v1alpha1
        kind: CanaryDeployment
        operatorName: canary-operator
        phases:
          - name: Initializing
            description: Set up the canary.
            initial: true
            outputs: [virtualServices]
          - name: Waiting
            inputs: [deployments]
          - name: Evaluating
            inputs: [metrics, virtualServices]
            outputs: [virtualServices]
          - name: Promoting
          - name: Succeeded
            final: true
        """
    )


# ---------------------------------------------------------------------------
# Loaded models
# ---------------------------------------------------------------------------

@pytest.fixture
def widget_data(widget_descriptor) -> TemplateData:
    """``TemplateData`` for the Widget descriptor."""
    return load(widget_descriptor, MODULE_ROOT)


@pytest.fixture
def noop_data(noop_descriptor) -> TemplateData:
    """``TemplateData`` for the Widget descriptor with a degenerate phase."""
    return load(noop_descriptor, MODULE_ROOT)


@pytest.fixture
def lifecycle_data(lifecycle_descriptor_yaml) -> TemplateData:
    """``TemplateData`` for the canary descriptor."""
    return load(lifecycle_descriptor_yaml, "canary_operator")


# ---------------------------------------------------------------------------
# Template stores
# ---------------------------------------------------------------------------

STUB_TEMPLATE_IDS = [
    "code/main.py.j2",
    "code/scheduler.py.j2",
    "code/config.py.j2",
    "code/doc.py.j2",
    "code/phases.py.j2",
    "code/register.py.j2",
    "code/spec.py.j2",
    "code/types.py.j2",
    "build/Dockerfile.j2",
    "build/user_setup.j2",
    "build/entrypoint.j2",
]


@pytest.fixture
def stub_templates() -> dict[str, str]:
    """Minimal in-memory templates for every planned template id."""
    templates = {
        template_id: f"{template_id} {{{{ kind }}}} {{{{ types_import_path }}}}\n"
        for template_id in STUB_TEMPLATE_IDS
    }
    templates["code/parameters.py.j2"] = (
        "parameters {{ name }} {{ inputs | join(',') }} {{ data.project_package }}\n"
    )
    templates["code/worker.py.j2"] = (
        "worker {{ name }} inputs={{ has_inputs() }} outputs={{ has_outputs() }}\n"
    )
    return templates


@pytest.fixture
def stub_renderer(stub_templates) -> TemplateRenderer:
    """Renderer backed by ``stub_templates``."""
    return TemplateRenderer(loader=DictLoader(stub_templates))


# ---------------------------------------------------------------------------
# Projects on disk
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_operator_project(tmp_path: Path, widget_descriptor) -> Path:
    """Temporary operator project with a pyproject.toml and phasegen.yaml."""
    import yaml

    project_dir = tmp_path / "widget-operator"
    project_dir.mkdir()
    (project_dir / "pyproject.toml").write_text(
        textwrap.dedent(
            """\
            [project]
            name = "Widget-Operator"
            version = "0.1.0"
            """
        ),
        encoding="utf-8",
    )
    (project_dir / "phasegen.yaml").write_text(
        yaml.safe_dump(widget_descriptor), encoding="utf-8"
    )
    yield project_dir
