"""phasegen configuration.

Typed configuration for a generation run.  Settings use a Pydantic v2 model
so they are validated at construction time and can be serialised to/from
JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from phasegen.codegen.templates import DEFAULT_TEMPLATE_DIR

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Settings for one ``phasegen`` run.

    Instances are typically created once by the CLI entry point and then
    passed to the loader, renderer, and writer.
    """

    template_dir: Path = Field(
        default=DEFAULT_TEMPLATE_DIR, description="Root of the template store"
    )
    output_dir: Path = Field(default=Path("."), description="Where generated files are written")
    module_root: Optional[str] = Field(
        default=None,
        description="Operator package name; resolved from pyproject.toml when unset",
    )
    deploy_manifest: bool = Field(
        default=False, description="Also write deploy/deployment.yaml"
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def deployment_path(self) -> Path:
        """Path of the optional Deployment manifest."""
        return self.output_dir / "deploy" / "deployment.yaml"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PHASEGEN_TEMPLATE_DIR, PHASEGEN_OUTPUT_DIR, PHASEGEN_MODULE_ROOT,
            PHASEGEN_DEPLOY_MANIFEST.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PHASEGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["PHASEGEN_TEMPLATE_DIR"])
        if os.environ.get("PHASEGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["PHASEGEN_OUTPUT_DIR"])
        if os.environ.get("PHASEGEN_MODULE_ROOT"):
            kwargs["module_root"] = os.environ["PHASEGEN_MODULE_ROOT"]
        if os.environ.get("PHASEGEN_DEPLOY_MANIFEST"):
            kwargs["deploy_manifest"] = (
                os.environ["PHASEGEN_DEPLOY_MANIFEST"].strip().lower() in _TRUTHY
            )
        return cls(**kwargs)
