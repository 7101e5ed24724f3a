"""Descriptor loading.

Parses a ``phasegen.yaml`` descriptor, validates it, and derives the
``TemplateData`` rendering context: API group/version, the types, scheduler
and config import paths, and the casing forms templates need.
"""

from __future__ import annotations

import keyword
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Union

import yaml
from pydantic import ValidationError

from phasegen.utils import (
    kebab_case,
    lower_camel,
    pluralize,
    sanitize_identifier,
    snake_case,
    upper_camel,
)

from .errors import MalformedDescriptor, ResolutionError
from .models import ProjectDescriptor, TemplateData

ModuleRoot = Union[str, Callable[[], str]]

DEFAULT_DESCRIPTOR_NAME = "phasegen.yaml"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load(raw: bytes | str | Mapping[str, Any], module_root: ModuleRoot) -> TemplateData:
    """Build the rendering context for a descriptor.

    Args:
        raw: Descriptor as raw bytes, YAML/JSON text, or an already-parsed
            mapping.
        module_root: The operator's importable root package, or a callable
            returning it.  Callables are invoked once per load.

    Returns:
        A frozen ``TemplateData`` whose phases are bound to it.

    Raises:
        MalformedDescriptor: The descriptor does not parse or validate.
        ResolutionError: The module root could not be determined.
    """
    project = _parse_descriptor(raw)

    api_version_parts = project.api_version.split("/")
    if len(api_version_parts) != 2 or not all(api_version_parts):
        raise MalformedDescriptor(
            "apiVersion must be of the form <group>/<version>", project.api_version
        )
    group, version = api_version_parts

    _check_generated_names(project)

    package = module_root() if callable(module_root) else module_root
    if not package:
        raise ResolutionError("Module root resolved to an empty package name")

    data = TemplateData(
        project=project,
        project_package=package,
        operator_name=project.operator_name or f"{kebab_case(project.kind)}-operator",
        group=group,
        version=version,
        types_import_path=f"{package}/apis/{pluralize(project.kind).lower()}/{version}",
        scheduler_import_path=f"{package}/scheduler",
        config_import_path=f"{package}/config",
        kind_lower_camel=lower_camel(project.kind),
    )

    # Worker templates reach project-level paths through the phase.
    for phase in data.phases:
        phase.bind(data)

    return data


def load_file(path: str | Path, module_root: ModuleRoot | None = None) -> TemplateData:
    """Read a descriptor from disk and load it.

    When *module_root* is omitted it is resolved from the ``pyproject.toml``
    governing the descriptor's directory.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise ResolutionError(f"Cannot read descriptor {file_path}: {exc}") from exc

    if module_root is None:
        directory = file_path.resolve().parent
        return load(raw, lambda: resolve_module_root(directory))

    return load(raw, module_root)


def resolve_module_root(directory: str | Path) -> str:
    """Find the importable package name for the project containing *directory*.

    Walks up to the nearest ``pyproject.toml``.  ``[tool.phasegen].package``
    wins when present; otherwise ``[project].name`` is normalised to a valid
    Python identifier.

    Raises:
        ResolutionError: No ``pyproject.toml`` was found, it is unreadable,
            or it names no package.
    """
    start = Path(directory).resolve()
    for candidate in (start, *start.parents):
        pyproject = candidate / "pyproject.toml"
        if pyproject.is_file():
            break
    else:
        raise ResolutionError(f"No pyproject.toml found at or above {start}")

    try:
        metadata = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ResolutionError(f"Cannot read {pyproject}: {exc}") from exc

    package = metadata.get("tool", {}).get("phasegen", {}).get("package")
    if package:
        return str(package)

    name = metadata.get("project", {}).get("name")
    if name:
        return sanitize_identifier(str(name))

    raise ResolutionError(
        f"{pyproject} declares neither [tool.phasegen].package nor [project].name"
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_descriptor(raw: bytes | str | Mapping[str, Any]) -> ProjectDescriptor:
    """Parse and validate the raw descriptor into a ``ProjectDescriptor``."""
    if isinstance(raw, Mapping):
        document: Any = raw
    else:
        try:
            document = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise MalformedDescriptor(f"Descriptor is not valid YAML: {exc}") from exc

    if not isinstance(document, Mapping):
        raise MalformedDescriptor("Descriptor must be a mapping", document)

    try:
        return ProjectDescriptor.model_validate(dict(document))
    except ValidationError as exc:
        raise MalformedDescriptor(_summarize_validation_error(exc)) from exc


def _identifier(value: str, form: Callable[[str], str], what: str) -> str:
    """Return ``form(value)``, which must be a usable Python identifier."""
    name = form(value)
    if not name.isidentifier() or keyword.iskeyword(name):
        raise MalformedDescriptor(f"{what} does not yield a valid Python identifier", value)
    return name


def _check_generated_names(project: ProjectDescriptor) -> None:
    """Reject names that render to invalid or clashing Python identifiers.

    Phase names become worker package names and enum members through
    ``snake_case``; inputs and outputs become dataclass fields the same way.
    """
    _identifier(project.kind, upper_camel, "kind")

    seen: dict[str, str] = {}
    for phase in project.phases:
        name = _identifier(phase.name, snake_case, "phase name")
        if name in seen:
            raise MalformedDescriptor(
                f"phase names {seen[name]!r} and {phase.name!r} both map to {name!r}",
                phase.name,
            )
        seen[name] = phase.name

        for what, items in (("input", phase.inputs), ("output", phase.outputs)):
            fields: dict[str, str] = {}
            for item in items:
                field_name = _identifier(item, snake_case, f"phase {phase.name!r} {what}")
                if field_name in fields:
                    raise MalformedDescriptor(
                        f"phase {phase.name!r} {what}s {fields[field_name]!r} and "
                        f"{item!r} both map to {field_name!r}",
                        item,
                    )
                fields[field_name] = item


def _summarize_validation_error(exc: ValidationError) -> str:
    """One-line description of every validation failure."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "descriptor"
        problems.append(f"{location}: {error['msg']}")
    return "Invalid descriptor: " + "; ".join(problems)
