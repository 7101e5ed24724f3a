"""Shared utility functions for phasegen.

Provides Rich-based console reporting plus the naming helpers (casing,
pluralisation, identifier normalisation) used to derive paths and exposed to
templates.  The naming helpers are pure functions: the same input always
yields the same output, which keeps regeneration idempotent.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

# Acronym runs ("HTTP" in "HTTPRoute"), capitalised or lower words with
# trailing digits ("v1", "Phase2"), bare digit runs.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+\d*|[A-Z]+\d*|\d+")

_VOWELS = frozenset("aeiou")


def split_words(value: str) -> list[str]:
    """Split an identifier-ish string into its words.

    Handles camelCase, PascalCase, acronyms, and ``-``/``_``/space separated
    input::

        split_words("HTTPRoute") -> ["HTTP", "Route"]
        split_words("build-step_two") -> ["build", "step", "two"]
    """
    return _WORD_RE.findall(value)


def lower_camel(value: str) -> str:
    """Convert ``VirtualService`` or ``virtual-service`` to ``virtualService``."""
    words = split_words(value)
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(w[0].upper() + w[1:] for w in rest)


def upper_camel(value: str) -> str:
    """Convert ``virtual-service`` or ``virtual_service`` to ``VirtualService``."""
    return "".join(w[0].upper() + w[1:] for w in split_words(value))


def snake_case(value: str) -> str:
    """Convert ``VirtualService`` or ``virtual-service`` to ``virtual_service``."""
    return "_".join(w.lower() for w in split_words(value))


def kebab_case(value: str) -> str:
    """Convert ``VirtualService`` to ``virtual-service``."""
    return "-".join(w.lower() for w in split_words(value))


def pluralize(word: str) -> str:
    """Simple English pluralization, preserving the case of the stem.

    Examples::

        pluralize("Widget") -> "Widgets"
        pluralize("Policy") -> "Policies"
        pluralize("Gateway") -> "Gateways"
        pluralize("Ingress") -> "Ingresses"
    """
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"


def sanitize_identifier(name: str) -> str:
    """Convert an arbitrary project name to a valid Python package name.

    * Lowercases the input.
    * Replaces runs of characters other than letters, digits and underscores
      with a single underscore.
    * Strips leading/trailing underscores and prefixes a leading digit.

    Examples::

        sanitize_identifier("Widget-Operator") -> "widget_operator"
        sanitize_identifier("3scale.controller") -> "_3scale_controller"
    """
    result = re.sub(r"[^a-z0-9_]+", "_", name.strip().lower()).strip("_")
    if result[:1].isdigit():
        result = "_" + result
    return result


def module_path(path: str) -> str:
    """Convert a slash-separated package path to a dotted module path."""
    return ".".join(part for part in path.split("/") if part)


# ---------------------------------------------------------------------------
# Rich console output
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
