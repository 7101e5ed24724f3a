"""Command-line entry point.

Usage::

    phasegen phasegen.yaml
    phasegen phasegen.yaml --output ./widget-operator --deploy-manifest
    python -m phasegen phasegen.yaml --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from phasegen.codegen import PhasegenError, ProjectGenerator, TemplateRenderer, load_file, plan
from phasegen.codegen.writer import write_files
from phasegen.config import Config
from phasegen.deploy import deployment_yaml
from phasegen.utils import console, print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phasegen",
        description="phasegen -- scaffold a phase-driven Kubernetes operator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  phasegen phasegen.yaml\n"
            "  phasegen phasegen.yaml -o ./widget-operator --package widget_operator\n"
            "  phasegen phasegen.yaml --dry-run\n"
        ),
    )
    parser.add_argument("descriptor", help="Path to the project descriptor (phasegen.yaml)")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: $PHASEGEN_OUTPUT_DIR or .)",
    )
    parser.add_argument(
        "--package",
        default=None,
        help="Operator package name (default: resolved from pyproject.toml)",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Override the template store directory",
    )
    parser.add_argument(
        "--deploy-manifest",
        action="store_true",
        help="Also write deploy/deployment.yaml",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List the files that would be generated without rendering them",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``phasegen``."""
    args = build_parser().parse_args(argv)

    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.package:
        config.module_root = args.package
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    if args.deploy_manifest:
        config.deploy_manifest = True

    descriptor = Path(args.descriptor)
    if not descriptor.exists():
        print_error(f"Error: descriptor not found: {descriptor}")
        sys.exit(1)

    try:
        data = load_file(descriptor, config.module_root)

        if args.dry_run:
            for planned in plan(data):
                flag = " [dim](skip if exists)[/dim]" if planned.skip_if_exists else ""
                console.print(f"  {planned.output_path}{flag}")
            return

        files = ProjectGenerator(TemplateRenderer(config.template_dir)).generate(data)
    except PhasegenError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    try:
        report = asyncio.run(write_files(files, config.output_dir))
        if config.deploy_manifest:
            config.deployment_path.parent.mkdir(parents=True, exist_ok=True)
            config.deployment_path.write_text(deployment_yaml(data), encoding="utf-8")
            report.written.append(config.deployment_path)
    except OSError as exc:
        print_error(f"Error writing to {config.output_dir}: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Operator": data.operator_name,
            "Package": data.project_package,
            "API": data.project.api_version,
            "Kind": data.project.kind,
            "Written": str(len(report.written)),
            "Skipped (exists)": str(len(report.skipped)),
        },
        title="phasegen",
    )
    for path in report.skipped:
        console.print(f"  [yellow]kept existing[/yellow] {path}")
    print_success(f"Generated {data.operator_name} in {config.output_dir}")


if __name__ == "__main__":
    main()
