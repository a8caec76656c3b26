"""xp-provider-gen command line.

Usage::

    xpgen init --domain acme.io --repo github.com/acme/provider-acme
    xpgen create-api --group compute --version v1alpha1 --kind Instance
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape

from xpgen.config import GeneratorDefaults, ProjectConfig
from xpgen.project import ProjectFile
from xpgen.scaffolder.errors import GeneratorError
from xpgen.scaffolder.generator import APIScaffolder, InitScaffolder, ScaffoldReport
from xpgen.utils import console, print_error, print_success, print_summary_table
from xpgen.validation import (
    validate_domain,
    validate_repository,
    validate_resource,
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _report(report: ScaffoldReport, title: str) -> None:
    print_summary_table(
        {
            "Files written": str(len(report.written)),
            "Failures": str(len(report.failed)),
        },
        title=title,
    )
    if not report.success:
        for path, message in report.failed.items():
            print_error(f"  {escape(path)}: {escape(message)}")
        sys.exit(1)


def cmd_init(args: argparse.Namespace) -> None:
    root = Path(args.dir)
    defaults = GeneratorDefaults()
    domain = validate_domain(args.domain)
    repo = validate_repository(args.repo or defaults.default_repo(root))

    config = ProjectConfig.from_env(
        module_path=repo,
        domain=domain,
        project_name=args.project_name,
        owner=args.owner,
    )
    report = InitScaffolder(config, root, force=args.force).scaffold()
    _report(report, title="init")

    print_success(f"Provider project {config.derived_project_name} created.")
    console.print("Next steps:")
    console.print(
        f"  git init && git submodule add {config.toolchain.build_submodule_url} build"
    )
    console.print("  make submodules && make generate")
    console.print("  xpgen create-api --group <group> --version <version> --kind <kind>")


def cmd_create_api(args: argparse.Namespace) -> None:
    root = Path(args.dir)
    config = ProjectFile(root).load()
    resource = validate_resource(args.group, args.version, args.kind)

    report = APIScaffolder(config, resource, root, force=args.force).scaffold()
    _report(report, title="create-api")

    print_success(f"API {resource.kind} created.")
    console.print("Next steps:")
    console.print("  make generate && make reviewable")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpgen",
        description="Scaffold Crossplane provider projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  xpgen init --domain acme.io --repo github.com/acme/provider-acme\n"
            "  xpgen create-api --group compute --version v1alpha1 --kind Instance\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help="Create a new provider project")
    init.add_argument("--domain", required=True, help="API group domain (e.g. acme.io)")
    init.add_argument(
        "--repo",
        default=None,
        help="Go module path (default: derived from the project directory name)",
    )
    init.add_argument("--owner", default=None, help="Copyright owner for the license header")
    init.add_argument("--project-name", default=None, help="Override the project name")
    init.add_argument("--dir", default=".", help="Project root (default: current directory)")
    init.add_argument("--force", action="store_true", help="Overwrite existing files")
    init.set_defaults(handler=cmd_init)

    create_api = subparsers.add_parser("create-api", help="Add a managed resource")
    create_api.add_argument("--group", required=True, help="API group (e.g. compute)")
    create_api.add_argument("--version", required=True, help="API version (e.g. v1alpha1)")
    create_api.add_argument("--kind", required=True, help="Kind in PascalCase (e.g. Instance)")
    create_api.add_argument("--dir", default=".", help="Project root (default: current directory)")
    create_api.add_argument("--force", action="store_true", help="Overwrite existing files")
    create_api.set_defaults(handler=cmd_create_api)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``xpgen``."""
    args = build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (ValueError, FileNotFoundError, GeneratorError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
