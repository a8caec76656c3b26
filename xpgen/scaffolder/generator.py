"""Scaffolding orchestrators for ``xpgen init`` and ``xpgen create-api``.

``InitScaffolder`` renders every project-wide and static template into a new
project root and writes the ``PROJECT`` file.  ``APIScaffolder`` renders the
per-resource templates for one group/version/kind, then regenerates the
aggregator files so the new API and controller are registered, and finally
records the resource in ``PROJECT``.

Each file is written independently: a failure is reported and recorded in
the returned :class:`ScaffoldReport` without stopping the remaining files.
Only an unreadable template store aborts a run.

When the project already has ``hack/boilerplate.go.txt``, its text is the
license header of every file generated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from rich.markup import escape
from rich.panel import Panel

from xpgen.config import ProjectConfig
from xpgen.project import PROJECT_FILE_NAME, ProjectFile
from xpgen.utils import console, print_warning

from .aggregators import AggregatorUpdater, aggregator_updaters
from .errors import GeneratorError, StoreUnavailable
from .factory import TemplateFactory
from .filesystem import ProjectFilesystem
from .models import ResourceDescriptor, TemplateCategory, TemplateType
from .templates import TemplateStore

BOILERPLATE_PATH = "hack/boilerplate.go.txt"


# ---------------------------------------------------------------------------
# Report model
# ---------------------------------------------------------------------------


class ScaffoldReport(BaseModel):
    """Outcome of one scaffolding run."""

    written: list[str] = Field(default_factory=list, description="Paths written, in order")
    failed: dict[str, str] = Field(
        default_factory=dict, description="Path (or template type) -> error message"
    )

    @property
    def success(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# Shared plumbing
# ---------------------------------------------------------------------------


class _Scaffolder:
    def __init__(
        self,
        config: ProjectConfig,
        root: str | Path,
        store: Optional[TemplateStore] = None,
        force: bool = False,
    ) -> None:
        self.root = Path(root)
        self.force = force
        self.filesystem = ProjectFilesystem(self.root)
        header = self.filesystem.read(BOILERPLATE_PATH)
        if header and not config.header:
            config = config.model_copy(update={"header": header.rstrip("\n")})
        self.config = config
        self.factory = TemplateFactory(config, store)

    def _write(
        self,
        category: TemplateCategory,
        template_type: TemplateType,
        report: ScaffoldReport,
        **options: Any,
    ) -> None:
        """Build and write one product, recording the outcome in *report*."""
        target = template_type
        try:
            product = self.factory.create(category, template_type, force=self.force, **options)
            target = product.path
            self.filesystem.write(product)
        except StoreUnavailable:
            raise
        except GeneratorError as exc:
            report.failed[target] = exc.message
            console.print(f"  [red]x[/red] {target}: {escape(exc.message)}")
            return
        report.written.append(target)
        console.print(f"  [green]+[/green] {target}")

    def _update_aggregator(
        self,
        updater: AggregatorUpdater,
        resource: Optional[ResourceDescriptor],
        report: ScaffoldReport,
    ) -> None:
        target = updater.template_type
        try:
            target = updater.path
            updater.update(resource)
        except StoreUnavailable:
            raise
        except GeneratorError as exc:
            report.failed[target] = exc.message
            console.print(f"  [red]x[/red] {target}: {escape(exc.message)}")
            return
        report.written.append(target)
        console.print(f"  [cyan]~[/cyan] {target}")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


class InitScaffolder(_Scaffolder):
    """Creates a new provider project from the project-wide templates."""

    def scaffold(self) -> ScaffoldReport:
        """Write every project-wide and static file plus ``PROJECT``.

        Raises:
            StoreUnavailable: The template store cannot be read.
        """
        console.print(
            Panel(
                f"[bold]Scaffolding {self.config.derived_project_name}[/bold]\n"
                f"module {self.config.module_path}, domain {self.config.domain}",
                style="cyan",
            )
        )
        report = ScaffoldReport()
        for category in (TemplateCategory.PROJECT_WIDE, TemplateCategory.STATIC):
            for template_type in self.factory.supported_types(category):
                self._write(category, template_type, report)

        project = ProjectFile(self.root)
        if project.exists() and not self.force:
            report.failed[PROJECT_FILE_NAME] = "Refusing to overwrite existing file"
            console.print(f"  [red]x[/red] {PROJECT_FILE_NAME}: already exists")
        else:
            project.save(self.config)
            report.written.append(PROJECT_FILE_NAME)
            console.print(f"  [green]+[/green] {PROJECT_FILE_NAME}")
        console.print()
        return report


# ---------------------------------------------------------------------------
# create-api
# ---------------------------------------------------------------------------


class APIScaffolder(_Scaffolder):
    """Adds one managed resource to an existing provider project."""

    def __init__(
        self,
        config: ProjectConfig,
        resource: ResourceDescriptor,
        root: str | Path,
        force: bool = False,
        store: Optional[TemplateStore] = None,
    ) -> None:
        super().__init__(config, root, store=store, force=force)
        self.resource = resource

    def scaffold(self) -> ScaffoldReport:
        """Write the resource's files, then register it in the aggregators.

        The aggregators and ``PROJECT`` are left untouched when any of the
        resource's own files failed, so they never reference a package that
        was not generated.  ``PROJECT`` is also left untouched when an
        aggregator could not be regenerated.

        Raises:
            StoreUnavailable: The template store cannot be read.
        """
        console.print(
            Panel(
                f"[bold]Creating API {self.resource.kind}[/bold]\n"
                f"{self.resource.qualified_group(self.config.domain)}/{self.resource.version}",
                style="cyan",
            )
        )
        report = ScaffoldReport()
        for template_type in self.factory.supported_types(TemplateCategory.PER_RESOURCE):
            self._write(
                TemplateCategory.PER_RESOURCE, template_type, report, resource=self.resource
            )

        if report.failed:
            print_warning("  Skipping aggregator update: resource files were not all written.")
            console.print()
            return report

        for updater in aggregator_updaters(self.factory, self.filesystem):
            self._update_aggregator(updater, self.resource, report)

        if report.failed:
            print_warning(
                f"  Not recording {self.resource.kind} in {PROJECT_FILE_NAME}: "
                "aggregators were not all updated."
            )
        else:
            self._record_resource()
        console.print()
        return report

    def _record_resource(self) -> None:
        project = ProjectFile(self.root)
        if project.exists():
            project.add_resource(self.resource)
            return
        self.config.add_resource(self.resource)
        project.save(self.config)
