"""Idempotent regeneration of aggregator files.

Aggregator files accumulate one import and one registration call per
scaffolded resource (``apis/register.go`` registers API schemes,
``internal/controller/register.go`` wires controller setup functions).
Every ``create-api`` run regenerates them from scratch:

1. read the file currently on disk (absent means "no entries yet"),
2. pull the dynamic import and registration entries out of it with the
   section parser, dropping the entries the template always emits itself,
3. append the entries implied by the new resource unless already present,
4. render the aggregator template with the merged lists, keeping the
   license comment the file already starts with.

Entries are never sorted: previous order is kept and new entries go last, so
re-running with the same resource reproduces the file byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Optional

from xpgen.parser.sections import SectionParser, SectionParserBuilder

from .factory import TemplateFactory
from .filesystem import ProjectFilesystem
from .models import ResourceDescriptor
from .products import TemplateProduct
from .templates import TemplateStore

if TYPE_CHECKING:
    from xpgen.config import ProjectConfig

IMPORTS_SECTION = "imports"
REGISTRATIONS_SECTION = "registrations"


class AggregatorKind(str, Enum):
    """The aggregator files the generator maintains."""
    API_REGISTRATION = "api"
    CONTROLLER_REGISTRATION = "controller"


@dataclass(frozen=True)
class AggregatorEntries:
    """What one resource contributes to an aggregator."""

    import_line: str
    registration: str
    # Substring identifying an import of the same package under any alias.
    import_key: str


class AggregatorUpdater:
    """Base class; subclasses describe one aggregator file's layout."""

    kind: ClassVar[AggregatorKind]
    template_alias: ClassVar[str]

    import_start: ClassVar[str] = "import ("
    import_end: ClassVar[str] = ")"
    import_pattern: ClassVar[str]
    registration_start: ClassVar[str]
    registration_end: ClassVar[str]
    registration_pattern: ClassVar[str]

    def __init__(
        self,
        factory: TemplateFactory,
        filesystem: ProjectFilesystem,
        path: Optional[str] = None,
    ) -> None:
        self.factory = factory
        self.filesystem = filesystem
        self.template_type = factory.find_type(self.template_alias)
        self._path = path

    @property
    def config(self) -> ProjectConfig:
        return self.factory.config

    @property
    def repo(self) -> str:
        return self.config.module_path

    @property
    def path(self) -> str:
        if self._path:
            return self._path
        return self._build_product([], []).path

    # -- Layout hooks ------------------------------------------------------

    def section_parser(self) -> SectionParser:
        return (
            SectionParserBuilder()
            .add_import_section(
                IMPORTS_SECTION, self.import_start, self.import_end, self.import_pattern
            )
            .add_match_group_section(
                REGISTRATIONS_SECTION,
                self.registration_start,
                self.registration_end,
                self.registration_pattern,
            )
            .build()
        )

    def static_entries(self) -> tuple[set[str], set[str]]:
        """Imports and registrations the template body always carries."""
        return set(), set()

    def derive(self, resource: ResourceDescriptor) -> Optional[AggregatorEntries]:
        raise NotImplementedError

    # -- Merge -------------------------------------------------------------

    def current_text(self) -> Optional[str]:
        """The on-disk aggregator, or ``None`` when it does not exist yet.

        Raises:
            ReadFailure: The file exists but cannot be read.
        """
        return self.filesystem.read(self.path)

    def current_entries(self, text: Optional[str] = None) -> tuple[list[str], list[str]]:
        """Parse the aggregator text (read from disk by default) into its dynamic entries."""
        if text is None:
            text = self.current_text()
        if text is None:
            return [], []
        sections = self.section_parser().parse(text)
        static_imports, static_registrations = self.static_entries()
        imports = [i for i in sections[IMPORTS_SECTION] if i not in static_imports]
        registrations = [
            r for r in sections[REGISTRATIONS_SECTION] if r not in static_registrations
        ]
        return imports, registrations

    def merge(
        self,
        imports: list[str],
        registrations: list[str],
        resource: Optional[ResourceDescriptor],
    ) -> tuple[list[str], list[str]]:
        """Append *resource*'s entries unless already present."""
        merged_imports = list(imports)
        merged_registrations = list(registrations)
        entries = self.derive(resource) if resource is not None else None
        if entries is None:
            return merged_imports, merged_registrations

        if not any(entries.import_key in existing for existing in merged_imports):
            merged_imports.append(entries.import_line)
        if entries.registration not in merged_registrations:
            merged_registrations.append(entries.registration)
        return merged_imports, merged_registrations

    @staticmethod
    def existing_header(text: Optional[str]) -> Optional[str]:
        """The leading license comment of *text*, if it starts with one."""
        if not text or not text.startswith("/*"):
            return None
        end = text.find("*/")
        if end < 0:
            return None
        return text[: end + 2]

    # -- Rendering ---------------------------------------------------------

    def _build_product(
        self,
        imports: list[str],
        registrations: list[str],
        header: Optional[str] = None,
    ) -> TemplateProduct:
        product = self.factory.create_project_template(
            self.template_type,
            force=True,
            custom_data={IMPORTS_SECTION: imports, REGISTRATIONS_SECTION: registrations},
        )
        if self._path:
            product.path = self._path
        if header:
            product.boilerplate = header
        return product

    def product(self, resource: Optional[ResourceDescriptor]) -> TemplateProduct:
        """The always-overwrite product carrying the merged entries.

        The license comment already heading the file is kept as is.
        """
        text = self.current_text()
        imports, registrations = self.current_entries(text)
        imports, registrations = self.merge(imports, registrations, resource)
        return self._build_product(imports, registrations, self.existing_header(text))

    def render(self, resource: Optional[ResourceDescriptor]) -> str:
        return self.product(resource).render()

    def update(self, resource: Optional[ResourceDescriptor]) -> Path:
        """Regenerate the aggregator on disk and return its path."""
        return self.filesystem.write(self.product(resource))


class APIRegistrationUpdater(AggregatorUpdater):
    """``apis/register.go``: one scheme registration per group/version."""

    kind = AggregatorKind.API_REGISTRATION
    template_alias = "apis"

    import_pattern = r'^\s*([a-zA-Z][a-zA-Z0-9]*v[a-zA-Z0-9]+)\s+"([^"]+/apis/[^"]+)"\s*$'
    registration_start = "AddToSchemes = append(AddToSchemes,"
    registration_end = ")"
    registration_pattern = r"^\s*([a-zA-Z][a-zA-Z0-9]*v[a-zA-Z0-9]+\.SchemeBuilder\.AddToScheme),?\s*$"

    def static_entries(self) -> tuple[set[str], set[str]]:
        return (
            {f'v1alpha1 "{self.repo}/apis/v1alpha1"'},
            {"v1alpha1.SchemeBuilder.AddToScheme"},
        )

    def derive(self, resource: ResourceDescriptor) -> Optional[AggregatorEntries]:
        # The provider's own v1alpha1 API is part of the template body.
        if resource.is_base:
            return None
        sub_path = f"/apis/{resource.group_lower}/{resource.version}"
        return AggregatorEntries(
            import_line=f'{resource.alias} "{self.repo}{sub_path}"',
            registration=f"{resource.alias}.SchemeBuilder.AddToScheme",
            import_key=f'{sub_path}"',
        )


class ControllerRegistrationUpdater(AggregatorUpdater):
    """``internal/controller/register.go``: one ``Setup`` per kind."""

    kind = AggregatorKind.CONTROLLER_REGISTRATION
    template_alias = "controllerregister"

    import_pattern = r'^\s*"([^"]+/internal/controller/[^"]+)"\s*$'
    registration_start = "for _, setup := range []func(ctrl.Manager, controller.Options) error{"
    registration_end = "}"
    registration_pattern = r"^\s*([a-zA-Z][a-zA-Z0-9]*\.Setup),?\s*$"

    def static_entries(self) -> tuple[set[str], set[str]]:
        return {f'"{self.repo}/internal/controller/config"'}, {"config.Setup"}

    def derive(self, resource: ResourceDescriptor) -> Optional[AggregatorEntries]:
        sub_path = f"/internal/controller/{resource.kind_lower}"
        return AggregatorEntries(
            import_line=f'"{self.repo}{sub_path}"',
            registration=f"{resource.kind_lower}.Setup",
            import_key=f'{sub_path}"',
        )


AGGREGATORS: dict[AggregatorKind, type[AggregatorUpdater]] = {
    AggregatorKind.API_REGISTRATION: APIRegistrationUpdater,
    AggregatorKind.CONTROLLER_REGISTRATION: ControllerRegistrationUpdater,
}


def aggregator_updaters(
    factory: TemplateFactory, filesystem: ProjectFilesystem
) -> list[AggregatorUpdater]:
    """One updater per aggregator kind, in a fixed order."""
    return [cls(factory, filesystem) for cls in AGGREGATORS.values()]


def render_aggregator(
    kind: AggregatorKind | str,
    path: str | Path,
    config: ProjectConfig,
    resource: Optional[ResourceDescriptor],
    store: Optional[TemplateStore] = None,
) -> str:
    """Render the merged text of the aggregator file at *path*.

    Nothing is written; *path* is only read.
    """
    target = Path(path)
    updater_cls = AGGREGATORS[AggregatorKind(kind)]
    factory = TemplateFactory(config, store)
    updater = updater_cls(factory, ProjectFilesystem(target.parent), path=target.name)
    return updater.render(resource)
