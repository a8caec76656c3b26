"""Tests for aggregator regeneration (apis/register.go, controller register.go)."""

from __future__ import annotations

import re

import pytest

from xpgen.scaffolder.aggregators import (
    AggregatorKind,
    APIRegistrationUpdater,
    ControllerRegistrationUpdater,
    aggregator_updaters,
    render_aggregator,
)
from xpgen.scaffolder.models import ResourceDescriptor

pytestmark = pytest.mark.unit

COMPUTE_IMPORT = 'computev1alpha1 "github.com/acme/provider-acme/apis/compute/v1alpha1"'
COMPUTE_REGISTRATION = "computev1alpha1.SchemeBuilder.AddToScheme"

HAND_WRITTEN_APIS = """package apis

import (
	storagev1alpha1 "mod/apis/storage/v1alpha1"
)

func init() {
	AddToSchemes = append(AddToSchemes,
		storagev1alpha1.SchemeBuilder.AddToScheme,
	)
}
"""


def _stripped_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


@pytest.fixture
def api_updater(factory, filesystem) -> APIRegistrationUpdater:
    return APIRegistrationUpdater(factory, filesystem)


@pytest.fixture
def controller_updater(factory, filesystem) -> ControllerRegistrationUpdater:
    return ControllerRegistrationUpdater(factory, filesystem)


class TestAPIRegistration:
    def test_default_path(self, api_updater):
        assert api_updater.path == "apis/register.go"

    def test_first_update_adds_entries(self, api_updater, instance, project_root):
        api_updater.update(instance)
        lines = _stripped_lines((project_root / "apis" / "register.go").read_text(encoding="utf-8"))
        assert COMPUTE_IMPORT in lines
        assert f"{COMPUTE_REGISTRATION}," in lines

    def test_update_is_idempotent(self, api_updater, instance, project_root):
        target = project_root / "apis" / "register.go"
        api_updater.update(instance)
        first = target.read_bytes()
        api_updater.update(instance)
        assert target.read_bytes() == first
        assert api_updater.render(instance) == first.decode("utf-8")

    def test_existing_header_kept(self, api_updater, instance, bucket, project_root):
        target = project_root / "apis" / "register.go"
        api_updater.update(instance)
        dated = re.sub(r"Copyright \d{4}", "Copyright 2019", target.read_text(encoding="utf-8"))
        target.write_text(dated, encoding="utf-8")

        assert api_updater.render(instance) == dated
        api_updater.update(bucket)
        assert target.read_text(encoding="utf-8").startswith(
            "/*\nCopyright 2019 The Crossplane Authors."
        )

    @pytest.mark.parametrize("text", [None, "", HAND_WRITTEN_APIS, "/* unterminated\npackage apis\n"])
    def test_no_existing_header(self, text):
        assert APIRegistrationUpdater.existing_header(text) is None

    def test_static_entries_emitted_once(self, api_updater, instance, bucket):
        api_updater.update(instance)
        api_updater.update(bucket)
        lines = _stripped_lines(api_updater.render(instance))
        assert lines.count('v1alpha1 "github.com/acme/provider-acme/apis/v1alpha1"') == 1
        assert lines.count("v1alpha1.SchemeBuilder.AddToScheme,") == 1

    def test_existing_order_kept_new_last(self, api_updater, instance, project_root):
        (project_root / "apis").mkdir()
        (project_root / "apis" / "register.go").write_text(HAND_WRITTEN_APIS, encoding="utf-8")
        lines = _stripped_lines(api_updater.render(instance))
        storage_import = lines.index('storagev1alpha1 "mod/apis/storage/v1alpha1"')
        compute_import = lines.index(COMPUTE_IMPORT)
        assert storage_import < compute_import
        storage_reg = lines.index("storagev1alpha1.SchemeBuilder.AddToScheme,")
        compute_reg = lines.index(f"{COMPUTE_REGISTRATION},")
        assert storage_reg < compute_reg

    def test_two_resources_in_call_order(self, api_updater, instance, bucket):
        api_updater.update(bucket)
        api_updater.update(instance)
        lines = _stripped_lines(api_updater.render(None))
        assert lines.index("storagev1alpha1.SchemeBuilder.AddToScheme,") < lines.index(
            f"{COMPUTE_REGISTRATION},"
        )

    def test_import_dedup_ignores_alias_but_registration_does_not(
        self, api_updater, instance, project_root
    ):
        (project_root / "apis").mkdir()
        (project_root / "apis" / "register.go").write_text(
            HAND_WRITTEN_APIS.replace("storage", "compute")
            .replace("computev1alpha1", "cmpv1alpha1")
            .replace('"mod/', '"github.com/acme/provider-acme/'),
            encoding="utf-8",
        )
        lines = _stripped_lines(api_updater.render(instance))
        imports = [line for line in lines if line.endswith('/apis/compute/v1alpha1"')]
        assert imports == ['cmpv1alpha1 "github.com/acme/provider-acme/apis/compute/v1alpha1"']
        assert "cmpv1alpha1.SchemeBuilder.AddToScheme," in lines
        assert f"{COMPUTE_REGISTRATION}," in lines

    def test_versions_are_distinct(self, api_updater, instance):
        api_updater.update(instance)
        v1 = ResourceDescriptor(group="compute", version="v1", kind="Instance")
        lines = _stripped_lines(api_updater.render(v1))
        assert COMPUTE_IMPORT in lines
        assert 'computev1 "github.com/acme/provider-acme/apis/compute/v1"' in lines

    def test_base_resource_adds_nothing(self, api_updater):
        base = ResourceDescriptor(version="v1alpha1", kind="ProviderConfig")
        assert api_updater.merge([], [], base) == ([], [])

    def test_unparseable_lines_ignored(self, api_updater, instance, project_root):
        (project_root / "apis").mkdir()
        (project_root / "apis" / "register.go").write_text(
            HAND_WRITTEN_APIS.replace(
                "import (\n", "import (\n\t// added by hand\n\tfmt \"fmt\"\n"
            ),
            encoding="utf-8",
        )
        imports, registrations = api_updater.current_entries()
        assert imports == ['storagev1alpha1 "mod/apis/storage/v1alpha1"']
        assert registrations == ["storagev1alpha1.SchemeBuilder.AddToScheme"]
        assert '"fmt"' not in api_updater.render(instance)


class TestControllerRegistration:
    def test_default_path(self, controller_updater):
        assert controller_updater.path == "internal/controller/register.go"

    def test_adds_setup_per_kind(self, controller_updater, instance, bucket):
        controller_updater.update(instance)
        controller_updater.update(bucket)
        lines = _stripped_lines(controller_updater.render(None))
        assert '"github.com/acme/provider-acme/internal/controller/instance"' in lines
        assert '"github.com/acme/provider-acme/internal/controller/bucket"' in lines
        assert lines.index("instance.Setup,") < lines.index("bucket.Setup,")
        assert lines.count("config.Setup,") == 1
        assert lines.count('"github.com/acme/provider-acme/internal/controller/config"') == 1

    def test_same_kind_in_two_groups_registered_once(self, controller_updater, instance):
        controller_updater.update(instance)
        other = ResourceDescriptor(group="network", version="v1beta1", kind="Instance")
        lines = _stripped_lines(controller_updater.render(other))
        assert lines.count("instance.Setup,") == 1

    def test_base_resource_still_wired(self, controller_updater):
        base = ResourceDescriptor(version="v1alpha1", kind="ProviderConfig")
        _, registrations = controller_updater.merge([], [], base)
        assert registrations == ["providerconfig.Setup"]


class TestHelpers:
    def test_updaters_in_fixed_order(self, factory, filesystem):
        kinds = [u.kind for u in aggregator_updaters(factory, filesystem)]
        assert kinds == [AggregatorKind.API_REGISTRATION, AggregatorKind.CONTROLLER_REGISTRATION]

    def test_render_aggregator_does_not_write(self, config, instance, project_root):
        target = project_root / "register.go"
        target.write_text(HAND_WRITTEN_APIS, encoding="utf-8")
        text = render_aggregator("api", target, config, instance)
        assert COMPUTE_IMPORT in _stripped_lines(text)
        assert target.read_text(encoding="utf-8") == HAND_WRITTEN_APIS

    def test_render_aggregator_missing_file(self, config, instance, project_root):
        text = render_aggregator(
            AggregatorKind.CONTROLLER_REGISTRATION,
            project_root / "register.go",
            config,
            instance,
        )
        assert "instance.Setup," in _stripped_lines(text)
