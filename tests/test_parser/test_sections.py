"""Tests for the marker-bounded section parser.

Covers:
- Extraction policies (whole line, first capture group)
- Start/end marker semantics, including markers on the same line
- Independence of sections with overlapping or distinct markers
- Tolerance of unmatched lines and missing markers
"""

from __future__ import annotations

import re
import textwrap
from pathlib import Path

import pytest

from xpgen.parser import (
    SectionParser,
    SectionParserBuilder,
    SectionSpec,
    extract_full_match,
    extract_match_group,
    parse_sections,
)

pytestmark = pytest.mark.unit


GO_SOURCE = textwrap.dedent(
    """\
    package apis

    import (
    \t"k8s.io/apimachinery/pkg/runtime"

    \tstoragev1alpha1 "mod/apis/storage/v1alpha1"
    \tcomputev1 "mod/apis/compute/v1"
    )

    func init() {
    \tAddToSchemes = append(AddToSchemes,
    \t\tstoragev1alpha1.SchemeBuilder.AddToScheme,
    \t\tcomputev1.SchemeBuilder.AddToScheme,
    \t)
    }
    """
)

IMPORT_RE = r'^\s*[a-z][a-z0-9]*v[a-z0-9]+\s+"[^"]+"\s*$'
REGISTRATION_RE = r"^\s*([a-z][a-z0-9]*\.SchemeBuilder\.AddToScheme),?\s*$"


def _go_parser() -> SectionParser:
    return (
        SectionParserBuilder()
        .add_import_section("imports", "import (", ")", IMPORT_RE)
        .add_match_group_section(
            "registrations", "AddToSchemes = append(AddToSchemes,", ")", REGISTRATION_RE
        )
        .build()
    )


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


class TestExtractors:
    def test_full_match_returns_trimmed_line(self):
        assert extract_full_match('\tfoo "bar"  ', re.compile(r'"bar"')) == 'foo "bar"'

    def test_full_match_no_match(self):
        assert extract_full_match("nothing here", re.compile(r"\d")) == ""

    def test_match_group_returns_first_group(self):
        pattern = re.compile(r"^\s*(\w+)\.Setup,?$")
        assert extract_match_group("\t\tbucket.Setup,", pattern) == "bucket"

    def test_match_group_without_groups_is_empty(self):
        assert extract_match_group("bucket.Setup", re.compile(r"Setup")) == ""

    def test_match_is_unanchored(self):
        assert extract_full_match("prefix 42 suffix", re.compile(r"\d+")) == "prefix 42 suffix"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestSectionParser:
    def test_extracts_go_sections(self):
        result = _go_parser().parse(GO_SOURCE)
        assert result["imports"] == [
            'storagev1alpha1 "mod/apis/storage/v1alpha1"',
            'computev1 "mod/apis/compute/v1"',
        ]
        assert result["registrations"] == [
            "storagev1alpha1.SchemeBuilder.AddToScheme",
            "computev1.SchemeBuilder.AddToScheme",
        ]

    def test_every_section_present_when_markers_missing(self):
        result = _go_parser().parse("package empty\n")
        assert result == {"imports": [], "registrations": []}

    def test_lines_outside_sections_ignored(self):
        text = 'foov1 "outside"\nimport (\n)\nbarv1 "also outside"\n'
        assert _go_parser().parse(text)["imports"] == []

    def test_unmatched_lines_skipped(self):
        text = 'import (\n\t// comment\n\tgarbage\n\tokv1 "mod/ok"\n)\n'
        assert _go_parser().parse(text)["imports"] == ['okv1 "mod/ok"']

    def test_start_line_offered_to_extractor(self):
        parser = SectionParserBuilder().add_full_match_section(
            "items", "BEGIN", "END", r"item\d"
        ).build()
        result = parser.parse("BEGIN item1\nitem2\nEND\n")
        assert result["items"] == ["BEGIN item1", "item2"]

    def test_end_line_not_extracted(self):
        parser = SectionParserBuilder().add_full_match_section(
            "items", "BEGIN", "END", r"item\d"
        ).build()
        result = parser.parse("BEGIN\nitem1\nEND item2\nitem3\n")
        assert result["items"] == ["item1"]

    def test_start_and_end_on_same_line_stays_active(self):
        parser = SectionParserBuilder().add_full_match_section(
            "items", "BEGIN", "END", r"item\d"
        ).build()
        result = parser.parse("BEGIN END item1\nitem2\nEND\n")
        assert result["items"] == ["BEGIN END item1", "item2"]

    def test_section_reactivates(self):
        parser = SectionParserBuilder().add_full_match_section(
            "items", "BEGIN", "END", r"item\d"
        ).build()
        result = parser.parse("BEGIN\nitem1\nEND\nitem2\nBEGIN\nitem3\nEND\n")
        assert result["items"] == ["item1", "item3"]

    def test_section_isolation(self):
        parser = (
            SectionParserBuilder()
            .add_full_match_section("a", "<a>", "</a>", r"entry")
            .add_full_match_section("b", "<b>", "</b>", r"entry")
            .build()
        )
        result = parser.parse("<a>\nentry one\n</a>\n<b>\nentry two\n</b>\n")
        assert result["a"] == ["entry one"]
        assert result["b"] == ["entry two"]

    def test_overlapping_sections_both_collect(self):
        parser = (
            SectionParserBuilder()
            .add_full_match_section("outer", "{outer", "outer}", r"x")
            .add_full_match_section("inner", "{inner", "inner}", r"x")
            .build()
        )
        result = parser.parse("{outer\nx1\n{inner\nx2\ninner}\nx3\nouter}\n")
        assert result["outer"] == ["x1", "x2", "x3"]
        assert result["inner"] == ["x2"]

    def test_duplicate_section_names_rejected(self):
        spec = SectionSpec("dup", "a", "b", re.compile("x"))
        with pytest.raises(ValueError, match="dup"):
            SectionParser([spec, spec])

    def test_parse_sections_helper(self):
        spec = SectionSpec("nums", "[", "]", re.compile(r"\d"))
        assert parse_sections("[\n1\n2\n]\n3\n", [spec]) == {"nums": ["1", "2"]}

    def test_parse_file(self, tmp_path: Path):
        path = tmp_path / "register.go"
        path.write_text(GO_SOURCE, encoding="utf-8")
        assert _go_parser().parse_file(path) == _go_parser().parse(GO_SOURCE)

    def test_package_usage_example(self):
        import xpgen.parser

        pattern = r'^\s*"[^"]+"\s*$'
        assert pattern in xpgen.parser.__doc__
        parser = SectionParserBuilder().add_import_section("imports", "import (", ")", pattern).build()
        assert parser.parse('import (\n\t"fmt"\n)\n')["imports"] == ['"fmt"']
