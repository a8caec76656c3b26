r"""Section-scoped line parser for regenerated Go source files.

Usage::

    from xpgen.parser import SectionParserBuilder

    parser = (
        SectionParserBuilder()
        .add_import_section("imports", "import (", ")", r'^\s*"[^"]+"\s*$')
        .build()
    )
    sections = parser.parse(text)
    print(sections["imports"])
"""

from xpgen.parser.sections import (
    SectionParser,
    SectionParserBuilder,
    SectionSpec,
    extract_full_match,
    extract_import_line,
    extract_match_group,
    parse_sections,
)

__all__ = [
    "SectionParser",
    "SectionParserBuilder",
    "SectionSpec",
    "extract_full_match",
    "extract_import_line",
    "extract_match_group",
    "parse_sections",
]
