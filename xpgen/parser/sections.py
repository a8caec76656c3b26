"""Marker-bounded line scanner.

Extracts ordered lists of declaration strings from named sections of an
existing text file.  A section becomes active on a line containing its start
marker and inactive on a later line containing its end marker; while active,
each line is offered to the section's extractor.  Sections are tracked
independently, so overlapping sections are fine.

The scanner is deliberately string-based: it has to cope with generated
files that users have since edited by hand.  Lines that do not match are
skipped, never reported.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

Extractor = Callable[[str, "re.Pattern[str]"], str]


# ---------------------------------------------------------------------------
# Extraction policies
# ---------------------------------------------------------------------------


def extract_full_match(line: str, pattern: re.Pattern[str]) -> str:
    """Return the whole trimmed line if *pattern* matches it."""
    if pattern.search(line):
        return line.strip()
    return ""


def extract_import_line(line: str, pattern: re.Pattern[str]) -> str:
    """Return a whole import declaration line (same policy as a full match)."""
    return extract_full_match(line, pattern)


def extract_match_group(line: str, pattern: re.Pattern[str]) -> str:
    """Return the first capture group of *pattern*, if it matches."""
    match = pattern.search(line)
    if match is None or not match.groups():
        return ""
    return match.group(1) or ""


# ---------------------------------------------------------------------------
# Section configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SectionSpec:
    """One named, marker-bounded section and how to extract from it."""

    name: str
    start_marker: str
    end_marker: str
    pattern: re.Pattern[str]
    extractor: Extractor = extract_full_match


class SectionParserBuilder:
    """Fluent helper for assembling a list of :class:`SectionSpec`."""

    def __init__(self) -> None:
        self._sections: list[SectionSpec] = []

    def add_section(
        self,
        name: str,
        start_marker: str,
        end_marker: str,
        pattern: str | re.Pattern[str],
        extractor: Extractor = extract_full_match,
    ) -> "SectionParserBuilder":
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._sections.append(SectionSpec(name, start_marker, end_marker, compiled, extractor))
        return self

    def add_import_section(
        self, name: str, start_marker: str, end_marker: str, pattern: str | re.Pattern[str]
    ) -> "SectionParserBuilder":
        return self.add_section(name, start_marker, end_marker, pattern, extract_import_line)

    def add_match_group_section(
        self, name: str, start_marker: str, end_marker: str, pattern: str | re.Pattern[str]
    ) -> "SectionParserBuilder":
        return self.add_section(name, start_marker, end_marker, pattern, extract_match_group)

    def add_full_match_section(
        self, name: str, start_marker: str, end_marker: str, pattern: str | re.Pattern[str]
    ) -> "SectionParserBuilder":
        return self.add_section(name, start_marker, end_marker, pattern, extract_full_match)

    def build(self) -> "SectionParser":
        return SectionParser(self._sections)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class SectionParser:
    """Scans text line by line and collects per-section extractions."""

    def __init__(self, sections: Iterable[SectionSpec]) -> None:
        self.sections = list(sections)
        names = [section.name for section in self.sections]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate section names: {', '.join(sorted(duplicates))}")

    def parse(self, text: str) -> dict[str, list[str]]:
        """Return ``{section name: [extracted strings in scan order]}``."""
        results: dict[str, list[str]] = {section.name: [] for section in self.sections}
        active: dict[str, bool] = {section.name: False for section in self.sections}

        for line in text.splitlines():
            for section in self.sections:
                if section.start_marker and section.start_marker in line:
                    active[section.name] = True
                    continue
                if section.end_marker and active[section.name] and section.end_marker in line:
                    active[section.name] = False

            for section in self.sections:
                if not active[section.name]:
                    continue
                extracted = section.extractor(line, section.pattern)
                if extracted:
                    results[section.name].append(extracted)

        return results

    def parse_file(self, path: str | Path) -> dict[str, list[str]]:
        return self.parse(Path(path).read_text(encoding="utf-8"))


def parse_sections(text: str, sections: Iterable[SectionSpec]) -> dict[str, list[str]]:
    """Convenience wrapper: ``SectionParser(sections).parse(text)``."""
    return SectionParser(sections).parse(text)
