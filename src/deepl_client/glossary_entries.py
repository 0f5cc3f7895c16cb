# SPDX-License-Identifier: Apache-2.0
"""Glossary entries and their TSV/CSV representations."""

from __future__ import annotations

import csv
import io
import re

from deepl_client.errors import ArgumentError

_LINE_SPLIT = re.compile(r"\r\n|\n|\r")


class GlossaryEntries:
    """Source-to-target term pairs of a glossary.

    Example:
        entries = GlossaryEntries({"Hello": "Hallo"})
        entries = GlossaryEntries.from_tsv("Hello\\tHallo\\nWorld\\tWelt")
    """

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries: dict[str, str] = {}
        for source, target in (entries or {}).items():
            self.add(source, target)

    @classmethod
    def from_tsv(cls, tsv: str) -> GlossaryEntries:
        """Parse tab-separated entries, one per line; empty lines are ignored.

        Raises:
            ArgumentError: If a line lacks a tab, has more than one, or
                repeats a source term.
        """
        result = cls()
        for line in _LINE_SPLIT.split(tsv):
            if not line:
                continue
            parts = line.split("\t")
            if len(parts) < 2:
                raise ArgumentError(f"Missing tab character in entry '{line}'")
            if len(parts) > 2:
                raise ArgumentError(f"Duplicate tab character in entry '{line}'")
            result.add(parts[0], parts[1])
        return result

    @classmethod
    def from_csv(cls, csv_content: str) -> GlossaryEntries:
        """Parse comma-separated entries; only the first two columns are used."""
        result = cls()
        for row in csv.reader(io.StringIO(csv_content)):
            if not row:
                continue
            if len(row) < 2:
                raise ArgumentError(f"Missing target term in CSV row {row!r}")
            result.add(row[0], row[1])
        return result

    def add(self, source: str, target: str, overwrite: bool = False) -> None:
        """Add an entry.

        Raises:
            ArgumentError: If ``source`` already exists and ``overwrite`` is False.
        """
        if not overwrite and source in self._entries:
            raise ArgumentError(f"Duplicate source term '{source}'")
        self._entries[source] = target

    def entries(self) -> dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlossaryEntries):
            return NotImplemented
        return self._entries == other._entries

    def to_tsv(self) -> str:
        """Serialize as TSV.

        Raises:
            ArgumentError: If any term is empty or contains control characters.
        """
        lines = []
        for source, target in self._entries.items():
            validate_glossary_term(source)
            validate_glossary_term(target)
            lines.append(f"{source}\t{target}")
        return "\n".join(lines)


def validate_glossary_term(term: str) -> None:
    """Reject empty terms and terms containing control characters or Unicode newlines."""
    if not isinstance(term, str) or not term:
        raise ArgumentError(f"'{term}' is not a valid term.")
    for char in term:
        code = ord(char)
        if code <= 31 or 128 <= code <= 159 or code in (0x2028, 0x2029):
            raise ArgumentError(
                f"Term '{term}' contains invalid character: {char!r} ({code})"
            )
