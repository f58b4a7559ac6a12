# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Applying and describing text modifications.

A modification replaces the half-open range ``[start, end)`` of the original
text. Modifications are validated against the text they were computed from
and applied in descending offset order, so an earlier splice never shifts the
offsets of a later one.
"""

import difflib
import enum
from dataclasses import dataclass

from gradle_parser.editor.errors import ModificationError

# ###############
# Public Interface
# ###############


class ModificationKind(enum.Enum):
    REPLACE = "replace"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class Modification:
    """One splice into the original text.

    Attributes:
        kind: What the splice does. INSERT has ``start == end``.
        start: Offset of the first replaced character.
        end: Offset one past the last replaced character.
        old_text: The text currently in ``[start, end)``.
        new_text: The replacement text.
        description: Human-readable summary of the edit.
        line: 1-based line of ``start``, for reporting.
    """

    kind: ModificationKind
    start: int
    end: int
    old_text: str
    new_text: str
    description: str = ""
    line: int = 0


@dataclass(frozen=True)
class DiffLine:
    """One changed line: ``-`` for removed, ``+`` for added."""

    prefix: str
    line_number: int
    text: str

    def __str__(self) -> str:
        return f"{self.prefix} {self.text}"


def validate_modifications(text: str, modifications: list[Modification]) -> None:
    """Check that every modification fits *text* and that none overlap.

    Two insertions at the same offset also count as overlapping, since their
    relative order would be undefined.

    Raises:
        ModificationError: On the first problem found.
    """
    for mod in modifications:
        if not 0 <= mod.start <= mod.end <= len(text):
            raise ModificationError(f"Modification [{mod.start}, {mod.end}) is outside the text")
        if text[mod.start : mod.end] != mod.old_text:
            raise ModificationError(
                f"Text at [{mod.start}, {mod.end}) is {text[mod.start : mod.end]!r}, expected {mod.old_text!r}"
            )
    ordered = sorted(modifications, key=lambda m: (m.start, m.end))
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.end > cur.start or (prev.start == prev.end == cur.start == cur.end):
            raise ModificationError(
                f"Modifications [{prev.start}, {prev.end}) and [{cur.start}, {cur.end}) overlap"
            )


def apply_modifications(text: str, modifications: list[Modification]) -> str:
    """Validate *modifications* and splice them into *text*.

    Returns:
        The new text. With no modifications this is *text* itself.

    Raises:
        ModificationError: If validation fails.
    """
    validate_modifications(text, modifications)
    for mod in sorted(modifications, key=lambda m: m.start, reverse=True):
        text = text[: mod.start] + mod.new_text + text[mod.end :]
    return text


def generate_diff(original: str, modified: str) -> list[DiffLine]:
    """Return the changed lines between two texts, without context lines."""
    old_lines = original.split("\n")
    new_lines = modified.split("\n")
    diff: list[DiffLine] = []
    matcher = difflib.SequenceMatcher(a=old_lines, b=new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        for i in range(i1, i2):
            diff.append(DiffLine("-", i + 1, old_lines[i]))
        for j in range(j1, j2):
            diff.append(DiffLine("+", j + 1, new_lines[j]))
    return diff


def summarize_modifications(modifications: list[Modification]) -> str:
    """Describe *modifications* in source order, one per line."""
    if not modifications:
        return "No modifications"
    lines = [f"{len(modifications)} modification(s):"]
    for mod in sorted(modifications, key=lambda m: m.start):
        description = mod.description or f"{mod.kind.value} {mod.old_text!r} -> {mod.new_text!r}"
        lines.append(f"  line {mod.line}: {description}")
    return "\n".join(lines)
