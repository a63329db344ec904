"""
Character-level diff for visual answer feedback.

The diff is a minimal edit script between the expected answer and the
learner's answer, computed with the classic edit-distance dynamic
program over grapheme-equivalent units (an Arabic letter together with
its tashkeel is one unit, so highlighted feedback never splits a mark
from its letter).

Exercise strings are short, so the O(n*m) table is fine.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from drilleval.text.arabic import split_units


class DiffOp(str, Enum):
    """Edit operation tag."""

    MATCH = "match"
    INSERT = "insert"
    DELETE = "delete"
    SUBSTITUTE = "substitute"


class DiffEntry(BaseModel):
    """
    One step of the edit script.

    Attributes:
        op: Operation tag
        expected: Expected unit consumed by the step ("" for INSERT)
        actual: Learner unit produced by the step ("" for DELETE)
        position: Index of the expected unit the step applies to; for
            INSERT, the index of the expected unit it is placed before
    """

    model_config = ConfigDict(frozen=True)

    op: DiffOp
    expected: str = ""
    actual: str = ""
    position: int = Field(ge=0)


class DiffChar(BaseModel):
    """A unit annotated for rendering."""

    model_config = ConfigDict(frozen=True)

    char: str
    type: Literal["correct", "wrong", "missing", "extra"]


class CharDiffResult(BaseModel):
    """
    Result of a character-level diff.

    Attributes:
        entries: Edit script in expected-string order
        distance: Number of non-MATCH steps (the edit distance)
        similarity: ``1 - distance / max(len)`` over units, 1.0 for two empty strings
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[DiffEntry, ...] = ()
    distance: int = 0
    similarity: float = 1.0

    @property
    def is_identical(self) -> bool:
        return self.distance == 0

    @property
    def expected_view(self) -> list[DiffChar]:
        """Expected units marked correct / wrong / missing."""
        view = []
        for entry in self.entries:
            if entry.op is DiffOp.MATCH:
                view.append(DiffChar(char=entry.expected, type="correct"))
            elif entry.op is DiffOp.SUBSTITUTE:
                view.append(DiffChar(char=entry.expected, type="wrong"))
            elif entry.op is DiffOp.DELETE:
                view.append(DiffChar(char=entry.expected, type="missing"))
        return view

    @property
    def actual_view(self) -> list[DiffChar]:
        """Learner units marked correct / wrong / extra."""
        view = []
        for entry in self.entries:
            if entry.op is DiffOp.MATCH:
                view.append(DiffChar(char=entry.actual, type="correct"))
            elif entry.op is DiffOp.SUBSTITUTE:
                view.append(DiffChar(char=entry.actual, type="wrong"))
            elif entry.op is DiffOp.INSERT:
                view.append(DiffChar(char=entry.actual, type="extra"))
        return view

    def operations(self, op: DiffOp) -> list[DiffEntry]:
        """Return the entries carrying ``op``."""
        return [entry for entry in self.entries if entry.op is op]


def edit_distance(a: Sequence, b: Sequence) -> int:
    """
    Levenshtein distance between two sequences (strings or unit lists).

    Args:
        a: First sequence
        b: Second sequence

    Returns:
        Minimal number of insert/delete/substitute steps
    """
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, item_a in enumerate(a, start=1):
        current = [i]
        for j, item_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j - 1] + (item_a != item_b),
                    previous[j] + 1,
                    current[j - 1] + 1,
                )
            )
        previous = current
    return previous[-1]


def _suffix_costs(expected: list[str], actual: list[str]) -> list[list[int]]:
    # cost[i][j] = edit distance between expected[i:] and actual[j:]
    n, m = len(expected), len(actual)
    cost = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n, -1, -1):
        for j in range(m, -1, -1):
            if i == n:
                cost[i][j] = m - j
            elif j == m:
                cost[i][j] = n - i
            else:
                cost[i][j] = min(
                    cost[i + 1][j + 1] + (expected[i] != actual[j]),
                    cost[i + 1][j] + 1,
                    cost[i][j + 1] + 1,
                )
    return cost


def compute_char_diff(expected: str, actual: str) -> CharDiffResult:
    """
    Align ``actual`` against ``expected`` and emit a minimal edit script.

    When several minimal alignments exist, each step prefers MATCH, then
    SUBSTITUTE, then DELETE, then INSERT, which keeps matched runs
    contiguous and the feedback readable.

    Args:
        expected: The correct answer
        actual: The learner's answer

    Returns:
        CharDiffResult whose entries replay ``expected`` into ``actual``
    """
    exp_units = split_units(expected)
    act_units = split_units(actual)
    n, m = len(exp_units), len(act_units)
    cost = _suffix_costs(exp_units, act_units)

    entries: list[DiffEntry] = []
    i = j = 0
    while i < n or j < m:
        here = cost[i][j]
        if i < n and j < m and exp_units[i] == act_units[j] and here == cost[i + 1][j + 1]:
            entries.append(DiffEntry(op=DiffOp.MATCH, expected=exp_units[i], actual=act_units[j], position=i))
            i += 1
            j += 1
        elif i < n and j < m and here == cost[i + 1][j + 1] + 1:
            entries.append(DiffEntry(op=DiffOp.SUBSTITUTE, expected=exp_units[i], actual=act_units[j], position=i))
            i += 1
            j += 1
        elif i < n and here == cost[i + 1][j] + 1:
            entries.append(DiffEntry(op=DiffOp.DELETE, expected=exp_units[i], position=i))
            i += 1
        else:
            entries.append(DiffEntry(op=DiffOp.INSERT, actual=act_units[j], position=i))
            j += 1

    distance = cost[0][0]
    longest = max(n, m)
    similarity = 1.0 - distance / longest if longest else 1.0
    return CharDiffResult(entries=tuple(entries), distance=distance, similarity=similarity)


def apply_diff(expected: str, diff: CharDiffResult) -> str:
    """
    Replay an edit script against ``expected``.

    Args:
        expected: The string the diff was computed from
        diff: Edit script

    Returns:
        The reconstructed learner string

    Raises:
        ValueError: If the script does not fit ``expected``
    """
    units = split_units(expected)
    out: list[str] = []
    index = 0
    for entry in diff.entries:
        if entry.op is DiffOp.INSERT:
            out.append(entry.actual)
            continue
        if index >= len(units) or units[index] != entry.expected:
            raise ValueError(f"Diff step {entry.op.value} at {entry.position} does not match expected text")
        if entry.op is DiffOp.MATCH:
            out.append(units[index])
        elif entry.op is DiffOp.SUBSTITUTE:
            out.append(entry.actual)
        index += 1
    if index != len(units):
        raise ValueError("Diff does not consume the whole expected text")
    return "".join(out)
