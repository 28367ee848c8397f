"""Diff engine tests."""

from promptvault.schemas.version import DiffKind
from promptvault.services.diff_service import diff_lines, summarize


def _pairs(diff):
    return [(d.kind.value, d.line) for d in diff]


def test_changed_middle_line():
    diff = diff_lines("a\nb\nc", "a\nx\nc")
    assert _pairs(diff) == [("same", "a"), ("removed", "b"), ("added", "x"), ("same", "c")]


def test_identical_texts():
    diff = diff_lines("one\ntwo", "one\ntwo")
    assert all(d.kind == DiffKind.SAME for d in diff)
    assert len(diff) == 2


def test_appended_lines():
    assert _pairs(diff_lines("a", "a\nb\nc")) == [("same", "a"), ("added", "b"), ("added", "c")]


def test_truncated_lines():
    assert _pairs(diff_lines("a\nb\nc", "a")) == [("same", "a"), ("removed", "b"), ("removed", "c")]


def test_insertion_cascades_positionally():
    # Lines are paired by index, so everything after the insert shows as changed
    diff = diff_lines("a\nb\nc", "a\nnew\nb\nc")
    assert _pairs(diff) == [
        ("same", "a"),
        ("removed", "b"),
        ("added", "new"),
        ("removed", "c"),
        ("added", "b"),
        ("added", "c"),
    ]


def test_empty_texts():
    assert _pairs(diff_lines("", "")) == [("same", "")]
    assert _pairs(diff_lines("", "x")) == [("removed", ""), ("added", "x")]


def test_summarize():
    summary = summarize(diff_lines("a\nb\nc", "a\nx\nc\nd"))
    assert (summary.added, summary.removed, summary.unchanged) == (2, 1, 2)
