"""Unit tests for core/indexer.py"""

import hashlib

import pytest

from docsearch.core.indexer import blocks_to_records, index_document, index_markdown
from docsearch.core.models import Block, BlockKind
from docsearch.core.source import SourceDoc
from docsearch.crud.memory_backend import MemoryBackend
from docsearch.errors import ClassificationError, ParseError


EXAMPLE_MD = """\
# Install

Run composer install.

## Requirements

| Label | Value |
| ----- | ----- |
| PHP   | PHP >= 7 |
"""


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def _heading(level: int, text: str) -> Block:
    return Block(kind=BlockKind.heading, tag=f"h{level}", text=text, level=level)


def _para(text: str) -> Block:
    return Block(kind=BlockKind.paragraph, tag="p", text=text)


# --- worked example ---

def test_example_document_records():
    """The installation example yields the four documented records."""
    records = index_markdown("5.0", "installation", EXAMPLE_MD)
    assert len(records) == 4
    a, b, c, d = records

    assert (a.h1, a.h2, a.content, a.importance) == ("Install", None, None, 0)
    assert (b.h1, b.content, b.importance, b.link) == ("Install", "Run composer install.", 4, "installation")
    assert (c.h2, c.content, c.importance) == ("Requirements", None, 1)
    assert (d.h1, d.h2, d.content, d.importance) == ("Install", "Requirements", "PHP >= 7", 5)

    assert a.id == f"5.0-installation-{_md5('Install')}"
    assert all(r.tags == ["5.0"] for r in records)


def test_sample_document_records(sample_md):
    """Anchors redirect links, bullet lists are skipped, code and quotes are ignored."""
    records = index_markdown("5.0", "installation", sample_md)
    assert [(r.link, r.importance, r.content or r.h2 or r.h1) for r in records] == [
        ("installation", 0, "Installation"),
        ("installation#introduction", 1, "Introduction"),
        ("installation#introduction", 5, "Run `composer install` to get started."),
        ("installation#requirements", 1, "Requirements"),
        ("installation#requirements", 5, ">= 7.1"),
        ("installation#requirements", 5, "2.x"),
        ("installation#requirements", 5, "Download the installer"),
        ("installation#requirements", 5, "Run it from 5.0/bin"),
    ]


def test_sample_document_with_bullet_lists(sample_md):
    """Enabling bullet lists adds one record per bullet item."""
    plain = index_markdown("5.0", "installation", sample_md)
    expanded = index_markdown("5.0", "installation", sample_md, expand_bullet_lists=True)
    assert len(expanded) == len(plain) + 2
    assert expanded[1].content == "[Introduction](#introduction)"
    assert expanded[1].importance == 4


# --- context threading ---

def test_h2_resets_deeper_headings_for_following_content():
    blocks = [
        _heading(1, "A"), _heading(2, "B"), _heading(3, "C"), _heading(4, "D"),
        _para("deep"), _heading(2, "B2"), _para("shallow"),
    ]
    records = blocks_to_records(blocks, "doc", "5.0")
    deep, shallow = records[4], records[6]
    assert (deep.h3, deep.h4, deep.importance) == ("C", "D", 7)
    assert (shallow.h2, shallow.h3, shallow.h4, shallow.importance) == ("B2", None, None, 5)


def test_anchor_produces_no_record_and_redirects_link():
    blocks = [_para("before"), _para('<a name="x"></a>'), _para("after"), _para('<a name="y"></a>'), _para("last")]
    records = blocks_to_records(blocks, "doc", "5.0")
    assert [r.content for r in records] == ["before", "after", "last"]
    assert [r.link for r in records] == ["doc", "doc#x", "doc#y"]


def test_each_document_starts_with_fresh_context():
    """Heading state never leaks between documents."""
    first = blocks_to_records([_heading(1, "A"), _heading(2, "B")], "one", "5.0")
    second = blocks_to_records([_para("body")], "two", "5.0")
    assert first[-1].h2 == "B"
    assert (second[0].h1, second[0].h2, second[0].link) == (None, None, "two")


def test_table_and_list_expansion_counts():
    blocks = [
        Block(kind=BlockKind.table, tag="table", rows=[["a", "1"], ["b", "2"], ["c", "3"]]),
        Block(kind=BlockKind.list, tag="ol", items=["x", "y"]),
    ]
    assert len(blocks_to_records(blocks, "doc", "5.0")) == 5


# --- errors ---

def test_classification_error_names_document():
    with pytest.raises(ClassificationError, match="5.0/upgrade"):
        index_markdown("5.0", "upgrade", "# Upgrade\n\n##### Too deep\n")


def test_parse_error_names_document():
    with pytest.raises(ParseError, match="5.0/upgrade"):
        index_markdown("5.0", "upgrade", "---\nkey: [unclosed\n---\n# X\n")


# --- index_document ---

def test_index_document_writes_one_batch(tmp_path):
    path = tmp_path / "installation.md"
    path.write_text(EXAMPLE_MD)
    backend = MemoryBackend()
    backend.init_staging("docs_tmp")

    count = index_document(SourceDoc("5.0", path), backend, "docs_tmp")

    assert count == 4
    assert len(backend.get_records("docs_tmp")) == 4
    assert backend.get_records("docs") == []
