"""Unit tests for core/source.py"""

import pytest

from docsearch.core.source import NO_INDEX, SourceDoc, discover_docs, is_indexable, replace_links
from docsearch.errors import SourceError


@pytest.fixture(name="docs_dir")
def docs_dir_fixture(tmp_path):
    """docs/5.0 with indexable docs, deny-listed docs and non-markdown noise."""
    version_dir = tmp_path / "docs" / "5.0"
    version_dir.mkdir(parents=True)
    for name in ["routing.md", "installation.md", "license.md", "releases.md", "License.md", "notes.txt"]:
        (version_dir / name).write_text(f"# {name}\n")
    (version_dir / "nested").mkdir()
    (version_dir / "nested" / "deep.md").write_text("# Deep\n")
    return tmp_path / "docs"


def test_discover_docs_sorted_and_filtered(docs_dir):
    """Only top-level .md files off the deny-list are returned, sorted by name."""
    docs = discover_docs(docs_dir, "5.0")
    assert [d.slug for d in docs] == ["License", "installation", "routing"]
    assert all(d.version == "5.0" for d in docs)


def test_discover_docs_missing_version(docs_dir):
    with pytest.raises(SourceError, match="4.x"):
        discover_docs(docs_dir, "4.x")


@pytest.mark.parametrize("slug,expected", [
    ("contributing", False),
    ("documentation", False),
    ("license", False),
    ("releases", False),
    ("License", True),
    ("installation", True),
])
def test_is_indexable_case_sensitive(slug, expected):
    assert is_indexable(slug) is expected


def test_deny_list_contents():
    assert NO_INDEX == {"contributing", "documentation", "license", "releases"}


def test_source_doc_slug_and_read(tmp_path):
    path = tmp_path / "installation.md"
    path.write_text("# Install\n", encoding="utf-8")
    doc = SourceDoc("5.0", path)
    assert doc.slug == "installation"
    assert doc.read() == "# Install\n"


def test_source_doc_read_missing_file(tmp_path):
    with pytest.raises(SourceError):
        SourceDoc("5.0", tmp_path / "gone.md").read()


def test_replace_links():
    """The version placeholder is substituted everywhere."""
    md = "See [routing](/docs/{{version}}/routing) and /docs/{{version}}/views."
    assert replace_links("5.0", md) == "See [routing](/docs/5.0/routing) and /docs/5.0/views."
