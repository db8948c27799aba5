"""Per-version document discovery, slug derivation and link rewriting"""

from dataclasses import dataclass
from pathlib import Path

from docsearch.errors import SourceError


NO_INDEX = frozenset({
    'contributing',
    'documentation',
    'license',
    'releases',
})
DOC_EXTENSION = '.md'
VERSION_PLACEHOLDER = '{{version}}'


@dataclass(frozen=True)
class SourceDoc:
    """One document file of one version."""
    version: str
    path: Path

    @property
    def slug(self) -> str:
        return self.path.name[:-len(DOC_EXTENSION)]

    def read(self) -> str:
        try:
            return self.path.read_text(encoding='utf-8')
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e}") from e


def replace_links(version: str, markdown: str) -> str:
    """Point version-relative links at the given version."""
    return markdown.replace(VERSION_PLACEHOLDER, version)


def is_indexable(slug: str) -> bool:
    """False for slugs on the deny-list (case-sensitive)."""
    return slug not in NO_INDEX


def discover_docs(docs_dir: Path, version: str) -> list[SourceDoc]:
    """Return indexable .md files directly under docs_dir/version, sorted by name."""
    version_dir = Path(docs_dir) / version
    if not version_dir.is_dir():
        raise SourceError(f"Version directory not found: {version_dir}")
    docs = (
        SourceDoc(version, p)
        for p in sorted(version_dir.iterdir())
        if p.is_file() and p.name.endswith(DOC_EXTENSION)
    )
    return [d for d in docs if is_indexable(d.slug)]
