"""Corpus-wide indexing run: build every document into staging, then settings and atomic publish"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from docsearch.config import Settings
from docsearch.core.index_settings import index_settings
from docsearch.core.indexer import index_document
from docsearch.core.source import SourceDoc, discover_docs
from docsearch.crud.backend import SearchBackend

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Linear run lifecycle; any error moves the run to failed"""
    building = "building"
    settings_applied = "settings_applied"
    published = "published"
    failed = "failed"


@dataclass
class RunResult:
    state: RunState
    documents: dict[str, int] = field(default_factory=dict)    # version -> indexed document count
    records: int = 0


class CorpusIndexer:
    """Rebuilds the whole corpus into the staging index and swaps it into production.

    The production index is written only by the final publish step, so an
    aborted run leaves it exactly as it was.
    """

    def __init__(self, backend: SearchBackend, settings: Settings):
        self.backend = backend
        self.settings = settings
        self.state: Optional[RunState] = None

    def _index_one(self, doc: SourceDoc) -> int:
        return index_document(
            doc,
            self.backend,
            self.settings.staging_name,
            self.settings.parser_config,
            self.settings.index_bullet_lists,
        )

    def _index_all(self, docs: list[SourceDoc]) -> int:
        """Index every document; returns only after all succeeded (join before publish)."""
        if self.settings.workers == 1:
            return sum(self._index_one(d) for d in docs)

        total = 0
        with ThreadPoolExecutor(max_workers=self.settings.workers, thread_name_prefix="docsearch") as pool:
            futures = [pool.submit(self._index_one, d) for d in docs]
            try:
                for future in as_completed(futures):
                    total += future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
        return total

    def run(self, versions: Iterable[str]) -> RunResult:
        """Index all versions, apply settings, publish. Re-raises the first error after marking the run failed."""
        versions = list(versions)
        if not versions:
            raise ValueError("No versions to index")

        staging, production = self.settings.staging_name, self.settings.index_name
        self.state = RunState.building
        try:
            docs = [d for v in versions for d in discover_docs(Path(self.settings.docs_dir), v)]
            self.backend.init_staging(staging)
            records = self._index_all(docs)

            self.backend.apply_settings(staging, index_settings())
            self.state = RunState.settings_applied
            logger.info("Applied settings to %s", staging)

            self.backend.publish(staging, production)
        except BaseException as e:
            logger.error("Indexing run aborted during %s: %s", self.state.value, e)
            self.state = RunState.failed
            raise

        self.state = RunState.published
        logger.info("Published %s -> %s (%d records)", staging, production, records)
        return RunResult(
            state=self.state,
            documents={v: sum(d.version == v for d in docs) for v in versions},
            records=records,
        )
