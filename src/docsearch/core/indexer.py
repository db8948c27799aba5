"""Drive one document end-to-end: parse, classify, build records, write the batch"""

import logging

from docsearch.core.extract.classify import AnchorUpdate, Expand, Single, classify_block
from docsearch.core.extract.records import build_record
from docsearch.core.models import Block, HeadingContext, Record
from docsearch.core.parse import parse_blocks
from docsearch.core.source import SourceDoc, replace_links
from docsearch.crud.backend import SearchBackend
from docsearch.errors import ClassificationError, ParseError

logger = logging.getLogger(__name__)


def blocks_to_records(
    blocks: list[Block],
    slug: str,
    version: str,
    expand_bullet_lists: bool = False,
    ) -> list[Record]:
    """Thread a fresh HeadingContext through blocks in order, emitting one record per unit."""
    ctx = HeadingContext(slug=slug)
    records: list[Record] = []

    for block in blocks:
        action = classify_block(block, expand_bullet_lists)
        if isinstance(action, AnchorUpdate):
            ctx.move_to_anchor(action.name)
        elif isinstance(action, Expand):
            records.extend(build_record(unit, ctx, version) for unit in action.units)
        elif isinstance(action, Single):
            records.append(build_record(action.unit, ctx, version))

    return records


def index_markdown(
    version: str,
    slug: str,
    markdown: str,
    parser_config: str = 'gfm-like',
    expand_bullet_lists: bool = False,
    ) -> list[Record]:
    """Records for one raw document: rewrite links, parse, transform."""
    try:
        blocks = parse_blocks(replace_links(version, markdown), parser_config)
        return blocks_to_records(blocks, slug, version, expand_bullet_lists)
    except (ParseError, ClassificationError) as e:
        raise type(e)(f"{version}/{slug}: {e}") from e


def index_document(
    doc: SourceDoc,
    backend: SearchBackend,
    staging_name: str,
    parser_config: str = 'gfm-like',
    expand_bullet_lists: bool = False,
    ) -> int:
    """Index one source document into the staging index as a single batch. Returns record count."""
    records = index_markdown(doc.version, doc.slug, doc.read(), parser_config, expand_bullet_lists)
    backend.write_batch(staging_name, records)
    logger.info("Indexed %s.%s (%d records)", doc.version, doc.slug, len(records))
    return len(records)
