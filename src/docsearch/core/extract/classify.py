"""Block classification: decide what each parsed block contributes to the index"""

from dataclasses import dataclass
from typing import Union

from docsearch.core.extract.blocks import ANCHOR_RE
from docsearch.core.models import Block, BlockKind, ContentUnit, UnitKind
from docsearch.errors import ClassificationError


@dataclass(frozen=True)
class Skip:
    reason: str


@dataclass(frozen=True)
class AnchorUpdate:
    """Redirect the link of subsequent records to slug#name."""
    name: str


@dataclass(frozen=True)
class Expand:
    """A table or list yielding one unit per row / item."""
    units: tuple[ContentUnit, ...]


@dataclass(frozen=True)
class Single:
    unit: ContentUnit


Action = Union[Skip, AnchorUpdate, Expand, Single]


def _table_units(block: Block) -> tuple[ContentUnit, ...]:
    """Second cell of every body row; the first cell is the row label."""
    units = []
    for n, row in enumerate(block.rows):
        if len(row) < 2:
            raise ClassificationError(f"Table row {n} has {len(row)} cell(s); expected at least 2")
        units.append(ContentUnit(UnitKind.table_cell, row[1]))
    return tuple(units)


def _single_unit(block: Block) -> ContentUnit:
    if block.kind == BlockKind.heading:
        try:
            return ContentUnit(UnitKind.for_heading(block.level), block.text)
        except ValueError as e:
            raise ClassificationError(f"No weight for heading tag {block.tag!r}") from e
    if block.kind == BlockKind.paragraph:
        return ContentUnit(UnitKind.paragraph, block.text)
    raise ClassificationError(f"No weight for {block.kind.value} block tag {block.tag!r}")


def classify_block(block: Block, expand_bullet_lists: bool = False) -> Action:
    """Map one block to Skip, AnchorUpdate, Expand or Single.

    Unordered lists (tag 'ul') are skipped unless expand_bullet_lists is set;
    ordered lists always expand to one unit per item.
    """
    if block.hidden or block.kind == BlockKind.excluded:
        return Skip(block.tag)
    if block.kind == BlockKind.list and block.tag == 'ul' and not expand_bullet_lists:
        return Skip('ul')

    if block.kind == BlockKind.table:
        return Expand(_table_units(block))
    if block.kind == BlockKind.list:
        return Expand(tuple(ContentUnit(UnitKind.list_item, item) for item in block.items))

    m = ANCHOR_RE.search(block.text)
    if m:
        return AnchorUpdate(m.group(1))
    if block.kind == BlockKind.anchor:
        raise ClassificationError(f"Anchor block without a name: {block.text!r}")

    return Single(_single_unit(block))
