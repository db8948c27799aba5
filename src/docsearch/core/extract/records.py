"""Record construction, heading-context updates and importance weighting"""

from docsearch.core.models import ContentUnit, HeadingContext, Record, UnitKind
from docsearch.core.utils.hashing import md5


WEIGHTS: dict[UnitKind, int] = {
    UnitKind.h1:         0,
    UnitKind.h2:         1,
    UnitKind.h3:         2,
    UnitKind.h4:         3,
    UnitKind.paragraph:  4,
    UnitKind.table_cell: 4,
    UnitKind.list_item:  4,
}
CONTENT_WEIGHT = 4


def importance(kind: UnitKind, ctx: HeadingContext) -> int:
    """Base weight for kind; body content sinks one step per active h2/h3/h4 (4-7)."""
    weight = WEIGHTS[kind]
    if weight == CONTENT_WEIGHT:
        weight += ctx.depth
    return weight


def record_id(version: str, link: str, text: str) -> str:
    return f"{version}-{link}-{md5(text)}"


def build_record(unit: ContentUnit, ctx: HeadingContext, version: str) -> Record:
    """Build one Record for unit, updating ctx in place when unit is a heading."""
    level = unit.kind.heading_level
    if level is not None:
        ctx.enter_heading(level, unit.text)

    return Record(
        id=record_id(version, ctx.link, unit.text),
        h1=ctx.h1,
        h2=ctx.h2,
        h3=ctx.h3,
        h4=ctx.h4,
        link=ctx.link,
        content=None if level is not None else unit.text,
        importance=importance(unit.kind, ctx),
        tags=[version],
    )
