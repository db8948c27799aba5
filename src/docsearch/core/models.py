"""Data models for the block -> record transformation"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockKind(str, Enum):
    """Structural kinds a parsed block can take"""
    heading = "heading"
    paragraph = "paragraph"
    table = "table"
    list = "list"
    anchor = "anchor"
    excluded = "excluded"


class Block(BaseModel):
    """A single typed block from a parsed markdown document (read-only)."""
    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    tag: str                                          # originating element name, e.g. h2, p, ol, table
    text: str = ""
    level: Optional[int] = None                       # heading level; None for non-headings
    rows: list[list[str]] = Field(default_factory=list)   # table body rows, cell texts
    items: list[str] = Field(default_factory=list)        # list items, first text segment each
    hidden: bool = False


class UnitKind(str, Enum):
    """Closed set of element kinds a record can be built from"""
    h1 = "h1"
    h2 = "h2"
    h3 = "h3"
    h4 = "h4"
    paragraph = "p"
    table_cell = "td"
    list_item = "li"

    @property
    def heading_level(self) -> Optional[int]:
        """Heading level (1-4) for heading kinds, else None."""
        return HEADING_LEVELS.get(self)

    @classmethod
    def for_heading(cls, level: int) -> "UnitKind":
        for kind, n in HEADING_LEVELS.items():
            if n == level:
                return kind
        raise ValueError(f"No unit kind for heading level {level}")


HEADING_LEVELS: dict[UnitKind, int] = {
    UnitKind.h1: 1,
    UnitKind.h2: 2,
    UnitKind.h3: 3,
    UnitKind.h4: 4,
}


@dataclass(frozen=True)
class ContentUnit:
    """One logical piece of text that becomes exactly one record."""
    kind: UnitKind
    text: str


@dataclass
class HeadingContext:
    """Current h1-h4 headings and in-page link, threaded through one document."""
    slug: str
    link: str = ""
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None

    def __post_init__(self):
        if not self.link:
            self.link = self.slug

    def enter_heading(self, level: int, text: str) -> None:
        """Set heading `level` to text and clear every deeper level."""
        if not 1 <= level <= 4:
            raise ValueError(f"Heading level must be 1-4, got {level}")
        levels = [self.h1, self.h2, self.h3, self.h4]
        levels[level - 1] = text
        levels[level:] = [None] * (4 - level)
        self.h1, self.h2, self.h3, self.h4 = levels

    def move_to_anchor(self, name: str) -> None:
        self.link = f"{self.slug}#{name}"

    @property
    def depth(self) -> int:
        """Number of sub-headings (h2-h4) currently set."""
        return sum(h is not None for h in (self.h2, self.h3, self.h4))


class Record(BaseModel):
    """One search-index document; immutable once emitted."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="objectID")
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None
    link: str
    content: Optional[str] = None                     # None for heading records
    importance: int = Field(..., ge=0, le=7, description="Lower ranks higher")
    tags: list[str] = Field(default_factory=list, alias="_tags")

    def to_payload(self) -> dict:
        """Serialise with the backend's field names (objectID, _tags)."""
        return self.model_dump(by_alias=True)
