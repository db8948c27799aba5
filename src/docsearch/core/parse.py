"""Frontmatter stripping and markdown-it tokenization into typed blocks"""

import re
from typing import Any

import yaml
from markdown_it import MarkdownIt

from docsearch.core.extract.blocks import tokens_to_blocks
from docsearch.core.models import Block
from docsearch.errors import ParseError


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)


def make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset; raw HTML stays on so anchors survive."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True}).enable("table")


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ParseError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ParseError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def parse_blocks(markdown: str, parser_config: str = 'gfm-like') -> list[Block]:
    """Parse a markdown document body into an ordered list of Blocks."""
    _, body = strip_frontmatter(markdown)
    try:
        tokens = make_parser(parser_config).parse(body)
    except Exception as e:
        raise ParseError(f"markdown-it failed ({parser_config}): {e}") from e
    return tokens_to_blocks(tokens)
