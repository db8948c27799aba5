"""Top-level markdown-it token stream to Block conversion"""

import re

from docsearch.core.models import Block, BlockKind


ANCHOR_RE = re.compile(r'<a name="([^"]*)">.*?</a>', re.IGNORECASE)

EXCLUDED_TAGS: dict[str, str] = {
    'fence':           'code',
    'code_block':      'code',
    'hr':              'hr',
}


def _heading_level(token) -> int | None:
    """Extract heading level (1-6) from a heading_open token tag, else None."""
    if token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _close_index(tokens: list, i: int) -> int:
    """Index of the token closing the container opened at i."""
    open_tok = tokens[i]
    close_type = open_tok.type.replace('_open', '_close')
    for j in range(i + 1, len(tokens)):
        if tokens[j].type == close_type and tokens[j].level == open_tok.level:
            return j
    return len(tokens) - 1


def _first_inline(tokens: list) -> str:
    """Content of the first inline token in tokens, or ''."""
    for tok in tokens:
        if tok.type == 'inline':
            return tok.content
    return ''


def _table_rows(tokens: list) -> list[list[str]]:
    """Cell texts for each body row (thead rows are not content)."""
    rows: list[list[str]] = []
    in_body = False
    for tok in tokens:
        if tok.type == 'tbody_open':
            in_body = True
        elif tok.type == 'tbody_close':
            in_body = False
        elif in_body and tok.type == 'tr_open':
            rows.append([])
        elif in_body and tok.type == 'inline' and rows:
            rows[-1].append(tok.content)
    return rows


def _list_items(tokens: list) -> list[str]:
    """First line of the first text segment of each top-level item."""
    items: list[str] = []
    item_level = tokens[0].level + 1
    i = 1
    while i < len(tokens) - 1:
        tok = tokens[i]
        if tok.type == 'list_item_open' and tok.level == item_level:
            end = _close_index(tokens, i)
            items.append(_first_inline(tokens[i + 1:end]).split('\n')[0])
            i = end
        i += 1
    return items


def _html_block(content: str) -> Block:
    text = content.strip()
    if ANCHOR_RE.search(text):
        return Block(kind=BlockKind.anchor, tag='a', text=text)
    return Block(kind=BlockKind.excluded, tag='html', text=text)


def tokens_to_blocks(tokens: list) -> list[Block]:
    """Convert a document's token list to typed Blocks, one per top-level element."""
    blocks: list[Block] = []
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        end = _close_index(tokens, i) if tok.nesting == 1 else i
        group = tokens[i:end + 1]

        if tok.type == 'heading_open':
            level = _heading_level(tok)
            blocks.append(Block(kind=BlockKind.heading, tag=tok.tag, text=_first_inline(group), level=level))
        elif tok.type == 'paragraph_open':
            blocks.append(Block(kind=BlockKind.paragraph, tag='p', text=_first_inline(group)))
        elif tok.type == 'table_open':
            blocks.append(Block(kind=BlockKind.table, tag='table', rows=_table_rows(group)))
        elif tok.type in ('ordered_list_open', 'bullet_list_open'):
            blocks.append(Block(kind=BlockKind.list, tag=tok.tag, items=_list_items(group)))
        elif tok.type == 'blockquote_open':
            blocks.append(Block(kind=BlockKind.excluded, tag='blockquote'))
        elif tok.type == 'html_block':
            blocks.append(_html_block(tok.content))
        elif tok.type in EXCLUDED_TAGS:
            blocks.append(Block(kind=BlockKind.excluded, tag=EXCLUDED_TAGS[tok.type], text=tok.content))

        i = end + 1

    return blocks
