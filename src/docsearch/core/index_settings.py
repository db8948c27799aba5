"""Ranking and search settings applied to the staging index before it is published"""

from typing import Any


HEADING_ATTRIBUTES = ['h1', 'h2', 'h3', 'h4']

INDEX_SETTINGS: dict[str, Any] = {
    'attributesToIndex':         [f'unordered({a})' for a in HEADING_ATTRIBUTES + ['content']],
    'attributesToHighlight':     HEADING_ATTRIBUTES + ['content'],
    'attributesToRetrieve':      HEADING_ATTRIBUTES + ['_tags', 'link'],
    'customRanking':             ['asc(importance)'],
    'ranking':                   ['words', 'typo', 'attribute', 'proximity', 'exact', 'custom'],
    'minWordSizefor1Typo':       3,
    'minWordSizefor2Typos':      7,
    'allowTyposOnNumericTokens': False,
    'minProximity':              2,
    'ignorePlurals':             True,
    'advancedSyntax':            True,
    'removeWordsIfNoResults':    'allOptional',
}


def index_settings() -> dict[str, Any]:
    """Return a fresh copy of the settings payload (sent verbatim to the backend)."""
    return {k: list(v) if isinstance(v, list) else v for k, v in INDEX_SETTINGS.items()}
