"""
CSS selector helpers over BeautifulSoup.

soupsieve raises SelectorSyntaxError for a malformed selector and returns
an empty list for a valid selector that matches nothing. select_all keeps
those two cases apart; the other helpers turn both into SelectorError.
"""

import re
from typing import List, Optional, Tuple

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from ..exceptions import SelectorError
from .normalizers import normalize_text

# "locator[attributeName]" -> ("locator", "attributeName")
ATTRIBUTE_SELECTOR = re.compile(r'^(?P<locator>.*)\[(?P<attribute>[\w:-]+)\]\s*$')


def select_all(scope: Tag, selector: str) -> List[Tag]:
    """
    Evaluate a selector inside a scope.

    Returns:
        Matching nodes in document order (possibly empty)

    Raises:
        SelectorError: If the selector is malformed
    """
    try:
        return scope.select(selector)
    except SelectorSyntaxError as e:
        raise SelectorError(f"Malformed selector '{selector}': {e}") from e


def select_first(scope: Tag, selector: str) -> Tag:
    """First node matching selector; raises SelectorError if there is none."""
    nodes = select_all(scope, selector)
    if not nodes:
        raise SelectorError(f"Selector '{selector}' matched no node")
    return nodes[0]


def select_text(scope: Tag, selector: str) -> str:
    """Normalized text of the first match."""
    text = normalize_text(select_first(scope, selector).get_text())
    return text or ''


def select_attr(scope: Tag, selector: str, attribute: str) -> str:
    """
    Read an attribute of the first match.

    An empty selector reads the attribute from the scope node itself.
    """
    node = select_first(scope, selector) if selector else scope
    value = node.get(attribute)
    if isinstance(value, list):
        value = ' '.join(value)
    if value is None or not value.strip():
        raise SelectorError(f"Attribute '{attribute}' not found for selector '{selector}'")
    return value.strip()


def split_attribute_selector(selector: str) -> Tuple[str, Optional[str]]:
    """
    Split a packed "locator[attribute]" selector.

    Examples:
        article[data-id] -> ("article", "data-id")
        [data-listing-id] -> ("", "data-listing-id")
        a.link -> ("a.link", None)
        a[rel=next] -> ("a[rel=next]", None)
    """
    selector = (selector or '').strip()
    match = ATTRIBUTE_SELECTOR.match(selector)
    if not match:
        return selector, None
    return match.group('locator').strip(), match.group('attribute')
