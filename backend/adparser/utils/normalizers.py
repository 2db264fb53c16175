"""
Data normalization utilities.

These functions standardize scraped strings before they reach a record.
"""

import re
from typing import Optional
from urllib.parse import urljoin


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    Collapse whitespace and strip.

    Examples:
        "  Paris\\n 11e " -> "Paris 11e"
        "1\\u00a0250 €" -> "1 250 €"
        "   " -> None
    """
    if not text:
        return None
    text = re.sub(r'\s+', ' ', text).strip()
    return text or None


def resolve_url(href: str, base_url: Optional[str]) -> str:
    """
    Resolve a possibly relative link against a base URL.

    Examples:
        ("/annonces/123", "https://www.pap.fr/") -> "https://www.pap.fr/annonces/123"
        ("https://x.fr/a", "https://www.pap.fr/") -> "https://x.fr/a"
        ("/annonces/123", "") -> "/annonces/123"
    """
    href = href.strip()
    if not base_url:
        return href
    return urljoin(base_url, href)
