"""
Data extraction utilities for listing fields.

These functions turn raw text scraped from a listing into typed values.
"""

import re
from datetime import datetime
from typing import Iterable

# First numeric token: either a grouped integer (1 250 / 1.250 / 1,250 / 1'250)
# or a plain run of digits, followed by an optional decimal part.
NUMBER_PATTERN = re.compile(
    r"(?P<int>\d{1,3}(?:[ \u00a0\u202f.,']\d{3})+(?!\d)|\d+)"
    r"(?:(?P<dec>[.,])(?P<frac>\d+))?"
)

# PHP date() tokens -> strptime directives
PHP_DATE_TOKENS = {
    'd': '%d',
    'j': '%d',
    'm': '%m',
    'n': '%m',
    'Y': '%Y',
    'y': '%y',
    'H': '%H',
    'G': '%H',
    'h': '%I',
    'g': '%I',
    'i': '%M',
    's': '%S',
    'A': '%p',
    'a': '%p',
    'D': '%a',
    'l': '%A',
    'M': '%b',
    'F': '%B',
}

HOUR_TOKENS = {'H', 'G', 'h', 'g'}


def _first_number(text: str) -> re.Match:
    match = NUMBER_PATTERN.search(text or '')
    if not match:
        raise ValueError(f"No numeric value found in '{text}'")
    return match


def extract_float(text: str) -> float:
    """
    Extract the first number from noisy text.

    Handles formats like:
        1 250,50 €
        1,250.50
        12,5 m²
        250 000 €

    Raises:
        ValueError: If the text holds no numeric token
    """
    match = _first_number(text)
    digits = re.sub(r'\D', '', match.group('int'))
    if match.group('frac'):
        return float(f"{digits}.{match.group('frac')}")
    return float(digits)


def extract_int(text: str) -> int:
    """
    Extract the integer part of the first number in text.

    Examples:
        3 pièces -> 3
        1 250 € -> 1250

    Raises:
        ValueError: If the text holds no numeric token
    """
    match = _first_number(text)
    return int(re.sub(r'\D', '', match.group('int')))


def contains_any(text: str, keywords: Iterable[str], case_sensitive: bool = False) -> bool:
    """Return True if any keyword appears as a substring of text."""
    if not text:
        return False
    if not case_sensitive:
        text = text.lower()
    for keyword in keywords:
        if not keyword:
            continue
        if (keyword if case_sensitive else keyword.lower()) in text:
            return True
    return False


def php_date_format_to_strptime(fmt: str) -> str:
    """
    Translate a PHP date() format into a strptime format.

    Examples:
        d/m/Y -> %d/%m/%Y
        d/m/Y H:i -> %d/%m/%Y %H:%M
        \\L\\e d/m -> Le %d/%m
    """
    out = []
    escaped = False
    for char in fmt:
        if escaped:
            out.append('%%' if char == '%' else char)
            escaped = False
        elif char == '\\':
            escaped = True
        elif char in PHP_DATE_TOKENS:
            out.append(PHP_DATE_TOKENS[char])
        elif char == '%':
            out.append('%%')
        else:
            out.append(char)
    return ''.join(out)


def has_hour_token(fmt: str) -> bool:
    """Check whether a PHP date() format carries an hour-of-day token."""
    escaped = False
    for char in fmt:
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char in HOUR_TOKENS:
            return True
    return False


def parse_published_at(text: str, fmt: str) -> datetime:
    """
    Parse a publication date using a PHP date() format.

    Date-only formats get a time of day of noon, so that a date does not
    turn into midnight of the previous day once shifted across timezones.

    Raises:
        ValueError: If the format is empty or the text does not match it
    """
    if not fmt:
        raise ValueError("No date format configured")

    published_at = datetime.strptime(text.strip(), php_date_format_to_strptime(fmt))

    if not has_hour_token(fmt):
        published_at = published_at.replace(hour=12, minute=0, second=0, microsecond=0)

    return published_at
