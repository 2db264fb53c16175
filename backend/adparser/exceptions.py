"""Exception hierarchy for the listing parser."""

from typing import Optional


class AdParserError(Exception):
    """Base class for all parser errors."""


class ConfigurationError(AdParserError):
    """A site profile is invalid. Raised when profiles are built, never while parsing."""


class ParseError(AdParserError):
    """A parse run failed as a whole."""


class NoItemsFoundError(ParseError):
    """The item-wrapper selector could not be evaluated on a page."""


class SelectorError(AdParserError):
    """A selector is malformed, matched nothing, or lacks the requested attribute."""


class RequiredFieldError(AdParserError):
    """A required field could not be extracted for one item."""

    def __init__(self, field: str, reason: Optional[str] = None):
        self.field = field
        self.reason = reason
        message = f"Error while parsing the {field}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
