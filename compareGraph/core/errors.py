"""
Error types raised by the catalog client and the session controller.
"""

from typing import Optional


class CompareGraphError(Exception):
    """Base class for every compareGraph error."""


class UserInputError(CompareGraphError):
    """Empty search string, already loaded tool, or a search while one is pending."""


class ToolLookupError(CompareGraphError):
    """A tool could not be fetched from the catalog."""

    def __init__(self, tool_id: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.tool_id = tool_id
        self.status_code = status_code


class ToolNotFoundError(ToolLookupError):
    """The catalog answered with a non-200 status."""


class MalformedResponseError(ToolLookupError):
    """The catalog answered 200 but the body is not a valid tool record."""
