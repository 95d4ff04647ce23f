"""
Exceptions raised by the rule store and rule editor.

The link rewriter itself never raises: invalid rules are skipped and
reported through the rule failure sink instead.
"""


class PrettyLinksError(Exception):
    """Base class for prettylinks errors."""


class RuleStoreError(PrettyLinksError):
    """Rule file could not be read, parsed or written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class RuleIndexError(PrettyLinksError, IndexError):
    """Edit requested for a rule position that does not exist."""
