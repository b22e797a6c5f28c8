"""
Title Derivation.

When a note is saved without a title, one is derived from the body.
Two policies exist and are selected by configuration (notes.yaml) or per
editor session:

    first_line - the body's first line ("Hello\\nWorld" -> "Hello")
    truncate   - the body's first N characters, N = title_max_length
                 ("Hello\\nWorld" -> "Hello\\nWor" with N = 9)
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_TITLE_MAX_LENGTH = 9


class TitlePolicy(str, Enum):
    """Named strategies for deriving a title from a note body."""

    FIRST_LINE = "first_line"
    TRUNCATE = "truncate"


@dataclass(frozen=True)
class TitleRule:
    """A title policy with its parameters."""

    policy: TitlePolicy = TitlePolicy.FIRST_LINE
    max_length: int = DEFAULT_TITLE_MAX_LENGTH

    @classmethod
    def from_config(cls) -> "TitleRule":
        """Build the rule configured in notes.yaml."""
        from modules.backend.core.config import get_app_config

        notes = get_app_config().notes
        return cls(policy=TitlePolicy(notes.title_policy), max_length=notes.title_max_length)

    def derive(self, body: str) -> str:
        """Derive a title from ``body`` under this rule."""
        if self.policy is TitlePolicy.TRUNCATE:
            return body[: self.max_length]
        lines = body.splitlines()
        return lines[0] if lines else ""

    def apply(self, title: str, body: str) -> str:
        """Return ``title`` if set, otherwise the title derived from ``body``."""
        return title if title else self.derive(body)
