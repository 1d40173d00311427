"""
Name-based relevance filters for transcript documents.

Transcript documents are conventionally named
``"<Meeting Title> - <timestamp> - <generator tag>"``. A document is a name
match when its case-folded name starts with the case-folded meeting title and
the secondary pattern policy accepts it.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Tuple

from pydantic import BaseModel

from domain.models import MatchMode, MatchOptions
from shared_utils.constants import TranscriptPatterns


class NamePatternPolicy(ABC):
    """Secondary filter applied to a case-folded document name."""

    @abstractmethod
    def matches(self, name_lower: str) -> bool:
        """True when the case-folded name satisfies the policy."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Human-readable summary used in diagnostics."""
        pass


class StrictSuffixPolicy(NamePatternPolicy):
    """Name must end with the generator tag ``notes by gemini``."""

    def __init__(self, suffix: str = TranscriptPatterns.STRICT_SUFFIX):
        self.suffix = suffix.lower()

    def matches(self, name_lower: str) -> bool:
        return name_lower.endswith(self.suffix)

    def describe(self) -> str:
        return f'ends with "{self.suffix}"'


class FlexiblePatternPolicy(NamePatternPolicy):
    """Name must contain at least one configured pattern."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns: Tuple[str, ...] = tuple(p.lower() for p in patterns if p)

    def matches(self, name_lower: str) -> bool:
        return any(pattern in name_lower for pattern in self.patterns)

    def describe(self) -> str:
        return "contains any of: " + ", ".join(self.patterns)


def policy_for(options: MatchOptions) -> NamePatternPolicy:
    """Build the policy selected by ``options.match_mode``."""
    if options.match_mode == MatchMode.FLEXIBLE:
        return FlexiblePatternPolicy(options.custom_patterns)
    return StrictSuffixPolicy()


class NameMatch(BaseModel):
    """Outcome of the two-part name filter for one document."""

    starts_with_title: bool
    matches_pattern: bool

    @property
    def accepted(self) -> bool:
        return self.starts_with_title and self.matches_pattern


def explain_name_match(title: str, name: str, policy: NamePatternPolicy) -> NameMatch:
    """Evaluate both name filters for ``name`` against meeting ``title``.

    Args:
        title: Meeting title.
        name: Document name.
        policy: Secondary pattern policy.

    Returns:
        NameMatch with each clause and the overall verdict.
    """
    name_lower = name.lower()
    return NameMatch(
        starts_with_title=name_lower.startswith(title.lower()),
        matches_pattern=policy.matches(name_lower),
    )
