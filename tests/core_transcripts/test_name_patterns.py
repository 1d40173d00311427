"""
Tests for core_transcripts.matching.name_patterns.
"""

from core_transcripts.matching.name_patterns import (
    FlexiblePatternPolicy,
    StrictSuffixPolicy,
    explain_name_match,
    policy_for,
)
from domain.models import MatchMode, MatchOptions


class TestStrictSuffixPolicy:
    def test_matches_generator_tag(self) -> None:
        policy = StrictSuffixPolicy()
        assert policy.matches("pod weekly sync - 2025/09/23 17:00 bst - notes by gemini")

    def test_rejects_other_suffix(self) -> None:
        assert not StrictSuffixPolicy().matches("pod weekly sync - agenda")

    def test_describe(self) -> None:
        assert "notes by gemini" in StrictSuffixPolicy().describe()


class TestFlexiblePatternPolicy:
    def test_contains_any_pattern(self) -> None:
        policy = FlexiblePatternPolicy(["Meeting Notes", "recap"])
        assert policy.matches("pod weekly sync - meeting notes - sept")
        assert policy.matches("pod weekly sync recap")
        assert not policy.matches("pod weekly sync agenda")

    def test_empty_patterns_match_nothing(self) -> None:
        assert not FlexiblePatternPolicy([]).matches("anything")


class TestPolicyFor:
    def test_strict_by_default(self) -> None:
        assert isinstance(policy_for(MatchOptions()), StrictSuffixPolicy)

    def test_flexible(self) -> None:
        policy = policy_for(MatchOptions(match_mode=MatchMode.FLEXIBLE, custom_patterns=("recap",)))
        assert isinstance(policy, FlexiblePatternPolicy)
        assert policy.patterns == ("recap",)


class TestExplainNameMatch:
    def test_accepted_case_insensitive(self) -> None:
        verdict = explain_name_match(
            "Pod Weekly Sync",
            "POD WEEKLY SYNC - 2025/09/23 - Notes by Gemini",
            StrictSuffixPolicy(),
        )
        assert verdict.starts_with_title
        assert verdict.matches_pattern
        assert verdict.accepted

    def test_prefix_only(self) -> None:
        verdict = explain_name_match("Pod Weekly Sync", "Pod Weekly Sync - agenda", StrictSuffixPolicy())
        assert verdict.starts_with_title
        assert not verdict.matches_pattern
        assert not verdict.accepted

    def test_title_not_at_start(self) -> None:
        verdict = explain_name_match(
            "Pod Weekly Sync",
            "Copy of Pod Weekly Sync - Notes by Gemini",
            StrictSuffixPolicy(),
        )
        assert not verdict.starts_with_title
        assert not verdict.accepted
