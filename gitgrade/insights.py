"""
Strength and improvement statements.

Each slot is an ordered list of ``(predicate, statement)`` rules. The first
rule whose predicate holds supplies the statement for that slot, and every
slot ends with an unconditional rule, so each list always has one entry per
slot. Statements may reference profile fields with ``str.format`` syntax.
"""

from typing import Callable

from gitgrade.models import CategoryScores, Insights, RepositoryProfile

Predicate = Callable[[RepositoryProfile, CategoryScores], bool]
Rule = tuple[Predicate, str]

POPULAR_STAR_THRESHOLD = 100
ISSUE_BACKLOG_THRESHOLD = 20


def _always(_profile: RepositoryProfile, _scores: CategoryScores) -> bool:
    return True


STRENGTH_RULES: list[list[Rule]] = [
    [
        (
            lambda p, _s: p.star_count > POPULAR_STAR_THRESHOLD,
            "Strong community engagement with significant stars",
        ),
        (_always, "Active development and maintenance"),
    ],
    [
        (lambda p, _s: p.has_license, "Proper licensing in place"),
        (_always, "Clear repository structure"),
    ],
    [
        (_always, "Primary language: {language}"),
    ],
    [
        (lambda p, _s: len(p.topics) > 0, "Well-categorized with relevant topics"),
        (_always, "Regular commit activity"),
    ],
]

IMPROVEMENT_RULES: list[list[Rule]] = [
    [
        (lambda p, _s: not p.has_license, "Add a LICENSE file to clarify usage rights"),
        (_always, "Consider adding more comprehensive documentation"),
    ],
    [
        (
            lambda p, _s: p.open_issue_count > ISSUE_BACKLOG_THRESHOLD,
            "High number of open issues - consider triaging",
        ),
        (_always, "Improve test coverage"),
    ],
    [
        (_always, "Add CI/CD pipeline for automated testing"),
    ],
    [
        (_always, "Create CONTRIBUTING.md guidelines"),
    ],
]


def select_statement(
    rules: list[Rule], profile: RepositoryProfile, scores: CategoryScores
) -> str:
    """Return the statement of the first rule whose predicate holds."""
    for predicate, statement in rules:
        if predicate(profile, scores):
            return statement.format(**profile._asdict())
    raise ValueError(
        "Rule list has no matching rule; end it with an unconditional rule."
    )


def generate_insights(profile: RepositoryProfile, scores: CategoryScores) -> Insights:
    """
    Derive the four strengths and four improvements for a repository.

    Order is significant: popularity and licensing first, then language,
    then topics and issues.
    """
    return Insights(
        strengths=tuple(
            select_statement(slot, profile, scores) for slot in STRENGTH_RULES
        ),
        improvements=tuple(
            select_statement(slot, profile, scores) for slot in IMPROVEMENT_RULES
        ),
    )
