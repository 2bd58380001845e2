"""
Report assembly and export for GitGrade.

``assemble`` is the entry point for callers: it runs normalization, category
scoring, grading, insights and roadmap planning, and derives the display
metrics. The whole pipeline is a pure function of the raw record and the
reference instant, so identical inputs yield identical reports.
"""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from gitgrade.grading import assign_grade, compute_overall_score
from gitgrade.insights import generate_insights
from gitgrade.models import (
    AnalysisReport,
    CategoryScores,
    DisplayMetrics,
    RepositoryProfile,
)
from gitgrade.normalizer import as_utc, normalize
from gitgrade.roadmap import plan_roadmap
from gitgrade.scoring import is_recently_active, score_categories

# Category field -> (display label, icon), in display order
CATEGORY_DISPLAY: dict[str, tuple[str, str]] = {
    "code_quality": ("Code Quality", "🧩"),
    "documentation": ("Documentation", "📖"),
    "activity": ("Activity", "📈"),
    "community": ("Community", "👥"),
    "security": ("Security", "🛡️"),
    "best_practices": ("Best Practices", "📊"),
}

# Category field -> export key
CATEGORY_EXPORT_KEYS: dict[str, str] = {
    "code_quality": "codeQuality",
    "documentation": "documentation",
    "activity": "activity",
    "community": "community",
    "security": "security",
    "best_practices": "bestPractices",
}

ISSUE_RESPONSE_THRESHOLD = 10
# No complexity signal is available yet
DEFAULT_COMPLEXITY = "Medium"


def derive_display_metrics(
    profile: RepositoryProfile, recently_active: bool
) -> DisplayMetrics:
    """Derive the commit frequency, contributor, issue response and complexity labels."""
    return DisplayMetrics(
        commit_frequency="5-10 per week" if recently_active else "1-2 per week",
        contributor_estimate=max(1, profile.star_count // 100 + 1),
        issue_response=(
            "< 24 hours"
            if profile.open_issue_count < ISSUE_RESPONSE_THRESHOLD
            else "2-3 days"
        ),
        complexity=DEFAULT_COMPLEXITY,
    )


def assemble(raw: Mapping[str, Any], now: datetime) -> AnalysisReport:
    """
    Produce the analysis report for a raw repository record.

    Args:
        raw: Raw repository metadata (see ``gitgrade.normalizer.normalize``).
        now: Reference instant for recency checks and the report timestamp.

    Returns:
        The complete AnalysisReport.

    Raises:
        InvalidInputError: If the raw record is malformed.
    """
    profile = normalize(raw, now)
    now = as_utc(now)

    scores = score_categories(profile, now)
    recently_active = is_recently_active(profile, now)
    overall_score = compute_overall_score(
        profile.star_count, profile.has_license, recently_active
    )
    grade = assign_grade(overall_score, profile.star_count)
    insights = generate_insights(profile, scores)
    roadmap = plan_roadmap(profile, scores)

    return AnalysisReport(
        repository=profile.full_name,
        overall_score=overall_score,
        grade=grade,
        category_scores=scores,
        strengths=insights.strengths,
        improvements=insights.improvements,
        roadmap=roadmap,
        metrics=derive_display_metrics(profile, recently_active),
        generated_at=now,
    )


def category_scores_to_dict(scores: CategoryScores) -> dict[str, int]:
    return {
        CATEGORY_EXPORT_KEYS[field]: value for field, value in scores._asdict().items()
    }


def report_to_dict(report: AnalysisReport) -> dict[str, Any]:
    """Convert a report to the flat JSON export document."""
    return {
        "repository": report.repository,
        "overallGrade": report.grade.value,
        "overallScore": report.overall_score,
        "categoryScores": category_scores_to_dict(report.category_scores),
        "summary": {
            "strengths": list(report.strengths),
            "improvements": list(report.improvements),
        },
        "roadmap": [
            {
                "priority": item.priority.value,
                "title": item.title,
                "description": item.description,
                "impact": item.impact.value,
            }
            for item in report.roadmap
        ],
        "metrics": {
            "commitFrequency": report.metrics.commit_frequency,
            "contributorCount": report.metrics.contributor_estimate,
            "issueResponseTime": report.metrics.issue_response,
            "codeComplexity": report.metrics.complexity,
        },
        "generatedAt": report.generated_at.isoformat().replace("+00:00", "Z"),
    }


def report_to_json(report: AnalysisReport) -> str:
    """Render the export document as indented JSON."""
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)
