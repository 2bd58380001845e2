"""
Tests for report assembly and export.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from gitgrade.exceptions import InvalidInputError
from gitgrade.models import AnalysisReport, CategoryScores, Grade
from gitgrade.report import (
    CATEGORY_DISPLAY,
    assemble,
    report_to_dict,
    report_to_json,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _iso(days_ago: int) -> str:
    return (NOW - timedelta(days=days_ago)).isoformat().replace("+00:00", "Z")


def _record(**overrides):
    record = {
        "name": "widget",
        "owner": {"login": "acme"},
        "description": "A widget",
        "stargazers_count": 0,
        "forks_count": 0,
        "watchers_count": 0,
        "open_issues_count": 0,
        "language": "TypeScript",
        "topics": [],
        "created_at": _iso(1000),
        "updated_at": _iso(0),
        "license": None,
    }
    record.update(overrides)
    return record


class TestAssembleScenarios:
    """End-to-end scenarios through assemble."""

    def test_popular_licensed_active(self):
        """Test a popular, licensed repository updated five days ago."""
        report = assemble(
            _record(
                stargazers_count=150,
                license={"key": "mit"},
                updated_at=_iso(5),
                open_issues_count=3,
            ),
            NOW,
        )
        assert report.grade == Grade.A
        assert report.overall_score == 95
        assert report.category_scores.activity == 88
        assert report.category_scores.documentation == 85
        assert report.metrics.issue_response == "< 24 hours"
        assert report.metrics.commit_frequency == "5-10 per week"
        assert report.metrics.contributor_estimate == 2
        assert report.roadmap[0].title == "Enhance Documentation"

    def test_new_unlicensed_stale(self):
        """Test an unlicensed repository with no stars, stale for 400 days."""
        report = assemble(
            _record(stargazers_count=0, updated_at=_iso(400), open_issues_count=30),
            NOW,
        )
        assert report.grade == Grade.C_PLUS
        assert report.overall_score == 70
        assert report.category_scores.activity == 55
        assert report.category_scores.documentation == 65
        assert report.category_scores.security == 60
        assert report.roadmap[0].title == "Add License"
        assert report.metrics.issue_response == "2-3 days"
        assert report.metrics.commit_frequency == "1-2 per week"
        assert report.metrics.contributor_estimate == 1
        assert report.improvements[1] == "High number of open issues - consider triaging"

    def test_missing_updated_at_is_recent(self):
        """Test that a record without updated_at is treated as recently active."""
        record = _record()
        del record["updated_at"]
        del record["created_at"]
        report = assemble(record, NOW)
        assert report.category_scores.activity == 88
        assert report.metrics.commit_frequency == "5-10 per week"

    def test_missing_created_at_with_stale_update(self):
        """Test that a stale record without created_at stays inactive."""
        record = _record(updated_at=_iso(400), open_issues_count=30)
        del record["created_at"]
        report = assemble(record, NOW)
        assert report.category_scores.activity == 55
        assert report.overall_score == 70
        assert report.metrics.commit_frequency == "1-2 per week"

    def test_empty_record(self):
        """Test that an empty record still produces a complete report."""
        report = assemble({}, NOW)
        assert report.repository == "unknown/unknown"
        assert report.grade == Grade.C_PLUS
        assert len(report.strengths) == 4
        assert len(report.improvements) == 4
        assert len(report.roadmap) == 5
        assert report.strengths[2] == "Primary language: Unknown"

    @pytest.mark.parametrize("stars, grade", [(101, "A"), (51, "B+"), (11, "B"), (0, "C+")])
    def test_grade_boundaries(self, stars, grade):
        report = assemble(_record(stargazers_count=stars), NOW)
        assert report.grade.value == grade

    def test_malformed_record_raises(self):
        """Test that assembly fails without a partial report."""
        with pytest.raises(InvalidInputError):
            assemble(_record(open_issues_count="lots"), NOW)


class TestAssembleProperties:
    """Properties that hold for any valid input."""

    @pytest.mark.parametrize("stars", [0, 10, 51, 150, 10**9])
    @pytest.mark.parametrize("licensed", [True, False])
    @pytest.mark.parametrize("days", [0, 30, 31, 4000])
    def test_scores_within_bounds(self, stars, licensed, days):
        report = assemble(
            _record(
                stargazers_count=stars,
                license={"key": "mit"} if licensed else None,
                updated_at=_iso(days),
            ),
            NOW,
        )
        assert 0 <= report.overall_score <= 100
        assert all(0 <= score <= 100 for score in report.category_scores)

    def test_idempotent(self):
        """Test that identical inputs produce identical reports and exports."""
        record = _record(stargazers_count=77, topics=["b", "a"], open_issues_count=12)
        first = assemble(record, NOW)
        second = assemble(record, NOW)
        assert first == second
        assert report_to_json(first) == report_to_json(second)

    def test_does_not_mutate_input(self):
        record = _record(topics=["x", "x"])
        snapshot = json.dumps(record, sort_keys=True)
        assemble(record, NOW)
        assert json.dumps(record, sort_keys=True) == snapshot

    def test_generated_at_is_now(self):
        report = assemble(_record(), NOW)
        assert report.generated_at == NOW
        assert isinstance(report, AnalysisReport)


class TestExport:
    """Test the JSON export document."""

    def test_required_keys(self):
        document = report_to_dict(assemble(_record(stargazers_count=60), NOW))
        for key in (
            "repository",
            "overallGrade",
            "overallScore",
            "categoryScores",
            "summary",
            "roadmap",
            "generatedAt",
        ):
            assert key in document
        assert document["repository"] == "acme/widget"
        assert document["overallGrade"] == "B+"
        assert document["generatedAt"] == "2024-06-01T12:00:00Z"

    def test_category_keys(self):
        document = report_to_dict(assemble(_record(), NOW))
        assert list(document["categoryScores"]) == [
            "codeQuality",
            "documentation",
            "activity",
            "community",
            "security",
            "bestPractices",
        ]

    def test_summary_and_roadmap(self):
        document = report_to_dict(assemble(_record(), NOW))
        assert len(document["summary"]["strengths"]) == 4
        assert len(document["summary"]["improvements"]) == 4
        assert document["roadmap"][3] == {
            "priority": "Medium",
            "title": "Security Scanning",
            "description": "Enable Dependabot and add security scanning for vulnerabilities",
            "impact": "High",
        }

    def test_metrics(self):
        document = report_to_dict(assemble(_record(stargazers_count=250), NOW))
        assert document["metrics"] == {
            "commitFrequency": "5-10 per week",
            "contributorCount": 3,
            "issueResponseTime": "< 24 hours",
            "codeComplexity": "Medium",
        }

    def test_json_round_trip(self):
        report = assemble(_record(), NOW)
        assert json.loads(report_to_json(report)) == report_to_dict(report)


def test_category_display_covers_all_categories():
    """Test that every category has a label and icon, in field order."""
    assert list(CATEGORY_DISPLAY) == list(CategoryScores._fields)
    for label, icon in CATEGORY_DISPLAY.values():
        assert label
        assert icon
