"""
Tests for category scoring.
"""

from datetime import datetime, timedelta, timezone

import pytest

from gitgrade.models import RepositoryProfile
from gitgrade.scoring import clamp_score, is_recently_active, score_categories

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _profile(stars=0, has_license=False, days_since_update=0, issues=0):
    updated_at = NOW - timedelta(days=days_since_update)
    return RepositoryProfile(
        owner="octo",
        name="repo",
        description="Test repo",
        star_count=stars,
        fork_count=0,
        watcher_count=0,
        open_issue_count=issues,
        created_at=updated_at - timedelta(days=365),
        updated_at=updated_at,
        language="Python",
        topics=(),
        has_readme=True,
        has_license=has_license,
        has_contributing=False,
    )


class TestRecency:
    """Test the 30-day recency window."""

    def test_updated_today(self):
        assert is_recently_active(_profile(days_since_update=0), NOW)

    def test_exactly_thirty_days(self):
        """Test that the window boundary is inclusive."""
        assert is_recently_active(_profile(days_since_update=30), NOW)

    def test_thirty_one_days(self):
        assert not is_recently_active(_profile(days_since_update=31), NOW)

    def test_depends_on_now(self):
        """Test that the same profile changes status when now moves."""
        profile = _profile(days_since_update=10)
        assert is_recently_active(profile, NOW)
        assert not is_recently_active(profile, NOW + timedelta(days=25))


class TestScoreCategories:
    """Test the score_categories function."""

    def test_popular_licensed_active(self):
        """Test a popular, licensed, recently updated repository."""
        scores = score_categories(_profile(stars=150, has_license=True), NOW)
        assert scores.code_quality == 90
        assert scores.documentation == 85
        assert scores.activity == 88
        assert scores.community == 63
        assert scores.security == 82
        assert scores.best_practices == 78

    def test_new_unlicensed_stale(self):
        """Test a new, unlicensed repository without recent updates."""
        scores = score_categories(_profile(days_since_update=400), NOW)
        assert scores.code_quality == 80
        assert scores.documentation == 65
        assert scores.activity == 55
        assert scores.community == 60
        assert scores.security == 60
        assert scores.best_practices == 78

    def test_code_quality_threshold(self):
        """Test that code quality rises only above 100 stars."""
        assert score_categories(_profile(stars=100), NOW).code_quality == 80
        assert score_categories(_profile(stars=101), NOW).code_quality == 90

    def test_community_capped(self):
        """Test that community is capped at 90."""
        assert score_categories(_profile(stars=1499), NOW).community == 89
        assert score_categories(_profile(stars=1500), NOW).community == 90
        assert score_categories(_profile(stars=10**9), NOW).community == 90

    @pytest.mark.parametrize("stars", [0, 1, 99, 101, 5000, 10**12])
    def test_scores_in_range(self, stars):
        """Test that every category stays within [0, 100]."""
        for has_license in (True, False):
            for days in (0, 400):
                scores = score_categories(
                    _profile(stars=stars, has_license=has_license, days_since_update=days),
                    NOW,
                )
                assert all(0 <= value <= 100 for value in scores)

    def test_monotonic_in_stars(self):
        """Test that more stars never lower a score."""
        previous = score_categories(_profile(stars=0), NOW)
        for stars in (10, 50, 100, 101, 500, 2000):
            current = score_categories(_profile(stars=stars), NOW)
            assert all(c >= p for c, p in zip(current, previous))
            previous = current


def test_clamp_score():
    assert clamp_score(-10) == 0
    assert clamp_score(50) == 50
    assert clamp_score(250) == 100
