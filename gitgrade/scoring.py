"""
Category scoring.

Each category is derived from a handful of profile signals. Scores are
always clamped into [0, 100].
"""

from datetime import datetime, timedelta

from gitgrade.models import CategoryScores, RepositoryProfile

MIN_SCORE = 0
MAX_SCORE = 100

# A repository updated within this window before "now" counts as active
RECENT_ACTIVITY_WINDOW = timedelta(days=30)

COMMUNITY_CAP = 90
# Baseline until a best-practices signal is available
BEST_PRACTICES_BASELINE = 78


def clamp_score(value: int) -> int:
    """Clamp a score into [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, value))


def is_recently_active(profile: RepositoryProfile, now: datetime) -> bool:
    """Return True if the repository was updated within the recency window."""
    return now - profile.updated_at <= RECENT_ACTIVITY_WINDOW


def score_categories(profile: RepositoryProfile, now: datetime) -> CategoryScores:
    """
    Compute the six category scores.

    Scoring:
    - Code quality: 90 with more than 100 stars, otherwise 80
    - Documentation: 85 with a license, otherwise 65
    - Activity: 88 if updated within 30 days, otherwise 55
    - Community: 60 + 1 per 50 stars, capped at 90
    - Security: 82 with a license, otherwise 60
    - Best practices: fixed baseline of 78
    """
    stars = profile.star_count
    recent = is_recently_active(profile, now)

    return CategoryScores(
        code_quality=clamp_score(70 + (20 if stars > 100 else 10)),
        documentation=clamp_score(85 if profile.has_license else 65),
        activity=clamp_score(88 if recent else 55),
        community=clamp_score(min(COMMUNITY_CAP, 60 + stars // 50)),
        security=clamp_score(82 if profile.has_license else 60),
        best_practices=clamp_score(BEST_PRACTICES_BASELINE),
    )
