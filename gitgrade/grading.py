"""Overall score and letter grade."""

from gitgrade.models import Grade
from gitgrade.scoring import clamp_score

BASE_SCORE = 65
OVERALL_CAP = 95
LICENSE_BONUS = 10
ACTIVITY_BONUS = 5

# (minimum exclusive star count, bonus), checked in order
STAR_BONUSES: list[tuple[int, int]] = [
    (100, 15),
    (10, 10),
]
DEFAULT_STAR_BONUS = 5

# (minimum exclusive star count, grade), strictly descending
GRADE_THRESHOLDS: list[tuple[int, Grade]] = [
    (100, Grade.A),
    (50, Grade.B_PLUS),
    (10, Grade.B),
]
DEFAULT_GRADE = Grade.C_PLUS


def star_bonus(star_count: int) -> int:
    for threshold, bonus in STAR_BONUSES:
        if star_count > threshold:
            return bonus
    return DEFAULT_STAR_BONUS


def compute_overall_score(
    star_count: int, has_license: bool, recently_active: bool
) -> int:
    """
    Compute the overall score.

    65 base, plus 15/10/5 for more than 100/10/any stars, 10 for a license
    and 5 for recent activity, capped at 95.
    """
    total = BASE_SCORE + star_bonus(star_count)
    if has_license:
        total += LICENSE_BONUS
    if recently_active:
        total += ACTIVITY_BONUS
    return clamp_score(min(OVERALL_CAP, total))


def assign_grade(overall_score: int, star_count: int) -> Grade:
    """
    Map a repository to a letter grade.

    The thresholds are evaluated on the star count, not on the overall
    score; the first (highest) matching threshold wins.
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if star_count > threshold:
            return grade
    return DEFAULT_GRADE
