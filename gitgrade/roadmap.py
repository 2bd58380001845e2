"""
Improvement roadmap.

The roadmap is a fixed sequence of five slots. Priority is assigned per slot
and the list order is the rank order; nothing is sorted by impact. Only the
first slot depends on the profile.
"""

from gitgrade.insights import Rule, select_statement
from gitgrade.models import CategoryScores, Level, RepositoryProfile, RoadmapItem

# Title rules for the first slot, evaluated in order
LICENSE_SLOT_RULES: list[Rule] = [
    (lambda p, _s: p.has_license, "Enhance Documentation"),
    (lambda _p, _s: True, "Add License"),
]

SLOT_DESCRIPTIONS = {
    "Enhance Documentation": (
        "Create comprehensive API documentation and usage examples to help new contributors"
    ),
    "Add License": "Add an appropriate open-source license (MIT, Apache 2.0, or GPL)",
}

STATIC_ITEMS: tuple[RoadmapItem, ...] = (
    RoadmapItem(
        priority=Level.HIGH,
        title="Implement Automated Testing",
        description="Set up continuous integration with GitHub Actions and increase test coverage to 80%+",
        impact=Level.HIGH,
    ),
    RoadmapItem(
        priority=Level.MEDIUM,
        title="Community Guidelines",
        description="Add CODE_OF_CONDUCT.md and CONTRIBUTING.md to encourage community participation",
        impact=Level.MEDIUM,
    ),
    # Priority and impact intentionally differ here
    RoadmapItem(
        priority=Level.MEDIUM,
        title="Security Scanning",
        description="Enable Dependabot and add security scanning for vulnerabilities",
        impact=Level.HIGH,
    ),
    RoadmapItem(
        priority=Level.LOW,
        title="Performance Optimization",
        description="Profile code and optimize critical paths for better performance",
        impact=Level.MEDIUM,
    ),
)


def plan_roadmap(
    profile: RepositoryProfile, scores: CategoryScores
) -> tuple[RoadmapItem, ...]:
    """Return the five roadmap items in rank order."""
    title = select_statement(LICENSE_SLOT_RULES, profile, scores)
    first = RoadmapItem(
        priority=Level.HIGH,
        title=title,
        description=SLOT_DESCRIPTIONS[title],
        impact=Level.HIGH,
    )
    return (first, *STATIC_ITEMS)
