"""
Shared report types.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple


class Level(str, Enum):
    """Priority and impact levels for roadmap items."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Grade(str, Enum):
    """Letter grades, best first."""

    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"


class RepositoryProfile(NamedTuple):
    """Normalized snapshot of repository metadata used as scoring input."""

    owner: str
    name: str
    description: str
    star_count: int
    fork_count: int
    watcher_count: int
    open_issue_count: int
    created_at: datetime
    updated_at: datetime
    language: str
    topics: tuple[str, ...]
    has_readme: bool
    has_license: bool
    has_contributing: bool

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CategoryScores(NamedTuple):
    """The six category scores (0-100), in display order."""

    code_quality: int
    documentation: int
    activity: int
    community: int
    security: int
    best_practices: int


class RoadmapItem(NamedTuple):
    """A recommended remediation action."""

    priority: Level
    title: str
    description: str
    impact: Level


class Insights(NamedTuple):
    """Narrative strengths and improvements."""

    strengths: tuple[str, ...]
    improvements: tuple[str, ...]


class DisplayMetrics(NamedTuple):
    """Derived labels shown alongside the scores."""

    commit_frequency: str
    contributor_estimate: int
    issue_response: str
    complexity: str


class AnalysisReport(NamedTuple):
    """The result of a repository assessment."""

    repository: str  # "owner/name"
    overall_score: int
    grade: Grade
    category_scores: CategoryScores
    strengths: tuple[str, ...]
    improvements: tuple[str, ...]
    roadmap: tuple[RoadmapItem, ...]
    metrics: DisplayMetrics
    generated_at: datetime
