"""
VCS (Version Control System) abstraction layer for GitGrade.

Providers fetch the raw repository metadata record that the assessment
engine consumes.
"""

from gitgrade.vcs.base import BaseVCSProvider
from gitgrade.vcs.github import GitHubProvider, fetch_repository_record

__all__ = [
    "BaseVCSProvider",
    "GitHubProvider",
    "fetch_repository_record",
]
