"""
Base interface for VCS providers.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseVCSProvider(ABC):
    """Contract for a provider that fetches raw repository metadata."""

    @abstractmethod
    def get_repository_record(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch the raw metadata record consumed by ``gitgrade.report.assemble``.

        Raises:
            RetrievalError: If the repository cannot be fetched.
        """
