"""Exceptions raised by GitGrade."""


class GitGradeError(Exception):
    """Base exception for all GitGrade errors."""


class InvalidInputError(GitGradeError, ValueError):
    """Raised when raw repository metadata has a structurally wrong field."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid value for '{field}': {message}")


class RetrievalError(GitGradeError):
    """Raised when repository metadata cannot be fetched from the provider."""
