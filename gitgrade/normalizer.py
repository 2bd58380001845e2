"""
Normalization of raw repository metadata into a RepositoryProfile.

The raw record follows the GitHub REST ``/repos/{owner}/{repo}`` payload.
Missing or null fields are replaced by explicit defaults; fields with a
structurally wrong type raise InvalidInputError.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from gitgrade.exceptions import InvalidInputError
from gitgrade.models import RepositoryProfile

DEFAULT_DESCRIPTION = "No description available"
DEFAULT_LANGUAGE = "Unknown"
DEFAULT_IDENTITY = "unknown"


def _wrong_type(field: str, expected: str, value: Any) -> InvalidInputError:
    return InvalidInputError(field, f"expected {expected}, got {type(value).__name__}")


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _count(raw: Mapping[str, Any], field: str) -> int:
    value = raw.get(field)
    if value is None:
        return 0
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        raise InvalidInputError(field, "expected a number, got a boolean")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError(field, f"expected a whole number, got {value}")
        value = int(value)
    if not isinstance(value, int):
        raise _wrong_type(field, "a number", value)
    return max(0, value)


def _text(raw: Mapping[str, Any], field: str, default: str) -> str:
    value = raw.get(field)
    if value is None:
        return default
    if not isinstance(value, str):
        raise _wrong_type(field, "a string", value)
    return value.strip() or default


def _flag(raw: Mapping[str, Any], field: str, default: bool) -> bool:
    value = raw.get(field)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise _wrong_type(field, "a boolean", value)
    return value


def _timestamp(raw: Mapping[str, Any], field: str, now: datetime) -> datetime:
    value = raw.get(field)
    if value is None or value == "":
        return now
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise _wrong_type(field, "a timestamp", value)
    try:
        return as_utc(datetime.fromisoformat(value))
    except ValueError as e:
        raise InvalidInputError(field, f"unparseable timestamp {value!r}") from e


def _topics(raw: Mapping[str, Any]) -> tuple[str, ...]:
    value = raw.get("topics")
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidInputError("topics", "expected a list of strings")

    seen: set[str] = set()
    topics: list[str] = []
    for topic in value:
        if not isinstance(topic, str):
            raise _wrong_type("topics", "a string", topic)
        if topic and topic not in seen:
            seen.add(topic)
            topics.append(topic)
    return tuple(topics)


def _owner_login(raw: Mapping[str, Any]) -> str:
    owner = raw.get("owner")
    if owner is None:
        return DEFAULT_IDENTITY
    if not isinstance(owner, Mapping):
        raise InvalidInputError("owner", "expected an object with a 'login' field")
    return _text(owner, "login", DEFAULT_IDENTITY)


def normalize(raw: Mapping[str, Any], now: datetime) -> RepositoryProfile:
    """
    Build a RepositoryProfile from a raw metadata record.

    Args:
        raw: Repository record (``name``, ``owner.login``, ``description``,
             ``stargazers_count``, ``forks_count``, ``watchers_count``,
             ``open_issues_count``, ``language``, ``topics``, ``created_at``,
             ``updated_at``, ``license`` and the optional ``has_readme`` /
             ``has_contributing`` flags). Any field may be absent or null.
        now: Reference instant used for a missing ``updated_at``. A missing
             ``created_at`` defaults to ``updated_at``.

    Returns:
        A fully populated profile with non-negative counts and
        ``updated_at >= created_at``.

    Raises:
        InvalidInputError: If a field has a type for which no default applies.
    """
    if not isinstance(raw, Mapping):
        raise _wrong_type("record", "an object", raw)
    if not isinstance(now, datetime):
        raise _wrong_type("now", "a datetime", now)
    now = as_utc(now)

    updated_at = _timestamp(raw, "updated_at", now)
    # A supplied update time is never moved; creation is pulled back instead
    created_at = min(_timestamp(raw, "created_at", updated_at), updated_at)

    return RepositoryProfile(
        owner=_owner_login(raw),
        name=_text(raw, "name", DEFAULT_IDENTITY),
        description=_text(raw, "description", DEFAULT_DESCRIPTION),
        star_count=_count(raw, "stargazers_count"),
        fork_count=_count(raw, "forks_count"),
        watcher_count=_count(raw, "watchers_count"),
        open_issue_count=_count(raw, "open_issues_count"),
        created_at=created_at,
        updated_at=updated_at,
        language=_text(raw, "language", DEFAULT_LANGUAGE),
        topics=_topics(raw),
        has_readme=_flag(raw, "has_readme", True),
        has_license=raw.get("license") is not None,
        has_contributing=_flag(raw, "has_contributing", False),
    )
