"""Custom exceptions for the warrior stats endpoint."""

from typing import Optional


class WarriorStatsError(Exception):
    """Base exception for warrior stats."""
    pass


class ConfigurationError(WarriorStatsError):
    """Database connection is not configured or a setting is invalid."""
    pass


class MethodNotAllowedError(WarriorStatsError):
    """HTTP method is not supported by the endpoint."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Method {method} not allowed")


class DatabaseError(WarriorStatsError):
    """A single PostgREST request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.args[0]]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.detail:
            parts.append(f"detail={self.detail}")
        return " ".join(parts)


class QueryStageError(WarriorStatsError):
    """One of the stats queries failed. Message is safe to return to clients."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        self.message = message
        super().__init__(message)
