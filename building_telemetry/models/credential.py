"""Credential model for the automation portal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """Bearer token and the moment it was issued."""

    token: str
    issued_at: float

    def is_valid(self, now: float, validity_seconds: float) -> bool:
        return now - self.issued_at < validity_seconds

    def __repr__(self) -> str:
        return f"Credential(token=<redacted>, issued_at={self.issued_at!r})"
