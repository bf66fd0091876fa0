from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StudySession:
    """Append-only record of one study period."""

    id: int
    user_id: int
    session_start: int
    duration_seconds: int
