"""Display formatting shared by the course and video endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType


def format_duration(seconds: int) -> str:
    """Render seconds as ``M:SS``: 0 -> "0:00", 65 -> "1:05", 3600 -> "60:00"."""
    if seconds < 0:
        raise ValueError("duration must be non-negative")
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes}:{remainder:02d}"


def format_course_duration(hours: int) -> str:
    return f"{hours} horas"


def format_publish_date(timestamp: int | None) -> str | None:
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, UTC).strftime("%Y-%m-%d")


@dataclass(frozen=True)
class CategoryLabels:
    """Category name -> short display label, with a fallback.

    Built once from Settings at startup and handed to the course endpoint.
    """

    labels: Mapping[str, str]
    default: str

    @staticmethod
    def from_mapping(labels: Mapping[str, str], default: str) -> CategoryLabels:
        return CategoryLabels(labels=MappingProxyType(dict(labels)), default=default)

    def label_for(self, category_name: str) -> str:
        return self.labels.get(category_name, self.default)
