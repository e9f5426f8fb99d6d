"""Data models for Helm operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HelmRepo:
    """A configured Helm chart repository."""

    name: str
    url: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HelmRepo:
        """Create from a ``helm repo list --output json`` entry."""
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
        )

    def matches_url(self, url: str) -> bool:
        """Compare repository URLs ignoring a trailing slash."""
        return self.url.rstrip("/") == url.rstrip("/")


@dataclass
class HelmCommandResult:
    """Result of a mutating Helm command."""

    success: bool
    stdout: str
    stderr: str = ""

    @property
    def output(self) -> str:
        """Primary output (stdout)."""
        return self.stdout


@dataclass
class ChartRelease:
    """A chart to install under a release name.

    ``set_values`` are ``key=value`` overrides passed as ``--set``;
    ``values_files`` are passed as ``--values``.
    """

    release_name: str
    chart: str
    namespace: str
    version: str | None = None
    set_values: list[str] = field(default_factory=list)
    values_files: list[str] = field(default_factory=list)
