"""Core data models for Lifecycle Audit."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class PackageManifest(BaseModel):
    """
    Loosely typed view of a package.json file.

    Only the fields the audit needs are declared, and all of them are
    optional. Anything else in the manifest is ignored. Values of the wrong
    type are treated as absent rather than rejected, since real-world
    manifests are messy.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, description="Declared package name")
    version: Optional[str] = Field(None, description="Declared package version")
    scripts: Optional[dict[str, Any]] = Field(
        None, description="Script name to command mapping"
    )

    @field_validator("name", "version", mode="before")
    @classmethod
    def drop_non_string(cls, v):
        """Treat non-string name/version as missing."""
        if isinstance(v, str):
            return v
        return None

    @field_validator("scripts", mode="before")
    @classmethod
    def drop_non_mapping(cls, v):
        """Treat a non-object scripts field as missing."""
        if isinstance(v, dict):
            return v
        return None


class ManifestFinding(BaseModel):
    """
    A package that declares at least one install lifecycle script.

    Findings are immutable once created. ``scripts`` holds only the
    lifecycle hooks, in hook order, and ``path`` points at the manifest so
    hoisted and nested copies of the same package can be told apart.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(None, description="Declared package name")
    version: Optional[str] = Field(None, description="Declared package version")
    scripts: Mapping[str, str] = Field(..., description="Lifecycle hook to command")
    path: Path = Field(..., description="Path to the package.json file")

    def __hash__(self) -> int:
        return hash((self.name, self.version, tuple(self.scripts.items()), self.path))

    @field_validator("scripts")
    @classmethod
    def freeze_scripts(cls, v):
        """Store scripts as a read-only copy."""
        return MappingProxyType(dict(v))

    @field_serializer("scripts")
    def serialize_scripts(self, scripts: Mapping[str, str]) -> dict[str, str]:
        """Serialize scripts back to a plain dict."""
        return dict(scripts)

    @field_serializer("path")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string for JSON output."""
        return str(path)

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v):
        """Convert string to Path if needed."""
        if isinstance(v, str):
            return Path(v)
        return v


class ScanResult(BaseModel):
    """
    Aggregated results from a complete audit run.

    Contains the findings plus execution metadata and per-hook counts.
    """

    target_path: Path = Field(..., description="Root directory that was scanned")
    findings: list[ManifestFinding] = Field(
        default_factory=list, description="Packages with lifecycle scripts"
    )
    manifests_scanned: int = Field(0, description="package.json files discovered")
    manifests_failed: int = Field(0, description="package.json files that failed to parse")
    scan_duration_seconds: float = Field(..., description="Total scan time")
    summary: dict[str, int] = Field(
        default_factory=dict, description="Hook counts and totals"
    )

    @field_serializer("target_path")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string for JSON output."""
        return str(path)

    @field_validator("target_path", mode="before")
    @classmethod
    def validate_path(cls, v):
        """Convert string to Path if needed."""
        if isinstance(v, str):
            return Path(v)
        return v

    def calculate_summary(self, lifecycle_scripts: Iterable[str]) -> dict[str, int]:
        """
        Calculate hook summary from findings.

        Args:
            lifecycle_scripts: Hook names to count, in display order

        Returns:
            Dictionary with the number of packages declaring each hook plus total
        """
        summary = {name: 0 for name in lifecycle_scripts}
        summary["total"] = len(self.findings)

        for finding in self.findings:
            for name in finding.scripts:
                summary[name] = summary.get(name, 0) + 1

        return summary
