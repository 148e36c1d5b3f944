"""Core scanning, models and reporting."""

from .errors import LifecycleAuditError, ManifestError, TraversalError
from .models import ManifestFinding, PackageManifest, ScanResult
from .scanner import (
    LIFECYCLE_SCRIPTS,
    Scanner,
    audit,
    filter_lifecycle_scripts,
    iter_findings,
    scan,
)

__all__ = [
    "LIFECYCLE_SCRIPTS",
    "LifecycleAuditError",
    "ManifestError",
    "ManifestFinding",
    "PackageManifest",
    "ScanResult",
    "Scanner",
    "TraversalError",
    "audit",
    "filter_lifecycle_scripts",
    "iter_findings",
    "scan",
]
