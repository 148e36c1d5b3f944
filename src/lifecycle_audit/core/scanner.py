"""Discovery of npm install lifecycle scripts in a dependency tree."""

import asyncio
import json
import logging
import os
import time
from collections import Counter
from collections.abc import AsyncIterator, Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from .errors import ManifestError, TraversalError
from .models import ManifestFinding, PackageManifest, ScanResult

logger = logging.getLogger(__name__)

# Scripts npm runs automatically on install, in execution order
LIFECYCLE_SCRIPTS = ("preinstall", "install", "postinstall")

MANIFEST_NAME = "package.json"

PathArg = Union[str, os.PathLike]


def filter_lifecycle_scripts(
    scripts: Mapping[str, Any], lifecycle_scripts: Iterable[str] = LIFECYCLE_SCRIPTS
) -> dict[str, str]:
    """
    Pick the lifecycle hooks out of a manifest's scripts mapping.

    The result is ordered by ``lifecycle_scripts``, not by the manifest.
    Entries whose value is not a string are not commands and are left out.

    Examples:
        {"test": "jest", "postinstall": "node a.js", "preinstall": "x"}
            -> {"preinstall": "x", "postinstall": "node a.js"}

    Args:
        scripts: The manifest's ``scripts`` object
        lifecycle_scripts: Hook names to keep, in output order

    Returns:
        New dict of hook name to command string (may be empty)
    """
    return {
        name: scripts[name]
        for name in lifecycle_scripts
        if name in scripts and isinstance(scripts[name], str)
    }


def iter_manifest_paths(root_path: PathArg) -> list[Path]:
    """
    Find every package.json at any depth under root_path.

    Paths are returned sorted so repeated scans report in the same order
    regardless of filesystem enumeration order.

    Args:
        root_path: Directory to search, typically a node_modules tree

    Returns:
        Sorted list of manifest paths

    Raises:
        TraversalError: If root_path is missing, not a directory, or unreadable
    """
    root = Path(root_path)

    try:
        if not root.exists():
            raise TraversalError(f"Root path does not exist: {root}")
        if not root.is_dir():
            raise TraversalError(f"Root path is not a directory: {root}")

        # rglob skips unreadable directories silently, so probe the root
        with os.scandir(root):
            pass

        paths = [p for p in root.rglob(MANIFEST_NAME) if p.is_file()]
    except OSError as e:
        raise TraversalError(f"Could not traverse {root}: {e}") from e

    return sorted(paths)


def load_manifest(path: Path) -> PackageManifest:
    """
    Read and parse a single package.json.

    Args:
        path: Manifest file to load

    Returns:
        The parsed manifest

    Raises:
        ManifestError: If the file cannot be read or is not a JSON object
    """
    try:
        with open(path, encoding="utf-8-sig", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise ManifestError(path, e) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(path, e) from e

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(path, e) from e


class Scanner:
    """Finds packages that declare install lifecycle scripts."""

    def __init__(self, lifecycle_scripts: Iterable[str] = LIFECYCLE_SCRIPTS):
        """
        Initialize scanner.

        Args:
            lifecycle_scripts: Hook names to report, in output order
        """
        self.lifecycle_scripts = tuple(lifecycle_scripts)

    def build_finding(
        self, manifest: PackageManifest, path: Path
    ) -> Optional[ManifestFinding]:
        """
        Turn a parsed manifest into a finding, if it has lifecycle hooks.

        Args:
            manifest: Parsed package.json
            path: Where the manifest was found

        Returns:
            ManifestFinding, or None when no lifecycle hook is declared
        """
        if manifest.scripts is None:
            return None

        hooks = filter_lifecycle_scripts(manifest.scripts, self.lifecycle_scripts)
        if not hooks:
            return None

        return ManifestFinding(
            name=manifest.name,
            version=manifest.version,
            scripts=hooks,
            path=path,
        )

    async def _walk(
        self, root_path: PathArg, tally: Optional[Counter] = None
    ) -> AsyncIterator[ManifestFinding]:
        """
        Load each manifest in path order and yield the ones with hooks.

        When ``tally`` is given, ``scanned`` and ``failed`` manifest counts
        are accumulated into it.
        """
        if tally is None:
            tally = Counter()

        paths = await asyncio.to_thread(iter_manifest_paths, root_path)
        logger.info(f"Found {len(paths)} {MANIFEST_NAME} file(s) under {root_path}")

        for path in paths:
            tally["scanned"] += 1
            try:
                manifest = await asyncio.to_thread(load_manifest, path)
            except ManifestError as e:
                tally["failed"] += 1
                logger.error(f"Failed to parse {e.path}: {e.reason}")
                continue

            finding = self.build_finding(manifest, path)
            if finding is not None:
                logger.debug(f"{finding.name}@{finding.version}: {', '.join(finding.scripts)}")
                yield finding

    async def iter_findings(self, root_path: PathArg) -> AsyncIterator[ManifestFinding]:
        """
        Stream findings for root_path in manifest path order.

        Unreadable or malformed manifests are logged and skipped.

        Raises:
            TraversalError: If the root cannot be enumerated
        """
        async for finding in self._walk(root_path):
            yield finding

    async def scan(self, root_path: PathArg) -> list[ManifestFinding]:
        """
        Collect all findings under root_path.

        Each call walks the filesystem again.

        Args:
            root_path: Directory to search, typically a node_modules tree

        Returns:
            Findings in manifest path order (may be empty)

        Raises:
            TraversalError: If the root cannot be enumerated
        """
        return [finding async for finding in self.iter_findings(root_path)]

    async def audit(self, root_path: PathArg) -> ScanResult:
        """
        Run a scan and wrap it with counts, timing and a summary.

        Args:
            root_path: Directory to search

        Returns:
            ScanResult for the run

        Raises:
            TraversalError: If the root cannot be enumerated
        """
        start_time = time.time()
        tally = Counter()

        findings = [finding async for finding in self._walk(root_path, tally)]

        logger.info(
            f"Scanned {tally['scanned']} manifest(s), {len(findings)} with lifecycle scripts, "
            f"{tally['failed']} failed"
        )

        duration = time.time() - start_time

        result = ScanResult(
            target_path=Path(root_path),
            findings=findings,
            manifests_scanned=tally["scanned"],
            manifests_failed=tally["failed"],
            scan_duration_seconds=round(duration, 2),
        )
        result.summary = result.calculate_summary(self.lifecycle_scripts)
        return result


async def scan(root_path: PathArg) -> list[ManifestFinding]:
    """Find all packages under root_path that declare install lifecycle scripts."""
    return await Scanner().scan(root_path)


def iter_findings(root_path: PathArg) -> AsyncIterator[ManifestFinding]:
    """Stream findings under root_path; see Scanner.iter_findings."""
    return Scanner().iter_findings(root_path)


async def audit(root_path: PathArg) -> ScanResult:
    """Scan root_path and return a ScanResult with counts and summary."""
    return await Scanner().audit(root_path)
