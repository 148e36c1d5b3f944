"""Shared pytest fixtures for Lifecycle Audit tests."""

import json

import pytest


def write_manifest(directory, data):
    """Write a package.json into directory, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    pkg = directory / "package.json"
    if isinstance(data, str):
        pkg.write_text(data)
    else:
        pkg.write_text(json.dumps(data))
    return pkg


@pytest.fixture
def postinstall_package(tmp_path):
    """Single package with a postinstall hook."""
    write_manifest(
        tmp_path / "pkgA",
        {"name": "a", "version": "1.0.0", "scripts": {"postinstall": "node setup.js"}},
    )
    return tmp_path


@pytest.fixture
def clean_package(tmp_path):
    """Package with ordinary scripts only."""
    write_manifest(
        tmp_path / "pkgB",
        {"name": "b", "version": "2.0.0", "scripts": {"test": "jest", "build": "tsc"}},
    )
    return tmp_path


@pytest.fixture
def malformed_package(tmp_path):
    """Package.json with invalid JSON."""
    write_manifest(tmp_path / "pkgC", '{"name": "broken", "scripts": {')
    return tmp_path


@pytest.fixture
def node_modules(tmp_path):
    """
    A small installed dependency tree.

    node_modules/
      @scope/e      all three hooks, declared out of order
      pkgA          postinstall
        node_modules/d   preinstall + install (nested, not hoisted)
      pkgB          no lifecycle hooks
      pkgC          invalid JSON
      pkgF          no scripts field
    """
    root = tmp_path / "node_modules"

    write_manifest(
        root / "@scope" / "e",
        {
            "name": "@scope/e",
            "version": "0.3.1",
            "scripts": {
                "postinstall": "node post.js",
                "test": "mocha",
                "install": "node-gyp rebuild",
                "preinstall": "node pre.js",
            },
        },
    )
    write_manifest(
        root / "pkgA",
        {"name": "a", "version": "1.0.0", "scripts": {"postinstall": "node setup.js"}},
    )
    write_manifest(
        root / "pkgA" / "node_modules" / "d",
        {
            "name": "d",
            "version": "4.2.0",
            "scripts": {"install": "node-gyp rebuild", "preinstall": "echo hi"},
        },
    )
    write_manifest(
        root / "pkgB",
        {"name": "b", "version": "2.0.0", "scripts": {"test": "jest"}},
    )
    write_manifest(root / "pkgC", "{not json")
    write_manifest(root / "pkgF", {"name": "f", "version": "1.1.1"})

    return root


@pytest.fixture
def make_manifest():
    """Return a helper that writes package.json files."""
    return write_manifest
