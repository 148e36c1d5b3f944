"""Lifecycle Audit - find npm packages that declare install lifecycle scripts."""

__version__ = "0.1.0"
