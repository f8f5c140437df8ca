"""Analyzers that inspect a project directory and report issues."""

__all__ = [
    "config_files",
    "dependencies",
    "documentation",
    "flutter",
    "laravel",
    "pubspec",
]