"""Reading the parts of a Flutter ``pubspec.yaml`` that the checks need."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _mapping_or_none(value: Any) -> dict | None:
    return value if isinstance(value, dict) else None


def _dependency_names(section: Any) -> list[str]:
    mapping = _mapping_or_none(section)
    if mapping is None:
        return []
    return [name for name in mapping if isinstance(name, str)]


def _git_dependency_names(section: Any) -> list[str]:
    mapping = _mapping_or_none(section)
    if mapping is None:
        return []
    return [
        name
        for name, spec in mapping.items()
        if isinstance(name, str) and isinstance(spec, dict) and "git" in spec
    ]


@dataclass
class Pubspec:
    """The subset of ``pubspec.yaml`` relevant to Flutter checks."""

    description: str | None = None
    sdk_constraint: str | None = None
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    git_deps: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, path: str | os.PathLike[str]) -> Pubspec | None:
        """Read ``pubspec.yaml`` in the directory ``path``.

        Returns None when the file is missing, unreadable or not valid YAML.
        """
        try:
            content = (Path(path) / "pubspec.yaml").read_text(encoding="utf-8")
            document = yaml.safe_load(content)
        except (OSError, UnicodeDecodeError, yaml.YAMLError):
            return None

        root = _mapping_or_none(document) or {}
        environment = _mapping_or_none(root.get("environment")) or {}
        return cls(
            description=_string_or_none(root.get("description")),
            sdk_constraint=_string_or_none(environment.get("sdk")),
            dependencies=_dependency_names(root.get("dependencies")),
            dev_dependencies=_dependency_names(root.get("dev_dependencies")),
            git_deps=_git_dependency_names(root.get("dependencies")),
        )

    def has_dep(self, name: str) -> bool:
        """Return whether ``name`` is listed under ``dependencies``."""
        return name in self.dependencies

    def has_dev_dep(self, name: str) -> bool:
        """Return whether ``name`` is listed under ``dev_dependencies``."""
        return name in self.dev_dependencies

    def has_any_dep(self, name: str) -> bool:
        """Return whether ``name`` is listed in either dependency section."""
        return self.has_dep(name) or self.has_dev_dep(name)