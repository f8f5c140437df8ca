"""Shared data model and helpers used by every analyzer."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(Enum):
    """How serious a reported issue is."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    def __str__(self) -> str:
        return self.value


class AnalyzerCategory(Enum):
    """The area of repository health an analyzer or issue belongs to."""

    STRUCTURE = "structure"
    CONFIGURATION = "configuration"
    DEPENDENCIES = "dependencies"
    TESTING = "testing"
    SECURITY = "security"
    DOCUMENTATION = "documentation"

    def __str__(self) -> str:
        return self.value


class Framework(Enum):
    """Project frameworks the analyzers know about."""

    SYMFONY = "Symfony"
    LARAVEL = "Laravel"
    FLUTTER = "Flutter"
    NEXTJS = "Next.js"
    NODEJS = "Node.js"
    RUST_CARGO = "Rust"
    PYTHON = "Python"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


class Language(Enum):
    """Primary programming language of a project."""

    RUST = "Rust"
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    PHP = "PHP"
    DART = "Dart"
    PYTHON = "Python"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


class PackageManager(Enum):
    """Dependency managers a project may use."""

    CARGO = "cargo"
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    COMPOSER = "composer"
    PUB = "pub"
    PIP = "pip"
    POETRY = "poetry"

    def __str__(self) -> str:
        return self.value


@dataclass
class Issue:
    """A single finding reported by an analyzer."""

    id: str
    analyzer: str
    category: AnalyzerCategory
    severity: Severity
    title: str
    description: str
    file: Path | None = None
    line: int | None = None
    suggestion: str | None = None
    auto_fixable: bool = False
    references: list[str] = field(default_factory=list)


@dataclass
class DetectedProject:
    """What was detected about a project's technology stack."""

    framework: Framework
    language: Language
    version: str | None = None
    package_manager: PackageManager | None = None
    has_git: bool = False
    has_ci: str | None = None


@dataclass
class Project:
    """A project on disk together with its detected stack."""

    path: Path
    detected: DetectedProject

    def __post_init__(self) -> None:
        self.path = Path(self.path)


class Analyzer(ABC):
    """Base class for all analyzers.

    Subclasses set ``name``, ``description`` and ``category`` as class
    attributes and implement :meth:`applies_to` and :meth:`analyze`.
    """

    name: str = ""
    description: str = ""
    category: AnalyzerCategory = AnalyzerCategory.STRUCTURE

    @abstractmethod
    def applies_to(self, project: Project) -> bool:
        """Return whether this analyzer should run on ``project``."""

    @abstractmethod
    def analyze(self, project: Project) -> list[Issue]:
        """Inspect ``project`` and return the issues found."""


_SKIPPED_DIRS = frozenset({".git", "node_modules", "vendor", "target"})


def path_exists(root: str | os.PathLike[str], relative: str) -> bool:
    """Return whether ``relative`` exists under ``root``."""
    return (Path(root) / relative).exists()


def find_files_with_extension(
    root: str | os.PathLike[str], extension: str
) -> list[Path]:
    """Return every file below ``root`` with the given extension, sorted.

    Version-control and dependency directories are not descended into.
    """
    suffix = "." + extension.lstrip(".")
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in _SKIPPED_DIRS]
        found.extend(
            Path(dirpath) / name for name in filenames if Path(name).suffix == suffix
        )
    return sorted(found)