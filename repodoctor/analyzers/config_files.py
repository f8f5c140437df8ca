"""Checks for framework configuration files and common config mistakes."""

from __future__ import annotations

from pathlib import Path

from repodoctor.core import (
    Analyzer,
    AnalyzerCategory,
    Framework,
    Issue,
    Project,
    Severity,
    path_exists,
)

_ANALYZER = "config_files"

_ESLINT_FILES = (
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.json",
    ".eslintrc.yml",
    ".eslintrc.yaml",
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
)

_PRETTIER_FILES = (
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.json",
    ".prettierrc.yml",
    ".prettierrc.yaml",
    "prettier.config.js",
)

_PHP_LINTER_FILES = (
    "phpstan.neon",
    "phpstan.neon.dist",
    ".php-cs-fixer.php",
    ".php-cs-fixer.dist.php",
)

_ENV_IGNORE_PATTERNS = frozenset({".env", "/.env", ".env*"})

_ENV_EXAMPLE_DESC = "Environment example file for team onboarding"


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _any_exists(path: Path, names) -> bool:
    return any(path_exists(path, name) for name in names)


def has_pyproject_tool_section(path) -> bool:
    """Return whether pyproject.toml exists and contains a ``[tool.`` table."""
    content = _read_text(Path(path) / "pyproject.toml")
    return content is not None and "[tool." in content


def has_eslint_config(path) -> bool:
    """Return whether any ESLint configuration file is present."""
    return _any_exists(Path(path), _ESLINT_FILES)


def has_prettier_config(path) -> bool:
    """Return whether any Prettier configuration file is present."""
    return _any_exists(Path(path), _PRETTIER_FILES)


def _missing_framework_configs(path: Path, framework: Framework) -> list[tuple[str, str]]:
    missing: list[tuple[str, str]] = []
    if framework is Framework.SYMFONY:
        if not _any_exists(path, (".env.example", ".env.dist")):
            missing.append((".env.example", _ENV_EXAMPLE_DESC))
        if not path_exists(path, "config/packages/doctrine.yaml"):
            missing.append(("config/packages/doctrine.yaml", "Doctrine ORM configuration"))
        if not path_exists(path, "config/packages/security.yaml"):
            missing.append(("config/packages/security.yaml", "Security configuration"))
    elif framework is Framework.LARAVEL:
        if not path_exists(path, ".env.example"):
            missing.append((".env.example", _ENV_EXAMPLE_DESC))
        if not path_exists(path, "config/app.php"):
            missing.append(("config/app.php", "Application configuration"))
        if not path_exists(path, "config/database.php"):
            missing.append(("config/database.php", "Database configuration"))
    elif framework is Framework.FLUTTER:
        if not path_exists(path, "analysis_options.yaml"):
            missing.append(("analysis_options.yaml", "Dart analysis options for linting"))
    elif framework is Framework.NEXTJS:
        if not _any_exists(path, ("tsconfig.json", "jsconfig.json")):
            missing.append(
                (
                    "tsconfig.json",
                    "TypeScript/JavaScript configuration for path aliases and compiler options",
                )
            )
    elif framework is Framework.RUST_CARGO:
        if not _any_exists(path, ("rustfmt.toml", ".rustfmt.toml")):
            missing.append(("rustfmt.toml", "Rust formatter configuration"))
    elif framework is Framework.PYTHON:
        if not path_exists(path, "setup.cfg") and not has_pyproject_tool_section(path):
            missing.append(
                ("setup.cfg or pyproject.toml [tool.*]", "Python tooling configuration")
            )
    return missing


def _check_framework_config(path: Path, framework: Framework) -> list[Issue]:
    return [
        Issue(
            id="CFG-001",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.CONFIGURATION,
            severity=Severity.MEDIUM,
            title=f"Missing {name}",
            description=f"{desc}. This file is recommended for {framework} projects.",
            suggestion=f"Create {name}",
        )
        for name, desc in _missing_framework_configs(path, framework)
    ]


def _has_linter(path: Path, framework: Framework) -> bool | None:
    if framework is Framework.FLUTTER:
        return path_exists(path, "analysis_options.yaml")
    if framework is Framework.RUST_CARGO:
        return _any_exists(path, ("clippy.toml", ".clippy.toml"))
    if framework in (Framework.NODEJS, Framework.NEXTJS):
        return has_eslint_config(path) or has_prettier_config(path)
    if framework is Framework.PYTHON:
        return _any_exists(path, (".flake8", "setup.cfg", ".pylintrc")) or (
            has_pyproject_tool_section(path)
        )
    if framework in (Framework.SYMFONY, Framework.LARAVEL):
        return _any_exists(path, _PHP_LINTER_FILES)
    return None


def _check_linter_config(path: Path, framework: Framework) -> list[Issue]:
    has_linter = _has_linter(path, framework)
    if has_linter is None or has_linter:
        return []
    return [
        Issue(
            id="CFG-004",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.CONFIGURATION,
            severity=Severity.MEDIUM,
            title="Missing linter configuration",
            description=(
                f"No linter or code style configuration found for {framework} project."
            ),
            suggestion="Add a linter configuration file to enforce code quality",
        )
    ]


def _check_editorconfig(path: Path) -> list[Issue]:
    if path_exists(path, ".editorconfig"):
        return []
    return [
        Issue(
            id="CFG-002",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.CONFIGURATION,
            severity=Severity.LOW,
            title="Missing .editorconfig",
            description=(
                "No .editorconfig found. This file helps maintain consistent "
                "coding styles across editors."
            ),
            suggestion="Create an .editorconfig file to define coding style rules",
            auto_fixable=True,
            references=["https://editorconfig.org"],
        )
    ]


def _env_is_gitignored(path: Path) -> bool:
    content = _read_text(path / ".gitignore")
    if content is None:
        return False
    return any(line.strip() in _ENV_IGNORE_PATTERNS for line in content.splitlines())


def _check_env_committed(path: Path) -> list[Issue]:
    if not path_exists(path, ".env") or _env_is_gitignored(path):
        return []
    return [
        Issue(
            id="CFG-003",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.CONFIGURATION,
            severity=Severity.CRITICAL,
            title=".env file found in project root",
            description=(
                ".env file exists and may not be gitignored. "
                "This could lead to secret leaks."
            ),
            file=path / ".env",
            suggestion="Add .env to .gitignore to prevent committing secrets",
            auto_fixable=True,
        )
    ]


class ConfigAnalyzer(Analyzer):
    """Checks for framework-specific configuration files and common config issues."""

    name = _ANALYZER
    description = (
        "Checks for framework-specific configuration files and common config issues"
    )
    category = AnalyzerCategory.CONFIGURATION

    def applies_to(self, project: Project) -> bool:
        return True

    def analyze(self, project: Project) -> list[Issue]:
        path = project.path
        framework = project.detected.framework
        return [
            *_check_framework_config(path, framework),
            *_check_linter_config(path, framework),
            *_check_editorconfig(path),
            *_check_env_committed(path),
        ]