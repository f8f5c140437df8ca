"""Laravel-specific structure, configuration and best-practice checks."""

from __future__ import annotations

import json
import re
from pathlib import Path

from repodoctor.core import (
    Analyzer,
    AnalyzerCategory,
    Framework,
    Issue,
    Project,
    Severity,
    find_files_with_extension,
)

_ANALYZER = "laravel"

_DEFAULT_APP_KEYS = frozenset({"", "base64:", "SomeRandomString"})

_DEV_PACKAGES = (
    "phpunit/phpunit",
    "fakerphp/faker",
    "mockery/mockery",
    "laravel/sail",
    "laravel/pint",
)

_EXTENDS_MODEL = re.compile(r"extends\s+Model")
_MASS_ASSIGNMENT_GUARD = re.compile(r"\$(fillable|guarded)\s*=")
_RAW_SQL = re.compile(r"(DB::raw\(|->whereRaw\(|->selectRaw\()")

_VENDOR_PATTERNS = frozenset({"vendor/", "/vendor/", "vendor"})
_ENV_PATTERNS = frozenset({".env", "/.env"})


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _composer_require(path: Path) -> dict[str, str] | None:
    """Return the ``require`` map of composer.json, or None if it cannot be read."""
    content = _read_text(path / "composer.json")
    if content is None:
        return None
    try:
        document = json.loads(content)
    except ValueError:
        return None
    require = document.get("require") if isinstance(document, dict) else None
    if not isinstance(require, dict):
        return {}
    return {
        name: version if isinstance(version, str) else ""
        for name, version in require.items()
    }


def _issue(
    rule_id: str,
    category: AnalyzerCategory,
    severity: Severity,
    title: str,
    description: str,
    suggestion: str,
    *,
    file: Path | None = None,
    line: int | None = None,
    auto_fixable: bool = False,
) -> Issue:
    return Issue(
        id=rule_id,
        analyzer=_ANALYZER,
        category=category,
        severity=severity,
        title=title,
        description=description,
        file=file,
        line=line,
        suggestion=suggestion,
        auto_fixable=auto_fixable,
    )


# Structure checks


def _check_structure_dirs(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    if not (path / "app/Http/Controllers").is_dir():
        issues.append(
            _issue(
                "LAR-001",
                AnalyzerCategory.STRUCTURE,
                Severity.HIGH,
                "Missing app/Http/Controllers/ directory",
                "Laravel projects should have an app/Http/Controllers/ directory "
                "for HTTP controllers.",
                "Create app/Http/Controllers/ and add your first controller",
                auto_fixable=True,
            )
        )
    if not (path / "routes").is_dir():
        issues.append(
            _issue(
                "LAR-002",
                AnalyzerCategory.STRUCTURE,
                Severity.MEDIUM,
                "Missing routes/ directory",
                "Laravel projects should have a routes/ directory for route definitions.",
                "Create routes/ directory with web.php and api.php",
                auto_fixable=True,
            )
        )
    if not (path / "resources/views").is_dir():
        issues.append(
            _issue(
                "LAR-003",
                AnalyzerCategory.STRUCTURE,
                Severity.MEDIUM,
                "Missing resources/views/ directory",
                "Laravel projects should have a resources/views/ directory "
                "for Blade templates.",
                "Create resources/views/ for your Blade templates",
                auto_fixable=True,
            )
        )
    return issues


# Configuration checks


def _check_default_app_key(path: Path) -> list[Issue]:
    env_path = path / ".env"
    content = _read_text(env_path)
    if content is None:
        return []
    key_line = next(
        (
            stripped
            for stripped in (line.strip() for line in content.splitlines())
            if stripped.startswith("APP_KEY=")
        ),
        None,
    )
    if key_line is None:
        return []
    value = key_line[len("APP_KEY="):].strip()
    if value not in _DEFAULT_APP_KEYS:
        return []
    return [
        _issue(
            "LAR-010",
            AnalyzerCategory.CONFIGURATION,
            Severity.CRITICAL,
            "Default or empty APP_KEY",
            "APP_KEY in .env is empty or a known default. "
            "Run `php artisan key:generate`.",
            "Run `php artisan key:generate` to set a secure application key",
            file=env_path,
        )
    ]


def _check_debug_mode(path: Path) -> list[Issue]:
    env_path = path / ".env"
    content = _read_text(env_path)
    if content is None:
        return []
    if not any(
        line.strip().startswith("APP_DEBUG=true") for line in content.splitlines()
    ):
        return []
    return [
        _issue(
            "LAR-011",
            AnalyzerCategory.CONFIGURATION,
            Severity.HIGH,
            "Debug mode enabled in .env",
            "APP_DEBUG=true in .env. Ensure this is disabled in production.",
            "Set APP_DEBUG=false in production .env",
            file=env_path,
        )
    ]


# Dependency checks


def _check_dev_deps_in_require(require: dict[str, str], path: Path) -> list[Issue]:
    package = next((pkg for pkg in _DEV_PACKAGES if pkg in require), None)
    if package is None:
        return []
    return [
        _issue(
            "LAR-020",
            AnalyzerCategory.DEPENDENCIES,
            Severity.MEDIUM,
            f"Dev dependency in require section: {package}",
            f"{package} is in require but should be in require-dev.",
            f"Move {package} to require-dev section",
            file=path / "composer.json",
        )
    ]


# Testing checks


def _check_testing(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    if not (path / "phpunit.xml").exists() and not (path / "phpunit.xml.dist").exists():
        issues.append(
            _issue(
                "LAR-030",
                AnalyzerCategory.TESTING,
                Severity.HIGH,
                "Missing PHPUnit configuration",
                "No phpunit.xml or phpunit.xml.dist found. "
                "Laravel ships with PHPUnit by default.",
                "Create phpunit.xml with your test configuration",
            )
        )
    if not (path / "tests").is_dir():
        issues.append(
            _issue(
                "LAR-031",
                AnalyzerCategory.TESTING,
                Severity.HIGH,
                "Missing tests/ directory",
                "No tests/ directory found. Laravel projects should have automated tests.",
                "Create a tests/ directory with Feature and Unit subdirectories",
                auto_fixable=True,
            )
        )
    return issues


# Security checks


def _check_unguarded_models(path: Path) -> list[Issue]:
    models_dir = path / "app/Models"
    if not models_dir.is_dir():
        return []
    issues: list[Issue] = []
    for file_path in find_files_with_extension(models_dir, "php"):
        content = _read_text(file_path)
        if content is None:
            continue
        if _EXTENDS_MODEL.search(content) and not _MASS_ASSIGNMENT_GUARD.search(content):
            issues.append(
                _issue(
                    "LAR-040",
                    AnalyzerCategory.SECURITY,
                    Severity.HIGH,
                    "Unguarded model (mass assignment risk)",
                    f"Model {file_path} extends Model without $fillable "
                    "or $guarded property.",
                    "Add $fillable or $guarded property to protect against "
                    "mass assignment",
                    file=file_path,
                )
            )
    return issues


def _check_raw_sql_queries(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    for file_path in find_files_with_extension(path, "php"):
        content = _read_text(file_path)
        if content is None:
            continue
        line_number = next(
            (
                number
                for number, line in enumerate(content.splitlines(), start=1)
                if _RAW_SQL.search(line)
            ),
            None,
        )
        if line_number is None:
            continue
        issues.append(
            _issue(
                "LAR-041",
                AnalyzerCategory.SECURITY,
                Severity.HIGH,
                "Raw SQL query detected",
                f"Raw SQL usage found in {file_path}. "
                "This may be vulnerable to SQL injection.",
                "Use Eloquent query builder or parameterized queries instead of raw SQL",
                file=file_path,
                line=line_number,
            )
        )
    return issues


# Best practices


def _check_gitignore_entries(path: Path) -> list[Issue]:
    gitignore_path = path / ".gitignore"
    content = _read_text(gitignore_path)
    if content is None:
        return []
    entries = {line.strip() for line in content.splitlines()}
    missing: list[str] = []
    if not entries & _VENDOR_PATTERNS:
        missing.append("vendor/")
    if not entries & _ENV_PATTERNS:
        missing.append(".env")
    if not missing:
        return []
    return [
        _issue(
            "LAR-050",
            AnalyzerCategory.STRUCTURE,
            Severity.MEDIUM,
            f".gitignore missing: {', '.join(missing)}",
            f".gitignore should include {' and '.join(missing)} for Laravel projects.",
            f"Add {' and '.join(missing)} to .gitignore",
            file=gitignore_path,
            auto_fixable=True,
        )
    ]


class LaravelAnalyzer(Analyzer):
    """Laravel-specific project structure, configuration and best practices."""

    name = _ANALYZER
    description = "Laravel-specific project structure, configuration, and best practices"
    category = AnalyzerCategory.STRUCTURE

    def applies_to(self, project: Project) -> bool:
        return project.detected.framework is Framework.LARAVEL

    def analyze(self, project: Project) -> list[Issue]:
        path = project.path
        require = _composer_require(path)
        issues = [
            *_check_structure_dirs(path),
            *_check_default_app_key(path),
            *_check_debug_mode(path),
        ]
        if require is not None:
            issues.extend(_check_dev_deps_in_require(require, path))
        issues.extend(_check_testing(path))
        issues.extend(_check_unguarded_models(path))
        issues.extend(_check_raw_sql_queries(path))
        issues.extend(_check_gitignore_entries(path))
        return issues