"""Checks dependency management, lock files and dependency hygiene."""

from __future__ import annotations

import json
from pathlib import Path

from repodoctor.core import (
    Analyzer,
    AnalyzerCategory,
    Framework,
    Issue,
    PackageManager,
    Project,
    Severity,
    path_exists,
)

_ANALYZER = "dependencies"

_MAX_DIRECT_DEPENDENCIES = 50

_NODE_DEV_PREFIXES = (
    "eslint",
    "@types/",
    "prettier",
    "jest",
    "mocha",
    "chai",
    "typescript",
    "ts-node",
    "nodemon",
    "webpack",
    "babel",
    "@babel/",
    "rollup",
    "vite",
)

_PHP_DEV_PREFIXES = (
    "phpunit/",
    "phpstan/",
    "squizlabs/",
    "friendsofphp/",
    "vimeo/psalm",
    "mockery/",
    "fakerphp/",
)

_REVIEW_SUGGESTION = "Review dependencies and remove unused ones"


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _read_json_document(path: Path) -> dict | None:
    """Return the JSON document at ``path``, or None if unreadable or invalid.

    A valid document that is not an object is treated as an empty object.
    """
    content = _read_text(path)
    if content is None:
        return None
    try:
        document = json.loads(content)
    except ValueError:
        return None
    return document if isinstance(document, dict) else {}


def _object_at(document: dict, key: str) -> dict | None:
    value = document.get(key)
    return value if isinstance(value, dict) else None


def _issue(
    rule_id: str,
    severity: Severity,
    title: str,
    description: str,
    file: Path | None = None,
    suggestion: str | None = None,
) -> Issue:
    return Issue(
        id=rule_id,
        analyzer=_ANALYZER,
        category=AnalyzerCategory.DEPENDENCIES,
        severity=severity,
        title=title,
        description=description,
        file=file,
        suggestion=suggestion,
    )


def _missing_lock(lock_name: str, command: str) -> Issue:
    return _issue(
        "DEP-001",
        Severity.HIGH,
        f"Missing {lock_name}",
        f"No {lock_name} found. Lock files ensure reproducible builds.",
        suggestion=f"Run `{command}` to generate {lock_name}",
    )


def _no_dependencies(description: str, file: Path | None) -> Issue:
    return _issue(
        "DEP-002", Severity.INFO, "No dependencies declared", description, file=file
    )


def _too_many(count: int, description: str, file: Path) -> Issue:
    return _issue(
        "DEP-005",
        Severity.LOW,
        f"Too many direct dependencies ({count})",
        description,
        file=file,
        suggestion=_REVIEW_SUGGESTION,
    )


def count_cargo_dependencies(content: str) -> int:
    """Count the entries in the ``[dependencies]`` table of a Cargo manifest."""
    in_deps = False
    count = 0
    for line in content.splitlines():
        trimmed = line.strip()
        if trimmed.startswith("["):
            in_deps = trimmed == "[dependencies]"
            continue
        if in_deps and trimmed and not trimmed.startswith("#") and "=" in trimmed:
            count += 1
    return count


def is_node_dev_dependency(name: str) -> bool:
    """Return whether an npm package name looks like a development-only tool."""
    return name.lower().startswith(_NODE_DEV_PREFIXES)


def is_php_dev_dependency(name: str) -> bool:
    """Return whether a Composer package name looks like a development-only tool."""
    return name.lower().startswith(_PHP_DEV_PREFIXES)


def _check_rust(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    if not path_exists(path, "Cargo.lock"):
        issues.append(_missing_lock("Cargo.lock", "cargo build"))

    cargo_path = path / "Cargo.toml"
    content = _read_text(cargo_path)
    if content is None:
        return issues

    dep_count = count_cargo_dependencies(content)
    if dep_count == 0:
        issues.append(
            _no_dependencies("Cargo.toml has no [dependencies] entries.", cargo_path)
        )
    elif dep_count > _MAX_DIRECT_DEPENDENCIES:
        issues.append(
            _too_many(
                dep_count,
                f"Project has {dep_count} direct dependencies. "
                "Consider reducing to improve compile times.",
                cargo_path,
            )
        )
    return issues


def _check_node(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    if not any(
        path_exists(path, name)
        for name in ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")
    ):
        issues.append(
            _issue(
                "DEP-001",
                Severity.HIGH,
                "Missing lock file",
                "No package-lock.json, yarn.lock, or pnpm-lock.yaml found.",
                suggestion="Run `npm install` to generate a lock file",
            )
        )

    pkg_path = path / "package.json"
    document = _read_json_document(pkg_path)
    if document is None:
        return issues

    prod_deps = _object_at(document, "dependencies")
    dev_deps = _object_at(document, "devDependencies")
    deps = len(prod_deps) if prod_deps is not None else 0

    if deps == 0 and not dev_deps:
        issues.append(
            _no_dependencies(
                "package.json has no dependencies or devDependencies.", pkg_path
            )
        )

    if prod_deps is not None:
        dev_in_prod = sorted(k for k in prod_deps if is_node_dev_dependency(k))
        if dev_in_prod:
            issues.append(
                _issue(
                    "DEP-003",
                    Severity.MEDIUM,
                    "Dev dependencies in production section",
                    "These packages are likely devDependencies but are listed in "
                    f"dependencies: {', '.join(dev_in_prod)}",
                    file=pkg_path,
                    suggestion="Move development-only packages to devDependencies",
                )
            )

    if deps > _MAX_DIRECT_DEPENDENCIES:
        issues.append(
            _too_many(
                deps,
                f"package.json has {deps} production dependencies. "
                "Consider reducing bundle size.",
                pkg_path,
            )
        )
    return issues


def _check_php(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    if not path_exists(path, "composer.lock"):
        issues.append(_missing_lock("composer.lock", "composer install"))

    composer_path = path / "composer.json"
    document = _read_json_document(composer_path)
    if document is None:
        return issues

    require = _object_at(document, "require")
    require_dev = _object_at(document, "require-dev")
    deps = len(require) if require is not None else 0
    dev_deps = len(require_dev) if require_dev is not None else 0

    if deps == 0 and dev_deps == 0:
        issues.append(
            _no_dependencies(
                "composer.json has no require or require-dev entries.", composer_path
            )
        )

    if require is not None:
        dev_in_prod = sorted(k for k in require if is_php_dev_dependency(k))
        if dev_in_prod:
            issues.append(
                _issue(
                    "DEP-003",
                    Severity.MEDIUM,
                    "Dev dependencies in production section",
                    "These packages are likely require-dev but are in require: "
                    f"{', '.join(dev_in_prod)}",
                    file=composer_path,
                    suggestion="Move development-only packages to require-dev",
                )
            )

    if deps > _MAX_DIRECT_DEPENDENCIES:
        issues.append(
            _too_many(
                deps,
                f"composer.json has {deps} production dependencies.",
                composer_path,
            )
        )
    return issues


def _check_flutter(path: Path) -> list[Issue]:
    if path_exists(path, "pubspec.lock"):
        return []
    return [_missing_lock("pubspec.lock", "flutter pub get")]


def _python_package_manager(path: Path) -> PackageManager | None:
    content = _read_text(path / "pyproject.toml")
    if content is not None and "[tool.poetry]" in content:
        return PackageManager.POETRY
    return None


def _unpinned_requirements(content: str) -> list[str]:
    return [
        stripped
        for stripped in (line.strip() for line in content.splitlines())
        if stripped
        and not stripped.startswith("#")
        and not stripped.startswith("-")
        and "==" not in stripped
    ]


def _check_python(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    has_requirements = path_exists(path, "requirements.txt")
    has_pyproject = path_exists(path, "pyproject.toml")

    if not has_requirements and not has_pyproject:
        issues.append(
            _no_dependencies("No requirements.txt or pyproject.toml found.", None)
        )

    if not has_requirements:
        return issues

    req_path = path / "requirements.txt"
    content = _read_text(req_path)
    if content is not None:
        unpinned = _unpinned_requirements(content)
        if unpinned:
            issues.append(
                _issue(
                    "DEP-004",
                    Severity.MEDIUM,
                    "Unpinned dependency versions",
                    "These dependencies lack pinned versions (==): "
                    f"{', '.join(unpinned)}",
                    file=req_path,
                    suggestion=(
                        "Pin versions with == for reproducible builds "
                        "(e.g., requests==2.28.0)"
                    ),
                )
            )

    # Plain pip projects often have no lock file; only Poetry projects must.
    if (
        not path_exists(path, "requirements.lock")
        and not path_exists(path, "poetry.lock")
        and _python_package_manager(path) is PackageManager.POETRY
    ):
        issues.append(_missing_lock("poetry.lock", "poetry lock"))
    return issues


_CHECKS = {
    Framework.RUST_CARGO: _check_rust,
    Framework.NODEJS: _check_node,
    Framework.NEXTJS: _check_node,
    Framework.SYMFONY: _check_php,
    Framework.LARAVEL: _check_php,
    Framework.FLUTTER: _check_flutter,
    Framework.PYTHON: _check_python,
}


class DependenciesAnalyzer(Analyzer):
    """Checks dependency management, lock files and dependency hygiene."""

    name = _ANALYZER
    description = "Checks dependency management, lock files, and dependency hygiene"
    category = AnalyzerCategory.DEPENDENCIES

    def applies_to(self, project: Project) -> bool:
        return project.detected.package_manager is not None

    def analyze(self, project: Project) -> list[Issue]:
        check = _CHECKS.get(project.detected.framework)
        if check is None:
            return []
        return check(project.path)