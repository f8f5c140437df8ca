"""Flutter-specific structure, configuration, dependency, testing and security checks."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from repodoctor.analyzers.pubspec import Pubspec
from repodoctor.core import (
    Analyzer,
    AnalyzerCategory,
    Framework,
    Issue,
    Project,
    Severity,
)

_ANALYZER = "flutter"

# Directories not descended into when scanning source files.
_SKIP_DIRS = frozenset({".git", ".dart_tool", "build", ".pub-cache", "node_modules"})

_MAX_MAIN_DART_LINES = 50
_MAX_FLAT_DART_FILES = 3
_MIN_DART_MAJOR = 3

_PLATFORM_ICONS = (
    ("android", "android/app/src/main/res/mipmap-hdpi"),
    ("ios", "ios/Runner/Assets.xcassets/AppIcon.appiconset"),
)

_REQUIRED_GITIGNORE = ("build/", ".dart_tool/", ".flutter-plugins")

_DEV_ONLY_PACKAGES = (
    "flutter_test",
    "build_runner",
    "mockito",
    "flutter_lints",
    "test",
    "integration_test",
    "fake_async",
)

_HTTP_SCHEME = "http://"
_LOCAL_HOST_PREFIXES = ("localhost", "127.0.0.1", "10.")


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


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


def _dart_files(root: Path, skip: frozenset[str] = frozenset()) -> Iterator[Path]:
    """Yield regular ``.dart`` files below ``root`` in a stable order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            file_path = Path(dirpath) / name
            if name.endswith(".dart") and not file_path.is_symlink():
                yield file_path


def _strip_repeated_prefix(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def is_local_http(line: str, pos: int) -> bool:
    """Return whether the ``http://`` URL starting at ``pos`` targets a local address."""
    after = line[pos + len(_HTTP_SCHEME):]
    return after.startswith(_LOCAL_HOST_PREFIXES)


# Structure checks


def _check_main_dart_too_large(path: Path) -> list[Issue]:
    main_dart = path / "lib/main.dart"
    content = _read_text(main_dart)
    if content is None:
        return []
    non_blank = sum(1 for line in content.splitlines() if line.strip())
    if non_blank <= _MAX_MAIN_DART_LINES:
        return []
    return [
        _issue(
            "FLT-003",
            AnalyzerCategory.STRUCTURE,
            Severity.MEDIUM,
            "lib/main.dart is too large",
            f"lib/main.dart has {non_blank} non-blank lines. Business logic "
            "should be separated into dedicated files.",
            "Extract widgets and business logic into separate files under lib/",
            file=main_dart,
        )
    ]


def _check_no_architecture(path: Path) -> list[Issue]:
    lib_dir = path / "lib"
    if not lib_dir.is_dir():
        return []
    try:
        with os.scandir(lib_dir) as scan:
            entries = list(scan)
    except OSError:
        return []
    if any(entry.is_dir(follow_symlinks=False) for entry in entries):
        return []
    dart_count = sum(
        1
        for entry in entries
        if entry.is_file(follow_symlinks=False) and entry.name.endswith(".dart")
    )
    if dart_count <= _MAX_FLAT_DART_FILES:
        return []
    return [
        _issue(
            "FLT-004",
            AnalyzerCategory.STRUCTURE,
            Severity.MEDIUM,
            "No architecture structure in lib/",
            f"Found {dart_count} .dart files flat in lib/ with no subdirectories. "
            "Consider organizing code into folders.",
            "Create subdirectories like lib/screens/, lib/widgets/, lib/models/",
        )
    ]


def _check_missing_platform_icons(path: Path) -> list[Issue]:
    return [
        _issue(
            "FLT-052",
            AnalyzerCategory.STRUCTURE,
            Severity.LOW,
            f"Missing {platform} icon assets",
            f"{platform} platform directory exists but icon assets at "
            f"{icon_path} are missing.",
            f"Add proper icon assets for {platform} platform",
        )
        for platform, icon_path in _PLATFORM_ICONS
        if (path / platform).is_dir() and not (path / icon_path).is_dir()
    ]


def _check_gitignore_entries(path: Path) -> list[Issue]:
    gitignore_path = path / ".gitignore"
    content = _read_text(gitignore_path)
    if content is None:
        return []
    lines = {line.strip() for line in content.splitlines()}
    missing = [
        entry
        for entry in _REQUIRED_GITIGNORE
        if not lines & {entry, f"/{entry}", entry.rstrip("/")}
    ]
    if not missing:
        return []
    joined = ", ".join(missing)
    return [
        _issue(
            "FLT-053",
            AnalyzerCategory.STRUCTURE,
            Severity.MEDIUM,
            f".gitignore missing: {joined}",
            f".gitignore should include {joined} for Flutter projects.",
            f"Add {joined} to .gitignore",
            file=gitignore_path,
            auto_fixable=True,
        )
    ]


# Configuration checks


def _check_missing_description(pubspec: Pubspec, path: Path) -> list[Issue]:
    if pubspec.description is not None and pubspec.description.strip():
        return []
    return [
        _issue(
            "FLT-010",
            AnalyzerCategory.CONFIGURATION,
            Severity.LOW,
            "Missing description in pubspec.yaml",
            "pubspec.yaml is missing a description field.",
            "Add a meaningful description field to pubspec.yaml",
            file=path / "pubspec.yaml",
        )
    ]


def _sdk_major(constraint: str) -> int | None:
    version = _strip_repeated_prefix(constraint.strip(), ">=")
    version = _strip_repeated_prefix(version, "^")
    head = version.split(".", 1)[0]
    if head.startswith("+"):
        head = head[1:]
    if not head or not (head.isascii() and head.isdigit()):
        return None
    major = int(head)
    return major if major < 2**32 else None


def _check_sdk_constraint(pubspec: Pubspec, path: Path) -> list[Issue]:
    constraint = pubspec.sdk_constraint
    if constraint is None:
        return []
    major = _sdk_major(constraint)
    if major is None or major >= _MIN_DART_MAJOR:
        return []
    return [
        _issue(
            "FLT-011",
            AnalyzerCategory.CONFIGURATION,
            Severity.HIGH,
            "SDK constraint below Dart 3.0",
            f"environment.sdk is '{constraint}'. Dart 3+ brings sound null "
            "safety and modern features.",
            "Update SDK constraint to '^3.0.0' or higher",
            file=path / "pubspec.yaml",
        )
    ]


def _check_android_signing(path: Path) -> list[Issue]:
    gradle_path = path / "android/app/build.gradle"
    content = _read_text(gradle_path)
    if content is None or "signingConfigs" in content:
        return []
    return [
        _issue(
            "FLT-050",
            AnalyzerCategory.CONFIGURATION,
            Severity.MEDIUM,
            "Android build.gradle missing signingConfigs",
            "android/app/build.gradle exists but has no signingConfigs for "
            "release builds.",
            "Add signingConfigs for release builds in build.gradle",
            file=gradle_path,
        )
    ]


def _check_ios_info_plist(path: Path) -> list[Issue]:
    if not (path / "ios").is_dir() or (path / "ios/Runner/Info.plist").exists():
        return []
    return [
        _issue(
            "FLT-051",
            AnalyzerCategory.CONFIGURATION,
            Severity.MEDIUM,
            "Missing ios/Runner/Info.plist",
            "ios/ directory exists but ios/Runner/Info.plist is missing.",
            "Run `flutter create .` to regenerate iOS platform files",
        )
    ]


# Dependency checks


def _check_dev_deps_in_dependencies(pubspec: Pubspec, path: Path) -> list[Issue]:
    misplaced = [pkg for pkg in _DEV_ONLY_PACKAGES if pubspec.has_dep(pkg)]
    if not misplaced:
        return []
    joined = ", ".join(misplaced)
    return [
        _issue(
            "FLT-021",
            AnalyzerCategory.DEPENDENCIES,
            Severity.MEDIUM,
            f"Dev-only packages in dependencies: {joined}",
            f"The following packages should be in dev_dependencies: {joined}",
            "Move these packages to dev_dependencies in pubspec.yaml",
            file=path / "pubspec.yaml",
        )
    ]


def _check_git_dependencies(pubspec: Pubspec, path: Path) -> list[Issue]:
    if not pubspec.git_deps:
        return []
    return [
        _issue(
            "FLT-022",
            AnalyzerCategory.DEPENDENCIES,
            Severity.LOW,
            f"Git dependencies found: {', '.join(pubspec.git_deps)}",
            "Dependencies using git: source can be unstable and hard to reproduce.",
            "Consider publishing packages to pub.dev or using path dependencies",
            file=path / "pubspec.yaml",
        )
    ]


# Testing checks


def _check_no_widget_tests(path: Path) -> list[Issue]:
    test_dir = path / "test"
    if not test_dir.is_dir():
        return []
    for file_path in _dart_files(test_dir):
        content = _read_text(file_path)
        if content is not None and "testWidgets" in content:
            return []
    return [
        _issue(
            "FLT-030",
            AnalyzerCategory.TESTING,
            Severity.HIGH,
            "No widget tests found",
            "test/ directory exists but no file contains testWidgets calls.",
            "Add widget tests using testWidgets() for UI components",
        )
    ]


def _check_missing_integration_tests(path: Path) -> list[Issue]:
    if (path / "integration_test").is_dir():
        return []
    return [
        _issue(
            "FLT-031",
            AnalyzerCategory.TESTING,
            Severity.MEDIUM,
            "Missing integration_test/ directory",
            "No integration_test/ directory found. Integration tests verify "
            "complete app flows.",
            "Create integration_test/ and add integration tests",
            auto_fixable=True,
        )
    ]


def _check_missing_flutter_test(pubspec: Pubspec, path: Path) -> list[Issue]:
    if pubspec.has_any_dep("flutter_test"):
        return []
    return [
        _issue(
            "FLT-032",
            AnalyzerCategory.TESTING,
            Severity.HIGH,
            "Missing flutter_test dependency",
            "flutter_test is not in dependencies or dev_dependencies.",
            "Add flutter_test to dev_dependencies in pubspec.yaml",
            file=path / "pubspec.yaml",
        )
    ]


# Security checks


def _lib_sources(path: Path) -> Iterator[tuple[Path, str]]:
    lib_dir = path / "lib"
    if not lib_dir.is_dir():
        return
    for file_path in _dart_files(lib_dir, _SKIP_DIRS):
        content = _read_text(file_path)
        if content is not None:
            yield file_path, content


def _first_insecure_url_line(content: str) -> int | None:
    for number, line in enumerate(content.splitlines(), start=1):
        pos = line.find(_HTTP_SCHEME)
        if pos != -1 and not is_local_http(line, pos):
            return number
    return None


def _check_http_urls(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    for file_path, content in _lib_sources(path):
        line_number = _first_insecure_url_line(content)
        if line_number is None:
            continue
        issues.append(
            _issue(
                "FLT-041",
                AnalyzerCategory.SECURITY,
                Severity.HIGH,
                "Insecure HTTP URL found",
                f"http:// URL found in {file_path}. Use https:// for secure "
                "communication.",
                "Replace http:// with https://",
                file=file_path,
                line=line_number,
                auto_fixable=True,
            )
        )
    return issues


def _check_debug_prints(path: Path) -> list[Issue]:
    issues: list[Issue] = []
    for file_path, content in _lib_sources(path):
        line_number = next(
            (
                number
                for number, line in enumerate(content.splitlines(), start=1)
                if "debugPrint(" in line
            ),
            None,
        )
        if line_number is None:
            continue
        issues.append(
            _issue(
                "FLT-042",
                AnalyzerCategory.SECURITY,
                Severity.HIGH,
                "debugPrint() found in lib/ code",
                f"debugPrint() call found in {file_path}. Debug output should "
                "not be in production code.",
                "Remove debugPrint() calls or use a proper logging framework",
                file=file_path,
                line=line_number,
            )
        )
    return issues


class FlutterAnalyzer(Analyzer):
    """Flutter-specific project structure, configuration and best practices."""

    name = _ANALYZER
    description = "Flutter-specific project structure, configuration, and best practices"
    category = AnalyzerCategory.STRUCTURE

    def applies_to(self, project: Project) -> bool:
        return project.detected.framework is Framework.FLUTTER

    def analyze(self, project: Project) -> list[Issue]:
        path = project.path
        pubspec = Pubspec.parse(path)

        issues = [
            *_check_main_dart_too_large(path),
            *_check_no_architecture(path),
            *_check_missing_platform_icons(path),
            *_check_gitignore_entries(path),
        ]
        if pubspec is not None:
            issues.extend(_check_missing_description(pubspec, path))
            issues.extend(_check_sdk_constraint(pubspec, path))
        issues.extend(_check_android_signing(path))
        issues.extend(_check_ios_info_plist(path))
        if pubspec is not None:
            issues.extend(_check_dev_deps_in_dependencies(pubspec, path))
            issues.extend(_check_git_dependencies(pubspec, path))
        issues.extend(_check_no_widget_tests(path))
        issues.extend(_check_missing_integration_tests(path))
        if pubspec is not None:
            issues.extend(_check_missing_flutter_test(pubspec, path))
        issues.extend(_check_http_urls(path))
        issues.extend(_check_debug_prints(path))
        return issues