"""Checks documentation quality and completeness."""

from __future__ import annotations

from pathlib import Path

from repodoctor.core import Analyzer, AnalyzerCategory, Issue, Project, Severity

_ANALYZER = "documentation"

_MIN_README_LINES = 5
_MIN_LICENSE_LENGTH = 50

# (rule id, keyword searched for case-insensitively, section name)
_REQUIRED_README_SECTIONS = (
    ("DOC-002", "install", "Installation"),
    ("DOC-006", "usage", "Usage"),
)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _check_readme(path: Path) -> list[Issue]:
    readme = path / "README.md"
    if not readme.exists():
        return []
    content = _read_text(readme)
    if content is None:
        return []

    if len(content.splitlines()) < _MIN_README_LINES:
        return [
            Issue(
                id="DOC-001",
                analyzer=_ANALYZER,
                category=AnalyzerCategory.DOCUMENTATION,
                severity=Severity.MEDIUM,
                title="README.md is too short",
                description=(
                    "A good README should have at least a description, "
                    "installation instructions, and usage examples."
                ),
                file=Path("README.md"),
                suggestion="Add sections: Description, Installation, Usage",
            )
        ]

    lower = content.lower()
    return [
        Issue(
            id=rule_id,
            analyzer=_ANALYZER,
            category=AnalyzerCategory.DOCUMENTATION,
            severity=Severity.LOW,
            title=f"README.md missing {section} section",
            description=(
                f"Consider adding a {section} section to help users get started."
            ),
            file=Path("README.md"),
            suggestion=f"Add a ## {section} section",
        )
        for rule_id, keyword, section in _REQUIRED_README_SECTIONS
        if keyword not in lower
    ]


def _check_contributing(path: Path) -> list[Issue]:
    if (path / "CONTRIBUTING.md").exists():
        return []
    return [
        Issue(
            id="DOC-003",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.DOCUMENTATION,
            severity=Severity.INFO,
            title="Missing CONTRIBUTING.md",
            description=(
                "A CONTRIBUTING.md helps new contributors understand how to participate."
            ),
            suggestion="Create a CONTRIBUTING.md with guidelines for contributors",
        )
    ]


def _find_license(path: Path) -> Path | None:
    for name in ("LICENSE", "LICENSE.md"):
        candidate = path / name
        if candidate.exists():
            return candidate
    return None


def _check_license(path: Path) -> list[Issue]:
    license_file = _find_license(path)
    if license_file is None:
        return []
    content = _read_text(license_file)
    if content is None or len(content.strip().encode("utf-8")) >= _MIN_LICENSE_LENGTH:
        return []
    return [
        Issue(
            id="DOC-004",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.DOCUMENTATION,
            severity=Severity.MEDIUM,
            title="LICENSE file appears incomplete",
            description="The LICENSE file exists but has very little content.",
            file=Path(license_file.name),
            suggestion="Add a proper license text (MIT, Apache 2.0, etc.)",
            references=["https://choosealicense.com"],
        )
    ]


def _check_code_of_conduct(path: Path) -> list[Issue]:
    if (path / "CODE_OF_CONDUCT.md").exists():
        return []
    return [
        Issue(
            id="DOC-005",
            analyzer=_ANALYZER,
            category=AnalyzerCategory.DOCUMENTATION,
            severity=Severity.INFO,
            title="Missing CODE_OF_CONDUCT.md",
            description="A code of conduct sets expectations for community behavior.",
            suggestion="Add a CODE_OF_CONDUCT.md (e.g., Contributor Covenant)",
            references=["https://www.contributor-covenant.org"],
        )
    ]


class DocumentationAnalyzer(Analyzer):
    """Checks documentation quality and completeness."""

    name = _ANALYZER
    description = "Checks documentation quality and completeness"
    category = AnalyzerCategory.DOCUMENTATION

    def applies_to(self, project: Project) -> bool:
        return True

    def analyze(self, project: Project) -> list[Issue]:
        path = project.path
        return [
            *_check_readme(path),
            *_check_contributing(path),
            *_check_license(path),
            *_check_code_of_conduct(path),
        ]