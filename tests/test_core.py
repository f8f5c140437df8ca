from pathlib import Path

import pytest

from repodoctor.core import (
    Analyzer,
    AnalyzerCategory,
    DetectedProject,
    Framework,
    Issue,
    Language,
    PackageManager,
    Project,
    Severity,
    find_files_with_extension,
    path_exists,
)


def test_path_exists_true_and_false(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "b.txt").write_text("x")
    assert path_exists(tmp_path, "a/b.txt") is True
    assert path_exists(tmp_path, "a") is True
    assert path_exists(tmp_path, "missing.txt") is False


def test_find_files_with_extension_nested(tmp_path):
    (tmp_path / "app" / "Models").mkdir(parents=True)
    (tmp_path / "app" / "Models" / "User.php").write_text("<?php")
    (tmp_path / "index.php").write_text("<?php")
    (tmp_path / "readme.md").write_text("# hi")
    found = find_files_with_extension(tmp_path, "php")
    assert found == sorted(
        [tmp_path / "app" / "Models" / "User.php", tmp_path / "index.php"]
    )


def test_find_files_with_extension_accepts_leading_dot(tmp_path):
    (tmp_path / "x.dart").write_text("")
    assert find_files_with_extension(tmp_path, ".dart") == [tmp_path / "x.dart"]


def test_find_files_skips_dependency_dirs(tmp_path):
    (tmp_path / "vendor" / "pkg").mkdir(parents=True)
    (tmp_path / "vendor" / "pkg" / "lib.php").write_text("<?php")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "a.php").write_text("<?php")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.php").write_text("<?php")
    assert find_files_with_extension(tmp_path, "php") == [tmp_path / "src" / "main.php"]


def test_find_files_empty_dir(tmp_path):
    assert find_files_with_extension(tmp_path, "php") == []


def test_issue_defaults():
    issue = Issue(
        id="CFG-002",
        analyzer="config_files",
        category=AnalyzerCategory.CONFIGURATION,
        severity=Severity.LOW,
        title="t",
        description="d",
    )
    assert issue.file is None
    assert issue.line is None
    assert issue.suggestion is None
    assert issue.auto_fixable is False
    assert issue.references == []


def test_issue_references_are_independent():
    a = Issue("A", "x", AnalyzerCategory.SECURITY, Severity.HIGH, "t", "d")
    b = Issue("B", "x", AnalyzerCategory.SECURITY, Severity.HIGH, "t", "d")
    a.references.append("ref")
    assert b.references == []


def test_project_path_is_path(tmp_path):
    project = Project(
        path=str(tmp_path),
        detected=DetectedProject(framework=Framework.UNKNOWN, language=Language.UNKNOWN),
    )
    assert project.path == Path(tmp_path)
    assert project.detected.package_manager is None
    assert project.detected.has_git is False


def test_framework_str_round_trips_through_lookup():
    for framework in Framework:
        assert Framework(str(framework)) is framework
    assert Framework("Laravel") is Framework.LARAVEL
    assert str(Framework("Laravel")) == "Laravel"


def test_analyzer_is_abstract():
    with pytest.raises(TypeError):
        Analyzer()


def test_concrete_analyzer_runs(tmp_path):
    class Dummy(Analyzer):
        name = "dummy"
        description = "d"
        category = AnalyzerCategory.TESTING

        def applies_to(self, project):
            return project.detected.package_manager is not None

        def analyze(self, project):
            return [
                Issue("D-1", self.name, self.category, Severity.INFO, "t", "d")
            ]

    project = Project(
        tmp_path,
        DetectedProject(Framework.RUST_CARGO, Language.RUST, package_manager=PackageManager.CARGO),
    )
    dummy = Dummy()
    assert dummy.applies_to(project) is True
    issues = dummy.analyze(project)
    assert [i.id for i in issues] == ["D-1"]
    assert issues[0].category is AnalyzerCategory.TESTING