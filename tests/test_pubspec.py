from pathlib import Path

import pytest

from repodoctor.analyzers.pubspec import Pubspec

CLEAN_PUBSPEC = """name: my_app
description: A sample Flutter app
environment:
  sdk: ">=3.0.0 <4.0.0"
dependencies:
  flutter:
    sdk: flutter
dev_dependencies:
  flutter_test:
    sdk: flutter
"""

GIT_PUBSPEC = """name: my_app
description: test
environment:
  sdk: ">=3.0.0 <4.0.0"
dependencies:
  flutter:
    sdk: flutter
  my_pkg:
    git:
      url: https://example.com/my_pkg.git
  http: ^1.0.0
dev_dependencies:
  flutter_test:
    sdk: flutter
"""


def _write(tmp_path: Path, content: str) -> Path:
    (tmp_path / "pubspec.yaml").write_text(content, encoding="utf-8")
    return tmp_path


def test_parse_clean_pubspec(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, CLEAN_PUBSPEC))
    assert pubspec.description == "A sample Flutter app"
    assert pubspec.sdk_constraint == ">=3.0.0 <4.0.0"
    assert pubspec.dependencies == ["flutter"]
    assert pubspec.dev_dependencies == ["flutter_test"]
    assert pubspec.git_deps == []


def test_parse_missing_file_returns_none(tmp_path):
    assert Pubspec.parse(tmp_path) is None


def test_parse_invalid_yaml_returns_none(tmp_path):
    _write(tmp_path, "name: [unclosed\n  - : :")
    assert Pubspec.parse(tmp_path) is None


def test_parse_accepts_str_path(tmp_path):
    _write(tmp_path, CLEAN_PUBSPEC)
    assert Pubspec.parse(str(tmp_path)).dependencies == ["flutter"]


def test_git_dependencies_detected(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, GIT_PUBSPEC))
    assert pubspec.git_deps == ["my_pkg"]
    assert pubspec.dependencies == ["flutter", "my_pkg", "http"]


def test_missing_description_is_none(tmp_path):
    pubspec = Pubspec.parse(
        _write(
            tmp_path,
            "name: my_app\nenvironment:\n  sdk: \">=3.0.0 <4.0.0\"\n"
            "dev_dependencies:\n  flutter_test:\n    sdk: flutter\n",
        )
    )
    assert pubspec.description is None
    assert pubspec.dependencies == []
    assert pubspec.dev_dependencies == ["flutter_test"]


def test_non_string_description_is_ignored(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, "name: my_app\ndescription: 42\n"))
    assert pubspec.description is None


def test_missing_environment_gives_no_constraint(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, "name: my_app\ndescription: test\n"))
    assert pubspec.sdk_constraint is None


def test_non_mapping_document_gives_empty_pubspec(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, "- just\n- a list\n"))
    assert pubspec == Pubspec()


def test_empty_document_gives_empty_pubspec(tmp_path):
    pubspec = Pubspec.parse(_write(tmp_path, ""))
    assert pubspec == Pubspec()


@pytest.mark.parametrize(
    ("name", "dep", "dev", "any_"),
    [
        ("flutter", True, False, True),
        ("flutter_test", False, True, True),
        ("mockito", False, False, False),
    ],
)
def test_dependency_queries(tmp_path, name, dep, dev, any_):
    pubspec = Pubspec.parse(_write(tmp_path, CLEAN_PUBSPEC))
    assert pubspec.has_dep(name) is dep
    assert pubspec.has_dev_dep(name) is dev
    assert pubspec.has_any_dep(name) is any_


def test_queries_on_constructed_instance():
    pubspec = Pubspec(dependencies=["build_runner"], dev_dependencies=["test"])
    assert pubspec.has_dep("build_runner")
    assert not pubspec.has_dev_dep("build_runner")
    assert pubspec.has_any_dep("test")
    assert not pubspec.has_dep("test")