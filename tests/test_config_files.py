import pytest

from repodoctor.analyzers.config_files import (
    ConfigAnalyzer,
    has_eslint_config,
    has_prettier_config,
    has_pyproject_tool_section,
)
from repodoctor.core import (
    AnalyzerCategory,
    DetectedProject,
    Framework,
    Language,
    Project,
    Severity,
)

_LANGUAGES = {
    Framework.RUST_CARGO: Language.RUST,
    Framework.NODEJS: Language.JAVASCRIPT,
    Framework.NEXTJS: Language.JAVASCRIPT,
    Framework.SYMFONY: Language.PHP,
    Framework.LARAVEL: Language.PHP,
    Framework.FLUTTER: Language.DART,
    Framework.PYTHON: Language.PYTHON,
}


def make_project(tmp_path, framework):
    return Project(
        path=tmp_path,
        detected=DetectedProject(
            framework=framework,
            language=_LANGUAGES.get(framework, Language.UNKNOWN),
        ),
    )


def ids(issues):
    return [i.id for i in issues]


def test_missing_editorconfig(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert "CFG-002" in ids(issues)


def test_has_editorconfig(tmp_path):
    (tmp_path / ".editorconfig").write_text("root = true")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert "CFG-002" not in ids(issues)


def test_env_committed_not_gitignored(tmp_path):
    (tmp_path / ".env").write_text("SECRET=foo")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    matching = [i for i in issues if i.id == "CFG-003"]
    assert len(matching) == 1
    assert matching[0].severity is Severity.CRITICAL
    assert matching[0].file == tmp_path / ".env"


def test_env_gitignored(tmp_path):
    (tmp_path / ".env").write_text("SECRET=foo")
    (tmp_path / ".gitignore").write_text(".env\n")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert "CFG-003" not in ids(issues)


@pytest.mark.parametrize("pattern", ["/.env", ".env*", "  .env  "])
def test_env_gitignore_variants(tmp_path, pattern):
    (tmp_path / ".env").write_text("SECRET=foo")
    (tmp_path / ".gitignore").write_text(f"node_modules/\n{pattern}\n")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert "CFG-003" not in ids(issues)


def test_env_gitignore_other_entry_not_enough(tmp_path):
    (tmp_path / ".env").write_text("SECRET=foo")
    (tmp_path / ".gitignore").write_text(".env.local\n")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert "CFG-003" in ids(issues)


def test_rust_missing_rustfmt(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.RUST_CARGO))
    assert any(i.id == "CFG-001" and "rustfmt" in i.title for i in issues)


def test_rust_has_rustfmt(tmp_path):
    (tmp_path / "rustfmt.toml").write_text("max_width = 100")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.RUST_CARGO))
    assert not any(i.id == "CFG-001" and "rustfmt" in i.title for i in issues)


def test_node_missing_linter(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.NODEJS))
    assert "CFG-004" in ids(issues)


def test_node_has_eslint(tmp_path):
    (tmp_path / ".eslintrc.json").write_text("{}")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.NODEJS))
    assert "CFG-004" not in ids(issues)


def test_applies_to_all(tmp_path):
    assert ConfigAnalyzer().applies_to(make_project(tmp_path, Framework.UNKNOWN)) is True


def test_unknown_framework_has_no_framework_or_linter_issues(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.UNKNOWN))
    assert ids(issues) == ["CFG-002"]


def test_symfony_missing_all(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.SYMFONY))
    titles = [i.title for i in issues if i.id == "CFG-001"]
    assert titles == [
        "Missing .env.example",
        "Missing config/packages/doctrine.yaml",
        "Missing config/packages/security.yaml",
    ]
    assert "CFG-004" in ids(issues)


def test_symfony_env_dist_accepted(tmp_path):
    (tmp_path / ".env.dist").write_text("")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.SYMFONY))
    assert "Missing .env.example" not in [i.title for i in issues]


def test_laravel_phpstan_satisfies_linter(tmp_path):
    (tmp_path / "phpstan.neon").write_text("")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.LARAVEL))
    assert "CFG-004" not in ids(issues)
    assert [i.title for i in issues if i.id == "CFG-001"] == [
        "Missing .env.example",
        "Missing config/app.php",
        "Missing config/database.php",
    ]


def test_nextjs_jsconfig_accepted(tmp_path):
    (tmp_path / "jsconfig.json").write_text("{}")
    (tmp_path / ".prettierrc").write_text("{}")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.NEXTJS))
    assert "CFG-001" not in ids(issues)
    assert "CFG-004" not in ids(issues)


def test_flutter_analysis_options_covers_both(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.FLUTTER))
    assert "CFG-001" in ids(issues) and "CFG-004" in ids(issues)
    (tmp_path / "analysis_options.yaml").write_text("")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.FLUTTER))
    assert "CFG-001" not in ids(issues) and "CFG-004" not in ids(issues)


def test_python_pyproject_tool_section(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.PYTHON))
    assert "CFG-001" not in ids(issues)
    assert "CFG-004" not in ids(issues)


def test_cfg001_description_names_framework(tmp_path):
    issues = ConfigAnalyzer().analyze(make_project(tmp_path, Framework.RUST_CARGO))
    issue = next(i for i in issues if i.id == "CFG-001")
    assert str(Framework.RUST_CARGO) in issue.description
    assert issue.suggestion == "Create rustfmt.toml"
    assert issue.category is AnalyzerCategory.CONFIGURATION


def test_has_pyproject_tool_section(tmp_path):
    assert has_pyproject_tool_section(tmp_path) is False
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    assert has_pyproject_tool_section(tmp_path) is False
    (tmp_path / "pyproject.toml").write_text("[tool.black]\n")
    assert has_pyproject_tool_section(tmp_path) is True


def test_has_eslint_and_prettier_config(tmp_path):
    assert has_eslint_config(tmp_path) is False
    assert has_prettier_config(tmp_path) is False
    (tmp_path / "eslint.config.mjs").write_text("")
    (tmp_path / "prettier.config.js").write_text("")
    assert has_eslint_config(tmp_path) is True
    assert has_prettier_config(tmp_path) is True