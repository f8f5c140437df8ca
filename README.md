# repodoctor

A library that checks a project directory for common health problems:
missing configuration files, thin documentation, dependency hygiene, and
framework-specific best practices for Laravel and Flutter projects.

## Installation

```
pip install .
```

## Usage

Describe the project you want to inspect, then run analyzers on it.
Every analyzer has `applies_to(project)` and `analyze(project)`; both are
ordinary synchronous methods, and `analyze` returns a list of `Issue`
objects.

```python
from pathlib import Path

from repodoctor.core import DetectedProject, Framework, Language, PackageManager, Project
from repodoctor.analyzers.config_files import ConfigAnalyzer
from repodoctor.analyzers.dependencies import DependenciesAnalyzer
from repodoctor.analyzers.documentation import DocumentationAnalyzer

project = Project(
    path=Path("."),
    detected=DetectedProject(
        framework=Framework.PYTHON,
        language=Language.PYTHON,
        package_manager=PackageManager.PIP,
    ),
)

for analyzer in (ConfigAnalyzer(), DocumentationAnalyzer(), DependenciesAnalyzer()):
    if analyzer.applies_to(project):
        for issue in analyzer.analyze(project):
            print(issue.id, issue.severity, issue.title)
```

### Analyzers

| Analyzer | Module | Applies to | Rule prefix |
|---|---|---|---|
| `ConfigAnalyzer` | `repodoctor.analyzers.config_files` | every project | `CFG-` |
| `DocumentationAnalyzer` | `repodoctor.analyzers.documentation` | every project | `DOC-` |
| `DependenciesAnalyzer` | `repodoctor.analyzers.dependencies` | projects with a package manager set | `DEP-` |
| `LaravelAnalyzer` | `repodoctor.analyzers.laravel` | `Framework.LARAVEL` projects | `LAR-` |
| `FlutterAnalyzer` | `repodoctor.analyzers.flutter` | `Framework.FLUTTER` projects | `FLT-` |

Each `Issue` carries a rule `id`, the `analyzer` name, a `category`
(`AnalyzerCategory`), a `severity` (`Severity`), a `title` and
`description`, and where they apply the `file` and `line`, a
`suggestion`, whether it is `auto_fixable`, and `references`.

### Helpers

- `repodoctor.core.path_exists(root, relative)` and
  `repodoctor.core.find_files_with_extension(root, extension)`; the latter
  returns sorted paths and does not descend into `.git`, `node_modules`,
  `vendor` or `target`.
- `repodoctor.analyzers.dependencies`: `count_cargo_dependencies(content)`,
  `is_node_dev_dependency(name)`, `is_php_dev_dependency(name)`.
- `repodoctor.analyzers.config_files`: `has_pyproject_tool_section(path)`,
  `has_eslint_config(path)`, `has_prettier_config(path)`.
- `repodoctor.analyzers.flutter.is_local_http(line, pos)`.
- `repodoctor.analyzers.pubspec.Pubspec` reads the parts of a
  `pubspec.yaml` that the Flutter checks use; `Pubspec.parse(path)` takes
  the project directory and returns `None` when the file is missing,
  unreadable or not valid YAML. `has_dep`, `has_dev_dep` and `has_any_dep`
  look up package names.

## What it does not do

- There is no command-line program; the analyzers are used from Python.
- It does not detect a project's framework, language or package manager.
  You describe them yourself in a `DetectedProject`.
- It reports issues only. It does not apply fixes, even for issues
  marked `auto_fixable`, and it does not format or save reports.
- Only the five analyzers above exist; there are no framework checks for
  Symfony, Next.js, Node.js, Rust or Python beyond what the configuration
  and dependency analyzers cover.

## Running the tests

```
pip install .[test]
pytest
```