[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "repodoctor"
version = "0.1.0"
description = "Diagnose repository health: configuration, documentation, dependencies and framework best practices"
requires-python = ">=3.10"
keywords = ["repository", "health", "lint", "audit", "quality", "flutter", "laravel"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["repodoctor"]

[tool.pytest.ini_options]
addopts = "-ra"
