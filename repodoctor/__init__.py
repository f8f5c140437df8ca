"""Repository health diagnostics: a shared issue model and project analyzers."""

__version__ = "0.1.0"