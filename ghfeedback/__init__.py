"""GitHub-issue backed feedback: bug reports, feature requests and votes."""

__version__ = "0.1.0"
