"""Collect snippets, imports, conventions, examples and team knowledge from a codebase for task blueprints."""

__version__ = "0.1.0"
__all__ = ["models", "condense", "snippets", "detect", "examples", "knowledge"]