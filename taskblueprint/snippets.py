"""Collecting templatized snippets and imports from an example directory."""

from __future__ import annotations

import os

from taskblueprint.condense import extract_file_imports, extract_snippet, snippet_description
from taskblueprint.models import SnippetEntry

_FILE_TYPES = (
    (".controller.ts", "controller"),
    (".service.ts", "service"),
    (".module.ts", "module"),
)
_TEST_SUFFIXES = (".service.spec.ts", ".controller.spec.ts", ".spec.ts")
_SUBDIR_SNIPPETS = (
    ("schemas", "schema", "Zod validation schema pattern"),
    ("types", "types", "Type definitions pattern"),
)


def _list_files(directory: str | os.PathLike[str]) -> list[str] | None:
    """Return the names of the plain entries of a directory, sorted, or None."""
    try:
        with os.scandir(directory) as entries:
            return sorted(
                entry.name for entry in entries if not entry.is_dir(follow_symlinks=False)
            )
    except OSError:
        return None


def _file_kind(name: str) -> str | None:
    for suffix, key in _FILE_TYPES:
        if name.endswith(suffix):
            return key
    return None


def _existing_test_files(example_dir: str | os.PathLike[str], feature_name: str):
    for suffix in _TEST_SUFFIXES:
        candidate = os.path.join(example_dir, feature_name + suffix)
        if os.path.exists(candidate):
            yield candidate


def _snippet_with_source(
    project_root: str | os.PathLike[str], path: str, feature_name: str, description: str
) -> SnippetEntry | None:
    snippet = extract_snippet(path, feature_name, description)
    if snippet is not None:
        snippet.source_file = os.path.relpath(path, project_root)
    return snippet


def extract_snippets(
    project_root: str | os.PathLike[str],
    example_dir: str | os.PathLike[str],
    feature_name: str,
) -> dict[str, SnippetEntry]:
    """Return condensed snippets of the example's files, keyed by file kind.

    Looks at controller, service and module files, the first usable file of
    the schemas/ and types/ subdirectories, and the feature's test file.
    """
    files = _list_files(example_dir)
    if files is None:
        return {}

    snippets: dict[str, SnippetEntry] = {}
    for name in files:
        key = _file_kind(name)
        if key is None:
            continue
        path = os.path.join(example_dir, name)
        snippet = _snippet_with_source(project_root, path, feature_name, snippet_description(key))
        if snippet is not None:
            snippets[key] = snippet

    for subdir, key, description in _SUBDIR_SNIPPETS:
        directory = os.path.join(example_dir, subdir)
        for name in _list_files(directory) or []:
            if not name.endswith(".ts"):
                continue
            path = os.path.join(directory, name)
            snippet = _snippet_with_source(project_root, path, feature_name, description)
            if snippet is not None:
                snippets[key] = snippet
                break

    for path in _existing_test_files(example_dir, feature_name):
        snippet = _snippet_with_source(project_root, path, feature_name, "Unit test pattern")
        if snippet is not None:
            snippets["test"] = snippet
            break

    return snippets


def extract_imports(
    example_dir: str | os.PathLike[str], feature_name: str
) -> dict[str, list[str]]:
    """Return the templatized imports of the example's files, keyed by file kind."""
    files = _list_files(example_dir)
    if files is None:
        return {}

    result: dict[str, list[str]] = {}
    for name in files:
        key = _file_kind(name)
        if key is None:
            continue
        found = extract_file_imports(os.path.join(example_dir, name), feature_name)
        if found is None:
            continue
        if found.get(key):
            result[key] = found[key]
        else:
            result.update(found)

    for path in _existing_test_files(example_dir, feature_name):
        found = extract_file_imports(path, feature_name)
        if found:
            result["test"] = next(iter(found.values()))
        break

    return result