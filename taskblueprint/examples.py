"""Finding real files of a codebase to serve as examples for a task."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterator

from taskblueprint.detect import app_source_path
from taskblueprint.models import Example

MAX_EXAMPLES = 3
MAX_TEST_EXAMPLES = 2

_SKIPPED_BASENAMES = frozenset({"mod.rs", "__init__.py", "index.ts"})
_NAME_SUFFIXES = (".controller.ts", "_handler.go", ".go", ".py", ".rs")
_MODULE_RE = re.compile(r"\.module\.ts$")
_TEST_FILE_RE = re.compile(r"\.spec\.ts$|\.test\.ts$")
_BEST_SUFFIX = " — newest, best example to follow"


def _walk_files(
    root: str | os.PathLike[str], prune: Callable[[str], bool] | None = None
) -> Iterator[os.DirEntry]:
    """Yield non-directory entries below root, in lexical order, depth first."""
    try:
        with os.scandir(root) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if prune is None or not prune(entry.path):
                yield from _walk_files(entry.path, prune)
        else:
            yield entry


def _rel_dir(project_root: str | os.PathLike[str], path: str) -> str:
    return os.path.dirname(os.path.relpath(path, project_root)) or "."


def _endpoint_search(project_root, app: str, framework: str):
    def under(*parts: str) -> str:
        return os.path.join(project_root, *parts)

    if framework.startswith("go"):
        return (
            [
                under("internal", "handlers"),
                under("internal", "handler"),
                under("internal", "api"),
                under("pkg", "handlers"),
                under("handlers"),
            ],
            [re.compile(r"_handler\.go$"), re.compile(r"handler\.go$")],
            " endpoint (handler + service)",
        )
    if framework.startswith("python"):
        return (
            [
                under("app", "routers"),
                under("app", "api"),
                under("routers"),
                under("api"),
                under("views"),
            ],
            [re.compile(r"^[a-z_]+\.py$")],
            " endpoint (router + service)",
        )
    if framework.startswith("rust"):
        return (
            [under("src", "handlers"), under("src", "routes"), under("src", "api")],
            [re.compile(r"\.rs$")],
            " endpoint (handler + service)",
        )
    return (
        [
            under("apps", app, "src", "app", "v1"),
            under("apps", app, "src", "app"),
            under("src", "app"),
        ],
        [re.compile(r"\.controller\.ts$")],
        " endpoint (controller + service + module)",
    )


def _feature_name(basename: str) -> str:
    name = basename
    for suffix in _NAME_SUFFIXES:
        name = name.removesuffix(suffix)
    return name


def find_endpoint_examples(
    project_root: str | os.PathLike[str], app: str, framework: str
) -> list[Example]:
    """Return up to three endpoint directories to copy, newest first.

    The first search path that holds any matching file is used; the newest
    example is marked as the best one to follow.
    """
    search_paths, patterns, description_suffix = _endpoint_search(project_root, app, framework)

    candidates: list[tuple[int, Example]] = []
    for search_path in search_paths:
        if not os.path.exists(search_path):
            continue
        for entry in _walk_files(search_path):
            basename = entry.name
            if basename in _SKIPPED_BASENAMES:
                continue
            if not any(pattern.search(basename) for pattern in patterns):
                continue
            try:
                mtime = int(entry.stat(follow_symlinks=False).st_mtime)
            except OSError:
                continue
            example = Example(
                path=_rel_dir(project_root, entry.path),
                description=_feature_name(basename) + description_suffix,
            )
            candidates.append((mtime, example))
        if candidates:
            break

    candidates.sort(key=lambda item: item[0], reverse=True)
    examples = [example for _, example in candidates[:MAX_EXAMPLES]]
    if examples:
        examples[0].description += _BEST_SUFFIX
    return examples


def find_feature_examples(project_root: str | os.PathLike[str], app: str) -> list[Example]:
    """Return up to three feature-module directories of an app."""
    if app:
        search_path = os.path.join(project_root, "apps", app, "src")
    else:
        search_path = os.path.join(project_root, "src")

    examples: list[Example] = []
    for entry in _walk_files(search_path):
        if len(examples) >= MAX_EXAMPLES:
            break
        if not _MODULE_RE.search(entry.path) or "app.module" in entry.path:
            continue
        examples.append(
            Example(
                path=_rel_dir(project_root, entry.path),
                description=entry.name.removesuffix(".module.ts") + " feature module",
            )
        )
    return examples


def _skips_node_modules(path: str) -> bool:
    return "node_modules" in path


def find_test_examples(project_root: str | os.PathLike[str], app: str) -> list[Example]:
    """Return up to two test files of an app, or of the whole project."""
    search_path = app_source_path(project_root, app)
    scoped = search_path is not None
    root = search_path if scoped else project_root

    examples: list[Example] = []
    for entry in _walk_files(root, _skips_node_modules):
        if len(examples) >= MAX_TEST_EXAMPLES:
            break
        if _skips_node_modules(entry.path) or not _TEST_FILE_RE.search(entry.path):
            continue
        description = f"Test file example ({entry.name})" if scoped else "Test file example"
        examples.append(
            Example(path=os.path.relpath(entry.path, project_root), description=description)
        )
    return examples