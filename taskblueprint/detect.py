"""Detecting frameworks and coding conventions of a project."""

from __future__ import annotations

import fnmatch
import os
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from taskblueprint.models import Conventions, NamingConvention

_SKIPPED_DIRS = frozenset({"node_modules"})
_GUARD_RE = re.compile(r"@UseGuards\((\w+)\)")
_DI_CONVENTION = "constructor(private readonly dep: Dep) — always private readonly"
_PYTHON_MANIFESTS = ("requirements.txt", "pyproject.toml", "setup.py", "Pipfile")
_NEST_INDICATORS = ("@nestjs/core", "@Module", "@Controller")


@dataclass(frozen=True)
class CodeMatch:
    """One line of code that matched a search."""

    path: str
    line: int
    content: str


def search_code(
    pattern: str, root: str | os.PathLike[str], glob: str = "*", limit: int = 0
) -> list[CodeMatch]:
    """Return lines under root matching the regex, in files matching glob.

    At most ``limit`` matches are returned when limit is positive. Raises
    FileNotFoundError when root is not a directory.
    """
    regex = re.compile(pattern)
    if not os.path.isdir(root):
        raise FileNotFoundError(f"no such directory: {root}")

    matches: list[CodeMatch] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if name not in _SKIPPED_DIRS and not name.startswith(".")
        )
        for name in sorted(filenames):
            if not fnmatch.fnmatchcase(name, glob):
                continue
            path = os.path.join(dirpath, name)
            try:
                with open(path, encoding="utf-8", errors="replace") as handle:
                    for number, line in enumerate(handle, 1):
                        if regex.search(line):
                            matches.append(CodeMatch(path, number, line.rstrip("\r\n")))
                            if 0 < limit <= len(matches):
                                return matches
            except OSError:
                continue
    return matches


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def detect_framework(project_root: str | os.PathLike[str]) -> str:
    """Return the web framework the project uses, or "unknown"."""
    root = Path(project_root)

    package_json = _read(root / "package.json")
    if package_json is not None:
        if any(indicator in package_json for indicator in _NEST_INDICATORS):
            return "nestjs"
        if "express" in package_json:
            return "express"

    go_mod = _read(root / "go.mod")
    if go_mod is not None:
        if "github.com/gin-gonic/gin" in go_mod:
            return "go-gin"
        if "github.com/labstack/echo" in go_mod:
            return "go-echo"
        return "go"

    for manifest in _PYTHON_MANIFESTS:
        content = _read(root / manifest)
        if content is None:
            continue
        for name in ("fastapi", "flask", "django"):
            if name in content:
                return "python-" + name

    cargo = _read(root / "Cargo.toml")
    if cargo is not None:
        if "actix-web" in cargo:
            return "rust-actix"
        if "axum" in cargo:
            return "rust-axum"
        if "rocket" in cargo:
            return "rust-rocket"
        return "rust"

    return "unknown"


def detect_test_framework(project_root: str | os.PathLike[str]) -> str:
    """Return the JavaScript test framework named in package.json, or "unknown"."""
    content = _read(Path(project_root) / "package.json")
    if content is not None:
        for name in ("jest", "mocha", "vitest"):
            if name in content:
                return name
    return "unknown"


def app_source_path(project_root: str | os.PathLike[str], app: str) -> str | None:
    """Return the source directory of an app, or None if a named app has none."""
    if not app:
        src_app = os.path.join(project_root, "src", "app")
        if os.path.exists(src_app):
            return src_app
        return os.path.join(project_root, "src")

    for candidate in (
        os.path.join(project_root, "apps", app, "src", "app"),
        os.path.join(project_root, "apps", app, "src"),
    ):
        if os.path.exists(candidate):
            return candidate
    return None


def _subdirectories(path: str | os.PathLike[str]) -> list[str]:
    with os.scandir(path) as entries:
        return [entry.name for entry in entries if entry.is_dir(follow_symlinks=False)]


def detect_naming_conventions(search_path: str | os.PathLike[str]) -> NamingConvention | None:
    """Return naming conventions judged from the feature directories' names."""
    try:
        names = _subdirectories(search_path)
    except OSError:
        try:
            names = _subdirectories(os.path.join(search_path, "v1"))
        except OSError:
            return None

    plural = singular = 0
    for name in names:
        if name in ("schemas", "types", "node_modules"):
            continue
        if name.endswith("s") and not name.endswith("ss"):
            plural += 1
        else:
            singular += 1

    if singular >= plural:
        files = "singular: alarm.controller.ts (not alarms.controller.ts)"
    else:
        files = "plural: alarms.controller.ts"
    return NamingConvention(
        files=files,
        classes="PascalCase: AlarmController, AlarmService",
        methods="camelCase: createIssue, findDevices",
        types="Create{Name}Request, Create{Name}Response, Create{Name}ResponseData",
    )


def _count(pattern: str, search_path: str, glob: str, limit: int) -> int | None:
    try:
        return len(search_code(pattern, search_path, glob, limit))
    except OSError:
        return None


def _detect_auth_guard(search_path: str) -> str:
    try:
        matches = search_code(r"@UseGuards\(\w+", search_path, "*.controller.ts", 20)
    except OSError:
        return ""
    guards = Counter(
        found.group(1) for match in matches if (found := _GUARD_RE.search(match.content))
    )
    if not guards:
        return ""
    best, _ = guards.most_common(1)[0]
    return best + " (class-level on all REST controllers)"


def _detect_validation(search_path: str) -> str:
    zod = _count("ZodPipe", search_path, "*.ts", 20) or 0
    class_validator = _count("ValidationPipe", search_path, "*.ts", 20) or 0
    if zod > class_validator and zod > 0:
        return "ZodPipe — never class-validator"
    if class_validator > zod and class_validator > 0:
        return "ValidationPipe (class-validator)"
    if zod > 0:
        return "ZodPipe"
    return ""


def _detect_response_envelope(search_path: str) -> str:
    if _count(r"statusCode.*data|data.*statusCode", search_path, "*.controller.ts", 10):
        return "{ statusCode: number, data: T } — controller wraps, service returns plain"
    return ""


def _detect_logging(search_path: str) -> str:
    if _count(r"new Logger\(", search_path, "*.service.ts", 10):
        return "private readonly logger = new Logger(ClassName.name)"
    return ""


def _detect_error_handling(search_path: str) -> str:
    pattern = r"NotFoundException|ConflictException|BadRequestException"
    if _count(pattern, search_path, "*.service.ts", 10):
        return (
            "Throw NestJS exceptions (NotFoundException, ConflictException)"
            " — services transform external errors"
        )
    return "Throw framework-specific exceptions from service layer"


def detect_conventions(project_root: str | os.PathLike[str], app: str) -> Conventions | None:
    """Return the conventions found in an app's code, or None if none were found."""
    search_path = app_source_path(project_root, app)
    if search_path is None:
        return None

    conventions = Conventions(
        auth_guard=_detect_auth_guard(search_path),
        validation=_detect_validation(search_path),
        response_envelope=_detect_response_envelope(search_path),
        logging=_detect_logging(search_path),
        di=_DI_CONVENTION,
        error_handling=_detect_error_handling(search_path),
        naming=detect_naming_conventions(search_path),
    )
    detected = any(
        (
            conventions.auth_guard,
            conventions.validation,
            conventions.response_envelope,
            conventions.logging,
            conventions.naming is not None,
        )
    )
    return conventions if detected else None