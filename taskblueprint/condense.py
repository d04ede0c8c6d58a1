"""Condensing and templatizing source files into compact snippets."""

from __future__ import annotations

import os
import re
from pathlib import Path

from taskblueprint.models import SnippetEntry

MAX_SNIPPET_LINES = 20
MAX_IMPORTS_PER_TYPE = 5

_IMPORT_RE = re.compile(r"^\s*import\s+", re.ASCII)
_JSDOC_START_RE = re.compile(r"^\s*/\*\*", re.ASCII)
_JSDOC_END_RE = re.compile(r"\*/\s*$", re.ASCII)
_BLOCK_COMMENT_RE = re.compile(r"^\s*\*", re.ASCII)
_LINE_COMMENT_RE = re.compile(r"^\s*//", re.ASCII)
_DECORATOR_RE = re.compile(r"^\s*@(\w+)", re.ASCII)
_CLASS_RE = re.compile(r"^\s*(export\s+)?(abstract\s+)?class\s+\w+", re.ASCII)
_CONSTRUCTOR_RE = re.compile(r"^\s*constructor\s*\(", re.ASCII)
_METHOD_RE = re.compile(
    r"^\s*(private\s+|public\s+|protected\s+)?(static\s+)?(async\s+)?(\w+)\s*(<[^>]+>)?\s*\(",
    re.ASCII,
)
_EXPORT_CONST_RE = re.compile(r"^\s*export\s+const\s+\w+", re.ASCII)
_EXPORT_TYPE_RE = re.compile(r"^\s*export\s+(?:type|interface)\s+", re.ASCII)

_PARAM_DECORATORS = frozenset(
    {
        "Body", "Query", "Param", "Headers", "Req", "Res", "Session",
        "UploadedFile", "UploadedFiles", "Ip", "HostParam",
    }
)
_CONTROL_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch"})

_SNIPPET_DESCRIPTIONS = {
    "controller": "REST controller pattern for this app",
    "service": "Injectable service pattern",
    "module": "Module registration pattern",
    "schema": "Zod validation schema pattern",
    "types": "Type definitions pattern",
    "test": "Unit test pattern",
}


def to_pascal_case(text: str) -> str:
    """Convert "rma" to "Rma" and "alarm-events" to "AlarmEvents"."""
    if not text:
        return ""
    parts = [part for part in re.split(r"[-_.]", text) if part]
    result = "".join(part[0].upper() + part[1:] for part in parts)
    if not result:
        return text[0].upper() + text[1:]
    return result


def templatize(text: str, feature_name: str) -> str:
    """Replace a feature name with {name} and its PascalCase form with {Name}."""
    if not feature_name:
        return text
    text = text.replace(to_pascal_case(feature_name), "{Name}")
    return text.replace(feature_name, "{name}")


def collect_signature(lines: list[str], start: int) -> str:
    """Collect a possibly multi-line signature and close its body as "{ }"."""
    sig = lines[start]
    if "{" not in sig:
        for line in lines[start + 1:start + 5]:
            sig += "\n" + line
            if "{" in line or ")" in line:
                break
    idx = sig.rfind("{")
    if idx > 0:
        sig = sig[: idx + 1].rstrip(" ") + " }"
    return sig


def collect_decorator_block(lines: list[str], start: int) -> str:
    """Collect a decorator together with its bracketed argument block."""
    block = lines[start]

    def balance(line: str) -> int:
        return line.count("(") - line.count(")") + line.count("{") - line.count("}")

    depth = balance(block)
    for line in lines[start + 1:]:
        if depth <= 0:
            break
        block += "\n" + line
        depth += balance(line)
    return block


def condense_source(lines: list[str], feature_name: str) -> str:
    """Build a condensed, templatized view of a source file.

    Keeps decorators, class and method signatures and exported declarations;
    drops imports, comments and bodies. The result holds at most
    MAX_SNIPPET_LINES entries.
    """
    if not lines:
        return ""

    start = 0
    for index, line in enumerate(lines):
        if not line.strip() or _IMPORT_RE.search(line):
            start = index + 1
            continue
        break

    result: list[str] = []
    seen: set[str] = set()

    def add(text: str) -> None:
        key = text.strip()
        if not key:
            if result and result[-1].strip():
                result.append("")
            return
        if key in seen:
            return
        seen.add(key)
        result.append(text)

    brace_depth = 0
    class_depth = -1
    skip_until = -1
    in_jsdoc = False

    i = start
    while i < len(lines):
        idx = i
        line = lines[idx]
        i += 1
        trimmed = line.strip()

        if _JSDOC_START_RE.search(trimmed):
            in_jsdoc = not _JSDOC_END_RE.search(trimmed)
            continue
        if in_jsdoc:
            if _JSDOC_END_RE.search(trimmed):
                in_jsdoc = False
            continue
        if _BLOCK_COMMENT_RE.search(trimmed) or _LINE_COMMENT_RE.search(trimmed):
            continue

        if skip_until >= 0:
            brace_depth = max(brace_depth + line.count("{") - line.count("}"), 0)
            if brace_depth <= skip_until:
                skip_until = -1
                if class_depth >= 0 and brace_depth == class_depth:
                    add("}")
                    class_depth = -1
            continue

        line_open = line.count("{")
        line_close = line.count("}")

        if trimmed.startswith("@Module") or trimmed.startswith("@Injectable"):
            block = collect_decorator_block(lines, idx)
            add(block)
            i += block.count("\n")
            brace_depth += block.count("{") - block.count("}")
            continue

        decorator = _DECORATOR_RE.search(trimmed)
        if decorator:
            if decorator.group(1) not in _PARAM_DECORATORS:
                add(line)
            continue

        if _CLASS_RE.search(trimmed):
            add(line)
            brace_depth += line_open - line_close
            class_depth = brace_depth - 1
            continue

        is_constructor = class_depth >= 0 and _CONSTRUCTOR_RE.search(trimmed)
        method = _METHOD_RE.search(trimmed) if class_depth >= 0 else None
        if is_constructor or method:
            if not is_constructor and method.group(4) in _CONTROL_KEYWORDS:
                brace_depth += line_open - line_close
                continue
            sig = collect_signature(lines, idx)
            add(sig)
            i += sig.count("\n")
            sig_open = sig.count("{")
            sig_close = sig.count("}")
            brace_depth += sig_open - sig_close
            if sig_open > sig_close:
                skip_until = brace_depth - (sig_open - sig_close)
            continue

        export_const = _EXPORT_CONST_RE.search(trimmed)
        if export_const or _EXPORT_TYPE_RE.search(trimmed):
            add(line)
            brace_depth += line_open - line_close
            if line_open > line_close:
                if export_const:
                    add("  // ...")
                    add("});")
                else:
                    add("  // fields...")
                    add("}")
                skip_until = brace_depth - line_open + line_close
            continue

        brace_depth = max(brace_depth + line_open - line_close, 0)
        if class_depth >= 0 and brace_depth <= class_depth:
            add("}")
            class_depth = -1

    text = "\n".join(result[:MAX_SNIPPET_LINES])
    return templatize(text, feature_name).strip()


def snippet_description(key: str) -> str:
    """Return the human description for a snippet key."""
    return _SNIPPET_DESCRIPTIONS.get(key, key + " pattern")


def extract_snippet(
    path: str | os.PathLike[str], feature_name: str, description: str
) -> SnippetEntry | None:
    """Read a file and return its condensed snippet, or None if there is none."""
    try:
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    condensed = condense_source(content.split("\n"), feature_name)
    if not condensed:
        return None
    return SnippetEntry(description=description, code=condensed)


def _import_key(basename: str) -> str:
    if ".controller." in basename:
        return "controller"
    if ".service.spec." in basename or ".spec." in basename:
        return "test"
    if ".service." in basename:
        return "service"
    if ".module." in basename:
        return "module"
    return "other"


def extract_file_imports(
    path: str | os.PathLike[str], feature_name: str
) -> dict[str, list[str]] | None:
    """Return the file's leading imports, templatized, keyed by file kind."""
    raw: list[str] = []
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                trimmed = line.strip()
                if trimmed.startswith("import "):
                    raw.append(trimmed)
                elif not trimmed:
                    continue
                elif raw:
                    break
    except OSError:
        return None

    templated = [templatize(item, feature_name) for item in raw][:MAX_IMPORTS_PER_TYPE]
    return {_import_key(os.path.basename(path)): templated}