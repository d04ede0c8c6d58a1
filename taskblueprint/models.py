"""Data structures that make up a task blueprint and their JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskType(str, Enum):
    """A common development task a blueprint can be generated for."""

    ADD_ENDPOINT = "add-endpoint"
    ADD_FEATURE = "add-feature"
    ADD_SERVICE = "add-service"
    FIX_BUG = "fix-bug"
    REFACTOR = "refactor"
    ADD_TEST = "add-test"


def _task_type_value(task_type: TaskType | str) -> str:
    if isinstance(task_type, TaskType):
        return task_type.value
    return str(task_type)


@dataclass
class FilePattern:
    """File layout to create for a task."""

    base_path: str
    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    register_in: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"base_path": self.base_path, "files": list(self.files)}
        if self.directories:
            data["directories"] = list(self.directories)
        if self.register_in:
            data["register_in"] = list(self.register_in)
        return data


@dataclass
class Example:
    """A real file or directory of the codebase to use as a pattern."""

    path: str
    description: str
    skeleton: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"path": self.path, "description": self.description}
        if self.skeleton:
            data["skeleton"] = self.skeleton
        return data


@dataclass
class SnippetEntry:
    """A templatized code snippet for one file type."""

    description: str
    code: str
    source_file: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "code": self.code,
            "source_file": self.source_file,
        }


@dataclass
class NamingConvention:
    """Detected naming patterns."""

    files: str = ""
    classes: str = ""
    methods: str = ""
    types: str = ""

    def to_dict(self) -> dict[str, Any]:
        items = {
            "files": self.files,
            "classes": self.classes,
            "methods": self.methods,
            "types": self.types,
        }
        return {key: value for key, value in items.items() if value}


@dataclass
class Conventions:
    """Conventions detected in an application's code."""

    auth_guard: str = ""
    validation: str = ""
    response_envelope: str = ""
    logging: str = ""
    di: str = ""
    error_handling: str = ""
    naming: NamingConvention | None = None

    def to_dict(self) -> dict[str, Any]:
        items = {
            "auth_guard": self.auth_guard,
            "validation": self.validation,
            "response_envelope": self.response_envelope,
            "logging": self.logging,
            "di": self.di,
            "error_handling": self.error_handling,
        }
        data: dict[str, Any] = {key: value for key, value in items.items() if value}
        if self.naming is not None:
            data["naming"] = self.naming.to_dict()
        return data


@dataclass
class Decision:
    """A team decision relevant to the task."""

    id: str
    title: str
    rationale: str = ""
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.rationale:
            data["rationale"] = self.rationale
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@dataclass
class Warning:
    """A pitfall to avoid."""

    title: str
    description: str = ""
    severity: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title}
        if self.description:
            data["description"] = self.description
        if self.severity:
            data["severity"] = self.severity
        return data


@dataclass
class Correlation:
    """Files that typically change together."""

    files: list[str]
    confidence: float
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"files": list(self.files), "confidence": self.confidence}
        if self.reason:
            data["reason"] = self.reason
        return data


_HTML_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Blueprint:
    """Structured, actionable plan for carrying out a development task."""

    task_type: TaskType | str
    description: str = ""
    app: str = ""
    path: str = ""
    file_pattern: FilePattern | None = None
    examples: list[Example] = field(default_factory=list)
    snippets: dict[str, SnippetEntry] = field(default_factory=dict)
    imports: dict[str, list[str]] = field(default_factory=dict)
    conventions: Conventions | None = None
    decisions: list[Decision] = field(default_factory=list)
    warnings: list[Warning] = field(default_factory=list)
    correlations: list[Correlation] = field(default_factory=list)
    checklist: list[str] = field(default_factory=list)
    confidence: float = 0.0
    source: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the blueprint as plain data, leaving out empty optional parts."""
        data: dict[str, Any] = {"task_type": _task_type_value(self.task_type)}
        if self.app:
            data["app"] = self.app
        if self.path:
            data["path"] = self.path
        data["description"] = self.description
        if self.file_pattern is not None:
            data["file_pattern"] = self.file_pattern.to_dict()
        if self.examples:
            data["examples"] = [example.to_dict() for example in self.examples]
        if self.snippets:
            data["snippets"] = {
                key: self.snippets[key].to_dict() for key in sorted(self.snippets)
            }
        if self.imports:
            data["imports"] = {key: list(self.imports[key]) for key in sorted(self.imports)}
        if self.conventions is not None:
            data["conventions"] = self.conventions.to_dict()
        if self.decisions:
            data["decisions"] = [decision.to_dict() for decision in self.decisions]
        if self.warnings:
            data["warnings"] = [warning.to_dict() for warning in self.warnings]
        if self.correlations:
            data["correlations"] = [item.to_dict() for item in self.correlations]
        if self.checklist:
            data["checklist"] = list(self.checklist)
        data["confidence"] = self.confidence
        data["source"] = self.source
        return data

    def to_json(self) -> str:
        """Return compact JSON with HTML-sensitive characters escaped."""
        text = json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
        for char, escaped in _HTML_ESCAPES.items():
            text = text.replace(char, escaped)
        return text