"""Team knowledge stored on disk: decisions, warnings, correlations and experts."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from taskblueprint.models import Correlation, Decision, TaskType, Warning

MAX_DECISIONS = 5
MAX_WARNINGS = 5
MAX_CORRELATIONS = 5
MAX_EXPERTS = 2
DEFAULT_CORRELATION_CONFIDENCE = 0.5

_ENDPOINT_REASON = "These files typically change together when adding/modifying endpoints"
_ENDPOINT_MARKERS = (".controller.", ".service.", ".module.", "app.module")

_TASK_KEYWORDS = {
    TaskType.ADD_ENDPOINT: (
        "api", "endpoint", "controller", "route", "rest", "http", "validation", "guard", "auth",
    ),
    TaskType.ADD_FEATURE: ("feature", "module", "service"),
    TaskType.ADD_SERVICE: ("service", "injection", "dependency"),
    TaskType.FIX_BUG: ("bug", "fix", "error", "issue"),
    TaskType.REFACTOR: ("refactor", "clean", "restructure", "migration"),
    TaskType.ADD_TEST: ("test", "spec", "mock", "jest", "coverage"),
}


def task_keywords(task_type: TaskType | str, app: str) -> list[str]:
    """Return the keywords that make knowledge relevant to a task."""
    keywords = [app] if app else []
    try:
        keywords.extend(_TASK_KEYWORDS[TaskType(task_type)])
    except ValueError:
        pass
    return keywords


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""


def _tags(record: dict[str, Any]) -> list[str]:
    value = record.get("tags")
    if not isinstance(value, list):
        return []
    return [tag for tag in value if isinstance(tag, str)]


def _matches(parts: list[str], keywords: list[str]) -> bool:
    text = " ".join(parts).lower()
    return any(keyword.lower() in text for keyword in keywords)


def _confidence(record: dict[str, Any]) -> float:
    value = record.get("confidence")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return DEFAULT_CORRELATION_CONFIDENCE


def _file_names(record: dict[str, Any]) -> list[str] | None:
    files = record.get("files")
    if not isinstance(files, list):
        return None
    return [name for name in files if isinstance(name, str)]


class KnowledgeBase:
    """Reads the knowledge files kept in a project's context directory."""

    def __init__(self, tc_dir: str | os.PathLike[str]) -> None:
        self.knowledge_dir = Path(tc_dir) / "knowledge"

    def _load(self, name: str) -> Any:
        try:
            return json.loads((self.knowledge_dir / name).read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None

    def _records(self, name: str) -> list[dict[str, Any]]:
        data = self._load(name)
        if not isinstance(data, list):
            return []
        if any(item is not None and not isinstance(item, dict) for item in data):
            return []
        return [item for item in data if isinstance(item, dict)]

    def decisions_for(self, task_type: TaskType | str, app: str) -> list[Decision]:
        """Return up to five relevant decisions, those with most tags first."""
        keywords = task_keywords(task_type, app)
        relevant = []
        for record in self._records("decisions.json"):
            tags = _tags(record)
            parts = [
                _text(record, "content"),
                _text(record, "reason"),
                _text(record, "context"),
                " ".join(tags),
            ]
            if _matches(parts, keywords):
                relevant.append(
                    Decision(
                        id=_text(record, "id"),
                        title=_text(record, "content"),
                        rationale=_text(record, "reason"),
                        tags=tags,
                    )
                )
        relevant.sort(key=lambda decision: len(decision.tags), reverse=True)
        return relevant[:MAX_DECISIONS]

    def warnings_for(self, task_type: TaskType | str, app: str) -> list[Warning]:
        """Return up to five warnings relevant to a task."""
        keywords = task_keywords(task_type, app)
        relevant = []
        for record in self._records("warnings.json"):
            parts = [_text(record, "content"), _text(record, "reason"), " ".join(_tags(record))]
            if _matches(parts, keywords):
                relevant.append(
                    Warning(
                        title=_text(record, "content"),
                        description=_text(record, "reason"),
                        severity=_text(record, "severity"),
                    )
                )
        return relevant[:MAX_WARNINGS]

    def file_correlations(self, path: str) -> list[Correlation]:
        """Return up to five groups of files that change together with path."""
        result: list[Correlation] = []
        for record in self._records("git-correlations.json"):
            names = _file_names(record)
            if names is None:
                continue
            if any(path in name or name in path for name in names):
                result.append(Correlation(names, _confidence(record), _text(record, "reason")))
            if len(result) >= MAX_CORRELATIONS:
                break
        return result

    def endpoint_correlations(self, app: str) -> list[Correlation]:
        """Return up to five correlations among an app's controller, service and module files."""
        prefix = "apps/" + app
        result: list[Correlation] = []
        for record in self._records("git-correlations.json"):
            names = _file_names(record)
            if names is None:
                continue
            relevant = any(
                prefix in name and any(marker in name for marker in _ENDPOINT_MARKERS)
                for name in names
            )
            if relevant and len(names) > 1:
                reason = _text(record, "reason") or _ENDPOINT_REASON
                result.append(Correlation(names, _confidence(record), reason))
            if len(result) >= MAX_CORRELATIONS:
                break
        return result

    def experts_for(self, path: str) -> list[str]:
        """Return the names of up to two contributors who know the path."""
        data = self._load("git-experts.json")
        if not isinstance(data, dict):
            return []
        names: list[str] = []
        for file_path, info in data.items():
            if not (file_path in path or path in file_path):
                continue
            if not isinstance(info, dict):
                continue
            contributors = info.get("contributors")
            if not isinstance(contributors, list):
                continue
            for contributor in contributors:
                if isinstance(contributor, dict) and isinstance(contributor.get("name"), str):
                    names.append(contributor["name"])
                    if len(names) >= MAX_EXPERTS:
                        return names
        return names