# taskblueprint

`taskblueprint` reads an existing project and collects what a developer or a
code assistant needs to add code that follows the project's habits: example
files, condensed code snippets, import blocks, detected conventions, and team
knowledge such as decisions, warnings and files that change together. The
results fit into a `Blueprint`, which serializes to compact JSON.

The package has no dependencies outside the standard library.

## Installation

```
pip install taskblueprint
```

## Modules

### `taskblueprint.models`

Dataclasses that make up a blueprint: `TaskType` (`add-endpoint`,
`add-feature`, `add-service`, `fix-bug`, `refactor`, `add-test`),
`FilePattern`, `Example`, `SnippetEntry`, `NamingConvention`, `Conventions`,
`Decision`, `Warning`, `Correlation` and `Blueprint`.

`Blueprint.to_dict()` returns plain data and leaves out optional parts that
are empty. Snippet and import keys are sorted. `Blueprint.to_json()` returns
compact JSON. In that JSON, `&`, `<`, `>`, U+2028 and U+2029 are written as
`\u` escapes.

### `taskblueprint.condense`

- `to_pascal_case(text)`: `"rma"` becomes `"Rma"` and `"alarm-events"`
  becomes `"AlarmEvents"`.
- `templatize(text, feature_name)`: replaces the PascalCase form of the
  feature name with `{Name}`, then the name itself with `{name}`.
- `condense_source(lines, feature_name)`: keeps decorators, class,
  constructor and method signatures, and exported constants, types and
  interfaces. It drops leading imports, comments, method bodies and
  parameter decorators such as `@Body`. Duplicate lines are removed, the
  result is cut to 20 lines, and then it is templatized.
- `extract_snippet(path, feature_name, description)`: returns a
  `SnippetEntry` for a file. It returns `None` if the file cannot be read or
  nothing is left after condensing.
- `extract_file_imports(path, feature_name)`: returns the file's leading
  `import` lines, templatized and limited to five. The result is keyed by
  file kind: `controller`, `test`, `service`, `module` or `other`.
- `collect_signature`, `collect_decorator_block` and `snippet_description`
  are the helpers used by the functions above.

### `taskblueprint.snippets`

- `extract_snippets(project_root, example_dir, feature_name)`: returns
  snippets keyed by `controller`, `service`, `module`, `schema` (the first
  usable file in `schemas/`), `types` (the first usable file in `types/`)
  and `test` (`<feature>.service.spec.ts`, `.controller.spec.ts` or
  `.spec.ts`). Each snippet records its `source_file` relative to the
  project root.
- `extract_imports(example_dir, feature_name)`: returns the import blocks of
  the same files, keyed the same way.

Both return an empty dict when the directory cannot be read.

### `taskblueprint.detect`

- `search_code(pattern, root, glob, limit)`: returns matching lines as
  `CodeMatch(path, line, content)`. It skips `node_modules` and hidden
  directories. It raises `FileNotFoundError` if `root` is not a directory.
- `detect_framework(project_root)`: checks `package.json`, `go.mod`, the
  Python dependency files and `Cargo.toml`. It returns one of `nestjs`,
  `express`, `go-gin`, `go-echo`, `go`, `python-fastapi`, `python-flask`,
  `python-django`, `rust-actix`, `rust-axum`, `rust-rocket`, `rust` or
  `unknown`.
- `detect_test_framework(project_root)`: returns `jest`, `mocha`, `vitest`
  or `unknown`, based on `package.json`.
- `app_source_path(project_root, app)`: returns `apps/<app>/src/app` or
  `apps/<app>/src`. With no app, it returns `src/app` or `src`. It returns
  `None` if a named app has neither directory.
- `detect_naming_conventions(search_path)`: guesses singular or plural file
  names from the feature directories.
- `detect_conventions(project_root, app)`: detects the auth guard, the
  validation pipe (ZodPipe or ValidationPipe), the response envelope,
  logging, error handling and naming. It returns `None` when none of these
  is found.

### `taskblueprint.examples`

- `find_endpoint_examples(project_root, app, framework)`: returns up to
  three example directories for the given framework, newest first. The
  first one is marked as the best example to follow.
- `find_feature_examples(project_root, app)`: returns up to three
  directories that hold a `*.module.ts`. `app.module` is ignored.
- `find_test_examples(project_root, app)`: returns up to two `.spec.ts` or
  `.test.ts` files from the app's source directory. If the app has no
  source directory, the whole project is searched.

### `taskblueprint.knowledge`

`task_keywords(task_type, app)` returns the keywords that make knowledge
relevant to a task.

`KnowledgeBase(tc_dir)` reads these files from `<tc_dir>/knowledge/`:

| File | Contents |
|------|----------|
| `decisions.json` | list of decisions (`id`, `content`, `reason`, `context`, `tags`) |
| `warnings.json` | list of warnings (`content`, `reason`, `severity`, `tags`) |
| `git-correlations.json` | list of `{ "files": [...], "confidence": n, "reason": "..." }` |
| `git-experts.json` | map of path to `{ "contributors": [{ "name": "..." }] }` |

`KnowledgeBase` has these methods:

- `decisions_for` returns up to five decisions, those with the most tags first.
- `warnings_for` returns up to five warnings.
- `file_correlations` returns up to five correlations.
- `endpoint_correlations` returns up to five correlations.
- `experts_for` returns up to two contributor names.

A file that is missing or cannot be parsed yields an empty list.

## Example

```python
import os

from taskblueprint.detect import detect_conventions, detect_framework
from taskblueprint.examples import find_endpoint_examples
from taskblueprint.knowledge import KnowledgeBase
from taskblueprint.models import Blueprint, TaskType
from taskblueprint.snippets import extract_imports, extract_snippets

root = "/path/to/project"
framework = detect_framework(root)
examples = find_endpoint_examples(root, "billing", framework)

blueprint = Blueprint(task_type=TaskType.ADD_ENDPOINT, app="billing", examples=examples)
if examples:
    example_dir = os.path.join(root, examples[0].path)
    feature = os.path.basename(examples[0].path)
    blueprint.snippets = extract_snippets(root, example_dir, feature)
    blueprint.imports = extract_imports(example_dir, feature)
blueprint.conventions = detect_conventions(root, "billing")

knowledge = KnowledgeBase(os.path.join(root, ".teamcontext"))
blueprint.decisions = knowledge.decisions_for(TaskType.ADD_ENDPOINT, "billing")
blueprint.warnings = knowledge.warnings_for(TaskType.ADD_ENDPOINT, "billing")

print(blueprint.to_json())
```

## What the package does not do

The package does not assemble a complete blueprint in a single call. You
combine the parts yourself, as in the example above.

It also does not provide:

- file patterns for each framework
- checklists for each task type
- task descriptions
- confidence scoring
- trimming of a blueprint to a token budget

The `Blueprint` fields for these (`file_pattern`, `checklist`, `description`,
`confidence`, `source`) exist, but you fill them in yourself. There is no
command-line tool.