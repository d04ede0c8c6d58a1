[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskblueprint"
version = "0.1.0"
description = "Building blocks for task blueprints: snippets, imports, conventions, examples and team knowledge read from an existing codebase"
requires-python = ">=3.10"
dependencies = []
keywords = ["blueprint", "codebase", "conventions", "snippets", "scaffolding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["taskblueprint"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
