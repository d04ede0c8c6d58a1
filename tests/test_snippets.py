import os

import pytest

from taskblueprint.condense import snippet_description
from taskblueprint.snippets import extract_imports, extract_snippets

CONTROLLER = """
import { Controller, Get, Post, Body, Param } from '@nestjs/common';
import { UsersService } from './users.service';

@Controller('users')
export class UsersController {
  constructor(private readonly usersService: UsersService) {}

  @Get()
  findAll() {
    return this.usersService.findAll();
  }
}
"""

SERVICE = """
import { Injectable } from '@nestjs/common';

@Injectable()
export class UsersService {
  findAll() {
    return [];
  }
}
"""

MODULE = """
import { Module } from '@nestjs/common';

@Module({
  providers: [UsersService],
})
export class UsersModule {}
"""

SCHEMA = """
import { z } from 'zod';

export const createUsersSchema = z.object({
  name: z.string(),
});
"""

SPEC = """
import { UsersService } from './users.service';

export const mockRepo = {};
"""


@pytest.fixture
def project(tmp_path):
    example = tmp_path / "src" / "app" / "users"
    (example / "schemas").mkdir(parents=True)
    (example / "users.controller.ts").write_text(CONTROLLER)
    (example / "users.service.ts").write_text(SERVICE)
    (example / "users.module.ts").write_text(MODULE)
    (example / "schemas" / "users.schemas.ts").write_text(SCHEMA)
    (example / "users.service.spec.ts").write_text(SPEC)
    return tmp_path, example


def test_snippet_keys(project):
    root, example = project
    snippets = extract_snippets(root, example, "users")
    assert set(snippets) == {"controller", "service", "module", "schema", "test"}


def test_snippet_source_files_are_relative(project):
    root, example = project
    snippets = extract_snippets(root, example, "users")
    assert snippets["controller"].source_file == os.path.join(
        "src", "app", "users", "users.controller.ts"
    )
    assert snippets["schema"].source_file == os.path.join(
        "src", "app", "users", "schemas", "users.schemas.ts"
    )


def test_snippet_descriptions(project):
    root, example = project
    snippets = extract_snippets(root, example, "users")
    for key in ("controller", "service", "module"):
        assert snippets[key].description == snippet_description(key)
    assert snippets["schema"].description == "Zod validation schema pattern"
    assert snippets["test"].description == "Unit test pattern"


def test_snippet_code_is_templatized(project):
    root, example = project
    code = extract_snippets(root, example, "users")["controller"].code
    assert "@Controller('{name}')" in code
    assert "class {Name}Controller" in code
    assert "users" not in code


def test_snippets_of_empty_directory(tmp_path):
    assert extract_snippets(tmp_path, tmp_path, "users") == {}


def test_snippets_of_missing_directory(tmp_path):
    assert extract_snippets(tmp_path, tmp_path / "absent", "users") == {}


def test_imports_keys(project):
    _, example = project
    imports = extract_imports(example, "users")
    assert set(imports) == {"controller", "service", "module", "test"}


def test_imports_are_templatized(project):
    _, example = project
    imports = extract_imports(example, "users")
    assert len(imports["controller"]) == 2
    assert any("{Name}Service" in line for line in imports["controller"])
    assert all(line.startswith("import ") for line in imports["controller"])
    assert imports["test"][0].endswith("'./{name}.service';")


def test_imports_of_file_without_imports(tmp_path):
    (tmp_path / "users.controller.ts").write_text("export class UsersController {}\n")
    assert extract_imports(tmp_path, "users") == {"controller": []}


def test_imports_of_missing_directory(tmp_path):
    assert extract_imports(tmp_path / "absent", "users") == {}