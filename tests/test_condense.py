import pytest

from taskblueprint.condense import (
    MAX_IMPORTS_PER_TYPE,
    MAX_SNIPPET_LINES,
    collect_decorator_block,
    collect_signature,
    condense_source,
    extract_file_imports,
    extract_snippet,
    snippet_description,
    templatize,
    to_pascal_case,
)

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

  @Post()
  create(@Body() createUserDto: CreateUserDto) {
    return this.usersService.create(createUserDto);
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

  create(dto: any) {
    return dto;
  }
}
"""


@pytest.mark.parametrize(
    "text,expected",
    [("rma", "Rma"), ("alarm-events", "AlarmEvents"), ("", "")],
)
def test_to_pascal_case(text, expected):
    assert to_pascal_case(text) == expected


def test_to_pascal_case_separators_only():
    assert to_pascal_case("--") == "--"


def test_templatize_replaces_both_forms():
    assert templatize("RmaService uses rma", "rma") == "{Name}Service uses {name}"


def test_templatize_without_feature_is_identity():
    assert templatize("RmaService", "") == "RmaService"


def test_collect_signature_single_line():
    assert collect_signature(["  findAll() {"], 0) == "  findAll() { }"


def test_collect_signature_multi_line_stops_at_paren():
    lines = ["  find(", "    id: string,", "  )", "  other"]
    assert collect_signature(lines, 0) == "\n".join(lines[:3])


def test_collect_signature_limits_continuation():
    lines = ["  f("] + ["    a,"] * 10
    assert collect_signature(lines, 0).count("\n") == 4


def test_collect_decorator_block_spans_arguments():
    lines = ["@Module({", "  imports: [],", "})", "export class AppModule {}"]
    assert collect_decorator_block(lines, 0) == "\n".join(lines[:3])


def test_collect_decorator_block_single_line():
    assert collect_decorator_block(["@Injectable()", "x"], 0) == "@Injectable()"


def test_condense_controller():
    result = condense_source(CONTROLLER.split("\n"), "users")
    assert result.startswith("@Controller('{name}')")
    assert "export class {Name}Controller {" in result
    assert "constructor(private readonly {name}Service: {Name}Service)" in result
    assert "@Get()" in result
    assert "import" not in result
    assert "return" not in result
    assert "users" not in result


def test_condense_service_keeps_injectable():
    result = condense_source(SERVICE.split("\n"), "users")
    assert result.split("\n")[0] == "@Injectable()"
    assert "export class {Name}Service {" in result


def test_condense_skips_param_decorators_and_comments():
    lines = [
        "/**",
        " * docs",
        " */",
        "// a comment",
        "@Body() dto: X,",
        "@Get()",
    ]
    assert condense_source(lines, "") == "@Get()"


def test_condense_export_const_is_collapsed():
    lines = [
        "export const CreateSchema = z.object({",
        "  name: z.string(),",
        "});",
    ]
    expected = "export const {Name}Schema = z.object({\n  // ...\n});"
    assert condense_source(lines, "create") == expected


def test_condense_export_interface_is_collapsed():
    lines = ["export interface UserDto {", "  id: string;", "}"]
    expected = "export interface {Name}Dto {\n  // fields...\n}"
    assert condense_source(lines, "user") == expected


def test_condense_deduplicates_lines():
    result = condense_source(["@Get()", "@Get()"], "")
    assert result.count("@Get()") == 1


def test_condense_caps_lines():
    lines = [f"@Dec{k}()" for k in range(40)]
    result = condense_source(lines, "")
    assert len(result.split("\n")) == MAX_SNIPPET_LINES


def test_condense_only_imports_is_empty():
    assert condense_source(["import a from 'b';", ""], "a") == ""


@pytest.mark.parametrize(
    "key,expected",
    [("controller", "REST controller pattern for this app"), ("test", "Unit test pattern"),
     ("widget", "widget pattern")],
)
def test_snippet_description(key, expected):
    assert snippet_description(key) == expected


def test_extract_snippet_reads_file(tmp_path):
    path = tmp_path / "users.service.ts"
    path.write_text(SERVICE)
    entry = extract_snippet(path, "users", "Injectable service pattern")
    assert entry.description == "Injectable service pattern"
    assert entry.source_file == ""
    assert entry.code == condense_source(SERVICE.split("\n"), "users")


def test_extract_snippet_missing_file(tmp_path):
    assert extract_snippet(tmp_path / "nope.ts", "x", "d") is None


def test_extract_snippet_without_content(tmp_path):
    path = tmp_path / "empty.ts"
    path.write_text("import a from 'b';\n")
    assert extract_snippet(path, "a", "d") is None


def test_extract_file_imports_controller(tmp_path):
    path = tmp_path / "users.controller.ts"
    path.write_text(CONTROLLER)
    result = extract_file_imports(path, "users")
    assert list(result) == ["controller"]
    assert result["controller"][1] == "import { {Name}Service } from './{name}.service';"


def test_extract_file_imports_caps_and_stops(tmp_path):
    path = tmp_path / "a.service.ts"
    body = "\n".join(f"import x{k} from 'm{k}';" for k in range(8))
    path.write_text(body + "\nconst a = 1;\nimport late from 'z';\n")
    imports = extract_file_imports(path, "")["service"]
    assert len(imports) == MAX_IMPORTS_PER_TYPE
    assert all("late" not in item for item in imports)


@pytest.mark.parametrize(
    "name,key",
    [("a.service.spec.ts", "test"), ("a.spec.ts", "test"), ("a.module.ts", "module"),
     ("a.ts", "other")],
)
def test_extract_file_imports_key(tmp_path, name, key):
    path = tmp_path / name
    path.write_text("import a from 'b';\n")
    assert extract_file_imports(path, "") == {key: ["import a from 'b';"]}


def test_extract_file_imports_missing(tmp_path):
    assert extract_file_imports(tmp_path / "none.ts", "x") is None