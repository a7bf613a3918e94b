"""Tests for the tool registry and the filesystem tools."""
import json

import pytest

from code_agent.errors import (
    DuplicateToolError,
    ToolErrorKind,
    ToolExecutionError,
    ToolInputError,
    UnknownToolError,
)
from code_agent.file_tools import build_file_tools
from code_agent.messages import ToolUseBlock
from code_agent.schema import Field, InputShape
from code_agent.tools import ToolRegistry, tool


@tool(name="echo", description="Echo text back.", shape=InputShape([Field("text", "string")]))
def echo_tool(args):
    return args["text"]


@tool(name="boom", description="Always fails.", shape=InputShape([]))
def boom_tool(args):
    raise RuntimeError("kaboom")


def raw(**kwargs) -> bytes:
    return json.dumps(kwargs).encode()


@pytest.fixture
def registry(tmp_path):
    return ToolRegistry(build_file_tools(tmp_path))


# =============================================================================
# Registry
# =============================================================================

def test_file_tool_definitions(registry):
    assert registry.names() == ["read_file", "list_files", "edit_file"]
    for spec in registry.specs():
        assert spec["description"]
        assert spec["input_schema"]["type"] == "object"
        assert spec["input_schema"]["properties"]


def test_specs_are_stable(tmp_path):
    first = json.dumps(ToolRegistry(build_file_tools(tmp_path)).specs())
    second = json.dumps(ToolRegistry(build_file_tools(tmp_path)).specs())
    assert first == second


def test_duplicate_registration_rejected():
    registry = ToolRegistry([echo_tool])
    with pytest.raises(DuplicateToolError):
        registry.register(echo_tool)


def test_register_chains():
    registry = ToolRegistry().register(echo_tool).register(boom_tool)
    assert registry.names() == ["echo", "boom"]
    assert len(registry) == 2


def test_dispatch_unknown_tool():
    registry = ToolRegistry([echo_tool])
    with pytest.raises(UnknownToolError) as exc:
        registry.dispatch("nonexistent_tool", b"{}")
    assert exc.value.kind is ToolErrorKind.UNKNOWN_TOOL


def test_dispatch_wraps_handler_failure():
    registry = ToolRegistry([boom_tool])
    with pytest.raises(ToolExecutionError, match="kaboom"):
        registry.dispatch("boom", b"{}")


def test_dispatch_bad_input():
    registry = ToolRegistry([echo_tool])
    with pytest.raises(ToolInputError):
        registry.dispatch("echo", b"{not json")


def test_execute_converts_errors_to_results():
    registry = ToolRegistry([echo_tool, boom_tool])

    ok = registry.execute(ToolUseBlock("t1", "echo", raw(text="hi")))
    assert (ok.tool_use_id, ok.content, ok.is_error) == ("t1", "hi", False)

    missing = registry.execute(ToolUseBlock("t2", "nope", b"{}"))
    assert missing.tool_use_id == "t2"
    assert missing.is_error
    assert "nope" in missing.content

    failed = registry.execute(ToolUseBlock("t3", "boom", b"{}"))
    assert failed.is_error
    assert failed.content == "kaboom"


# =============================================================================
# read_file
# =============================================================================

def test_read_file(registry, tmp_path):
    content = "Hello, World!\nThis is a test file."
    (tmp_path / "test.txt").write_text(content)
    assert registry.dispatch("read_file", raw(path="test.txt")) == content


def test_read_file_missing(registry):
    with pytest.raises(ToolExecutionError, match="file not found"):
        registry.dispatch("read_file", raw(path="non_existent_file.txt"))


def test_read_file_directory(registry, tmp_path):
    (tmp_path / "sub").mkdir()
    with pytest.raises(ToolExecutionError, match="directory"):
        registry.dispatch("read_file", raw(path="sub"))


def test_read_file_absolute_path_inside_workdir(registry, tmp_path):
    (tmp_path / "abs.txt").write_text("absolute")
    assert registry.dispatch("read_file", raw(path=str(tmp_path / "abs.txt"))) == "absolute"


def test_descriptions_state_path_rules(registry):
    for spec in registry.specs():
        assert "relative to the working directory" in spec["description"]


def test_read_file_outside_workdir(registry):
    with pytest.raises(ToolExecutionError, match="escapes workspace"):
        registry.dispatch("read_file", raw(path="../../etc/passwd"))


# =============================================================================
# list_files
# =============================================================================

def _make_tree(root):
    for rel in ["file1.txt", "file2.go", "subdir/file3.txt", "subdir/deeper/file4.txt"]:
        fp = root / rel
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text("test content")


def test_list_files(registry, tmp_path):
    _make_tree(tmp_path)
    files = json.loads(registry.dispatch("list_files", raw(path="")))
    assert files == [
        "file1.txt",
        "file2.go",
        "subdir/",
        "subdir/deeper/",
        "subdir/file3.txt",
    ]


def test_list_files_default_path(registry, tmp_path):
    _make_tree(tmp_path)
    assert registry.dispatch("list_files", b"{}") == registry.dispatch("list_files", raw(path="."))


def test_list_files_subdirectory(registry, tmp_path):
    _make_tree(tmp_path)
    files = json.loads(registry.dispatch("list_files", raw(path="subdir")))
    assert files == ["deeper/", "deeper/file4.txt", "file3.txt"]


def test_list_files_not_a_directory(registry, tmp_path):
    (tmp_path / "a.txt").write_text("x")
    with pytest.raises(ToolExecutionError, match="not a directory"):
        registry.dispatch("list_files", raw(path="a.txt"))


# =============================================================================
# edit_file
# =============================================================================

def test_edit_file_replaces(registry, tmp_path):
    fp = tmp_path / "test.txt"
    fp.write_text("Hello, World!\nThis is a test.")
    result = registry.dispatch("edit_file", raw(path="test.txt", old_str="World", new_str="Python"))
    assert result == "OK"
    assert fp.read_text() == "Hello, Python!\nThis is a test."


def test_edit_file_replaces_all_occurrences(registry, tmp_path):
    fp = tmp_path / "a.txt"
    fp.write_text("x-x-x")
    registry.dispatch("edit_file", raw(path="a.txt", old_str="x", new_str="y"))
    assert fp.read_text() == "y-y-y"


def test_edit_file_creates_missing_file(registry, tmp_path):
    result = registry.dispatch(
        "edit_file", raw(path="nested/new.txt", old_str="", new_str="New file content")
    )
    assert "Successfully created" in result
    assert result != "OK"
    assert (tmp_path / "nested" / "new.txt").read_text() == "New file content"


def test_edit_file_old_str_not_found(registry, tmp_path):
    (tmp_path / "test.txt").write_text("Hello")
    with pytest.raises(ToolExecutionError, match="old_str not found"):
        registry.dispatch("edit_file", raw(path="test.txt", old_str="nonexistent", new_str="x"))


def test_edit_file_same_strings_rejected_before_touching_disk(registry, tmp_path):
    with pytest.raises(ToolInputError, match="identical"):
        registry.dispatch("edit_file", raw(path="ghost.txt", old_str="", new_str=""))
    assert not (tmp_path / "ghost.txt").exists()

    fp = tmp_path / "test.txt"
    fp.write_text("same")
    with pytest.raises(ToolInputError):
        registry.dispatch("edit_file", raw(path="test.txt", old_str="same", new_str="same"))
    assert fp.read_text() == "same"


def test_edit_file_empty_path(registry):
    with pytest.raises(ToolInputError, match="path is empty"):
        registry.dispatch("edit_file", raw(path="", old_str="", new_str="x"))


def test_edit_file_empty_old_str_on_existing_file(registry, tmp_path):
    fp = tmp_path / "full.txt"
    fp.write_text("content")
    with pytest.raises(ToolInputError):
        registry.dispatch("edit_file", raw(path="full.txt", old_str="", new_str="x"))
    assert fp.read_text() == "content"

    empty = tmp_path / "empty.txt"
    empty.write_text("")
    assert registry.dispatch("edit_file", raw(path="empty.txt", old_str="", new_str="x")) == "OK"
    assert empty.read_text() == "x"


def test_edit_file_missing_with_old_str(registry):
    with pytest.raises(ToolExecutionError, match="file not found"):
        registry.dispatch("edit_file", raw(path="nope.txt", old_str="a", new_str="b"))
