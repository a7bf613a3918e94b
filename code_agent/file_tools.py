"""
file_tools.py - The three filesystem tools the model can call.

    read_file   read a file's text
    list_files  list a directory, one level into subdirectories
    edit_file   replace text in a file, or create it when old_str is empty

All paths resolve against the agent's working directory and may not escape
it. Tools are built per workdir so nothing here is global.
"""

import json
from pathlib import Path

from .errors import ToolInputError
from .schema import Field, InputShape
from .tools import ToolDefinition, tool

READ_FILE_INPUT = InputShape([
    Field("path", "string", "The relative path of a file in the working directory."),
])

LIST_FILES_INPUT = InputShape([
    Field(
        "path", "string",
        "Optional relative path to list files from. Defaults to current directory if not provided.",
        required=False,
    ),
])

EDIT_FILE_INPUT = InputShape([
    Field("path", "string", "The path to the file"),
    Field("old_str", "string",
          "Text to search for - must match exactly and must only have one match exactly"),
    Field("new_str", "string", "Text to replace old_str with"),
])

PATH_NOTE = (
    " Paths are relative to the working directory; absolute paths are only"
    " accepted when they point inside it."
)


def safe_path(workdir: Path, p: str) -> Path:
    """Ensure path stays within workspace."""
    path = (workdir / p).resolve()
    if not path.is_relative_to(workdir):
        raise ValueError(f"Path escapes workspace: {p}")
    return path


def _list_entries(root: Path, base: Path, depth: int) -> list[str]:
    entries = []
    for child in sorted(base.iterdir()):
        rel = child.relative_to(root).as_posix()
        if child.is_dir():
            entries.append(rel + "/")
            if depth > 0:
                entries.extend(_list_entries(root, child, depth - 1))
        else:
            entries.append(rel)
    return entries


def build_file_tools(workdir: Path) -> list[ToolDefinition]:
    """Create read_file, list_files and edit_file bound to `workdir`."""
    workdir = Path(workdir).resolve()

    @tool(
        name="read_file",
        description=(
            "Read the contents of a given relative file path. Use this when you want "
            "to see what's inside a file. Do not use this with directory names."
            + PATH_NOTE
        ),
        shape=READ_FILE_INPUT,
    )
    def read_file(args: dict) -> str:
        fp = safe_path(workdir, args["path"])
        if not fp.exists():
            raise FileNotFoundError(f"file not found: {args['path']}")
        if fp.is_dir():
            raise IsADirectoryError(f"{args['path']} is a directory, not a file")
        return fp.read_text()

    @tool(
        name="list_files",
        description=(
            "List files and directories at a given path. If no path is provided, "
            "lists files in the current directory."
            + PATH_NOTE
        ),
        shape=LIST_FILES_INPUT,
    )
    def list_files(args: dict) -> str:
        base = safe_path(workdir, args["path"] or ".")
        if not base.is_dir():
            raise NotADirectoryError(f"not a directory: {args['path']}")
        return json.dumps(_list_entries(base, base, depth=1))

    @tool(
        name="edit_file",
        description=(
            "Make edits to a text file.\n\n"
            "Replaces 'old_str' with 'new_str' in the given file. 'old_str' and "
            "'new_str' MUST be different from each other.\n\n"
            "If the file specified with path doesn't exist, it will be created."
            + PATH_NOTE
        ),
        shape=EDIT_FILE_INPUT,
    )
    def edit_file(args: dict) -> str:
        path, old_str, new_str = args["path"], args["old_str"], args["new_str"]
        if not path:
            raise ToolInputError("invalid input parameters: path is empty")
        if old_str == new_str:
            raise ToolInputError("invalid input parameters: old_str and new_str are identical")

        fp = safe_path(workdir, path)
        if not fp.exists():
            if old_str != "":
                raise FileNotFoundError(f"file not found: {path}")
            fp.parent.mkdir(parents=True, exist_ok=True)
            fp.write_text(new_str)
            return f"Successfully created file {path}"

        text = fp.read_text()
        if old_str == "":
            # Only an empty existing file can be filled without an anchor.
            if text:
                raise ToolInputError("old_str must not be empty when editing a non-empty file")
            fp.write_text(new_str)
            return "OK"
        if old_str not in text:
            raise ValueError("old_str not found in file")
        fp.write_text(text.replace(old_str, new_str))
        return "OK"

    return [read_file, list_files, edit_file]
