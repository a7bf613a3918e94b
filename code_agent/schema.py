"""
schema.py - Declarative tool input shapes and their JSON schemas.

Tools describe their input as an ordered table of fields instead of writing
JSON schema by hand:

    READ_FILE_INPUT = InputShape([
        Field("path", "string", "The relative path of a file in the working directory."),
    ])

    READ_FILE_INPUT.json_schema()
    -> {"type": "object",
        "properties": {"path": {"type": "string", "description": "..."}},
        "required": ["path"]}

The schema is sent to the model on every request, so generation is
deterministic: properties keep declaration order and `schema_bytes()` is a
canonical encoding that never changes between calls.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import SchemaError, ToolInputError

# JSON schema type -> accepted Python types after json.loads
JSON_TYPES: dict[str, tuple] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list,),
    "object": (dict,),
}


def _matches(type_name: str, value: Any) -> bool:
    # bool is an int subclass; only "boolean" may accept it
    if isinstance(value, bool) and type_name != "boolean":
        return False
    return isinstance(value, JSON_TYPES[type_name])


@dataclass(frozen=True)
class Field:
    """One entry of an input shape."""
    name: str
    type: str
    description: str = ""
    required: bool = True
    items: Optional[str] = None  # element type for arrays

    def __post_init__(self):
        if self.type not in JSON_TYPES:
            raise SchemaError(f"field '{self.name}': unsupported type '{self.type}'")
        if self.items is not None:
            if self.type != "array":
                raise SchemaError(f"field '{self.name}': items only apply to arrays")
            if self.items not in JSON_TYPES:
                raise SchemaError(f"field '{self.name}': unsupported item type '{self.items}'")

    def fragment(self) -> dict:
        frag: dict[str, Any] = {"type": self.type}
        if self.description:
            frag["description"] = self.description
        if self.items is not None:
            frag["items"] = {"type": self.items}
        return frag


@dataclass(frozen=True)
class InputShape:
    """Ordered, immutable description of a tool's input object."""
    fields: tuple = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable but store a tuple so the shape stays hashable.
        object.__setattr__(self, "fields", tuple(self.fields))
        seen = set()
        for f in self.fields:
            if f.name in seen:
                raise SchemaError(f"duplicate field '{f.name}'")
            seen.add(f.name)

    def json_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {f.name: f.fragment() for f in self.fields},
            "required": [f.name for f in self.fields if f.required],
        }

    def schema_bytes(self) -> bytes:
        """Canonical encoding. Identical for identical shapes."""
        return json.dumps(
            self.json_schema(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")


def generate_schema(shape: InputShape) -> dict:
    return shape.json_schema()


def decode_input(shape: InputShape, raw: bytes) -> dict:
    """
    Decode raw tool input against a shape.

    Returns a dict with one key per declared field; absent optional fields
    map to None. Keys the shape does not declare are dropped.
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        raise ToolInputError(f"invalid JSON input: {e}") from e

    if not isinstance(payload, dict):
        raise ToolInputError("tool input must be a JSON object")

    args = {}
    for f in shape.fields:
        if f.name not in payload or payload[f.name] is None:
            if f.required:
                raise ToolInputError(f"missing required field '{f.name}'")
            args[f.name] = None
            continue
        value = payload[f.name]
        if not _matches(f.type, value):
            raise ToolInputError(f"field '{f.name}' must be of type {f.type}")
        if f.items is not None and not all(_matches(f.items, v) for v in value):
            raise ToolInputError(f"field '{f.name}' must contain only {f.items} items")
        args[f.name] = value
    return args
