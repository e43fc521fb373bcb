"""Schema descriptors stored in ``.schema`` world files."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

PRIMITIVE_TYPES = frozenset(
    {
        "bool",
        "u8",
        "u16",
        "u32",
        "u64",
        "i8",
        "i16",
        "i32",
        "i64",
        "f32",
        "f64",
        "str",
        "wstr",
        "object",
        "class",
    }
)


@dataclass(frozen=True)
class GlobalData:
    """Decode context shared by every schema in a world."""

    types: frozenset[str] = frozenset()

    def __init__(self, types: Iterable[str] = ()) -> None:
        object.__setattr__(self, "types", frozenset(types))

    @classmethod
    def from_bytes(cls, data: bytes) -> "GlobalData":
        payload = _load_object(data, what="global data")
        types = payload.get("types", [])
        if not isinstance(types, list) or not all(isinstance(name, str) for name in types):
            raise ValueError("global data 'types' must be a list of names")
        return cls(types)


@dataclass
class SchemaDescriptor:
    enums: dict[str, list[str]] = field(default_factory=dict)
    structs: dict[str, dict[str, str]] = field(default_factory=dict)

    def __str__(self) -> str:
        blocks: list[str] = []
        for name in sorted(self.enums):
            body = "".join(f"    {variant} = {idx},\n" for idx, variant in enumerate(self.enums[name]))
            blocks.append(f"enum {name} {{\n{body}}}")
        for name in sorted(self.structs):
            fields = self.structs[name]
            body = "".join(f"    {field_name}: {fields[field_name]},\n" for field_name in sorted(fields))
            blocks.append(f"struct {name} {{\n{body}}}")
        return "\n\n".join(blocks)


def _load_object(data: bytes, *, what: str) -> dict[str, object]:
    try:
        payload = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ValueError(f"{what} is not UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"{what} is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{what} must be a JSON object")
    return payload


def _check_names(value: object, *, what: str) -> Mapping[str, object]:
    if not isinstance(value, dict):
        raise ValueError(f"'{what}' must be an object")
    return value


def decode_schema(data: bytes, global_data: GlobalData) -> SchemaDescriptor:
    """Decode schema bytes, checking every field type can be resolved.

    A field type is one of :data:`PRIMITIVE_TYPES`, an enum or struct the
    schema declares, a type listed in ``global_data``, or any of those with
    a trailing ``[]``.

    Raises:
        ValueError: the bytes are not a well-formed schema.
    """
    payload = _load_object(data, what="schema")
    enums: dict[str, list[str]] = {}
    for name, variants in _check_names(payload.get("enums", {}), what="enums").items():
        if not isinstance(variants, list) or not all(isinstance(v, str) for v in variants):
            raise ValueError(f"enum {name} must list variant names")
        if len(set(variants)) != len(variants):
            raise ValueError(f"enum {name} repeats a variant")
        enums[name] = list(variants)
    structs: dict[str, dict[str, str]] = {}
    for name, fields in _check_names(payload.get("structs", {}), what="structs").items():
        if not isinstance(fields, dict) or not all(isinstance(t, str) for t in fields.values()):
            raise ValueError(f"struct {name} must map field names to type names")
        structs[name] = dict(fields)

    overlap = enums.keys() & structs.keys()
    if overlap:
        raise ValueError(f"{sorted(overlap)[0]} is declared as both enum and struct")

    known = PRIMITIVE_TYPES | enums.keys() | structs.keys() | global_data.types
    for name, fields in structs.items():
        for field_name, type_name in fields.items():
            base = type_name[:-2] if type_name.endswith("[]") else type_name
            if base not in known:
                raise ValueError(f"{name}.{field_name} has unknown type {type_name}")
    return SchemaDescriptor(enums=enums, structs=structs)


__all__ = ["PRIMITIVE_TYPES", "GlobalData", "SchemaDescriptor", "decode_schema"]
