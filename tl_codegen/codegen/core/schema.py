"""
Core schema representation for code generation.

Holds the already-parsed interface definition (custom types with their
constructors, and functions) that every generator works from, plus a
loader that builds the model from a JSON schema document.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union
from enum import Enum


class SchemaError(Exception):
    """Exception raised for malformed schema documents."""

    pass


class TypeKind(Enum):
    """Closed set of field types a schema can use."""

    BOOL = "Bool"
    INT32 = "int32"
    INT53 = "int53"
    INT64 = "int64"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    VECTOR = "vector"
    CUSTOM = "custom"


@dataclass(eq=False)
class Type:
    """A field type. VECTOR carries an element type, CUSTOM a type reference."""

    kind: TypeKind
    element: Optional["Type"] = None
    custom: Optional["CustomType"] = field(default=None, repr=False)

    @classmethod
    def vector(cls, element: "Type") -> "Type":
        return cls(TypeKind.VECTOR, element=element)

    @classmethod
    def of(cls, custom: "CustomType") -> "Type":
        return cls(TypeKind.CUSTOM, custom=custom)

    def describe(self) -> str:
        """Human readable spelling, used in messages."""
        if self.kind == TypeKind.VECTOR:
            inner = self.element.describe() if self.element else "?"
            return f"vector<{inner}>"
        if self.kind == TypeKind.CUSTOM:
            return self.custom.name if self.custom else "?"
        return self.kind.value


BOOL = Type(TypeKind.BOOL)
INT32 = Type(TypeKind.INT32)
INT53 = Type(TypeKind.INT53)
INT64 = Type(TypeKind.INT64)
DOUBLE = Type(TypeKind.DOUBLE)
STRING = Type(TypeKind.STRING)
BYTES = Type(TypeKind.BYTES)


@dataclass(eq=False)
class Arg:
    """A named field of a constructor or function."""

    name: str
    type: Type


@dataclass(eq=False)
class Constructor:
    """One variant of a custom type."""

    name: str
    args: List[Arg] = field(default_factory=list)
    type: Optional["CustomType"] = field(default=None, repr=False)


@dataclass(eq=False)
class Function:
    """An RPC call description; not grouped under any custom type."""

    name: str
    args: List[Arg] = field(default_factory=list)
    result: Optional[Type] = None

    @property
    def result_type(self) -> Optional["CustomType"]:
        """Custom type returned by the function, if any."""
        if self.result is not None and self.result.kind == TypeKind.CUSTOM:
            return self.result.custom
        return None


@dataclass(eq=False)
class CustomType:
    """A named type owning one or more constructors."""

    name: str
    constructors: List[Constructor] = field(default_factory=list)

    def add_constructor(self, constructor: Constructor) -> Constructor:
        """Attach a constructor and set its back reference."""
        constructor.type = self
        self.constructors.append(constructor)
        return constructor


@dataclass(eq=False)
class Schema:
    """All custom types and functions of one interface definition."""

    custom_types: List[CustomType] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)

    def add_custom_type(self, custom_type: CustomType) -> CustomType:
        self.custom_types.append(custom_type)
        return custom_type

    def add_function(self, function: Function) -> Function:
        self.functions.append(function)
        return function

    def get_custom_type(self, name: str) -> Optional[CustomType]:
        """Get custom type by name."""
        for custom_type in self.custom_types:
            if custom_type.name == name:
                return custom_type
        return None

    def all_constructors(self) -> Iterator[Constructor]:
        """Every constructor of every custom type, in schema order."""
        for custom_type in self.custom_types:
            yield from custom_type.constructors


_PRIMITIVES = {
    "bool": TypeKind.BOOL,
    "int32": TypeKind.INT32,
    "int": TypeKind.INT32,
    "int53": TypeKind.INT53,
    "int64": TypeKind.INT64,
    "long": TypeKind.INT64,
    "double": TypeKind.DOUBLE,
    "string": TypeKind.STRING,
    "bytes": TypeKind.BYTES,
}

_VECTOR_RE = re.compile(r"^vector\s*<(.*)>$", re.IGNORECASE)


def parse_type(spelling: str, types_by_name: Dict[str, CustomType]) -> Type:
    """
    Resolve a type spelling such as ``vector<int32>`` or ``Shape``.

    Raises:
        SchemaError: If the spelling is not a string or names no known type
    """
    if not isinstance(spelling, str):
        raise SchemaError(f"Type must be a string, got {spelling!r}")
    spelling = spelling.strip()
    match = _VECTOR_RE.match(spelling)
    if match:
        return Type.vector(parse_type(match.group(1), types_by_name))

    kind = _PRIMITIVES.get(spelling.lower())
    if kind is not None:
        return Type(kind)

    if spelling in types_by_name:
        return Type.of(types_by_name[spelling])

    raise SchemaError(f"Unknown type '{spelling}'")


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise SchemaError(f"Missing '{key}' in {where}")
    return data[key]


def _parse_args(
    raw_args: List[Dict[str, Any]],
    owner: str,
    types_by_name: Dict[str, CustomType],
) -> List[Arg]:
    args = []
    for raw_arg in raw_args:
        name = _require(raw_arg, "name", owner)
        spelling = _require(raw_arg, "type", f"{owner}.{name}")
        try:
            arg_type = parse_type(spelling, types_by_name)
        except SchemaError as e:
            raise SchemaError(f"{owner}.{name}: {e}") from e
        args.append(Arg(name=name, type=arg_type))
    return args


def load_schema_dict(data: Dict[str, Any]) -> Schema:
    """
    Build a Schema from a JSON schema document.

    Types are declared first so constructor fields may reference types
    declared later in the document.

    Args:
        data: Document with ``types`` and ``functions`` lists

    Returns:
        Schema model
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema document must be a JSON object")

    raw_types = data.get("types", [])
    raw_functions = data.get("functions", [])

    schema = Schema()
    types_by_name: Dict[str, CustomType] = {}
    for raw_type in raw_types:
        name = _require(raw_type, "name", "type declaration")
        if name in types_by_name:
            raise SchemaError(f"Duplicate type '{name}'")
        types_by_name[name] = schema.add_custom_type(CustomType(name=name))

    for raw_type in raw_types:
        custom_type = types_by_name[raw_type["name"]]
        for raw_constructor in raw_type.get("constructors", []):
            name = _require(raw_constructor, "name", f"type {custom_type.name}")
            args = _parse_args(raw_constructor.get("args", []), name, types_by_name)
            custom_type.add_constructor(Constructor(name=name, args=args))

    for raw_function in raw_functions:
        name = _require(raw_function, "name", "function declaration")
        args = _parse_args(raw_function.get("args", []), name, types_by_name)
        result = None
        if raw_function.get("result"):
            try:
                result = parse_type(raw_function["result"], types_by_name)
            except SchemaError as e:
                raise SchemaError(f"{name} result: {e}") from e
        schema.add_function(Function(name=name, args=args, result=result))

    return schema


def iter_declarations(schema: Schema) -> Iterator[Union[Constructor, Function]]:
    """Every constructor followed by every function, in schema order."""
    yield from schema.all_constructors()
    yield from schema.functions
