"""Shared schema fixtures."""

from __future__ import annotations

import pytest

from tl_codegen.codegen.core.schema import (
    BYTES,
    DOUBLE,
    INT32,
    INT53,
    STRING,
    Arg,
    Constructor,
    CustomType,
    Function,
    Schema,
    Type,
)
from tl_codegen.codegen.languages.rust import RustGenerator


def make_type(schema: Schema, name: str, *constructors: Constructor) -> CustomType:
    custom_type = schema.add_custom_type(CustomType(name=name))
    for constructor in constructors:
        custom_type.add_constructor(constructor)
    return custom_type


@pytest.fixture
def shape_schema() -> Schema:
    """One type with two numeric constructors and no functions."""
    schema = Schema()
    make_type(
        schema,
        "Shape",
        Constructor("shapeCircle", [Arg("radius", DOUBLE)]),
        Constructor("shapeSquare", [Arg("side", DOUBLE)]),
    )
    return schema


@pytest.fixture
def chat_schema() -> Schema:
    """Borrowed data, a single-constructor type, self reference and functions."""
    schema = Schema()
    photo = make_type(
        schema,
        "Photo",
        Constructor("photo", [Arg("id", INT53), Arg("data", BYTES)]),
    )
    tree = make_type(schema, "Tree")
    tree.add_constructor(
        Constructor(
            "treeNode",
            [
                Arg("value", INT32),
                Arg("left", Type.of(tree)),
                Arg("children", Type.vector(Type.of(tree))),
            ],
        )
    )
    tree.add_constructor(Constructor("treeLeaf", []))
    make_type(
        schema,
        "Message",
        Constructor(
            "messageText",
            [Arg("text", STRING), Arg("type", INT32)],
        ),
        Constructor("messagePhoto", [Arg("photo", Type.of(photo))]),
    )
    schema.add_function(
        Function("getPhoto", [Arg("photo_id", INT53)], result=Type.of(photo))
    )
    schema.add_function(Function("close", []))
    return schema


@pytest.fixture
def generator() -> RustGenerator:
    return RustGenerator()
