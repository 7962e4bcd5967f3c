"""Tests for the lifetime analysis."""

from __future__ import annotations

import pytest

from tl_codegen.codegen.core.generator import GeneratorError
from tl_codegen.codegen.core.schema import (
    BOOL,
    BYTES,
    DOUBLE,
    INT32,
    INT53,
    INT64,
    STRING,
    Arg,
    Constructor,
    CustomType,
    Function,
    Type,
    TypeKind,
)
from tl_codegen.codegen.languages.rust.lifetimes import LifetimeAnalyzer


def custom(name: str, *arg_lists: list[Arg]) -> CustomType:
    custom_type = CustomType(name)
    for index, args in enumerate(arg_lists):
        custom_type.add_constructor(Constructor(f"{name.lower()}{index}", list(args)))
    return custom_type


@pytest.fixture
def analyzer() -> LifetimeAnalyzer:
    return LifetimeAnalyzer()


class TestPrimitives:
    @pytest.mark.parametrize("type_", [STRING, BYTES])
    def test_borrowed(self, analyzer: LifetimeAnalyzer, type_: Type) -> None:
        assert analyzer.needs_lifetime(type_)

    @pytest.mark.parametrize("type_", [BOOL, INT32, INT53, INT64, DOUBLE])
    def test_plain(self, analyzer: LifetimeAnalyzer, type_: Type) -> None:
        assert not analyzer.needs_lifetime(type_)

    @pytest.mark.parametrize("type_", [STRING, BYTES, BOOL, INT32, DOUBLE])
    def test_vector_matches_element(self, analyzer: LifetimeAnalyzer, type_: Type) -> None:
        assert analyzer.needs_lifetime(Type.vector(type_)) == analyzer.needs_lifetime(type_)
        nested = Type.vector(Type.vector(type_))
        assert analyzer.needs_lifetime(nested) == analyzer.needs_lifetime(type_)


class TestCustomTypes:
    def test_any_constructor_decides(self, analyzer: LifetimeAnalyzer) -> None:
        mixed = custom("Mixed", [Arg("n", INT32)], [Arg("s", STRING)])
        assert analyzer.needs_lifetime(Type.of(mixed))

    def test_numeric_only(self, analyzer: LifetimeAnalyzer) -> None:
        point = custom("Point", [Arg("x", DOUBLE), Arg("y", DOUBLE)])
        assert not analyzer.needs_lifetime(Type.of(point))

    def test_transitive(self, analyzer: LifetimeAnalyzer) -> None:
        inner = custom("Inner", [Arg("data", BYTES)])
        outer = custom("Outer", [Arg("items", Type.vector(Type.of(inner)))])
        assert analyzer.needs_lifetime(Type.of(outer))

    def test_direct_self_reference_terminates(self, analyzer: LifetimeAnalyzer) -> None:
        node = CustomType("Node")
        node.add_constructor(Constructor("node", [Arg("next", Type.of(node)), Arg("v", INT32)]))
        assert not analyzer.needs_lifetime(Type.of(node))

    def test_self_reference_with_string(self, analyzer: LifetimeAnalyzer) -> None:
        node = CustomType("Node")
        node.add_constructor(
            Constructor("node", [Arg("children", Type.vector(Type.of(node))), Arg("label", STRING)])
        )
        assert analyzer.needs_lifetime(Type.of(node))

    def test_mutual_recursion_queried_from_either_side(self) -> None:
        a = CustomType("A")
        b = CustomType("B")
        a.add_constructor(Constructor("a", [Arg("b", Type.of(b)), Arg("s", STRING)]))
        b.add_constructor(Constructor("b", [Arg("a", Type.of(a))]))

        assert LifetimeAnalyzer().needs_lifetime(Type.of(b))
        assert LifetimeAnalyzer().needs_lifetime(Type.of(a))

    def test_results_are_cached(self, analyzer: LifetimeAnalyzer) -> None:
        point = custom("Point", [Arg("x", DOUBLE)])
        assert not analyzer.custom_needs_lifetime(point)
        # A later change to the type is not seen by the same analyzer
        point.constructors[0].args.append(Arg("name", STRING))
        assert not analyzer.custom_needs_lifetime(point)
        assert LifetimeAnalyzer().custom_needs_lifetime(point)

    def test_empty_type(self, analyzer: LifetimeAnalyzer) -> None:
        assert not analyzer.needs_lifetime(Type.of(CustomType("Empty")))


class TestFolds:
    def test_args(self, analyzer: LifetimeAnalyzer) -> None:
        assert analyzer.args_need_lifetime([Arg("a", INT32), Arg("b", BYTES)])
        assert not analyzer.args_need_lifetime([Arg("a", INT32)])
        assert not analyzer.args_need_lifetime([])

    def test_constructors(self, analyzer: LifetimeAnalyzer) -> None:
        constructors = [Constructor("a", [Arg("x", INT32)]), Constructor("b", [Arg("s", STRING)])]
        assert analyzer.constructors_need_lifetime(constructors)
        assert not analyzer.constructors_need_lifetime(constructors[:1])

    def test_functions(self, analyzer: LifetimeAnalyzer) -> None:
        functions = [Function("close"), Function("echo", [Arg("text", STRING)])]
        assert analyzer.functions_need_lifetime(functions)
        assert not analyzer.functions_need_lifetime(functions[:1])


class TestMalformed:
    def test_vector_without_element(self, analyzer: LifetimeAnalyzer) -> None:
        with pytest.raises(GeneratorError):
            analyzer.needs_lifetime(Type(TypeKind.VECTOR))

    def test_custom_without_reference(self, analyzer: LifetimeAnalyzer) -> None:
        with pytest.raises(GeneratorError):
            analyzer.needs_lifetime(Type(TypeKind.CUSTOM))
