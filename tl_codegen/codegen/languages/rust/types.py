"""
Rust-specific type system for code generation.

Projects schema field types onto Rust type expressions and the serde
attributes that go with them.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from ...core.generator import GeneratorError
from ...core.schema import CustomType, Type, TypeKind
from .lifetimes import LifetimeAnalyzer
from .naming import rust_type_name


@dataclass(frozen=True)
class RustType:
    """
    Immutable representation of a projected Rust type.

    ``name`` is the full spelling used in declarations, ``base_name`` the
    named type without wrappers.
    """

    name: str
    base_name: str = field(default="")
    needs_lifetime: bool = field(default=False)
    is_boxed: bool = field(default=False)
    is_optional: bool = field(default=False)

    def __post_init__(self):
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name)

    def as_boxed(self, box_type: str = "Box") -> "RustType":
        """Return this type behind a heap indirection."""
        if self.is_boxed:
            return self
        return replace(self, name=f"{box_type}<{self.name}>", is_boxed=True)

    def as_optional(self, option_type: str = "Option") -> "RustType":
        """Return this type wrapped in an option."""
        if self.is_optional:
            return self
        return replace(self, name=f"{option_type}<{self.name}>", is_optional=True)


@dataclass
class RustTypeConfig:
    """Configuration for Rust type mapping behavior."""

    lifetime: str = "'a"

    # Primitive spellings
    bool_type: str = "bool"
    int32_type: str = "i32"
    int64_type: str = "i64"
    double_type: str = "f64"

    # Wrappers
    vector_type: str = "Vec"
    box_type: str = "Box"
    option_type: str = "Option"
    cow_type: str = "Cow"

    # Deserializer for optional borrowed-or-owned strings
    cow_deserializer: str = "crate::cow_de::de_opt_cow_str"

    def lifetime_params(self) -> str:
        return f"<{self.lifetime}>"


class RustTypeMapper:
    """
    Maps schema types to Rust types.

    The enclosing custom type of the declaration being emitted is passed as
    ``parent``; a field referring back to it is boxed so the declaration
    does not have infinite size.
    """

    def __init__(
        self,
        config: Optional[RustTypeConfig] = None,
        analyzer: Optional[LifetimeAnalyzer] = None,
    ):
        self.config = config or RustTypeConfig()
        self.analyzer = analyzer or LifetimeAnalyzer()

    def map_type(self, type_: Type, parent: Optional[CustomType] = None) -> RustType:
        """
        Project a schema type.

        Args:
            type_: Field type
            parent: Custom type that owns the declaration, if any

        Returns:
            Projected RustType

        Raises:
            GeneratorError: For types that have no projection
        """
        cfg = self.config
        kind = type_.kind

        if kind == TypeKind.BOOL:
            return RustType(cfg.bool_type)
        if kind == TypeKind.INT32:
            return RustType(cfg.int32_type)
        if kind in (TypeKind.INT53, TypeKind.INT64):
            return RustType(cfg.int64_type)
        if kind == TypeKind.DOUBLE:
            return RustType(cfg.double_type)
        if kind == TypeKind.BYTES:
            return RustType(
                f"{cfg.option_type}<&{cfg.lifetime} [u8]>",
                base_name="[u8]",
                needs_lifetime=True,
                is_optional=True,
            )
        if kind == TypeKind.STRING:
            return RustType(
                f"{cfg.option_type}<{cfg.cow_type}<{cfg.lifetime}, str>>",
                base_name="str",
                needs_lifetime=True,
                is_optional=True,
            )
        if kind == TypeKind.VECTOR:
            if type_.element is None:
                raise GeneratorError("Vector type without element type")
            element = self.map_type(type_.element, parent)
            return RustType(
                f"{cfg.vector_type}<{element.name}>",
                base_name=element.base_name,
                needs_lifetime=element.needs_lifetime,
            )
        if kind == TypeKind.CUSTOM:
            return self._map_custom_type(type_, parent)

        raise GeneratorError(f"No Rust projection for type kind {kind}")

    def _map_custom_type(self, type_: Type, parent: Optional[CustomType]) -> RustType:
        cfg = self.config
        custom = type_.custom
        if custom is None:
            raise GeneratorError("Custom type without a type reference")

        base_name = rust_type_name(custom.name)
        needs_lifetime = self.analyzer.custom_needs_lifetime(custom)
        name = base_name + (cfg.lifetime_params() if needs_lifetime else "")

        rust_type = RustType(name, base_name=base_name, needs_lifetime=needs_lifetime)
        if parent is not None and custom is parent:
            rust_type = rust_type.as_boxed(cfg.box_type)
        return rust_type.as_optional(cfg.option_type)

    def field_attribute(self, type_: Type) -> Optional[str]:
        """serde attribute for a field of this type, or None."""
        if type_.kind == TypeKind.STRING:
            return f'#[serde(borrow, deserialize_with="{self.config.cow_deserializer}")]'
        if self.analyzer.needs_lifetime(type_):
            return "#[serde(borrow)]"
        return None
