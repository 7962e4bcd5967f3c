"""
Rust code generator implementation.

Generates serde-annotated Rust structs and tagged enums from a TL schema:
one struct per constructor and per function, one enum per custom type with
several constructors, and the synthetic Object and Function enums.
"""

from typing import Any, Dict, List, Optional, Sequence, Union
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import NamingCase, NamingError, strip_prefix
from ...core.schema import Constructor, CustomType, Function, Schema
from .config import RustConfig
from .lifetimes import LifetimeAnalyzer
from .naming import create_rust_sanitizer, rust_type_name
from .types import RustTypeConfig, RustTypeMapper

logger = get_logger(__name__)

Declaration = Union[Constructor, Function]

OBJECT_ENUM = "Object"
FUNCTION_ENUM = "Function"


class RustGenerator(CodeGenerator):
    """Code generator for serde-based Rust bindings."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Rust generator with configuration."""
        super().__init__(RustConfig.from_config(config or GeneratorConfig()))

        self.sanitizer = create_rust_sanitizer()
        self.field_case = NamingCase(self.config.field_case)

        self.type_config = RustTypeConfig(
            lifetime=self.config.lifetime,
            cow_deserializer=self.config.cow_deserializer,
        )
        self.analyzer = LifetimeAnalyzer()
        self.type_mapper = RustTypeMapper(self.type_config, self.analyzer)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Rust templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        return "rust"

    @property
    def file_extension(self) -> str:
        return ".rs"

    @property
    def generics(self) -> str:
        return self.type_config.lifetime_params()

    # File assembly

    def generate(self, schema: Schema) -> str:
        """Generate the complete Rust file: enums module, then struct modules."""
        # Fresh analysis per run; the schema may have changed
        self.analyzer = LifetimeAnalyzer()
        self.type_mapper = RustTypeMapper(self.type_config, self.analyzer)

        custom = self.config.custom
        context = {
            "add_comments": self.config.add_comments,
            "enums_module": custom["enums_module"],
            "types_module": custom["types_module"],
            "functions_module": custom["functions_module"],
            "enums": self.generate_enums(schema),
            "type_structs": [
                self.generate_struct(constructor)
                for constructor in schema.all_constructors()
            ],
            "function_structs": [
                self.generate_struct(function) for function in schema.functions
            ],
        }
        return self.render_template("file.rs.j2", context)

    def generate_enums(self, schema: Schema) -> List[str]:
        """Per-type enums followed by the Object and Function enums."""
        constructors = list(schema.all_constructors())
        object_generics = self._generics_for(constructors)
        object_target = {
            "target": OBJECT_ENUM + object_generics,
            "path": OBJECT_ENUM,
            "prefix": OBJECT_ENUM,
            "needs_lifetime": bool(object_generics),
        }

        enums = []
        for custom_type in schema.custom_types:
            if len(custom_type.constructors) > 1:
                enums.append(
                    self.generate_enum(
                        rust_type_name(custom_type.name),
                        custom_type.constructors,
                        conversion_targets=[object_target],
                    )
                )

        maximal_targets = []
        if self.config.maximal_union:
            maximal_targets.append(
                {
                    "target": self.config.maximal_union + self.generics,
                    "path": self.config.maximal_union,
                    "prefix": None,
                    "needs_lifetime": True,
                }
            )

        enums.append(
            self.generate_enum(OBJECT_ENUM, constructors, conversion_targets=maximal_targets)
        )
        enums.append(
            self.generate_enum(
                FUNCTION_ENUM, schema.functions, conversion_targets=maximal_targets
            )
        )
        return enums

    # Struct emitter

    def generate_struct(self, declaration: Declaration) -> str:
        """Render one struct for a constructor or function."""
        name = rust_type_name(declaration.name)
        parent = self._parent_of(declaration)

        self.sanitizer.reset_used_names()
        fields = [self._generate_field_data(declaration, arg, parent) for arg in declaration.args]

        super_type = None
        if self.config.add_comments and isinstance(declaration, Constructor) and declaration.type:
            super_type = rust_type_name(declaration.type.name)

        context = {
            "name": name,
            "generics": self.generics if self._needs_lifetime(declaration) else "",
            "derives": self.config.derives,
            "fields": fields,
            "super_type": super_type,
        }
        logger.debug("Emitting struct %s with %d fields", name, len(fields))
        return self.render_template("struct.rs.j2", context).rstrip("\n")

    def _generate_field_data(
        self, declaration: Declaration, arg, parent: Optional[CustomType]
    ) -> Dict[str, Any]:
        where = f"{declaration.name}.{arg.name}"
        try:
            field_name = self.sanitizer.sanitize_name(arg.name, self.field_case)
            rust_type = self.type_mapper.map_type(arg.type, parent)
            attribute = self.type_mapper.field_attribute(arg.type)
        except NamingError as e:
            raise GeneratorError(f"Invalid field name in {declaration.name}: {e}") from e
        except GeneratorError as e:
            raise GeneratorError(f"{where} ({arg.type.describe()}): {e}") from e

        return {
            "name": field_name,
            "type": rust_type.name,
            "rename": arg.name if field_name != arg.name else None,
            "attribute": attribute,
        }

    def _parent_of(self, declaration: Declaration) -> Optional[CustomType]:
        """Custom type used as the self-reference guard for a declaration."""
        if isinstance(declaration, Constructor):
            return declaration.type
        return declaration.result_type

    # Enum emitter

    def generate_enum(
        self,
        name: str,
        declarations: Sequence[Declaration],
        conversion_targets: Sequence[Dict[str, Any]] = (),
    ) -> str:
        """
        Render a tagged enum with one variant per declaration.

        Args:
            name: Enum name, also stripped from variant names
            declarations: Constructors or functions wrapped by the variants
            conversion_targets: Enums to emit TryFrom/Into conversions for

        Returns:
            Rendered enum and its impls
        """
        generics = self._generics_for(declarations)

        variants = []
        for declaration in declarations:
            struct_name = rust_type_name(declaration.name)
            needs_lifetime = self._needs_lifetime(declaration)
            variants.append(
                {
                    "name": strip_prefix(struct_name, name),
                    "struct_name": struct_name,
                    "wire_name": declaration.name,
                    "needs_lifetime": needs_lifetime,
                    "payload": struct_name + (self.generics if needs_lifetime else ""),
                }
            )

        conversions = []
        for target in conversion_targets:
            uses_lifetime = target["needs_lifetime"] or bool(generics)
            conversions.append(
                {
                    "target": target["target"],
                    "path": target["path"],
                    "impl_generics": self.generics if uses_lifetime else "",
                    "arms": [
                        {
                            "variant": variant["name"],
                            "target_variant": (
                                strip_prefix(variant["struct_name"], target["prefix"])
                                if target["prefix"]
                                else variant["struct_name"]
                            ),
                        }
                        for variant in variants
                    ],
                }
            )

        context = {
            "name": name,
            "generics": generics,
            "derives": self.config.derives,
            "tag_field": self.config.tag_field,
            "variants": variants,
            "conversions": conversions,
        }
        logger.debug("Emitting enum %s with %d variants", name, len(variants))
        return self.render_template("enum.rs.j2", context).rstrip("\n")

    def _generics_for(self, declarations: Sequence[Declaration]) -> str:
        return self.generics if any(self._needs_lifetime(d) for d in declarations) else ""

    def _needs_lifetime(self, declaration: Declaration) -> bool:
        """Lifetime check for one declaration; errors name the offending field."""
        for arg in declaration.args:
            try:
                if self.analyzer.needs_lifetime(arg.type):
                    return True
            except GeneratorError as e:
                raise GeneratorError(
                    f"{declaration.name}.{arg.name} ({arg.type.describe()}): {e}"
                ) from e
        return False

    # Formatting and reporting

    def format_code(self, code: str) -> str:
        """Apply Rust-specific formatting."""
        code = super().format_code(code)
        if self.config.use_tabs:
            return code

        indent = " " * self.config.indent_size
        lines = []
        for line in code.split("\n"):
            stripped = line.lstrip("\t")
            lines.append(indent * (len(line) - len(stripped)) + stripped)
        return "\n".join(lines)

    def collect_metadata(self, schema: Schema) -> Dict[str, Any]:
        type_enums = sum(1 for t in schema.custom_types if len(t.constructors) > 1)
        return {
            "enum_count": type_enums + 2,
            "struct_count": sum(1 for _ in schema.all_constructors()) + len(schema.functions),
            "needs_lifetime": self.analyzer.constructors_need_lifetime(schema.all_constructors())
            or self.analyzer.functions_need_lifetime(schema.functions),
        }


def create_rust_generator(config: Optional[Dict[str, Any]] = None) -> RustGenerator:
    """Create a Rust generator from a plain configuration dict."""
    return RustGenerator(load_config("rust", custom_config=config))
