"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    Schema,
    CustomType,
    Constructor,
    Function,
    Arg,
    Type,
    TypeKind,
    SchemaError,
    load_schema_dict,
)
from .naming import (
    NameSanitizer,
    NamingCase,
    NamingError,
    capitalize_first,
    strip_prefix,
    to_identifier,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine
from .output import OutputError, write_if_changed, is_up_to_date

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema model
    "Schema",
    "CustomType",
    "Constructor",
    "Function",
    "Arg",
    "Type",
    "TypeKind",
    "SchemaError",
    "load_schema_dict",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    "NamingError",
    "capitalize_first",
    "strip_prefix",
    "to_identifier",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Output
    "OutputError",
    "write_if_changed",
    "is_up_to_date",
]
