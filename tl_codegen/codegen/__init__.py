"""
TL Code Generation Module

Generates typed bindings in other languages from a parsed TL schema.
"""

from pathlib import Path

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import Schema, SchemaError, load_schema_dict
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.output import OutputError, is_up_to_date, write_if_changed

__version__ = "0.1.0"


def generate_from_schema(schema, language="rust", config=None):
    """
    Generate code for a parsed schema.

    Args:
        schema: Schema model
        language: Target language name
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, schema)


def generate_file(schema, output_path, language="rust", config=None):
    """
    Generate code and write it to output_path if it changed.

    Returns:
        Tuple of (GenerationResult, whether the file was written)

    Raises:
        GeneratorError: If generation fails; nothing is written
        OutputError: If the file cannot be written
    """
    generator = get_generator(language, config)
    result = generate_code(generator, schema)
    if not result.success:
        raise GeneratorError(result.error_message) from result.exception

    written = write_if_changed(Path(output_path), result.code, generator.config.line_ending)
    return result, written


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "Schema",
    "SchemaError",
    "GeneratorConfig",
    "ConfigError",
    "OutputError",
    "generate_code",
    "generate_from_schema",
    "generate_file",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
    "load_config",
    "load_schema_dict",
    "is_up_to_date",
    "write_if_changed",
]
