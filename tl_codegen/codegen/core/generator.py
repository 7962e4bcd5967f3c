"""
Base generator interface for all code generation targets.

A generator turns a Schema into the text of one source file. Running it
through generate_code() adds schema warnings, formatting and metadata, and
turns failures into an error result instead of partial output.
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import Schema, iter_declarations
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.template_engine: TemplateEngine = create_template_engine(
            self.get_template_directory()
        )

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Registry name of the target language, e.g. 'rust'."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of generated files, e.g. '.rs'."""

    def get_template_directory(self) -> Optional[Path]:
        """Directory of the language templates; None for in-memory only."""
        return None

    @abstractmethod
    def generate(self, schema: Schema) -> str:
        """
        Generate the complete source file for a schema.

        Args:
            schema: Parsed schema model

        Returns:
            Unformatted code

        Raises:
            GeneratorError: If a declaration cannot be translated
        """

    def collect_metadata(self, schema: Schema) -> Dict[str, Any]:
        """Language specific metadata merged into the generation result."""
        return {}

    def validate_schema(self, schema: Schema) -> List[str]:
        """
        Structural problems worth reporting. The schema is never rejected.

        Returns:
            Warning messages, empty if there is nothing to report
        """
        warnings = [
            f"Type '{t.name}' has no constructors - nothing is generated for it"
            for t in schema.custom_types
            if not t.constructors
        ]

        counts = Counter(decl.name for decl in iter_declarations(schema))
        warnings.extend(
            f"Declaration '{name}' is defined {count} times"
            for name, count in sorted(counts.items())
            if count > 1
        )
        return warnings

    def format_code(self, code: str) -> str:
        """
        Strip trailing whitespace, collapse runs of blank lines to one and
        end the text with a single newline.
        """
        lines: List[str] = []
        for line in code.split("\n"):
            line = line.rstrip()
            if line or (lines and lines[-1]):
                lines.append(line)
        return "\n".join(lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


@dataclass
class GenerationResult:
    """Outcome of one generator run."""

    code: str
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """A failed result carrying no code."""
        return cls(code="", success=False, error_message=message, exception=exception)


def generate_code(generator: CodeGenerator, schema: Schema) -> GenerationResult:
    """
    Run a generator over a schema.

    Args:
        generator: Code generator instance
        schema: Schema to generate code for

    Returns:
        GenerationResult with formatted code, warnings and metadata, or an
        error result if generation raised
    """
    try:
        warnings = generator.validate_schema(schema)
        for warning in warnings:
            logger.warning(warning)

        code = generator.format_code(generator.generate(schema))

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "custom_type_count": len(schema.custom_types),
            "constructor_count": sum(1 for _ in schema.all_constructors()),
            "function_count": len(schema.functions),
        }
        metadata.update(generator.collect_metadata(schema))
    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    logger.info(
        "Generated %s code for %d types and %d functions",
        generator.language_name,
        metadata["custom_type_count"],
        metadata["function_count"],
    )
    return GenerationResult(code, warnings, metadata)
