"""
Registry of target languages.

Maps a language name or alias to its generator class and builds configured
generator instances for the CLI and the package API.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Unknown language, bad registration or unusable configuration."""

    pass


@dataclass
class LanguageEntry:
    """A registered target language."""

    name: str
    generator_class: Type[CodeGenerator]
    aliases: List[str] = field(default_factory=list)


class GeneratorRegistry:
    """Language name (or alias) to generator lookup."""

    def __init__(self):
        self._entries: Dict[str, LanguageEntry] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator class under a primary name and aliases.

        A second registration of the same name is ignored unless replace is
        set. An alias already used by another language is an error.

        Raises:
            RegistryError: If generator_class is not a CodeGenerator or an
                alias conflicts
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError(f"{generator_class!r} is not a CodeGenerator subclass")

        key = language.lower()
        if key in self._entries and not replace:
            logger.debug("Language %s already registered", key)
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != key]
        if not replace:
            for alias in alias_keys:
                if alias in self._entries:
                    raise RegistryError(f"Alias '{alias}' is already a language name")
                owner = self._aliases.get(alias)
                if owner is not None and owner != key:
                    raise RegistryError(f"Alias '{alias}' already points to '{owner}'")

        self._entries[key] = LanguageEntry(key, generator_class, alias_keys)
        for alias in alias_keys:
            self._aliases[alias] = key
        logger.debug("Registered %s (%s)", key, generator_class.__name__)

    def unregister(self, language: str):
        """Remove a language and every alias pointing to it."""
        key = language.lower()
        self._entries.pop(key, None)
        self._aliases = {a: target for a, target in self._aliases.items() if target != key}

    def resolve(self, language: str) -> str:
        """Primary name for a language name or alias."""
        key = language.lower()
        key = self._aliases.get(key, key)
        if key not in self._entries:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return key

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._entries[self.resolve(language)].generator_class

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Build a generator for language.

        Args:
            language: Language name or alias
            config: A GeneratorConfig, override dict, JSON config file path,
                or None for the language defaults

        Raises:
            RegistryError: If the language is unknown or the configuration
                is rejected
        """
        key = self.resolve(language)
        generator_class = self._entries[key].generator_class

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(key, config_file=config)
            elif isinstance(config, dict) or config is None:
                final_config = load_config(key, custom_config=config)
            else:
                raise RegistryError(f"Invalid config type: {type(config).__name__}")
            return generator_class(final_config)
        except (ConfigError, ValueError, TypeError) as e:
            raise RegistryError(f"Failed to create {key} generator: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._entries)

    def get_aliases_for_language(self, language: str) -> List[str]:
        key = language.lower()
        return sorted(a for a, target in self._aliases.items() if target == key)

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._entries or key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Name, extension, generator class and aliases of a language."""
        key = self.resolve(language)
        generator = self.create_generator(key)
        generator_class = type(generator)
        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "module": generator_class.__module__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(key),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Process-wide registry with the built-in languages registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        from .languages.rust import RustGenerator

        _global_registry.register("rust", RustGenerator, aliases=["rs"])
    return _global_registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)
